import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

from agenda.rules.models import AuthRules


class LegacyPlaintextAuthAdapter:
    """
    Historical credential check: plaintext, trimmed, case-insensitive.

    Kept only so existing accounts keep working; select ``argon2`` in
    rules.yaml to store hashes instead.
    """

    def hash_password(self, password: str) -> str:
        return password.strip()

    def verify_password(self, plain: str, stored: str) -> bool:
        if not stored:
            return False
        return plain.strip().lower() == stored.strip().lower()

    def create_token(self) -> str:
        return secrets.token_urlsafe(32)


class Argon2AuthAdapter:
    def __init__(self) -> None:
        self.ph = PasswordHasher()

    def hash_password(self, password: str) -> str:
        return str(self.ph.hash(password.strip()))

    def verify_password(self, plain: str, stored: str) -> bool:
        if not stored:
            return False
        try:
            self.ph.verify(stored, plain.strip())
            return True
        except (VerificationError, InvalidHashError):
            return False

    def create_token(self) -> str:
        return secrets.token_urlsafe(32)


def build_auth_adapter(rules: AuthRules) -> LegacyPlaintextAuthAdapter | Argon2AuthAdapter:
    if rules.password_mode == "argon2":
        return Argon2AuthAdapter()
    return LegacyPlaintextAuthAdapter()
