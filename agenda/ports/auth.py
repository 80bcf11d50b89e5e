from typing import Protocol


class AuthPort(Protocol):
    def hash_password(self, password: str) -> str:
        """Return the value stored for a new or changed password."""
        ...

    def verify_password(self, plain: str, stored: str) -> bool: ...

    def create_token(self) -> str:
        """Opaque high-entropy token for sessions and share links."""
        ...
