import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from agenda.adapters.auth.crypto import build_auth_adapter
from agenda.adapters.auth.session_store import KeyValueSessionStore
from agenda.adapters.clock import SystemClock
from agenda.adapters.gemini import DEFAULT_MODEL, build_summarizer
from agenda.adapters.repos import BOOTSTRAP_ADMIN_ID, BandRepo, ContractorRepo, EventRepo, UserRepo
from agenda.adapters.sqlite.documents import SQLiteDocumentStore
from agenda.adapters.stores.fallback import FallbackDocumentStore
from agenda.adapters.stores.json_files import JsonFileDocumentStore, JsonFileKeyValueStore
from agenda.adapters.tokens import KeyValueTokenMap
from agenda.components.auth import VerifySessionInput, run_verify_session
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine
from agenda.ports.auth import AuthPort
from agenda.ports.clock import ClockPort
from agenda.ports.summarizer import SummarizerPort
from agenda.rules.loader import DEFAULT_RULES_PATH, load_rules
from agenda.rules.models import AuthRules, Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.data_dir = Path(os.environ.get("AGENDA_DATA_DIR", "./data"))
        self.rules_path = Path(os.environ.get("AGENDA_RULES_PATH", str(DEFAULT_RULES_PATH)))
        # "sqlite" keeps a primary SQLite store in front of the JSON cache; "none" runs on the cache alone.
        self.primary_store = os.environ.get("AGENDA_PRIMARY_STORE", "sqlite")
        self.gemini_api_key = os.environ.get("GEMINI_API_KEY", "")
        self.gemini_model = os.environ.get("AGENDA_GEMINI_MODEL", DEFAULT_MODEL)
        self.public_base_url = os.environ.get("AGENDA_PUBLIC_BASE_URL", "")
        self.bootstrap_email = os.environ.get("AGENDA_BOOTSTRAP_EMAIL", "admin")
        self.bootstrap_password = os.environ.get("AGENDA_BOOTSTRAP_PASSWORD", "admin")
        self.secure_cookies = os.environ.get("AGENDA_SECURE_COOKIES", "false").lower() == "true"

    @property
    def db_path(self) -> str:
        return str(self.data_dir / "agenda.db")


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def _load_rules_cached(path: Path) -> Rules:
    return load_rules(path)


def get_rules(settings: Settings = Depends(get_settings)) -> Rules:
    return _load_rules_cached(settings.rules_path)


def get_policy(rules: Rules = Depends(get_rules)) -> PolicyEngine:
    return PolicyEngine(rules)


# --- Stores ---
def get_document_store(settings: Settings = Depends(get_settings)) -> FallbackDocumentStore:
    cache = JsonFileDocumentStore(settings.data_dir / "cache")
    primary = SQLiteDocumentStore(settings.db_path) if settings.primary_store == "sqlite" else None
    return FallbackDocumentStore(primary, cache)


def get_kv_store(settings: Settings = Depends(get_settings)) -> JsonFileKeyValueStore:
    return JsonFileKeyValueStore(settings.data_dir / "kv")


# --- Adapters ---
def get_auth_adapter(rules: Rules = Depends(get_rules)) -> AuthPort:
    return build_auth_adapter(rules.auth)


@lru_cache
def get_clock() -> ClockPort:
    return SystemClock()


@lru_cache
def _summarizer(api_key: str, model_name: str) -> SummarizerPort:
    return build_summarizer(api_key, model_name)


def get_summarizer(settings: Settings = Depends(get_settings)) -> SummarizerPort:
    return _summarizer(settings.gemini_api_key, settings.gemini_model)


@lru_cache
def _bootstrap_admin(email: str, password: str, password_mode: str) -> User:
    # Hashed once per credential set; argon2 hashing is deliberately slow.
    adapter = build_auth_adapter(AuthRules(password_mode=password_mode))
    return User(
        id=BOOTSTRAP_ADMIN_ID,
        name="Super Admin",
        email=email.strip().lower(),
        password=adapter.hash_password(password),
        role="ADMIN",
        status="ACTIVE",
    )


# --- Repos ---
def get_event_repo(
    store: FallbackDocumentStore = Depends(get_document_store),
    rules: Rules = Depends(get_rules),
) -> EventRepo:
    return EventRepo(store, rules.storage.collections.events)


def get_band_repo(
    store: FallbackDocumentStore = Depends(get_document_store),
    rules: Rules = Depends(get_rules),
) -> BandRepo:
    return BandRepo(store, rules.storage.collections.bands)


def get_contractor_repo(
    store: FallbackDocumentStore = Depends(get_document_store),
    rules: Rules = Depends(get_rules),
) -> ContractorRepo:
    return ContractorRepo(store, rules.storage.collections.contractors)


def get_user_repo(
    store: FallbackDocumentStore = Depends(get_document_store),
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> UserRepo:
    admin = _bootstrap_admin(settings.bootstrap_email, settings.bootstrap_password, rules.auth.password_mode)
    return UserRepo(store, rules.storage.collections.users, bootstrap_admin=admin)


# --- Key-value maps ---
def get_session_store(
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    rules: Rules = Depends(get_rules),
) -> KeyValueSessionStore:
    return KeyValueSessionStore(kv, rules.storage.key("sessions"))


def get_form_tokens(
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    rules: Rules = Depends(get_rules),
) -> KeyValueTokenMap:
    return KeyValueTokenMap(kv, rules.storage.key("form_tokens"))


def get_prospecting_tokens(
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    rules: Rules = Depends(get_rules),
) -> KeyValueTokenMap:
    return KeyValueTokenMap(kv, rules.storage.key("prospecting_tokens"))


def get_template_key(rules: Rules = Depends(get_rules)) -> str:
    return rules.storage.key("contract_template")


def get_public_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    return settings.public_base_url or str(request.base_url)


# --- Auth ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_session_token(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str | None:
    # Cookie first (HttpOnly), then the Authorization header.
    cookie_token = request.cookies.get("access_token")
    if cookie_token and cookie_token.startswith("Bearer "):
        return cookie_token.split(" ", 1)[1]
    return token


def get_current_user(
    token: Annotated[str | None, Depends(get_session_token)],
    session_store: KeyValueSessionStore = Depends(get_session_store),
    clock: ClockPort = Depends(get_clock),
) -> User:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    result = run_verify_session(VerifySessionInput(token=token), session_store, clock)
    if not result.success or result.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error or "Invalid session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return result.user
