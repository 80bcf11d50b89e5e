from typing import Literal

from pydantic import BaseModel


class ProjectRules(BaseModel):
    slug: str
    rules_version: str


class AccessRules(BaseModel):
    all_bands_roles: list[str]
    all_events_roles: list[str]
    financials_roles: list[str]
    contracts_roles: list[str]
    admin_roles: list[str]
    event_edit_roles: list[str]
    event_delete_roles: list[str]
    prospecting_roles: list[str]
    fallback_role: str


class SessionsRules(BaseModel):
    ttl_hours: int


class AuthRules(BaseModel):
    password_mode: Literal["legacy_plaintext", "argon2"]


class ImporterRules(BaseModel):
    required_headers: list[str]
    optional_headers: list[str]
    default_time: str
    date_pattern: str
    status_aliases: dict[str, str] = {}


class StorageCollections(BaseModel):
    bands: str
    users: str
    events: str
    contractors: str


class StorageKeys(BaseModel):
    sessions: str
    form_tokens: str
    prospecting_tokens: str
    contract_template: str


class StorageRules(BaseModel):
    prefix: str
    collections: StorageCollections
    keys: StorageKeys

    def key(self, name: str) -> str:
        return f"{self.prefix}{getattr(self.keys, name)}"


class OpsRules(BaseModel):
    required_env: list[str]


class Rules(BaseModel):
    project: ProjectRules
    access: AccessRules
    sessions: SessionsRules
    auth: AuthRules
    importer: ImporterRules
    storage: StorageRules
    ops: OpsRules
