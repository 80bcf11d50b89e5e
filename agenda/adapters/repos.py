"""
Entity repositories over the document store.

Every read is sanitized, so callers always get fully populated entities.
Lookups by id are list-and-filter, matching the document store contract.
"""

from __future__ import annotations

from agenda.domain.entities import Band, Contractor, Event, User
from agenda.domain.sanitize import sanitize_band, sanitize_contractor, sanitize_event, sanitize_user
from agenda.ports.store import DocumentStorePort
from agenda.rules.models import StorageCollections

DEFAULT_BANDS = [Band(id="b_new_1", name="Banda Principal", genre="Variado", members=5)]
BOOTSTRAP_ADMIN_ID = "u_admin_master"


def _doc_id(doc: dict) -> str:
    value = doc.get("id")
    return value if isinstance(value, str) else ""


class EventRepo:
    def __init__(self, store: DocumentStorePort, collection: str):
        self.store = store
        self.collection = collection

    def list_all(self) -> list[Event]:
        return [sanitize_event(d, _doc_id(d)) for d in self.store.list_all(self.collection)]

    def get_by_id(self, event_id: str) -> Event | None:
        for event in self.list_all():
            if event.id == event_id:
                return event
        return None

    def save(self, event: Event) -> Event:
        # Whole-record replace: the last save wins.
        self.store.upsert(self.collection, event.id, event.to_document(), merge=False)
        return event

    def delete(self, event_id: str) -> None:
        self.store.delete(self.collection, event_id)


class BandRepo:
    def __init__(self, store: DocumentStorePort, collection: str, defaults: list[Band] | None = None):
        self.store = store
        self.collection = collection
        self.defaults = DEFAULT_BANDS if defaults is None else defaults

    def list_all(self) -> list[Band]:
        docs = self.store.list_all(self.collection)
        if not docs:
            return [b.model_copy(deep=True) for b in self.defaults]
        return [sanitize_band(d, _doc_id(d)) for d in docs]

    def get_by_id(self, band_id: str) -> Band | None:
        for band in self.list_all():
            if band.id == band_id:
                return band
        return None

    def save(self, band: Band) -> Band:
        self.store.upsert(self.collection, band.id, band.to_document(), merge=False)
        return band

    def delete(self, band_id: str) -> None:
        # No cascade: events keep their band_id.
        self.store.delete(self.collection, band_id)


class ContractorRepo:
    def __init__(self, store: DocumentStorePort, collection: str):
        self.store = store
        self.collection = collection

    def list_all(self) -> list[Contractor]:
        return [sanitize_contractor(d, _doc_id(d)) for d in self.store.list_all(self.collection)]

    def get_by_id(self, contractor_id: str) -> Contractor | None:
        for contractor in self.list_all():
            if contractor.id == contractor_id:
                return contractor
        return None

    def save(self, contractor: Contractor) -> Contractor:
        self.store.upsert(self.collection, contractor.id, contractor.to_document(), merge=True)
        return contractor

    def delete(self, contractor_id: str) -> None:
        self.store.delete(self.collection, contractor_id)


class UserRepo:
    def __init__(self, store: DocumentStorePort, collection: str, bootstrap_admin: User | None = None):
        self.store = store
        self.collection = collection
        self.bootstrap_admin = bootstrap_admin

    def list_all(self) -> list[User]:
        users = [sanitize_user(d, _doc_id(d)) for d in self.store.list_all(self.collection)]
        admin = self.bootstrap_admin
        if admin is not None and not any(u.email == admin.email for u in users):
            users.insert(0, admin.model_copy(deep=True))
        return users

    def get_by_id(self, user_id: str) -> User | None:
        for user in self.list_all():
            if user.id == user_id:
                return user
        return None

    def get_by_email(self, email: str) -> User | None:
        normalized = email.strip().lower()
        for user in self.list_all():
            if user.email == normalized:
                return user
        return None

    def save(self, user: User) -> User:
        normalized = user.model_copy(
            update={"email": user.email.strip().lower(), "password": user.password.strip()}
        )
        self.store.upsert(self.collection, normalized.id, normalized.to_document(), merge=True)
        return normalized

    def delete(self, user_id: str) -> None:
        self.store.delete(self.collection, user_id)


def build_repos(
    store: DocumentStorePort,
    collections: StorageCollections,
    bootstrap_admin: User | None = None,
) -> tuple[EventRepo, BandRepo, ContractorRepo, UserRepo]:
    return (
        EventRepo(store, collections.events),
        BandRepo(store, collections.bands),
        ContractorRepo(store, collections.contractors),
        UserRepo(store, collections.users, bootstrap_admin=bootstrap_admin),
    )
