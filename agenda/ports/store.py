from typing import Any, Protocol


class StoreUnavailableError(Exception):
    """Raised by a store adapter when its backend cannot be reached."""


class DocumentStorePort(Protocol):
    """Collections of JSON documents keyed by id."""

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        """Return every document in the collection, each including its "id"."""
        ...

    def upsert(self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = True) -> None:
        """Insert or update a document; merge=True keeps top-level keys absent from data."""
        ...

    def delete(self, collection: str, doc_id: str) -> None:
        ...


class KeyValueStorePort(Protocol):
    """Single JSON blob per logical key."""

    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
