"""In-memory store adapters.

Suitable for tests and for single-process demo deployments.
"""

import copy
from typing import Any


class InMemoryDocumentStore:
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        docs = self._collections.get(collection, {})
        return [copy.deepcopy(d) for d in docs.values()]

    def upsert(self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = True) -> None:
        docs = self._collections.setdefault(collection, {})
        existing = docs.get(doc_id, {}) if merge else {}
        docs[doc_id] = {**existing, **copy.deepcopy(data), "id": doc_id}

    def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)

    def clear(self) -> None:
        """Clear all collections - useful for testing."""
        self._collections.clear()


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        value = self._values.get(key)
        return copy.deepcopy(value)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)
