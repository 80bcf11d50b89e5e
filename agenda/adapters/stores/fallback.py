"""
Two-tier document store.

Primary (remote) store backed by a local cache of the same shape. Reads
degrade to the cache, writes land in the cache first and never fail because
the primary is down.
"""

from __future__ import annotations

import logging
from typing import Any

from agenda.ports.store import DocumentStorePort

logger = logging.getLogger(__name__)


class FallbackDocumentStore:
    def __init__(self, primary: DocumentStorePort | None, cache: DocumentStorePort) -> None:
        self.primary = primary
        self.cache = cache

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        if self.primary is None:
            return self.cache.list_all(collection)

        try:
            docs = self.primary.list_all(collection)
        except Exception as e:
            logger.warning(f"Primary store read failed ({collection}), using local cache: {e}")
            return self.cache.list_all(collection)

        if not docs:
            # Demo and pre-sync data only exist locally.
            return self.cache.list_all(collection)
        return docs

    def upsert(self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = True) -> None:
        self.cache.upsert(collection, doc_id, data, merge=merge)
        if self.primary is None:
            return
        try:
            self.primary.upsert(collection, doc_id, data, merge=merge)
        except Exception as e:
            logger.error(f"Primary store save failed ({collection}/{doc_id}): {e}")

    def delete(self, collection: str, doc_id: str) -> None:
        self.cache.delete(collection, doc_id)
        if self.primary is None:
            return
        try:
            self.primary.delete(collection, doc_id)
        except Exception as e:
            logger.warning(f"Primary store delete failed ({collection}/{doc_id}): {e}")
