"""
JSON file store adapters.

The local tier of the two-tier store: one JSON file per collection or key,
rewritten whole on every change (the "last known good state").
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _safe_name(name: str) -> str:
    return name.replace("..", "").replace("/", "_").replace("\\", "_")


def _read_json(path: Path, default: Any) -> Any:
    if not path.exists():
        return default
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Unreadable local store file {path.name}: {e}")
        return default


def _write_json(path: Path, value: Any) -> None:
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(value, f, ensure_ascii=False)
    os.replace(tmp_path, path)


class JsonFileDocumentStore:
    """Stores each collection as a JSON list of documents."""

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path)
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _path(self, collection: str) -> Path:
        return self.base_path / f"{_safe_name(collection)}.json"

    def _load(self, collection: str) -> list[dict[str, Any]]:
        data = _read_json(self._path(collection), [])
        if not isinstance(data, list):
            return []
        return [d for d in data if isinstance(d, dict)]

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        return self._load(collection)

    def upsert(self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = True) -> None:
        docs = self._load(collection)
        for index, doc in enumerate(docs):
            if doc.get("id") == doc_id:
                base = doc if merge else {}
                docs[index] = {**base, **data, "id": doc_id}
                break
        else:
            docs.append({**data, "id": doc_id})
        _write_json(self._path(collection), docs)

    def delete(self, collection: str, doc_id: str) -> None:
        docs = self._load(collection)
        remaining = [d for d in docs if d.get("id") != doc_id]
        if len(remaining) != len(docs):
            _write_json(self._path(collection), remaining)


class JsonFileKeyValueStore:
    """One JSON file per key, the server-side stand-in for browser local storage."""

    def __init__(self, base_path: str | Path, *, create_dirs: bool = True) -> None:
        self.base_path = Path(base_path)
        if create_dirs:
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_path / f"{_safe_name(key)}.json"

    def get(self, key: str) -> Any | None:
        return _read_json(self._path(key), None)

    def set(self, key: str, value: Any) -> None:
        _write_json(self._path(key), value)

    def remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()
