import json
import sqlite3
from typing import Any

from agenda.ports.store import StoreUnavailableError

SCHEMA = """
CREATE TABLE IF NOT EXISTS documents (
    collection TEXT NOT NULL,
    id TEXT NOT NULL,
    data_json TEXT NOT NULL,
    PRIMARY KEY (collection, id)
)
"""


class SQLiteDocumentStore:
    """Primary document store: one row per document, JSON payload."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._schema_ready = False

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self.db_path)
            if not self._schema_ready:
                conn.execute(SCHEMA)
                conn.commit()
                self._schema_ready = True
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"SQLite store unavailable at {self.db_path}: {e}") from e
        return conn

    def list_all(self, collection: str) -> list[dict[str, Any]]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT id, data_json FROM documents WHERE collection = ? ORDER BY rowid ASC",
                (collection,),
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e)) from e
        finally:
            conn.close()

        docs = []
        for doc_id, data_json in rows:
            try:
                data = json.loads(data_json)
            except json.JSONDecodeError:
                data = {}
            if not isinstance(data, dict):
                data = {}
            docs.append({**data, "id": doc_id})
        return docs

    def upsert(self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = True) -> None:
        conn = self._get_conn()
        try:
            payload = dict(data)
            if merge:
                row = conn.execute(
                    "SELECT data_json FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id),
                ).fetchone()
                if row:
                    try:
                        existing = json.loads(row[0])
                    except json.JSONDecodeError:
                        existing = {}
                    if isinstance(existing, dict):
                        payload = {**existing, **payload}
            payload["id"] = doc_id

            conn.execute(
                """
                INSERT INTO documents (collection, id, data_json) VALUES (?, ?, ?)
                ON CONFLICT(collection, id) DO UPDATE SET data_json=excluded.data_json
            """,
                (collection, doc_id, json.dumps(payload, ensure_ascii=False)),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailableError(str(e)) from e
        finally:
            conn.close()

    def delete(self, collection: str, doc_id: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM documents WHERE collection = ? AND id = ?", (collection, doc_id))
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreUnavailableError(str(e)) from e
        finally:
            conn.close()
