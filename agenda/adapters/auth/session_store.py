"""Key-value backed session store adapter.

Implements SessionStorePort for the auth component. The whole token->session
map lives under one key and is read, modified and written back on every call.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from agenda.domain.entities import Session
from agenda.ports.store import KeyValueStorePort

logger = logging.getLogger(__name__)


class KeyValueSessionStore:
    def __init__(self, kv: KeyValueStorePort, key: str) -> None:
        self.kv = kv
        self.key = key

    def _load(self) -> dict[str, Any]:
        data = self.kv.get(self.key)
        return data if isinstance(data, dict) else {}

    def get(self, token: str) -> Session | None:
        raw = self._load().get(token)
        if raw is None:
            return None
        try:
            return Session.model_validate(raw)
        except ValidationError as e:
            logger.error(f"Error reading session, discarding it: {e}")
            self.delete(token)
            return None

    def save(self, token: str, session: Session) -> None:
        sessions = self._load()
        sessions[token] = session.to_document()
        self.kv.set(self.key, sessions)

    def delete(self, token: str) -> None:
        sessions = self._load()
        if sessions.pop(token, None) is not None:
            self.kv.set(self.key, sessions)

    def delete_by_user(self, user_id: str) -> int:
        """Delete all sessions for a user. Returns count deleted."""
        sessions = self._load()
        remaining = {
            token: raw
            for token, raw in sessions.items()
            if not (isinstance(raw, dict) and isinstance(raw.get("user"), dict) and raw["user"].get("id") == user_id)
        }
        removed = len(sessions) - len(remaining)
        if removed:
            self.kv.set(self.key, remaining)
        return removed
