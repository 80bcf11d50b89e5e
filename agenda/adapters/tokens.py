"""Share-token maps over the key-value store.

Each map is a single JSON object token -> payload, read and rewritten whole
on every operation.
"""

from typing import Any

from agenda.ports.store import KeyValueStorePort


class KeyValueTokenMap:
    def __init__(self, kv: KeyValueStorePort, key: str) -> None:
        self.kv = kv
        self.key = key

    def _load(self) -> dict[str, Any]:
        data = self.kv.get(self.key)
        return data if isinstance(data, dict) else {}

    def get(self, token: str) -> dict[str, Any] | None:
        payload = self._load().get(token)
        return payload if isinstance(payload, dict) else None

    def put(self, token: str, payload: dict[str, Any]) -> None:
        tokens = self._load()
        tokens[token] = payload
        self.kv.set(self.key, tokens)

    def remove(self, token: str) -> None:
        tokens = self._load()
        if tokens.pop(token, None) is not None:
            self.kv.set(self.key, tokens)
