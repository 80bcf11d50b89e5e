from datetime import datetime
from typing import Any, Protocol

from agenda.domain.entities import Band, Contractor, Event


class TokenMapPort(Protocol):
    """token -> JSON payload."""

    def get(self, token: str) -> dict[str, Any] | None: ...
    def put(self, token: str, payload: dict[str, Any]) -> None: ...
    def remove(self, token: str) -> None: ...


class EventRepoPort(Protocol):
    def list_all(self) -> list[Event]: ...
    def get_by_id(self, event_id: str) -> Event | None: ...
    def save(self, event: Event) -> Event: ...


class BandRepoPort(Protocol):
    def list_all(self) -> list[Band]: ...
    def get_by_id(self, band_id: str) -> Band | None: ...


class ContractorRepoPort(Protocol):
    def list_all(self) -> list[Contractor]: ...
    def save(self, contractor: Contractor) -> Contractor: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
