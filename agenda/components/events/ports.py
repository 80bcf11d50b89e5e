from datetime import datetime
from typing import Protocol

from agenda.domain.entities import Band, Event


class EventRepoPort(Protocol):
    def list_all(self) -> list[Event]: ...
    def get_by_id(self, event_id: str) -> Event | None: ...
    def save(self, event: Event) -> Event: ...
    def delete(self, event_id: str) -> None: ...


class BandRepoPort(Protocol):
    def list_all(self) -> list[Band]: ...
    def get_by_id(self, band_id: str) -> Band | None: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
