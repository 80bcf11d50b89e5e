from typing import Protocol

from agenda.domain.entities import Band, Event


class EventRepoPort(Protocol):
    def get_by_id(self, event_id: str) -> Event | None: ...


class BandRepoPort(Protocol):
    def list_all(self) -> list[Band]: ...
    def get_by_id(self, band_id: str) -> Band | None: ...


class SummarizerPort(Protocol):
    def summarize(self, event: Event, band_name: str) -> str: ...
