from typing import Any, Protocol

from agenda.domain.entities import Band, Contractor, Event


class KeyValuePort(Protocol):
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...


class EventRepoPort(Protocol):
    def get_by_id(self, event_id: str) -> Event | None: ...


class BandRepoPort(Protocol):
    def list_all(self) -> list[Band]: ...
    def get_by_id(self, band_id: str) -> Band | None: ...


class ContractorRepoPort(Protocol):
    def list_all(self) -> list[Contractor]: ...
