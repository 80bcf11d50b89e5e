from datetime import datetime
from typing import Protocol

from agenda.domain.entities import Band, Event


class EventRepoPort(Protocol):
    def list_all(self) -> list[Event]: ...


class BandRepoPort(Protocol):
    def list_all(self) -> list[Band]: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
