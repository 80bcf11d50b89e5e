from datetime import datetime
from typing import Protocol

from agenda.domain.entities import Event


class EventRepoPort(Protocol):
    def save(self, event: Event) -> Event: ...


class TimePort(Protocol):
    def now_utc(self) -> datetime: ...
