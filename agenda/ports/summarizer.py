from typing import Protocol

from agenda.domain.entities import Event


class SummarizerPort(Protocol):
    def summarize(self, event: Event, band_name: str) -> str:
        """
        Short logistics brief for the musicians.
        Must not raise: failures come back as a placeholder message.
        """
        ...
