from __future__ import annotations

from dataclasses import dataclass

from agenda.domain.entities import User


@dataclass(frozen=True)
class BriefInput:
    actor: User
    event_id: str


@dataclass(frozen=True)
class BriefOutput:
    text: str | None = None
    success: bool = False
    error: str | None = None
