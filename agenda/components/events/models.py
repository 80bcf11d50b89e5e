"""
Events component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from agenda.domain.entities import Event, PipelineStage, User

# --- Validation Error ---


@dataclass(frozen=True)
class EventValidationError:
    """Event validation error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class SaveEventInput:
    """Create or replace an event. Creation is detected by the id being unknown."""

    actor: User
    event: Event


@dataclass(frozen=True)
class GetEventInput:
    actor: User
    event_id: str


@dataclass(frozen=True)
class DeleteEventInput:
    actor: User
    event_id: str


@dataclass(frozen=True)
class AttachContractFileInput:
    actor: User
    event_id: str
    name: str
    url: str


@dataclass(frozen=True)
class RemoveContractFileInput:
    actor: User
    event_id: str
    url: str


@dataclass(frozen=True)
class SetPipelineStageInput:
    actor: User
    event_id: str
    stage: PipelineStage


@dataclass(frozen=True)
class ListEventsInput:
    """List visible events, optionally narrowed to one band and a name/city search."""

    actor: User
    band_id: str | None = None
    search: str = ""


# --- Output Models ---


@dataclass(frozen=True)
class EventOutput:
    event: Event | None = None
    errors: list[EventValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class EventListOutput:
    events: list[Event]
    errors: list[EventValidationError] = field(default_factory=list)
    success: bool = True
