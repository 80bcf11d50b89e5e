"""
Tokens component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Literal

from agenda.domain.entities import Band, Contractor, Event, User

EntryView = Literal["contractor_form", "request_access", "login"]


# --- Input Models ---


@dataclass(frozen=True)
class IssueFormTokenInput:
    actor: User
    event_id: str
    base_url: str = ""


@dataclass(frozen=True)
class ResolveFormTokenInput:
    token: str


@dataclass(frozen=True)
class SubmitContractorFormInput:
    """Contractor data typed by the client on the public form; ``id`` is ignored."""

    token: str
    contractor: Contractor


@dataclass(frozen=True)
class IssueProspectingTokenInput:
    actor: User
    base_url: str = ""


@dataclass(frozen=True)
class ProspectingTokenInput:
    token: str


@dataclass(frozen=True)
class SubmitProspectingInput:
    token: str
    contractor: Contractor
    band_id: str
    event_date: date
    event_name: str = ""
    event_type: str = "Geral"
    time: str = "20:00"
    city: str = ""
    venue: str = ""
    notes: str = ""


@dataclass(frozen=True)
class ResolveEntryInput:
    """Query parameters of the public landing URL."""

    params: dict[str, str]


# --- Output Models ---


@dataclass(frozen=True)
class ShareLinkOutput:
    token: str | None = None
    url: str | None = None
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class FormContext:
    """Everything the public contractor form is pre-filled with."""

    event: Event
    contractor: Contractor | None
    band: Band | None


@dataclass(frozen=True)
class FormContextOutput:
    context: FormContext | None = None
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class SubmissionOutput:
    contractor: Contractor | None = None
    event: Event | None = None
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class TokenStatusOutput:
    valid: bool


@dataclass(frozen=True)
class EntryOutput:
    view: EntryView
    form_token: str | None = None
    message: str | None = None
