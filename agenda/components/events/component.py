"""
Events component - Event lifecycle with financial and contract consistency.

Every save recomputes the payout from scratch, so the stored record never
carries a hand-typed net value.

Consistency rules:
- financials.net_value == gross - commission - taxes
- has_contract is the submitted flag; attaching the first contract file
  sets it, removing files leaves it alone
- pipeline_stage is inferred from status only when an event is created
  without an explicit stage
- callers that cannot see financials or edit contracts keep the stored
  values for those fields, whatever they submit
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import UTC

from agenda.domain.entities import PIPELINE_STAGES, ContractFile, Contractor, Event, Financials, User
from agenda.domain.financials import recalculate
from agenda.domain.policy import PolicyEngine
from agenda.domain.sanitize import DEFAULT_CREATED_BY, LEGACY_CONTRACT_FILE_NAME, infer_pipeline_stage

from .models import (
    AttachContractFileInput,
    DeleteEventInput,
    EventListOutput,
    EventOutput,
    EventValidationError,
    GetEventInput,
    ListEventsInput,
    RemoveContractFileInput,
    SaveEventInput,
    SetPipelineStageInput,
)
from .ports import BandRepoPort, EventRepoPort, TimePort

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

ACCESS_DENIED = EventValidationError(code="forbidden", message="Access denied")
NOT_FOUND = EventValidationError(code="not_found", message="Event not found")


# --- Pure helpers ---


def find_contractor(contractors: Iterable[Contractor], name: str) -> Contractor | None:
    """First contractor whose name matches case-insensitively; duplicates resolve to the first."""
    wanted = name.strip().lower()
    if not wanted:
        return None
    for contractor in contractors:
        if contractor.name.strip().lower() == wanted:
            return contractor
    return None


def mask_financials(event: Event) -> Event:
    return event.model_copy(update={"financials": Financials()})


def apply_consistency(event: Event) -> Event:
    """Recompute derived fields."""
    return event.model_copy(update={"financials": recalculate(event.financials)})


def validate_event(event: Event) -> list[EventValidationError]:
    errors: list[EventValidationError] = []

    if not event.name or not event.name.strip():
        errors.append(EventValidationError(code="name_required", message="Nome do evento é obrigatório", field="name"))

    if not event.band_id:
        errors.append(EventValidationError(code="band_required", message="Selecione uma banda", field="bandId"))

    if event.duration_hours <= 0:
        errors.append(
            EventValidationError(
                code="duration_invalid",
                message="A duração deve ser maior que zero",
                field="durationHours",
            )
        )

    if not TIME_PATTERN.match(event.time):
        errors.append(EventValidationError(code="time_invalid", message="Horário inválido (use HH:MM)", field="time"))

    return errors


def _load_accessible(
    event_id: str,
    actor: User,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> tuple[Event | None, EventValidationError | None]:
    event = event_repo.get_by_id(event_id)
    if not event:
        return None, NOT_FOUND
    if not policy.can_access_event(actor, event, band_repo.list_all()):
        return None, ACCESS_DENIED
    return event, None


# --- Entry points ---


def run_save_event(
    inp: SaveEventInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
    time: TimePort,
) -> EventOutput:
    actor = inp.actor
    if not policy.can_edit_events(actor):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    errors = validate_event(inp.event)
    if errors:
        return EventOutput(success=False, errors=errors)

    bands = band_repo.list_all()
    existing = event_repo.get_by_id(inp.event.id)
    if existing and not policy.can_access_event(actor, existing, bands):
        return EventOutput(success=False, errors=[ACCESS_DENIED])
    if not policy.can_access_event(actor, inp.event, bands):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    updates: dict = {"name": inp.event.name.strip()}
    if inp.event.date.tzinfo is None:
        updates["date"] = inp.event.date.replace(tzinfo=UTC)

    if not policy.can_see_financials(actor):
        updates["financials"] = existing.financials if existing else Financials()

    if not policy.can_edit_contracts(actor):
        updates["has_contract"] = existing.has_contract if existing else False
        updates["contract_files"] = list(existing.contract_files) if existing else []

    if existing:
        updates["created_by"] = existing.created_by
        updates["created_at"] = existing.created_at
        # Owned by the share-link flow.
        updates["contractor_form_token"] = existing.contractor_form_token
        updates["contractor_form_status"] = existing.contractor_form_status
    else:
        updates["created_by"] = actor.name or DEFAULT_CREATED_BY
        updates["created_at"] = time.now_utc()
        updates["contractor_form_token"] = ""
        updates["contractor_form_status"] = "PENDING"
        if "pipeline_stage" not in inp.event.model_fields_set:
            updates["pipeline_stage"] = infer_pipeline_stage(inp.event.status)

    event = apply_consistency(inp.event.model_copy(update=updates))
    event_repo.save(event)

    if not policy.can_see_financials(actor):
        event = mask_financials(event)
    return EventOutput(event=event, success=True)


def run_get_event(
    inp: GetEventInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> EventOutput:
    event, error = _load_accessible(inp.event_id, inp.actor, event_repo, band_repo, policy)
    if error or event is None:
        return EventOutput(success=False, errors=[error or NOT_FOUND])

    if not policy.can_see_financials(inp.actor):
        event = mask_financials(event)
    return EventOutput(event=event, success=True)


def run_delete_event(
    inp: DeleteEventInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> EventOutput:
    if not policy.can_delete_events(inp.actor):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    event, error = _load_accessible(inp.event_id, inp.actor, event_repo, band_repo, policy)
    if error or event is None:
        return EventOutput(success=False, errors=[error or NOT_FOUND])

    event_repo.delete(event.id)
    logger.info(f"Event {event.id} deleted by {inp.actor.id}")
    return EventOutput(event=event, success=True)


def run_attach_contract_file(
    inp: AttachContractFileInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
    time: TimePort,
) -> EventOutput:
    if not policy.can_edit_contracts(inp.actor):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    if not inp.url.strip():
        return EventOutput(
            success=False,
            errors=[EventValidationError(code="url_required", message="Arquivo sem URL", field="url")],
        )

    event, error = _load_accessible(inp.event_id, inp.actor, event_repo, band_repo, policy)
    if error or event is None:
        return EventOutput(success=False, errors=[error or NOT_FOUND])

    contract_file = ContractFile(
        name=inp.name.strip() or LEGACY_CONTRACT_FILE_NAME,
        url=inp.url.strip(),
        uploaded_at=time.now_utc(),
    )
    updates: dict = {"contract_files": [*event.contract_files, contract_file]}
    if not event.contract_files:
        updates["has_contract"] = True

    event = apply_consistency(event.model_copy(update=updates))
    event_repo.save(event)
    return EventOutput(event=event, success=True)


def run_remove_contract_file(
    inp: RemoveContractFileInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> EventOutput:
    if not policy.can_edit_contracts(inp.actor):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    event, error = _load_accessible(inp.event_id, inp.actor, event_repo, band_repo, policy)
    if error or event is None:
        return EventOutput(success=False, errors=[error or NOT_FOUND])

    remaining = [f for f in event.contract_files if f.url != inp.url]
    if len(remaining) == len(event.contract_files):
        return EventOutput(
            success=False,
            errors=[EventValidationError(code="not_found", message="Arquivo não encontrado", field="url")],
        )

    event = apply_consistency(event.model_copy(update={"contract_files": remaining}))
    event_repo.save(event)
    return EventOutput(event=event, success=True)


def run_set_pipeline_stage(
    inp: SetPipelineStageInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> EventOutput:
    if not policy.can_edit_events(inp.actor):
        return EventOutput(success=False, errors=[ACCESS_DENIED])

    if inp.stage not in PIPELINE_STAGES:
        return EventOutput(
            success=False,
            errors=[EventValidationError(code="stage_invalid", message=f"Etapa inválida: {inp.stage}", field="pipelineStage")],
        )

    event, error = _load_accessible(inp.event_id, inp.actor, event_repo, band_repo, policy)
    if error or event is None:
        return EventOutput(success=False, errors=[error or NOT_FOUND])

    # Stage and booking status move independently.
    event = event.model_copy(update={"pipeline_stage": inp.stage})
    event_repo.save(event)

    if not policy.can_see_financials(inp.actor):
        event = mask_financials(event)
    return EventOutput(event=event, success=True)


def run_list_events(
    inp: ListEventsInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> EventListOutput:
    events = policy.filter_events(event_repo.list_all(), inp.actor, band_repo.list_all())

    if inp.band_id:
        events = [e for e in events if e.band_id == inp.band_id]

    search = inp.search.strip().lower()
    if search:
        events = [e for e in events if search in e.name.lower() or search in e.city.lower()]

    events.sort(key=lambda e: (e.date, e.time))

    if not policy.can_see_financials(inp.actor):
        events = [mask_financials(e) for e in events]
    return EventListOutput(events=events, success=True)


def run(
    inp: (
        SaveEventInput
        | GetEventInput
        | DeleteEventInput
        | AttachContractFileInput
        | RemoveContractFileInput
        | SetPipelineStageInput
        | ListEventsInput
    ),
    *,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
    time: TimePort | None = None,
) -> EventOutput | EventListOutput:
    if isinstance(inp, SaveEventInput):
        assert time
        return run_save_event(inp, event_repo, band_repo, policy, time)

    elif isinstance(inp, GetEventInput):
        return run_get_event(inp, event_repo, band_repo, policy)

    elif isinstance(inp, DeleteEventInput):
        return run_delete_event(inp, event_repo, band_repo, policy)

    elif isinstance(inp, AttachContractFileInput):
        assert time
        return run_attach_contract_file(inp, event_repo, band_repo, policy, time)

    elif isinstance(inp, RemoveContractFileInput):
        return run_remove_contract_file(inp, event_repo, band_repo, policy)

    elif isinstance(inp, SetPipelineStageInput):
        return run_set_pipeline_stage(inp, event_repo, band_repo, policy)

    elif isinstance(inp, ListEventsInput):
        return run_list_events(inp, event_repo, band_repo, policy)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
