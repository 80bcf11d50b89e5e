"""
Tokens component - Share links for the public contractor and prospecting forms.

Form tokens map to ``{"eventId": ...}`` and unlock the contractor data form
for one event. Prospecting tokens map to ``{"valid": true, "createdAt": ...}``
and let an anonymous visitor submit a new lead. Both are single-use: a
successful public submission removes the token. Neither expires by time.
"""

from __future__ import annotations

import logging
import secrets

from agenda.components.events import find_contractor, validate_event
from agenda.domain.calendar import utc_noon
from agenda.domain.entities import Event, new_id
from agenda.domain.financials import recalculate
from agenda.domain.policy import PolicyEngine

from .models import (
    EntryOutput,
    FormContext,
    FormContextOutput,
    IssueFormTokenInput,
    IssueProspectingTokenInput,
    ProspectingTokenInput,
    ResolveEntryInput,
    ResolveFormTokenInput,
    ShareLinkOutput,
    SubmissionOutput,
    SubmitContractorFormInput,
    SubmitProspectingInput,
    TokenStatusOutput,
)
from .ports import BandRepoPort, ContractorRepoPort, EventRepoPort, TimePort, TokenMapPort

logger = logging.getLogger(__name__)

INVALID_LINK = "Link inválido ou já utilizado."
PROSPECTING_CREATED_BY = "Formulário de Prospecção"
REGISTRATION_PENDING_MESSAGE = "Cadastro enviado! Aguarde a aprovação do administrador para acessar."


def _new_token() -> str:
    return secrets.token_urlsafe(24)


def share_url(base_url: str, param: str, token: str) -> str:
    return f"{base_url.rstrip('/')}/?{param}={token}"


# --- Form tokens ---


def run_issue_form_token(
    inp: IssueFormTokenInput,
    form_tokens: TokenMapPort,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
) -> ShareLinkOutput:
    if not policy.can_edit_contracts(inp.actor):
        return ShareLinkOutput(success=False, error="Access denied")

    event = event_repo.get_by_id(inp.event_id)
    if not event:
        return ShareLinkOutput(success=False, error="Event not found")
    if not policy.can_access_event(inp.actor, event, band_repo.list_all()):
        return ShareLinkOutput(success=False, error="Access denied")

    # One live link per event.
    if event.contractor_form_token:
        form_tokens.remove(event.contractor_form_token)

    token = _new_token()
    form_tokens.put(token, {"eventId": event.id})
    event_repo.save(event.model_copy(update={"contractor_form_token": token, "contractor_form_status": "SENT"}))

    return ShareLinkOutput(token=token, url=share_url(inp.base_url, "form_token", token), success=True)


def _resolve(
    token: str,
    form_tokens: TokenMapPort,
    event_repo: EventRepoPort,
) -> Event | None:
    payload = form_tokens.get(token) if token else None
    if not payload:
        return None
    event_id = payload.get("eventId")
    if not isinstance(event_id, str):
        return None
    return event_repo.get_by_id(event_id)


def run_resolve_form_token(
    inp: ResolveFormTokenInput,
    form_tokens: TokenMapPort,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    contractor_repo: ContractorRepoPort,
) -> FormContextOutput:
    event = _resolve(inp.token, form_tokens, event_repo)
    if not event:
        return FormContextOutput(success=False, error=INVALID_LINK)

    context = FormContext(
        event=event,
        contractor=find_contractor(contractor_repo.list_all(), event.contractor),
        band=band_repo.get_by_id(event.band_id),
    )
    return FormContextOutput(context=context, success=True)


def run_submit_contractor_form(
    inp: SubmitContractorFormInput,
    form_tokens: TokenMapPort,
    event_repo: EventRepoPort,
    contractor_repo: ContractorRepoPort,
) -> SubmissionOutput:
    event = _resolve(inp.token, form_tokens, event_repo)
    if not event:
        logger.warning("Contractor form submitted with an unknown token")
        return SubmissionOutput(success=False, error=INVALID_LINK)

    name = event.contractor or inp.contractor.name.strip()
    if not name:
        return SubmissionOutput(success=False, error="Nome do contratante é obrigatório.")

    existing = find_contractor(contractor_repo.list_all(), name)
    contractor = inp.contractor.model_copy(
        update={"id": existing.id if existing else new_id(), "name": existing.name if existing else name}
    )
    contractor_repo.save(contractor)

    event = event.model_copy(
        update={
            "contractor": event.contractor or contractor.name,
            "contractor_form_status": "COMPLETED",
            "contractor_form_token": "",
        }
    )
    event_repo.save(event)
    form_tokens.remove(inp.token)

    logger.info(f"Contractor form completed for event {event.id}")
    return SubmissionOutput(contractor=contractor, event=event, success=True)


# --- Prospecting tokens ---


def run_issue_prospecting_token(
    inp: IssueProspectingTokenInput,
    prospecting_tokens: TokenMapPort,
    policy: PolicyEngine,
    time: TimePort,
) -> ShareLinkOutput:
    if not policy.can_issue_prospecting_links(inp.actor):
        return ShareLinkOutput(success=False, error="Access denied")

    token = _new_token()
    prospecting_tokens.put(token, {"valid": True, "createdAt": time.now_utc().isoformat()})
    return ShareLinkOutput(token=token, url=share_url(inp.base_url, "prospecting_token", token), success=True)


def validate_prospecting_token(token: str, prospecting_tokens: TokenMapPort) -> bool:
    payload = prospecting_tokens.get(token) if token else None
    return bool(payload) and payload.get("valid") is True


def run_validate_prospecting_token(inp: ProspectingTokenInput, prospecting_tokens: TokenMapPort) -> TokenStatusOutput:
    return TokenStatusOutput(valid=validate_prospecting_token(inp.token, prospecting_tokens))


def run_invalidate_prospecting_token(inp: ProspectingTokenInput, prospecting_tokens: TokenMapPort) -> TokenStatusOutput:
    prospecting_tokens.remove(inp.token)
    return TokenStatusOutput(valid=False)


def run_submit_prospecting(
    inp: SubmitProspectingInput,
    prospecting_tokens: TokenMapPort,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    contractor_repo: ContractorRepoPort,
    time: TimePort,
) -> SubmissionOutput:
    if not validate_prospecting_token(inp.token, prospecting_tokens):
        logger.warning("Prospecting form submitted with an invalid token")
        return SubmissionOutput(success=False, error=INVALID_LINK)

    name = inp.contractor.name.strip()
    if not name:
        return SubmissionOutput(success=False, error="Nome do contratante é obrigatório.")

    if not band_repo.get_by_id(inp.band_id):
        return SubmissionOutput(success=False, error="Banda não encontrada.")

    event = Event(
        band_id=inp.band_id,
        name=inp.event_name.strip() or f"Evento - {name}",
        event_type=inp.event_type or "Geral",
        date=utc_noon(inp.event_date),
        time=inp.time,
        duration_hours=2,
        city=inp.city,
        venue=inp.venue,
        contractor=name,
        notes=inp.notes,
        status="RESERVED",
        pipeline_stage="LEAD",
        created_by=PROSPECTING_CREATED_BY,
        created_at=time.now_utc(),
    )
    event = event.model_copy(update={"financials": recalculate(event.financials)})

    # Same checks as a staff save.
    errors = validate_event(event)
    if errors:
        return SubmissionOutput(success=False, error=" ".join(e.message for e in errors))

    contractor = contractor_repo.save(inp.contractor.model_copy(update={"id": new_id(), "name": name}))
    event_repo.save(event)

    # Single-use link.
    prospecting_tokens.remove(inp.token)

    logger.info(f"Prospecting lead created: event {event.id}")
    return SubmissionOutput(contractor=contractor, event=event, success=True)


# --- Public entry ---


def run_resolve_entry(inp: ResolveEntryInput) -> EntryOutput:
    """Pick the startup screen from the landing URL's query parameters."""
    form_token = inp.params.get("form_token", "").strip()
    if form_token:
        return EntryOutput(view="contractor_form", form_token=form_token)

    if inp.params.get("request_access", "").lower() == "true":
        return EntryOutput(view="request_access")

    if inp.params.get("registration", "").lower() == "pending":
        return EntryOutput(view="login", message=REGISTRATION_PENDING_MESSAGE)

    return EntryOutput(view="login")
