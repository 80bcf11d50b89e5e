"""
Unauthenticated entry points: the contractor self-service form, the
prospecting form and the landing-URL resolver. Dead or reused tokens
answer 404 with the same message, whatever the reason.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from agenda.adapters.repos import BandRepo, ContractorRepo, EventRepo
from agenda.adapters.tokens import KeyValueTokenMap
from agenda.api.deps import (
    get_band_repo,
    get_clock,
    get_contractor_repo,
    get_event_repo,
    get_form_tokens,
    get_prospecting_tokens,
)
from agenda.api.errors import raise_for_error
from agenda.api.schemas import (
    EntryResponse,
    FormContextResponse,
    ProspectingStatusResponse,
    ProspectingSubmitRequest,
    PublicBand,
    PublicEventSummary,
    SubmissionResponse,
)
from agenda.components.tokens import (
    INVALID_LINK,
    ProspectingTokenInput,
    ResolveEntryInput,
    ResolveFormTokenInput,
    SubmissionOutput,
    SubmitContractorFormInput,
    SubmitProspectingInput,
    run_resolve_entry,
    run_resolve_form_token,
    run_submit_contractor_form,
    run_submit_prospecting,
    run_validate_prospecting_token,
)
from agenda.domain.entities import Contractor
from agenda.ports.clock import ClockPort

router = APIRouter()


def _dead_link() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=INVALID_LINK)


def _submission_or_raise(result: SubmissionOutput) -> SubmissionResponse:
    if result.error == INVALID_LINK:
        raise _dead_link()
    if not result.success or not result.contractor or not result.event:
        raise_for_error(result.error)
    return SubmissionResponse(contractor_id=result.contractor.id, event_id=result.event.id)


@router.get("/entry", response_model=EntryResponse)
def resolve_entry(request: Request) -> EntryResponse:
    """Which screen the landing URL opens: form_token, request_access or registration=pending."""
    result = run_resolve_entry(ResolveEntryInput(params=dict(request.query_params)))
    return EntryResponse(view=result.view, form_token=result.form_token, message=result.message)


# --- Contractor form ---


@router.get("/form/{token}", response_model=FormContextResponse)
def get_contractor_form(
    token: str,
    form_tokens: KeyValueTokenMap = Depends(get_form_tokens),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
) -> FormContextResponse:
    result = run_resolve_form_token(ResolveFormTokenInput(token=token), form_tokens, event_repo, band_repo, contractor_repo)
    if not result.success or result.context is None:
        raise _dead_link()
    ctx = result.context
    return FormContextResponse(
        event=PublicEventSummary.from_event(ctx.event),
        contractor=ctx.contractor,
        band=PublicBand.from_band(ctx.band) if ctx.band else None,
    )


@router.post("/form/{token}", response_model=SubmissionResponse)
def submit_contractor_form(
    token: str,
    contractor: Contractor,
    form_tokens: KeyValueTokenMap = Depends(get_form_tokens),
    event_repo: EventRepo = Depends(get_event_repo),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
) -> SubmissionResponse:
    result = run_submit_contractor_form(
        SubmitContractorFormInput(token=token, contractor=contractor),
        form_tokens,
        event_repo,
        contractor_repo,
    )
    return _submission_or_raise(result)


# --- Prospecting form ---


@router.get("/prospecting/{token}", response_model=ProspectingStatusResponse)
def get_prospecting_form(
    token: str,
    prospecting_tokens: KeyValueTokenMap = Depends(get_prospecting_tokens),
    band_repo: BandRepo = Depends(get_band_repo),
) -> ProspectingStatusResponse:
    status_out = run_validate_prospecting_token(ProspectingTokenInput(token=token), prospecting_tokens)
    if not status_out.valid:
        raise _dead_link()
    return ProspectingStatusResponse(valid=True, bands=[PublicBand.from_band(b) for b in band_repo.list_all()])


@router.post("/prospecting/{token}", response_model=SubmissionResponse)
def submit_prospecting_form(
    token: str,
    req: ProspectingSubmitRequest,
    prospecting_tokens: KeyValueTokenMap = Depends(get_prospecting_tokens),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    clock: ClockPort = Depends(get_clock),
) -> SubmissionResponse:
    inp = SubmitProspectingInput(
        token=token,
        contractor=req.contractor,
        band_id=req.band_id,
        event_date=req.event_date,
        event_name=req.event_name,
        event_type=req.event_type,
        time=req.time,
        city=req.city,
        venue=req.venue,
        notes=req.notes,
    )
    result = run_submit_prospecting(inp, prospecting_tokens, event_repo, band_repo, contractor_repo, clock)
    return _submission_or_raise(result)
