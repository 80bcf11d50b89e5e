from fastapi import APIRouter, Depends, HTTPException, status

from agenda.adapters.repos import BandRepo, ContractorRepo, EventRepo
from agenda.adapters.stores.json_files import JsonFileKeyValueStore
from agenda.adapters.tokens import KeyValueTokenMap
from agenda.api.deps import (
    get_band_repo,
    get_clock,
    get_contractor_repo,
    get_current_user,
    get_event_repo,
    get_form_tokens,
    get_kv_store,
    get_policy,
    get_public_base_url,
    get_summarizer,
    get_template_key,
)
from agenda.api.errors import raise_for_error, raise_for_event_errors
from agenda.api.schemas import ContractFileRequest, PipelineStageRequest, ShareLinkResponse, TextResponse
from agenda.components.briefing import BriefInput, run_brief
from agenda.components.contracts import RenderContractInput, run_render_contract
from agenda.components.events import (
    AttachContractFileInput,
    DeleteEventInput,
    EventOutput,
    GetEventInput,
    ListEventsInput,
    RemoveContractFileInput,
    SaveEventInput,
    SetPipelineStageInput,
    run_attach_contract_file,
    run_delete_event,
    run_get_event,
    run_list_events,
    run_remove_contract_file,
    run_save_event,
    run_set_pipeline_stage,
)
from agenda.components.tokens import IssueFormTokenInput, run_issue_form_token
from agenda.domain.entities import Event, User, new_id
from agenda.domain.policy import PolicyEngine
from agenda.ports.clock import ClockPort
from agenda.ports.summarizer import SummarizerPort

router = APIRouter()


def _event_or_raise(result: EventOutput) -> Event:
    if not result.success or result.event is None:
        raise_for_event_errors(result.errors)
    return result.event


@router.get("", response_model=list[Event])
def list_events(
    band_id: str | None = None,
    search: str = "",
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> list[Event]:
    """Events visible to the caller, ordered by date and time."""
    result = run_list_events(
        ListEventsInput(actor=current_user, band_id=band_id, search=search),
        event_repo,
        band_repo,
        policy,
    )
    return result.events


@router.get("/{event_id}", response_model=Event)
def get_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Event:
    result = run_get_event(GetEventInput(actor=current_user, event_id=event_id), event_repo, band_repo, policy)
    return _event_or_raise(result)


@router.post("", response_model=Event)
def create_event(
    event: Event,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
) -> Event:
    """Create an event. Any client-sent id is replaced."""
    draft = event.model_copy(update={"id": new_id()})
    result = run_save_event(SaveEventInput(actor=current_user, event=draft), event_repo, band_repo, policy, clock)
    return _event_or_raise(result)


@router.put("/{event_id}", response_model=Event)
def update_event(
    event_id: str,
    event: Event,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
) -> Event:
    """Replace an event. The last save wins."""
    if not event_repo.get_by_id(event_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    draft = event.model_copy(update={"id": event_id})
    result = run_save_event(SaveEventInput(actor=current_user, event=draft), event_repo, band_repo, policy, clock)
    return _event_or_raise(result)


@router.delete("/{event_id}")
def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> dict[str, str]:
    result = run_delete_event(DeleteEventInput(actor=current_user, event_id=event_id), event_repo, band_repo, policy)
    _event_or_raise(result)
    return {"status": "deleted"}


@router.put("/{event_id}/pipeline-stage", response_model=Event)
def set_pipeline_stage(
    event_id: str,
    req: PipelineStageRequest,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Event:
    inp = SetPipelineStageInput(actor=current_user, event_id=event_id, stage=req.stage)
    return _event_or_raise(run_set_pipeline_stage(inp, event_repo, band_repo, policy))


# --- Contract files ---


@router.post("/{event_id}/contract-files", response_model=Event)
def attach_contract_file(
    event_id: str,
    req: ContractFileRequest,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
) -> Event:
    inp = AttachContractFileInput(actor=current_user, event_id=event_id, name=req.name, url=req.url)
    return _event_or_raise(run_attach_contract_file(inp, event_repo, band_repo, policy, clock))


@router.delete("/{event_id}/contract-files", response_model=Event)
def remove_contract_file(
    event_id: str,
    url: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> Event:
    inp = RemoveContractFileInput(actor=current_user, event_id=event_id, url=url)
    return _event_or_raise(run_remove_contract_file(inp, event_repo, band_repo, policy))


# --- Sharing, briefing, contract ---


@router.post("/{event_id}/form-token", response_model=ShareLinkResponse)
def issue_form_token(
    event_id: str,
    current_user: User = Depends(get_current_user),
    form_tokens: KeyValueTokenMap = Depends(get_form_tokens),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    base_url: str = Depends(get_public_base_url),
) -> ShareLinkResponse:
    """Share link for the contractor self-service form. Reissuing revokes the previous link."""
    inp = IssueFormTokenInput(actor=current_user, event_id=event_id, base_url=base_url)
    result = run_issue_form_token(inp, form_tokens, event_repo, band_repo, policy)
    if not result.success or not result.token or not result.url:
        raise_for_error(result.error)
    return ShareLinkResponse(token=result.token, url=result.url)


@router.post("/{event_id}/brief", response_model=TextResponse)
def brief_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    summarizer: SummarizerPort = Depends(get_summarizer),
    policy: PolicyEngine = Depends(get_policy),
) -> TextResponse:
    result = run_brief(BriefInput(actor=current_user, event_id=event_id), event_repo, band_repo, summarizer, policy)
    if not result.success or result.text is None:
        raise_for_error(result.error)
    return TextResponse(text=result.text)


@router.get("/{event_id}/contract", response_model=TextResponse)
def render_event_contract(
    event_id: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    kv: JsonFileKeyValueStore = Depends(get_kv_store),
    template_key: str = Depends(get_template_key),
    policy: PolicyEngine = Depends(get_policy),
) -> TextResponse:
    result = run_render_contract(
        RenderContractInput(actor=current_user, event_id=event_id),
        event_repo,
        band_repo,
        contractor_repo,
        kv,
        template_key,
        policy,
    )
    if not result.success or result.text is None:
        raise_for_error(result.error)
    return TextResponse(text=result.text)
