from fastapi import APIRouter, Depends

from agenda.adapters.tokens import KeyValueTokenMap
from agenda.api.deps import get_clock, get_current_user, get_policy, get_prospecting_tokens, get_public_base_url
from agenda.api.errors import raise_for_error
from agenda.api.schemas import ShareLinkResponse
from agenda.components.tokens import IssueProspectingTokenInput, run_issue_prospecting_token
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine
from agenda.ports.clock import ClockPort

router = APIRouter()


@router.post("", response_model=ShareLinkResponse)
def issue_prospecting_token(
    current_user: User = Depends(get_current_user),
    prospecting_tokens: KeyValueTokenMap = Depends(get_prospecting_tokens),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
    base_url: str = Depends(get_public_base_url),
) -> ShareLinkResponse:
    """Single-use link to the public prospecting form."""
    inp = IssueProspectingTokenInput(actor=current_user, base_url=base_url)
    result = run_issue_prospecting_token(inp, prospecting_tokens, policy, clock)
    if not result.success or not result.token or not result.url:
        raise_for_error(result.error)
    return ShareLinkResponse(token=result.token, url=result.url)
