"""
Tokens component - Share links for public contractor and prospecting forms.
"""

from .component import (
    INVALID_LINK,
    PROSPECTING_CREATED_BY,
    REGISTRATION_PENDING_MESSAGE,
    run_invalidate_prospecting_token,
    run_issue_form_token,
    run_issue_prospecting_token,
    run_resolve_entry,
    run_resolve_form_token,
    run_submit_contractor_form,
    run_submit_prospecting,
    run_validate_prospecting_token,
    share_url,
    validate_prospecting_token,
)
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

__all__ = [
    # Entry points
    "run_invalidate_prospecting_token",
    "run_issue_form_token",
    "run_issue_prospecting_token",
    "run_resolve_entry",
    "run_resolve_form_token",
    "run_submit_contractor_form",
    "run_submit_prospecting",
    "run_validate_prospecting_token",
    "share_url",
    "validate_prospecting_token",
    # Messages
    "INVALID_LINK",
    "PROSPECTING_CREATED_BY",
    "REGISTRATION_PENDING_MESSAGE",
    # Models
    "EntryOutput",
    "FormContext",
    "FormContextOutput",
    "IssueFormTokenInput",
    "IssueProspectingTokenInput",
    "ProspectingTokenInput",
    "ResolveEntryInput",
    "ResolveFormTokenInput",
    "ShareLinkOutput",
    "SubmissionOutput",
    "SubmitContractorFormInput",
    "SubmitProspectingInput",
    "TokenStatusOutput",
    # Ports
    "BandRepoPort",
    "ContractorRepoPort",
    "EventRepoPort",
    "TimePort",
    "TokenMapPort",
]
