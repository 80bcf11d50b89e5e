"""
Events component - Event lifecycle with financial and contract consistency.
"""

from .component import (
    apply_consistency,
    find_contractor,
    mask_financials,
    run,
    run_attach_contract_file,
    run_delete_event,
    run_get_event,
    run_list_events,
    run_remove_contract_file,
    run_save_event,
    run_set_pipeline_stage,
    validate_event,
)
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

__all__ = [
    # Entry points
    "run",
    "run_attach_contract_file",
    "run_delete_event",
    "run_get_event",
    "run_list_events",
    "run_remove_contract_file",
    "run_save_event",
    "run_set_pipeline_stage",
    # Helpers
    "apply_consistency",
    "find_contractor",
    "mask_financials",
    "validate_event",
    # Models
    "AttachContractFileInput",
    "DeleteEventInput",
    "EventListOutput",
    "EventOutput",
    "EventValidationError",
    "GetEventInput",
    "ListEventsInput",
    "RemoveContractFileInput",
    "SaveEventInput",
    "SetPipelineStageInput",
    # Ports
    "BandRepoPort",
    "EventRepoPort",
    "TimePort",
]
