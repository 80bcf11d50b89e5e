"""
Contracts component - Contract template storage and rendering.
"""

from .component import (
    DEFAULT_CONTRACT_TEMPLATE,
    contractor_address,
    render_contract,
    run_get_template,
    run_render_contract,
    run_save_template,
)
from .models import ContractOutput, RenderContractInput, SaveTemplateInput, TemplateOutput
from .ports import BandRepoPort, ContractorRepoPort, EventRepoPort, KeyValuePort
from .wording import date_in_words, format_brl, number_to_words, reais_in_words

__all__ = [
    # Entry points
    "render_contract",
    "run_get_template",
    "run_render_contract",
    "run_save_template",
    # Wording
    "contractor_address",
    "date_in_words",
    "format_brl",
    "number_to_words",
    "reais_in_words",
    "DEFAULT_CONTRACT_TEMPLATE",
    # Models
    "ContractOutput",
    "RenderContractInput",
    "SaveTemplateInput",
    "TemplateOutput",
    # Ports
    "BandRepoPort",
    "ContractorRepoPort",
    "EventRepoPort",
    "KeyValuePort",
]
