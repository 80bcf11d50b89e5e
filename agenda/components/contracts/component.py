"""
Contracts component - Contract template storage and rendering.

The template is free text with ``{{PLACEHOLDER}}`` markers; unknown markers
are left untouched.
"""

from __future__ import annotations

import logging

from agenda.components.events import find_contractor
from agenda.domain.entities import Band, Contractor, Event
from agenda.domain.policy import PolicyEngine

from .models import ContractOutput, RenderContractInput, SaveTemplateInput, TemplateOutput
from .ports import BandRepoPort, ContractorRepoPort, EventRepoPort, KeyValuePort
from .wording import date_in_words, format_brl, reais_in_words

logger = logging.getLogger(__name__)

NOT_INFORMED = "Não informado"

DEFAULT_CONTRACT_TEMPLATE = """CONTRATO DE APRESENTAÇÃO ARTÍSTICA

Pelo presente instrumento, as partes:

CONTRATANTE: {{NOME_CONTRATANTE}}
Responsável: {{NOME_RESPONSAVEL}}
Endereço: {{ENDERECO_CONTRATANTE}}

CONTRATADA: {{NOME_BANDA}}
Agência: D&E MUSIC

Celebram o presente contrato para a apresentação artística no evento "{{NOME_EVENTO}}", \
a ser realizado em {{DATA_EVENTO_EXTENSO}} às {{HORARIO_EVENTO}}, no local "{{LOCAL_EVENTO}}, {{CIDADE_EVENTO}}".

O valor acordado para a apresentação é de {{VALOR_BRUTO_FORMATADO}} ({{VALOR_POR_EXTENSO}}).

E por estarem justos e contratados, assinam o presente em duas vias de igual teor e forma.

_________________________
{{NOME_CONTRATANTE}}

_________________________
D&E MUSIC
"""


def contractor_address(contractor: Contractor | None) -> str:
    if contractor is None:
        return NOT_INFORMED
    a = contractor.address
    street = ", ".join(p for p in (a.street, a.number) if p)
    locality = " - ".join(p for p in (a.neighborhood, a.city, a.state) if p)
    parts = [p for p in (street, a.complement, locality) if p]
    if a.zip_code:
        parts.append(f"CEP: {a.zip_code}")
    return ", ".join(parts) or NOT_INFORMED


def render_contract(template: str, event: Event, band: Band | None, contractor: Contractor | None) -> str:
    gross = event.financials.gross_value
    contractor_name = (contractor.name if contractor else event.contractor) or NOT_INFORMED
    replacements = {
        "{{NOME_CONTRATANTE}}": contractor_name,
        "{{NOME_RESPONSAVEL}}": (contractor.responsible_name if contractor else "") or contractor_name,
        "{{ENDERECO_CONTRATANTE}}": contractor_address(contractor),
        "{{NOME_BANDA}}": band.name if band else NOT_INFORMED,
        "{{NOME_EVENTO}}": event.name,
        "{{DATA_EVENTO_EXTENSO}}": date_in_words(event.date),
        "{{HORARIO_EVENTO}}": event.time,
        "{{LOCAL_EVENTO}}": event.venue or NOT_INFORMED,
        "{{CIDADE_EVENTO}}": event.city or NOT_INFORMED,
        "{{VALOR_BRUTO_FORMATADO}}": format_brl(gross),
        "{{VALOR_POR_EXTENSO}}": reais_in_words(gross),
    }

    text = template
    for marker, value in replacements.items():
        text = text.replace(marker, value)
    return text


def run_get_template(store: KeyValuePort, key: str) -> TemplateOutput:
    stored = store.get(key)
    if isinstance(stored, str) and stored.strip():
        return TemplateOutput(template=stored, success=True)
    return TemplateOutput(template=DEFAULT_CONTRACT_TEMPLATE, success=True)


def run_save_template(inp: SaveTemplateInput, store: KeyValuePort, key: str, policy: PolicyEngine) -> TemplateOutput:
    if not policy.can_edit_contracts(inp.actor):
        return TemplateOutput(success=False, error="Access denied")
    if not inp.template.strip():
        return TemplateOutput(success=False, error="O modelo de contrato não pode ficar vazio.")

    store.set(key, inp.template)
    logger.info(f"Contract template updated by {inp.actor.id}")
    return TemplateOutput(template=inp.template, success=True)


def run_render_contract(
    inp: RenderContractInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    contractor_repo: ContractorRepoPort,
    store: KeyValuePort,
    key: str,
    policy: PolicyEngine,
) -> ContractOutput:
    # The contract prints the gross value.
    if not policy.can_see_financials(inp.actor):
        return ContractOutput(success=False, error="Access denied")

    event = event_repo.get_by_id(inp.event_id)
    if not event:
        return ContractOutput(success=False, error="Event not found")
    if not policy.can_access_event(inp.actor, event, band_repo.list_all()):
        return ContractOutput(success=False, error="Access denied")

    template = run_get_template(store, key).template or DEFAULT_CONTRACT_TEMPLATE
    text = render_contract(
        template,
        event,
        band_repo.get_by_id(event.band_id),
        find_contractor(contractor_repo.list_all(), event.contractor),
    )
    return ContractOutput(text=text, success=True)
