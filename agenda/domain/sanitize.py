"""
Entity sanitizer.

Turns raw persisted documents (partial, legacy or hand-edited) into fully
populated entities. Every function here is total: malformed input yields
defaults, never an exception.

Invariants:
- sanitize(sanitize(x).to_document()) == sanitize(x)
- Event.has_contract is False whenever contract_files is empty and the flag was absent
- Legacy single ``contractUrl`` values become a one-element contract_files list
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

from agenda.domain.entities import (
    EPOCH,
    EVENT_STATUSES,
    PIPELINE_STAGES,
    AdditionalInfo,
    Address,
    Band,
    CompanyInfo,
    ContractFile,
    Contractor,
    EntityKind,
    Event,
    EventStatus,
    Financials,
    PipelineStage,
    User,
)

DEFAULT_EVENT_NAME = "Evento Sem Nome"
DEFAULT_USER_NAME = "Usuário"
DEFAULT_USER_EMAIL = "sem-email@dne.music"
DEFAULT_CREATED_BY = "Sistema"
LEGACY_CONTRACT_FILE_NAME = "Contrato"


# --- Field coercion helpers ---


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any, default: str = "") -> str:
    if isinstance(value, str) and value:
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _number(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return float(value)
    return default


def _datetime(value: Any, default: datetime) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return default
    else:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def infer_pipeline_stage(status: str) -> PipelineStage:
    """One-time default for records that predate the CRM funnel."""
    if status == "CONFIRMED":
        return "WON"
    if status == "CANCELED":
        return "LOST"
    return "LEAD"


# --- Per-kind sanitizers ---


def sanitize_financials(raw: Any) -> Financials:
    data = _mapping(raw)
    commission_type = data.get("commissionType")
    return Financials(
        gross_value=_number(data.get("grossValue")),
        commission_type=commission_type if commission_type in ("PERCENTAGE", "FIXED") else "PERCENTAGE",
        commission_value=_number(data.get("commissionValue")),
        taxes=_number(data.get("taxes")),
        net_value=_number(data.get("netValue")),
        currency=_text(data.get("currency"), "BRL"),
    )


def _contract_files(data: Mapping[str, Any], created_at: datetime) -> list[ContractFile]:
    raw_files = data.get("contractFiles")
    if isinstance(raw_files, list):
        files = []
        for item in raw_files:
            entry = _mapping(item)
            url = _text(entry.get("url"))
            if not url:
                continue
            files.append(
                ContractFile(
                    name=_text(entry.get("name"), LEGACY_CONTRACT_FILE_NAME),
                    url=url,
                    uploaded_at=_datetime(entry.get("uploadedAt"), created_at),
                )
            )
        return files

    legacy_url = _text(data.get("contractUrl"))
    if legacy_url:
        return [ContractFile(name=LEGACY_CONTRACT_FILE_NAME, url=legacy_url, uploaded_at=created_at)]
    return []


def sanitize_event(raw: Any, entity_id: str) -> Event:
    data = _mapping(raw)

    created_at = _datetime(data.get("createdAt"), EPOCH)
    status: EventStatus = data["status"] if data.get("status") in EVENT_STATUSES else "RESERVED"
    stage = data.get("pipelineStage")
    pipeline_stage: PipelineStage = stage if stage in PIPELINE_STAGES else infer_pipeline_stage(status)

    contract_files = _contract_files(data, created_at)
    raw_has_contract = data.get("hasContract")
    if isinstance(raw_has_contract, bool):
        has_contract = raw_has_contract
    else:
        # Old records predate the flag and were treated as received, unless nothing is on file.
        has_contract = True
        if not contract_files:
            has_contract = False

    form_status = data.get("contractorFormStatus")

    return Event(
        id=entity_id,
        band_id=_text(data.get("bandId")),
        name=_text(data.get("name"), DEFAULT_EVENT_NAME),
        event_type=_text(data.get("eventType"), "Geral"),
        date=_datetime(data.get("date"), created_at),
        time=_text(data.get("time"), "00:00"),
        duration_hours=_number(data.get("durationHours")),
        city=_text(data.get("city")),
        venue=_text(data.get("venue")),
        venue_address=_text(data.get("venueAddress")),
        contractor=_text(data.get("contractor")),
        notes=_text(data.get("notes")),
        status=status,
        pipeline_stage=pipeline_stage,
        financials=sanitize_financials(data.get("financials")),
        has_contract=has_contract,
        contract_files=contract_files,
        contractor_form_token=_text(data.get("contractorFormToken")),
        contractor_form_status=form_status if form_status in ("PENDING", "SENT", "COMPLETED") else "PENDING",
        created_by=_text(data.get("createdBy"), DEFAULT_CREATED_BY),
        created_at=created_at,
    )


def sanitize_user(raw: Any, entity_id: str) -> User:
    data = _mapping(raw)

    raw_status = data.get("status")
    if raw_status is None or raw_status == "":
        # Accounts created before the approval workflow are all active.
        status = "ACTIVE"
    elif raw_status in ("ACTIVE", "PENDING"):
        status = raw_status
    else:
        status = "PENDING"

    band_ids = data.get("bandIds")

    return User(
        id=entity_id,
        name=_text(data.get("name"), DEFAULT_USER_NAME),
        email=_text(data.get("email"), DEFAULT_USER_EMAIL).strip().lower(),
        password=_text(data.get("password")),
        role=_text(data.get("role"), "MEMBER"),
        status=status,
        band_ids=[b for b in band_ids if isinstance(b, str)] if isinstance(band_ids, list) else [],
    )


def sanitize_contractor(raw: Any, entity_id: str) -> Contractor:
    data = _mapping(raw)
    address = _mapping(data.get("address"))
    info = _mapping(data.get("additionalInfo"))

    return Contractor(
        id=entity_id,
        type="JURIDICA" if data.get("type") == "JURIDICA" else "FISICA",
        name=_text(data.get("name")),
        responsible_name=_text(data.get("responsibleName")),
        cpf=_text(data.get("cpf")),
        rg=_text(data.get("rg")),
        birth_date=_text(data.get("birthDate")),
        cnpj=_text(data.get("cnpj")),
        phone=_text(data.get("phone")),
        whatsapp=_text(data.get("whatsapp")),
        email=_text(data.get("email")),
        address=Address(
            street=_text(address.get("street")),
            number=_text(address.get("number")),
            complement=_text(address.get("complement")),
            neighborhood=_text(address.get("neighborhood")),
            zip_code=_text(address.get("zipCode")),
            city=_text(address.get("city")),
            state=_text(address.get("state")),
            country=_text(address.get("country"), "Brasil"),
        ),
        additional_info=AdditionalInfo(
            event=_text(info.get("event")),
            venue=_text(info.get("venue")),
            notes=_text(info.get("notes")),
        ),
    )


def sanitize_band(raw: Any, entity_id: str) -> Band:
    data = _mapping(raw)
    company = _mapping(data.get("companyInfo"))
    members = data.get("members")

    return Band(
        id=entity_id,
        name=_text(data.get("name")),
        genre=_text(data.get("genre")),
        members=int(members) if isinstance(members, (int, float)) and not isinstance(members, bool) and members >= 1 else 1,
        company_info=CompanyInfo(
            razao_social=_text(company.get("razaoSocial")),
            cnpj=_text(company.get("cnpj")),
            address=_text(company.get("address")),
            legal_representative=_text(company.get("legalRepresentative")),
            representative_cpf=_text(company.get("representativeCpf")),
            representative_rg=_text(company.get("representativeRg")),
            email=_text(company.get("email")),
            phone=_text(company.get("phone")),
        ),
    )


SANITIZERS: dict[EntityKind, Callable[[Any, str], Event | Band | Contractor | User]] = {
    "event": sanitize_event,
    "band": sanitize_band,
    "contractor": sanitize_contractor,
    "user": sanitize_user,
}


def sanitize(raw: Any, entity_id: str, kind: EntityKind) -> Event | Band | Contractor | User:
    """Dispatch to the sanitizer for ``kind``."""
    return SANITIZERS[kind](raw, entity_id)
