from datetime import UTC, datetime
from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# --- Enums / Literals ---
EventStatus = Literal["RESERVED", "CONFIRMED", "CANCELED", "COMPLETED"]
PipelineStage = Literal["LEAD", "QUALIFICATION", "PROPOSAL", "NEGOTIATION", "CONTRACT", "WON", "LOST"]
CommissionType = Literal["PERCENTAGE", "FIXED"]
ContractorFormStatus = Literal["PENDING", "SENT", "COMPLETED"]
ContractorType = Literal["FISICA", "JURIDICA"]
RoleType = Literal["ADMIN", "MANAGER", "CONTRACTS", "SALES", "VIEWER", "MEMBER"]
UserStatus = Literal["ACTIVE", "PENDING"]
EntityKind = Literal["event", "band", "contractor", "user"]

EVENT_STATUSES: tuple[EventStatus, ...] = ("RESERVED", "CONFIRMED", "CANCELED", "COMPLETED")
PIPELINE_STAGES: tuple[PipelineStage, ...] = (
    "LEAD",
    "QUALIFICATION",
    "PROPOSAL",
    "NEGOTIATION",
    "CONTRACT",
    "WON",
    "LOST",
)
ROLES: tuple[RoleType, ...] = ("ADMIN", "MANAGER", "CONTRACTS", "SALES", "VIEWER", "MEMBER")

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def new_id() -> str:
    return str(uuid4())


class Document(BaseModel):
    """Base for persisted entities: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


# --- Band ---

class CompanyInfo(Document):
    razao_social: str = ""
    cnpj: str = ""
    address: str = ""
    legal_representative: str = ""
    representative_cpf: str = ""
    representative_rg: str = ""
    email: str = ""
    phone: str = ""


class Band(Document):
    id: str = Field(default_factory=new_id)
    name: str
    genre: str = ""
    members: int = 1
    company_info: CompanyInfo = Field(default_factory=CompanyInfo)


# --- Event ---

class Financials(Document):
    gross_value: float = 0.0
    commission_type: CommissionType = "PERCENTAGE"
    commission_value: float = 0.0
    taxes: float = 0.0
    net_value: float = 0.0
    currency: str = "BRL"


class ContractFile(Document):
    name: str
    url: str
    uploaded_at: datetime = EPOCH


class Event(Document):
    id: str = Field(default_factory=new_id)
    band_id: str = ""
    name: str
    event_type: str = "Geral"
    date: datetime
    time: str = "00:00"
    duration_hours: float = 0
    city: str = ""
    venue: str = ""
    venue_address: str = ""
    contractor: str = ""
    notes: str = ""
    status: EventStatus = "RESERVED"
    pipeline_stage: PipelineStage = "LEAD"
    financials: Financials = Field(default_factory=Financials)
    has_contract: bool = False
    contract_files: list[ContractFile] = Field(default_factory=list)
    contractor_form_token: str = ""
    contractor_form_status: ContractorFormStatus = "PENDING"
    created_by: str = "Sistema"
    created_at: datetime = EPOCH


# --- Contractor ---

class Address(Document):
    street: str = ""
    number: str = ""
    complement: str = ""
    neighborhood: str = ""
    zip_code: str = ""
    city: str = ""
    state: str = ""
    country: str = "Brasil"


class AdditionalInfo(Document):
    event: str = ""
    venue: str = ""
    notes: str = ""


class Contractor(Document):
    id: str = Field(default_factory=new_id)
    type: ContractorType = "FISICA"
    name: str = ""
    responsible_name: str = ""
    cpf: str = ""
    rg: str = ""
    birth_date: str = ""
    cnpj: str = ""
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    address: Address = Field(default_factory=Address)
    additional_info: AdditionalInfo = Field(default_factory=AdditionalInfo)


# --- User & Auth ---

class User(Document):
    id: str = Field(default_factory=new_id)
    name: str = "Usuário"
    email: str
    password: str = ""
    # Kept as a plain string so unknown legacy roles survive reads and fail closed in policy.
    role: str = "MEMBER"
    status: UserStatus = "ACTIVE"
    band_ids: list[str] = Field(default_factory=list)


class Session(Document):
    user: User
    expiry: datetime
