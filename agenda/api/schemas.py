from datetime import date, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from agenda.domain.entities import Band, Contractor, Event, PipelineStage, User


class ApiModel(BaseModel):
    """camelCase on the wire, like the stored documents."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Auth ---
class LoginRequest(ApiModel):
    identifier: str
    password: str


class RegisterRequest(ApiModel):
    name: str
    email: str
    password: str


class UserResponse(ApiModel):
    id: str
    name: str
    email: str
    role: str
    status: str
    band_ids: list[str] = []

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
            band_ids=list(user.band_ids),
        )


class LoginResponse(ApiModel):
    token: str
    token_type: str = "bearer"
    expires_at: datetime
    user: UserResponse


# --- Users ---
class UserCreateRequest(ApiModel):
    name: str
    email: str
    password: str
    role: str = "MEMBER"
    band_ids: list[str] = []


class UserUpdateRequest(ApiModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    status: str | None = None
    band_ids: list[str] | None = None


# --- Events ---
class ContractFileRequest(ApiModel):
    url: str
    name: str = ""


class PipelineStageRequest(ApiModel):
    stage: PipelineStage


class ShareLinkResponse(ApiModel):
    token: str
    url: str


class TextResponse(ApiModel):
    text: str


class TemplateRequest(ApiModel):
    template: str


# --- Import ---
class ParsedRowResponse(ApiModel):
    line_number: int
    original: dict[str, str]
    errors: list[str]
    valid: bool


class ImportReportResponse(ApiModel):
    rows: list[ParsedRowResponse]
    valid_count: int
    invalid_count: int
    header_error: str | None = None
    missing_headers: list[str] = []


class CommitResponse(ApiModel):
    committed: int
    failed: int
    event_ids: list[str]


# --- Dashboard ---
class DashboardResponse(ApiModel):
    total: int
    confirmed: int
    reserved: int
    canceled: int
    completed: int
    missing_contracts: int
    by_stage: dict[str, int]
    upcoming: list[Event]
    latest: list[Event]
    gross_revenue: float | None = None
    net_revenue: float | None = None


class MonthlyTotalsResponse(ApiModel):
    month: int
    name: str
    gross: float
    net: float


class FinancialReportResponse(ApiModel):
    year: int
    band_id: str | None = None
    total_gross: float
    total_commission: float
    total_net: float
    months: list[MonthlyTotalsResponse]
    available_years: list[int]


# --- Public ---
class PublicEventSummary(ApiModel):
    """What a contractor sees about the booking: no financials, no audit fields."""

    id: str
    name: str
    event_type: str
    date: datetime
    time: str
    city: str
    venue: str
    venue_address: str
    contractor: str

    @classmethod
    def from_event(cls, event: Event) -> "PublicEventSummary":
        return cls(
            id=event.id,
            name=event.name,
            event_type=event.event_type,
            date=event.date,
            time=event.time,
            city=event.city,
            venue=event.venue,
            venue_address=event.venue_address,
            contractor=event.contractor,
        )


class PublicBand(ApiModel):
    id: str
    name: str

    @classmethod
    def from_band(cls, band: Band) -> "PublicBand":
        return cls(id=band.id, name=band.name)


class FormContextResponse(ApiModel):
    event: PublicEventSummary
    contractor: Contractor | None = None
    band: PublicBand | None = None


class SubmissionResponse(ApiModel):
    contractor_id: str
    event_id: str


class ProspectingStatusResponse(ApiModel):
    valid: bool
    bands: list[PublicBand] = []


class ProspectingSubmitRequest(ApiModel):
    contractor: Contractor
    band_id: str
    event_date: date
    event_name: str = ""
    event_type: str = "Geral"
    time: str = "20:00"
    city: str = ""
    venue: str = ""
    notes: str = ""


class EntryResponse(ApiModel):
    view: str
    form_token: str | None = None
    message: str | None = None
