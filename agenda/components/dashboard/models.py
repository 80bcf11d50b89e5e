from __future__ import annotations

from dataclasses import dataclass, field

from agenda.domain.entities import Contractor, Event, User


# --- Input Models ---


@dataclass(frozen=True)
class DashboardInput:
    actor: User


@dataclass(frozen=True)
class SuggestionsInput:
    field_name: str
    events: list[Event]
    contractors: list[Contractor] = field(default_factory=list)


@dataclass(frozen=True)
class FinancialReportInput:
    actor: User
    year: int | None = None
    band_id: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class DashboardStats:
    total: int
    confirmed: int
    reserved: int
    canceled: int
    completed: int
    missing_contracts: int
    by_stage: dict[str, int]
    upcoming: list[Event]
    latest: list[Event]
    # None when the viewer may not see financials.
    gross_revenue: float | None = None
    net_revenue: float | None = None


@dataclass(frozen=True)
class DashboardOutput:
    stats: DashboardStats | None = None
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class SuggestionsOutput:
    values: list[str] = field(default_factory=list)
    success: bool = False
    error: str | None = None


@dataclass(frozen=True)
class MonthlyTotals:
    month: int
    name: str
    gross: float
    net: float


@dataclass(frozen=True)
class FinancialReport:
    year: int
    band_id: str | None
    total_gross: float
    total_commission: float
    total_net: float
    months: list[MonthlyTotals]
    available_years: list[int]


@dataclass(frozen=True)
class FinancialReportOutput:
    report: FinancialReport | None = None
    success: bool = False
    error: str | None = None
