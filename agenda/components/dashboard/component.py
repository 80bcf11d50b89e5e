"""
Dashboard component - Booking stats, financial report and form suggestions.

All figures are computed over the events the viewer is allowed to see.
"""

from __future__ import annotations

from agenda.components.events import mask_financials
from agenda.domain.entities import PIPELINE_STAGES, Event
from agenda.domain.policy import PolicyEngine

from .models import (
    DashboardInput,
    DashboardOutput,
    DashboardStats,
    FinancialReport,
    FinancialReportInput,
    FinancialReportOutput,
    MonthlyTotals,
    SuggestionsInput,
    SuggestionsOutput,
)
from .ports import BandRepoPort, EventRepoPort, TimePort

DASHBOARD_LIST_SIZE = 5

MONTH_NAMES = (
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
)

DEFAULT_EVENT_TYPES = (
    "Casamento",
    "Corporativo",
    "Formatura",
    "Aniversário",
    "Show Público",
    "Bar/Restaurante",
    "Bodas",
)

SUGGESTION_FIELDS = ("eventType", "city", "venue", "contractor")


def _count(events: list[Event], status: str) -> int:
    return sum(1 for e in events if e.status == status)


def run_dashboard(
    inp: DashboardInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
    time: TimePort,
) -> DashboardOutput:
    events = policy.filter_events(event_repo.list_all(), inp.actor, band_repo.list_all())
    today = time.now_utc().date()
    sees_financials = policy.can_see_financials(inp.actor)

    upcoming = sorted(
        (e for e in events if e.date.date() >= today and e.status != "CANCELED"),
        key=lambda e: (e.date, e.time),
    )[:DASHBOARD_LIST_SIZE]
    latest = sorted(events, key=lambda e: e.created_at, reverse=True)[:DASHBOARD_LIST_SIZE]

    if not sees_financials:
        upcoming = [mask_financials(e) for e in upcoming]
        latest = [mask_financials(e) for e in latest]

    by_stage = {stage: 0 for stage in PIPELINE_STAGES}
    for event in events:
        by_stage[event.pipeline_stage] += 1

    live = [e for e in events if e.status != "CANCELED"]
    stats = DashboardStats(
        total=len(events),
        confirmed=_count(events, "CONFIRMED"),
        reserved=_count(events, "RESERVED"),
        canceled=_count(events, "CANCELED"),
        completed=_count(events, "COMPLETED"),
        missing_contracts=sum(1 for e in live if not e.has_contract),
        by_stage=by_stage,
        upcoming=upcoming,
        latest=latest,
        gross_revenue=sum(e.financials.gross_value for e in live) if sees_financials else None,
        net_revenue=sum(e.financials.net_value for e in live) if sees_financials else None,
    )
    return DashboardOutput(stats=stats, success=True)


def run_financial_report(
    inp: FinancialReportInput,
    event_repo: EventRepoPort,
    band_repo: BandRepoPort,
    policy: PolicyEngine,
    time: TimePort,
) -> FinancialReportOutput:
    """Yearly gross/commission/net totals with a per-month breakdown; canceled events are left out."""
    if not policy.can_see_financials(inp.actor):
        return FinancialReportOutput(success=False, error="Access denied")

    visible = policy.filter_events(event_repo.list_all(), inp.actor, band_repo.list_all())
    available_years = sorted({e.date.year for e in visible}, reverse=True) or [time.now_utc().year]
    year = inp.year or available_years[0]

    events = [
        e
        for e in visible
        if e.date.year == year and e.status != "CANCELED" and (not inp.band_id or e.band_id == inp.band_id)
    ]

    total_gross = sum(e.financials.gross_value for e in events)
    total_net = sum(e.financials.net_value for e in events)
    total_taxes = sum(e.financials.taxes for e in events)

    months = []
    for index, name in enumerate(MONTH_NAMES, start=1):
        in_month = [e for e in events if e.date.month == index]
        months.append(
            MonthlyTotals(
                month=index,
                name=name,
                gross=sum(e.financials.gross_value for e in in_month),
                net=sum(e.financials.net_value for e in in_month),
            )
        )

    report = FinancialReport(
        year=year,
        band_id=inp.band_id,
        total_gross=total_gross,
        total_commission=total_gross - total_net - total_taxes,
        total_net=total_net,
        months=months,
        available_years=available_years,
    )
    return FinancialReportOutput(report=report, success=True)


def run_suggestions(inp: SuggestionsInput) -> SuggestionsOutput:
    """Distinct values already used for a form field, for autocomplete."""
    if inp.field_name not in SUGGESTION_FIELDS:
        return SuggestionsOutput(success=False, error=f"Unknown field: {inp.field_name}")

    values: set[str] = set(DEFAULT_EVENT_TYPES) if inp.field_name == "eventType" else set()

    for event in inp.events:
        value = {
            "eventType": event.event_type,
            "city": event.city,
            "venue": event.venue,
            "contractor": event.contractor,
        }[inp.field_name]
        if value:
            values.add(value)

    if inp.field_name == "contractor":
        values.update(c.name for c in inp.contractors if c.name)
    elif inp.field_name == "city":
        values.update(c.address.city for c in inp.contractors if c.address.city)

    return SuggestionsOutput(values=sorted(values), success=True)
