from fastapi import APIRouter, Depends

from agenda.adapters.repos import BandRepo, ContractorRepo, EventRepo
from agenda.api.deps import (
    get_band_repo,
    get_clock,
    get_contractor_repo,
    get_current_user,
    get_event_repo,
    get_policy,
)
from agenda.api.errors import raise_for_error
from agenda.api.schemas import DashboardResponse, FinancialReportResponse, MonthlyTotalsResponse
from agenda.components.dashboard import (
    DashboardInput,
    FinancialReportInput,
    SuggestionsInput,
    run_dashboard,
    run_financial_report,
    run_suggestions,
)
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine
from agenda.ports.clock import ClockPort

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
) -> DashboardResponse:
    result = run_dashboard(DashboardInput(actor=current_user), event_repo, band_repo, policy, clock)
    if not result.success or result.stats is None:
        raise_for_error(result.error)
    stats = result.stats
    return DashboardResponse(
        total=stats.total,
        confirmed=stats.confirmed,
        reserved=stats.reserved,
        canceled=stats.canceled,
        completed=stats.completed,
        missing_contracts=stats.missing_contracts,
        by_stage=stats.by_stage,
        upcoming=stats.upcoming,
        latest=stats.latest,
        gross_revenue=stats.gross_revenue,
        net_revenue=stats.net_revenue,
    )


@router.get("/reports/financial", response_model=FinancialReportResponse)
def financial_report(
    year: int | None = None,
    band_id: str | None = None,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    policy: PolicyEngine = Depends(get_policy),
    clock: ClockPort = Depends(get_clock),
) -> FinancialReportResponse:
    inp = FinancialReportInput(actor=current_user, year=year, band_id=band_id)
    result = run_financial_report(inp, event_repo, band_repo, policy, clock)
    if not result.success or result.report is None:
        raise_for_error(result.error)
    report = result.report
    return FinancialReportResponse(
        year=report.year,
        band_id=report.band_id,
        total_gross=report.total_gross,
        total_commission=report.total_commission,
        total_net=report.total_net,
        months=[MonthlyTotalsResponse(month=m.month, name=m.name, gross=m.gross, net=m.net) for m in report.months],
        available_years=report.available_years,
    )


@router.get("/suggestions/{field_name}", response_model=list[str])
def suggestions(
    field_name: str,
    current_user: User = Depends(get_current_user),
    event_repo: EventRepo = Depends(get_event_repo),
    band_repo: BandRepo = Depends(get_band_repo),
    contractor_repo: ContractorRepo = Depends(get_contractor_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> list[str]:
    """Autocomplete values for an event form field."""
    events = policy.filter_events(event_repo.list_all(), current_user, band_repo.list_all())
    result = run_suggestions(
        SuggestionsInput(field_name=field_name, events=events, contractors=contractor_repo.list_all())
    )
    if not result.success:
        raise_for_error(result.error)
    return result.values
