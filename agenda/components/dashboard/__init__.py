"""
Dashboard component - Booking stats, financial report and form suggestions.
"""

from .component import (
    DEFAULT_EVENT_TYPES,
    MONTH_NAMES,
    SUGGESTION_FIELDS,
    run_dashboard,
    run_financial_report,
    run_suggestions,
)
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

__all__ = [
    # Entry points
    "run_dashboard",
    "run_financial_report",
    "run_suggestions",
    "DEFAULT_EVENT_TYPES",
    "MONTH_NAMES",
    "SUGGESTION_FIELDS",
    # Models
    "DashboardInput",
    "DashboardOutput",
    "DashboardStats",
    "FinancialReport",
    "FinancialReportInput",
    "FinancialReportOutput",
    "MonthlyTotals",
    "SuggestionsInput",
    "SuggestionsOutput",
    # Ports
    "BandRepoPort",
    "EventRepoPort",
    "TimePort",
]
