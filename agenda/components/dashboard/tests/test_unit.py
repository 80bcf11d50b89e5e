"""
Dashboard component unit tests.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from agenda.components.dashboard import (
    DEFAULT_EVENT_TYPES,
    DashboardInput,
    FinancialReportInput,
    SuggestionsInput,
    run_dashboard,
    run_financial_report,
    run_suggestions,
)
from agenda.domain.entities import Address, Band, Contractor, Event, Financials, User
from agenda.domain.policy import PolicyEngine
from agenda.rules.loader import load_rules

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=UTC)


class MockEventRepo:
    def __init__(self, events: list[Event]) -> None:
        self._events = events

    def list_all(self) -> list[Event]:
        return list(self._events)


class MockBandRepo:
    def list_all(self) -> list[Band]:
        return [Band(id="b1", name="Banda Principal"), Band(id="b2", name="Outra")]


class MockTimePort:
    def now_utc(self) -> datetime:
        return NOW


def make_event(event_id: str, days: int, status: str = "CONFIRMED", band_id: str = "b1", gross: float = 1000, **kw) -> Event:
    return Event(
        id=event_id,
        band_id=band_id,
        name=f"Show {event_id}",
        date=NOW + timedelta(days=days),
        duration_hours=2,
        status=status,
        financials=Financials(gross_value=gross, commission_type="FIXED", commission_value=100, taxes=50, net_value=gross - 150),
        created_at=NOW - timedelta(days=30 - days),
        **kw,
    )


@pytest.fixture
def policy() -> PolicyEngine:
    return PolicyEngine(load_rules())


@pytest.fixture
def events() -> list[Event]:
    return [
        make_event("past", -10, status="COMPLETED", has_contract=True),
        make_event("soon", 1),
        make_event("later", 20, status="RESERVED"),
        make_event("canceled", 2, status="CANCELED"),
        make_event("other_band", 3, band_id="b2"),
        *[make_event(f"bulk{i}", 30 + i) for i in range(5)],
    ]


class TestDashboard:
    def test_counts_and_lists_for_admin(self, policy: PolicyEngine, events: list[Event]) -> None:
        admin = User(id="u1", email="a@dne.music", role="ADMIN")

        result = run_dashboard(DashboardInput(actor=admin), MockEventRepo(events), MockBandRepo(), policy, MockTimePort())

        stats = result.stats
        assert stats is not None
        assert stats.total == 10
        assert stats.confirmed == 7
        assert stats.reserved == 1
        assert stats.canceled == 1
        assert stats.completed == 1
        assert [e.id for e in stats.upcoming] == ["soon", "other_band", "later", "bulk0", "bulk1"]
        assert len(stats.latest) == 5
        assert stats.latest[0].id == "bulk4"
        assert stats.missing_contracts == 8
        assert stats.gross_revenue == 9000
        assert stats.net_revenue == 9000 - 9 * 150

    def test_member_sees_own_band_without_money(self, policy: PolicyEngine, events: list[Event]) -> None:
        member = User(id="u2", email="m@dne.music", role="MEMBER", band_ids=["b2"])

        result = run_dashboard(DashboardInput(actor=member), MockEventRepo(events), MockBandRepo(), policy, MockTimePort())

        stats = result.stats
        assert stats is not None
        assert stats.total == 1
        assert stats.gross_revenue is None
        assert stats.upcoming[0].financials.gross_value == 0

    def test_stage_counts_cover_every_stage(self, policy: PolicyEngine, events: list[Event]) -> None:
        admin = User(id="u1", email="a@dne.music", role="ADMIN")

        stats = run_dashboard(DashboardInput(actor=admin), MockEventRepo(events), MockBandRepo(), policy, MockTimePort()).stats

        assert stats is not None
        assert set(stats.by_stage) == {"LEAD", "QUALIFICATION", "PROPOSAL", "NEGOTIATION", "CONTRACT", "WON", "LOST"}
        assert sum(stats.by_stage.values()) == 10


class TestFinancialReport:
    def test_yearly_totals_skip_canceled(self, policy: PolicyEngine) -> None:
        events = [
            make_event("a", 0, gross=1000),
            make_event("b", 30, gross=2000, band_id="b2"),
            make_event("c", 0, gross=5000, status="CANCELED"),
            make_event("d", 365, gross=7000),
        ]
        manager = User(id="u1", email="m@dne.music", role="MANAGER")

        result = run_financial_report(
            FinancialReportInput(actor=manager, year=2024), MockEventRepo(events), MockBandRepo(), policy, MockTimePort()
        )

        report = result.report
        assert report is not None
        assert report.total_gross == 3000
        assert report.total_net == 3000 - 300
        assert report.total_commission == 200
        assert report.months[5].gross == 1000
        assert report.months[6].gross == 2000
        assert report.available_years == [2025, 2024]

    def test_band_filter(self, policy: PolicyEngine) -> None:
        events = [make_event("a", 0, gross=1000), make_event("b", 1, gross=2000, band_id="b2")]
        admin = User(id="u1", email="a@dne.music", role="ADMIN")

        report = run_financial_report(
            FinancialReportInput(actor=admin, year=2024, band_id="b2"),
            MockEventRepo(events),
            MockBandRepo(),
            policy,
            MockTimePort(),
        ).report

        assert report is not None
        assert report.total_gross == 2000

    def test_viewer_denied(self, policy: PolicyEngine) -> None:
        viewer = User(id="u3", email="v@dne.music", role="VIEWER", band_ids=["b1"])

        result = run_financial_report(
            FinancialReportInput(actor=viewer), MockEventRepo([]), MockBandRepo(), policy, MockTimePort()
        )

        assert result.success is False


class TestSuggestions:
    def test_event_types_are_seeded(self) -> None:
        result = run_suggestions(SuggestionsInput(field_name="eventType", events=[]))

        assert result.values == sorted(DEFAULT_EVENT_TYPES)

    def test_contractor_names_merge_events_and_contractors(self) -> None:
        events = [make_event("a", 0, contractor="Zeca"), make_event("b", 0, contractor="Ana")]
        contractors = [Contractor(name="Bruno"), Contractor(name="Ana")]

        result = run_suggestions(SuggestionsInput(field_name="contractor", events=events, contractors=contractors))

        assert result.values == ["Ana", "Bruno", "Zeca"]

    def test_city_includes_contractor_addresses(self) -> None:
        events = [make_event("a", 0, city="Recife")]
        contractors = [Contractor(name="X", address=Address(city="Olinda"))]

        result = run_suggestions(SuggestionsInput(field_name="city", events=events, contractors=contractors))

        assert result.values == ["Olinda", "Recife"]

    def test_unknown_field(self) -> None:
        assert run_suggestions(SuggestionsInput(field_name="password", events=[])).success is False
