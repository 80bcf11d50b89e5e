"""
Tokens component unit tests.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

import pytest

from agenda.adapters.stores.memory import InMemoryKeyValueStore
from agenda.adapters.tokens import KeyValueTokenMap
from agenda.components.tokens import (
    INVALID_LINK,
    PROSPECTING_CREATED_BY,
    IssueFormTokenInput,
    IssueProspectingTokenInput,
    ProspectingTokenInput,
    ResolveEntryInput,
    ResolveFormTokenInput,
    SubmitContractorFormInput,
    SubmitProspectingInput,
    run_invalidate_prospecting_token,
    run_issue_form_token,
    run_issue_prospecting_token,
    run_resolve_entry,
    run_resolve_form_token,
    run_submit_contractor_form,
    run_submit_prospecting,
    run_validate_prospecting_token,
)
from agenda.domain.entities import Band, Contractor, Event, User
from agenda.domain.policy import PolicyEngine
from agenda.rules.loader import load_rules

# --- Mock Implementations ---


class MockEventRepo:
    def __init__(self) -> None:
        self._events: dict[str, Event] = {}

    def list_all(self) -> list[Event]:
        return list(self._events.values())

    def get_by_id(self, event_id: str) -> Event | None:
        return self._events.get(event_id)

    def save(self, event: Event) -> Event:
        self._events[event.id] = event
        return event


class MockBandRepo:
    def __init__(self, bands: list[Band]) -> None:
        self._bands = bands

    def list_all(self) -> list[Band]:
        return list(self._bands)

    def get_by_id(self, band_id: str) -> Band | None:
        return next((b for b in self._bands if b.id == band_id), None)


class MockContractorRepo:
    def __init__(self) -> None:
        self._contractors: dict[str, Contractor] = {}

    def list_all(self) -> list[Contractor]:
        return list(self._contractors.values())

    def save(self, contractor: Contractor) -> Contractor:
        self._contractors[contractor.id] = contractor
        return contractor


class MockTimePort:
    def __init__(self) -> None:
        self._time = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)

    def now_utc(self) -> datetime:
        return self._time


# --- Fixtures ---


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def form_tokens(kv: InMemoryKeyValueStore) -> KeyValueTokenMap:
    return KeyValueTokenMap(kv, "agendade_prod_v1_form_tokens")


@pytest.fixture
def prospecting_tokens(kv: InMemoryKeyValueStore) -> KeyValueTokenMap:
    return KeyValueTokenMap(kv, "agendade_prod_v1_prospecting_tokens")


@pytest.fixture
def event_repo() -> MockEventRepo:
    repo = MockEventRepo()
    repo.save(
        Event(
            id="e1",
            band_id="b1",
            name="Casamento",
            date=datetime(2024, 12, 25, 12, tzinfo=UTC),
            duration_hours=3,
            contractor="Maria Silva",
        )
    )
    return repo


@pytest.fixture
def band_repo() -> MockBandRepo:
    return MockBandRepo([Band(id="b1", name="Banda Principal")])


@pytest.fixture
def contractor_repo() -> MockContractorRepo:
    return MockContractorRepo()


@pytest.fixture
def policy() -> PolicyEngine:
    return PolicyEngine(load_rules())


@pytest.fixture
def time_port() -> MockTimePort:
    return MockTimePort()


@pytest.fixture
def contracts_user() -> User:
    return User(id="u_c", name="Contratos", email="c@dne.music", role="CONTRACTS")


# --- Form tokens ---


class TestFormToken:
    def _issue(self, actor, form_tokens, event_repo, band_repo, policy) -> str:
        result = run_issue_form_token(
            IssueFormTokenInput(actor=actor, event_id="e1", base_url="https://agenda.dne.music/"),
            form_tokens,
            event_repo,
            band_repo,
            policy,
        )
        assert result.success is True
        assert result.token is not None
        return result.token

    def test_issue_marks_event_sent(
        self, contracts_user, form_tokens, event_repo, band_repo, policy, kv
    ) -> None:
        result = run_issue_form_token(
            IssueFormTokenInput(actor=contracts_user, event_id="e1", base_url="https://agenda.dne.music/"),
            form_tokens,
            event_repo,
            band_repo,
            policy,
        )

        assert result.url == f"https://agenda.dne.music/?form_token={result.token}"
        event = event_repo.get_by_id("e1")
        assert event is not None
        assert event.contractor_form_status == "SENT"
        assert event.contractor_form_token == result.token
        assert kv.get("agendade_prod_v1_form_tokens") == {result.token: {"eventId": "e1"}}

    def test_reissue_replaces_previous_link(self, contracts_user, form_tokens, event_repo, band_repo, policy) -> None:
        first = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)
        second = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)

        assert form_tokens.get(first) is None
        assert form_tokens.get(second) == {"eventId": "e1"}

    def test_sales_cannot_issue(self, form_tokens, event_repo, band_repo, policy) -> None:
        sales = User(id="u_s", email="s@dne.music", role="SALES", band_ids=["b1"])

        result = run_issue_form_token(
            IssueFormTokenInput(actor=sales, event_id="e1"), form_tokens, event_repo, band_repo, policy
        )

        assert result.success is False

    def test_resolve_finds_contractor_and_band(
        self, contracts_user, form_tokens, event_repo, band_repo, contractor_repo, policy
    ) -> None:
        contractor_repo.save(Contractor(id="c1", name="MARIA SILVA"))
        token = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)

        result = run_resolve_form_token(
            ResolveFormTokenInput(token=token), form_tokens, event_repo, band_repo, contractor_repo
        )

        assert result.success is True
        assert result.context is not None
        assert result.context.event.id == "e1"
        assert result.context.contractor is not None
        assert result.context.contractor.id == "c1"
        assert result.context.band is not None
        assert result.context.band.name == "Banda Principal"

    def test_resolve_without_contractor_match(
        self, contracts_user, form_tokens, event_repo, band_repo, contractor_repo, policy
    ) -> None:
        token = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)

        result = run_resolve_form_token(
            ResolveFormTokenInput(token=token), form_tokens, event_repo, band_repo, contractor_repo
        )

        assert result.success is True
        assert result.context is not None
        assert result.context.contractor is None

    def test_resolve_unknown_token(self, form_tokens, event_repo, band_repo, contractor_repo) -> None:
        result = run_resolve_form_token(
            ResolveFormTokenInput(token="nope"), form_tokens, event_repo, band_repo, contractor_repo
        )

        assert result.success is False
        assert result.error == INVALID_LINK

    def test_submit_creates_contractor_and_consumes_token(
        self, contracts_user, form_tokens, event_repo, band_repo, contractor_repo, policy
    ) -> None:
        token = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)
        submitted = Contractor(name="ignored", cpf="123.456.789-00", email="maria@example.com")

        result = run_submit_contractor_form(
            SubmitContractorFormInput(token=token, contractor=submitted), form_tokens, event_repo, contractor_repo
        )

        assert result.success is True
        assert result.contractor is not None
        assert result.contractor.name == "Maria Silva"
        assert result.contractor.cpf == "123.456.789-00"
        event = event_repo.get_by_id("e1")
        assert event is not None
        assert event.contractor_form_status == "COMPLETED"
        assert form_tokens.get(token) is None

        again = run_submit_contractor_form(
            SubmitContractorFormInput(token=token, contractor=submitted), form_tokens, event_repo, contractor_repo
        )
        assert again.success is False
        assert again.error == INVALID_LINK

    def test_submit_updates_existing_contractor(
        self, contracts_user, form_tokens, event_repo, band_repo, contractor_repo, policy
    ) -> None:
        contractor_repo.save(Contractor(id="c1", name="Maria Silva", phone="old"))
        token = self._issue(contracts_user, form_tokens, event_repo, band_repo, policy)

        run_submit_contractor_form(
            SubmitContractorFormInput(token=token, contractor=Contractor(name="Maria Silva", phone="new")),
            form_tokens,
            event_repo,
            contractor_repo,
        )

        assert [c.id for c in contractor_repo.list_all()] == ["c1"]
        assert contractor_repo.list_all()[0].phone == "new"


# --- Prospecting tokens ---


class TestProspectingToken:
    def test_round_trip(self, contracts_user, prospecting_tokens, policy, time_port, kv) -> None:
        issued = run_issue_prospecting_token(
            IssueProspectingTokenInput(actor=contracts_user), prospecting_tokens, policy, time_port
        )
        assert issued.token is not None
        stored = kv.get("agendade_prod_v1_prospecting_tokens")
        assert stored[issued.token] == {"valid": True, "createdAt": "2024-06-15T12:00:00+00:00"}

        token = ProspectingTokenInput(token=issued.token)
        assert run_validate_prospecting_token(token, prospecting_tokens).valid is True

        run_invalidate_prospecting_token(token, prospecting_tokens)

        assert run_validate_prospecting_token(token, prospecting_tokens).valid is False

    def test_flag_false_is_invalid(self, prospecting_tokens) -> None:
        prospecting_tokens.put("t", {"valid": False, "createdAt": "2024-01-01T00:00:00+00:00"})

        assert run_validate_prospecting_token(ProspectingTokenInput(token="t"), prospecting_tokens).valid is False

    def test_viewer_cannot_issue(self, prospecting_tokens, policy, time_port) -> None:
        viewer = User(id="u_v", email="v@dne.music", role="VIEWER")

        result = run_issue_prospecting_token(IssueProspectingTokenInput(actor=viewer), prospecting_tokens, policy, time_port)

        assert result.success is False

    def test_submission_creates_lead(
        self, contracts_user, prospecting_tokens, event_repo, band_repo, contractor_repo, policy, time_port
    ) -> None:
        issued = run_issue_prospecting_token(
            IssueProspectingTokenInput(actor=contracts_user), prospecting_tokens, policy, time_port
        )
        assert issued.token is not None

        result = run_submit_prospecting(
            SubmitProspectingInput(
                token=issued.token,
                contractor=Contractor(type="JURIDICA", name=" Eventos LTDA ", cnpj="00.000.000/0001-00"),
                band_id="b1",
                event_date=date(2025, 3, 8),
                event_type="Corporativo",
                city="Recife",
            ),
            prospecting_tokens,
            event_repo,
            band_repo,
            contractor_repo,
            time_port,
        )

        assert result.success is True
        assert result.event is not None
        assert result.event.status == "RESERVED"
        assert result.event.pipeline_stage == "LEAD"
        assert result.event.created_by == PROSPECTING_CREATED_BY
        assert result.event.contractor == "Eventos LTDA"
        assert result.event.date == datetime(2025, 3, 8, 12, tzinfo=UTC)
        assert [c.name for c in contractor_repo.list_all()] == ["Eventos LTDA"]
        assert run_validate_prospecting_token(ProspectingTokenInput(token=issued.token), prospecting_tokens).valid is False

    def test_submission_with_bad_time_is_rejected(
        self, contracts_user, prospecting_tokens, event_repo, band_repo, contractor_repo, policy, time_port
    ) -> None:
        issued = run_issue_prospecting_token(
            IssueProspectingTokenInput(actor=contracts_user), prospecting_tokens, policy, time_port
        )
        assert issued.token is not None

        result = run_submit_prospecting(
            SubmitProspectingInput(
                token=issued.token,
                contractor=Contractor(name="Clube"),
                band_id="b1",
                event_date=date(2025, 3, 8),
                time="banana",
            ),
            prospecting_tokens,
            event_repo,
            band_repo,
            contractor_repo,
            time_port,
        )

        assert result.success is False
        assert result.error == "Horário inválido (use HH:MM)"
        assert event_repo.list_all() == []
        assert contractor_repo.list_all() == []
        # The visitor can correct the form and submit again.
        assert run_validate_prospecting_token(ProspectingTokenInput(token=issued.token), prospecting_tokens).valid is True

    def test_submission_with_dead_token(
        self, prospecting_tokens, event_repo, band_repo, contractor_repo, time_port
    ) -> None:
        result = run_submit_prospecting(
            SubmitProspectingInput(token="dead", contractor=Contractor(name="X"), band_id="b1", event_date=date(2025, 1, 1)),
            prospecting_tokens,
            event_repo,
            band_repo,
            contractor_repo,
            time_port,
        )

        assert result.success is False
        assert result.error == INVALID_LINK
        assert contractor_repo.list_all() == []

    def test_submission_with_unknown_band_keeps_token(
        self, prospecting_tokens, event_repo, band_repo, contractor_repo, time_port
    ) -> None:
        prospecting_tokens.put("t", {"valid": True, "createdAt": "2024-01-01T00:00:00+00:00"})

        result = run_submit_prospecting(
            SubmitProspectingInput(token="t", contractor=Contractor(name="X"), band_id="nope", event_date=date(2025, 1, 1)),
            prospecting_tokens,
            event_repo,
            band_repo,
            contractor_repo,
            time_port,
        )

        assert result.success is False
        assert prospecting_tokens.get("t") is not None


# --- Public entry ---


class TestResolveEntry:
    def test_form_token_wins(self) -> None:
        result = run_resolve_entry(ResolveEntryInput(params={"form_token": "abc", "request_access": "true"}))

        assert result.view == "contractor_form"
        assert result.form_token == "abc"

    def test_request_access(self) -> None:
        assert run_resolve_entry(ResolveEntryInput(params={"request_access": "true"})).view == "request_access"

    def test_registration_pending_message(self) -> None:
        result = run_resolve_entry(ResolveEntryInput(params={"registration": "pending"}))

        assert result.view == "login"
        assert result.message is not None

    def test_default_is_login(self) -> None:
        result = run_resolve_entry(ResolveEntryInput(params={}))

        assert result.view == "login"
        assert result.message is None
