"""
Contracts component unit tests.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from agenda.adapters.stores.memory import InMemoryKeyValueStore
from agenda.components.contracts import (
    DEFAULT_CONTRACT_TEMPLATE,
    RenderContractInput,
    SaveTemplateInput,
    contractor_address,
    date_in_words,
    format_brl,
    number_to_words,
    reais_in_words,
    render_contract,
    run_get_template,
    run_render_contract,
    run_save_template,
)
from agenda.domain.entities import Address, Band, Contractor, Event, Financials, User
from agenda.domain.policy import PolicyEngine
from agenda.rules.loader import load_rules

KEY = "agendade_prod_v1_contract_template"


class MockEventRepo:
    def __init__(self, events: list[Event]) -> None:
        self._events = {e.id: e for e in events}

    def get_by_id(self, event_id: str) -> Event | None:
        return self._events.get(event_id)


class MockBandRepo:
    def __init__(self, bands: list[Band]) -> None:
        self._bands = bands

    def list_all(self) -> list[Band]:
        return list(self._bands)

    def get_by_id(self, band_id: str) -> Band | None:
        return next((b for b in self._bands if b.id == band_id), None)


class MockContractorRepo:
    def __init__(self, contractors: list[Contractor]) -> None:
        self._contractors = contractors

    def list_all(self) -> list[Contractor]:
        return list(self._contractors)


@pytest.fixture
def policy() -> PolicyEngine:
    return PolicyEngine(load_rules())


@pytest.fixture
def event() -> Event:
    return Event(
        id="e1",
        band_id="b1",
        name="Casamento Ana & João",
        date=datetime(2024, 12, 25, 12, tzinfo=UTC),
        time="21:00",
        duration_hours=3,
        city="Recife",
        venue="Espaço Villa",
        contractor="Ana Souza",
        financials=Financials(gross_value=1500),
    )


@pytest.fixture
def contractor() -> Contractor:
    return Contractor(
        id="c1",
        name="ana souza",
        responsible_name="Ana Souza",
        address=Address(street="Rua A", number="10", neighborhood="Boa Viagem", city="Recife", state="PE", zip_code="51000-000"),
    )


class TestWording:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "zero"),
            (1, "um"),
            (15, "quinze"),
            (21, "vinte e um"),
            (100, "cem"),
            (101, "cento e um"),
            (1000, "mil"),
            (1500, "mil e quinhentos"),
            (1520, "mil quinhentos e vinte"),
            (2025, "dois mil e vinte e cinco"),
            (100000, "cem mil"),
            (1500000, "um milhão e quinhentos mil"),
            (1001500, "um milhão e mil e quinhentos"),
            (2340500, "dois milhões, trezentos e quarenta mil e quinhentos"),
            (3000250, "três milhões, duzentos e cinquenta"),
            (1500.99, "mil e quinhentos"),
        ],
    )
    def test_number_to_words(self, value: float, expected: str) -> None:
        assert number_to_words(value) == expected

    def test_reais(self) -> None:
        assert reais_in_words(1) == "um real"
        assert reais_in_words(20000) == "vinte mil reais"
        assert reais_in_words(1_000_000) == "um milhão de reais"
        assert reais_in_words(2_000_000) == "dois milhões de reais"
        assert reais_in_words(1_500_000) == "um milhão e quinhentos mil reais"

    def test_format_brl(self) -> None:
        assert format_brl(1500) == "R$ 1.500,00"
        assert format_brl(1234567.891) == "R$ 1.234.567,89"
        assert format_brl(0) == "R$ 0,00"
        assert format_brl(-250.5) == "-R$ 250,50"

    def test_date_in_words(self) -> None:
        assert date_in_words(datetime(2024, 3, 8, 12, tzinfo=UTC)) == "8 de março de 2024"

    def test_contractor_address(self, contractor: Contractor) -> None:
        assert contractor_address(contractor) == "Rua A, 10, Boa Viagem - Recife - PE, CEP: 51000-000"
        assert contractor_address(None) == "Não informado"


class TestRender:
    def test_all_placeholders_are_replaced(self, event: Event, contractor: Contractor) -> None:
        text = render_contract(DEFAULT_CONTRACT_TEMPLATE, event, Band(id="b1", name="Banda Principal"), contractor)

        assert "{{" not in text
        assert "CONTRATANTE: ana souza" in text
        assert "Responsável: Ana Souza" in text
        assert "CONTRATADA: Banda Principal" in text
        assert "25 de dezembro de 2024 às 21:00" in text
        assert '"Espaço Villa, Recife"' in text
        assert "R$ 1.500,00 (mil e quinhentos reais)" in text

    def test_missing_contractor_falls_back_to_event_name(self, event: Event) -> None:
        text = render_contract("{{NOME_CONTRATANTE}}|{{ENDERECO_CONTRATANTE}}|{{X}}", event, None, None)

        assert text == "Ana Souza|Não informado|{{X}}"


class TestTemplateStore:
    def test_default_when_unset(self) -> None:
        assert run_get_template(InMemoryKeyValueStore(), KEY).template == DEFAULT_CONTRACT_TEMPLATE

    def test_save_and_read_back(self, policy: PolicyEngine) -> None:
        store = InMemoryKeyValueStore()
        admin = User(id="u1", email="a@dne.music", role="ADMIN")

        result = run_save_template(SaveTemplateInput(actor=admin, template="Contrato {{NOME_BANDA}}"), store, KEY, policy)

        assert result.success is True
        assert run_get_template(store, KEY).template == "Contrato {{NOME_BANDA}}"

    def test_manager_cannot_save(self, policy: PolicyEngine) -> None:
        manager = User(id="u2", email="m@dne.music", role="MANAGER")

        result = run_save_template(SaveTemplateInput(actor=manager, template="x"), InMemoryKeyValueStore(), KEY, policy)

        assert result.success is False


class TestRenderContract:
    def test_render_for_event(self, policy: PolicyEngine, event: Event, contractor: Contractor) -> None:
        store = InMemoryKeyValueStore()
        store.set(KEY, "{{NOME_CONTRATANTE}} / {{NOME_BANDA}} / {{VALOR_BRUTO_FORMATADO}}")
        admin = User(id="u1", email="a@dne.music", role="ADMIN")

        result = run_render_contract(
            RenderContractInput(actor=admin, event_id="e1"),
            MockEventRepo([event]),
            MockBandRepo([Band(id="b1", name="Banda Principal")]),
            MockContractorRepo([contractor]),
            store,
            KEY,
            policy,
        )

        assert result.success is True
        assert result.text == "ana souza / Banda Principal / R$ 1.500,00"

    def test_member_cannot_render(self, policy: PolicyEngine, event: Event) -> None:
        member = User(id="u3", email="m@dne.music", role="MEMBER", band_ids=["b1"])

        result = run_render_contract(
            RenderContractInput(actor=member, event_id="e1"),
            MockEventRepo([event]),
            MockBandRepo([Band(id="b1", name="Banda Principal")]),
            MockContractorRepo([]),
            InMemoryKeyValueStore(),
            KEY,
            policy,
        )

        assert result.success is False
