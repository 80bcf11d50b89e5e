from datetime import UTC, datetime

import pytest

from agenda.domain.entities import EPOCH
from agenda.domain.sanitize import (
    DEFAULT_EVENT_NAME,
    infer_pipeline_stage,
    sanitize,
    sanitize_band,
    sanitize_contractor,
    sanitize_event,
    sanitize_user,
)

RAW_RECORDS = [
    ("event", {}),
    ("event", None),
    ("event", {"name": "Show", "status": "CONFIRMED", "financials": {"grossValue": "abc"}}),
    ("event", {"contractUrl": "https://files/c.pdf", "createdAt": "2024-01-02T10:00:00+00:00"}),
    ("event", {"date": "not a date", "durationHours": True, "contractFiles": [{"name": "x"}, 3]}),
    ("user", {}),
    ("user", {"email": "  Mixed@Case.COM ", "status": "WEIRD", "bandIds": ["b1", 7]}),
    ("contractor", {"address": "not a mapping"}),
    ("band", {"members": 0, "companyInfo": {"cnpj": 123}}),
]


@pytest.mark.parametrize("kind,raw", RAW_RECORDS)
def test_sanitize_is_idempotent(kind, raw):
    once = sanitize(raw, "id-1", kind)
    twice = sanitize(once.to_document(), "id-1", kind)
    assert twice == once


def test_empty_event_gets_defaults():
    event = sanitize_event({}, "e1")

    assert event.id == "e1"
    assert event.name == DEFAULT_EVENT_NAME
    assert event.status == "RESERVED"
    assert event.pipeline_stage == "LEAD"
    assert event.created_at == EPOCH
    assert event.financials.net_value == 0
    assert event.has_contract is False


def test_missing_contract_flag_with_files_defaults_to_true():
    event = sanitize_event({"contractFiles": [{"name": "Contrato", "url": "https://f/1.pdf"}]}, "e1")
    assert event.has_contract is True


def test_explicit_contract_flag_is_kept():
    event = sanitize_event({"hasContract": False, "contractFiles": [{"url": "https://f/1.pdf"}]}, "e1")
    assert event.has_contract is False


def test_legacy_contract_url_becomes_single_file():
    created = "2023-05-01T12:00:00+00:00"
    event = sanitize_event({"contractUrl": "https://f/old.pdf", "createdAt": created}, "e1")

    assert len(event.contract_files) == 1
    assert event.contract_files[0].url == "https://f/old.pdf"
    assert event.contract_files[0].name == "Contrato"
    assert event.contract_files[0].uploaded_at == datetime(2023, 5, 1, 12, tzinfo=UTC)
    assert event.has_contract is True


def test_non_numeric_net_value_is_zero():
    event = sanitize_event({"financials": {"netValue": "1.000", "grossValue": 500}}, "e1")
    assert event.financials.net_value == 0
    assert event.financials.gross_value == 500


@pytest.mark.parametrize(
    "status,stage",
    [("CONFIRMED", "WON"), ("CANCELED", "LOST"), ("RESERVED", "LEAD"), ("COMPLETED", "LEAD")],
)
def test_pipeline_stage_inferred_from_status(status, stage):
    assert infer_pipeline_stage(status) == stage
    assert sanitize_event({"status": status}, "e1").pipeline_stage == stage


def test_stored_pipeline_stage_wins_over_inference():
    event = sanitize_event({"status": "CONFIRMED", "pipelineStage": "NEGOTIATION"}, "e1")
    assert event.pipeline_stage == "NEGOTIATION"


def test_user_defaults_role_and_status():
    user = sanitize_user({"email": "a@b.c"}, "u1")
    assert user.role == "MEMBER"
    assert user.status == "ACTIVE"


def test_user_email_normalized_and_band_ids_filtered():
    user = sanitize_user({"email": " Foo@Bar.com ", "bandIds": ["b1", None, "b2"]}, "u1")
    assert user.email == "foo@bar.com"
    assert user.band_ids == ["b1", "b2"]


def test_unknown_role_string_survives():
    assert sanitize_user({"email": "x", "role": "ROADIE"}, "u1").role == "ROADIE"


def test_contractor_nested_defaults():
    contractor = sanitize_contractor({"name": "Prefeitura"}, "c1")
    assert contractor.type == "FISICA"
    assert contractor.address.country == "Brasil"
    assert contractor.address.street == ""
    assert contractor.additional_info.notes == ""


def test_band_members_floor():
    assert sanitize_band({"name": "B", "members": -2}, "b1").members == 1
    assert sanitize_band({"name": "B", "members": 6}, "b1").members == 6
