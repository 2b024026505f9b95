"""Unit tests for DormantEvent and QueryLeads validation."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from dormant_leads.application.dtos.dormant import DormantEvent, LeadResponse
from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.dtos.query_leads import QueryLeads
from dormant_leads.domain.value_objects.dormant_signals import LineType
from dormant_leads.domain.value_objects.lead_status import LeadStatus


def _error_fields(exc_info) -> set[str]:
    return {".".join(str(part) for part in error["loc"]) for error in exc_info.value.errors()}


def test_valid_event_is_parsed(event_payload):
    event = DormantEvent.model_validate(event_payload(metadata={"swap_count_30d": 1}))

    assert event.line_type == LineType.CONSUMER
    assert event.sim_swap.occurred is True
    assert event.sim_swap.ts.tzinfo is not None
    assert event.metadata.swap_count_30d == 1


def test_schema_example_is_a_valid_event():
    example = DormantEvent.model_config["json_schema_extra"]["example"]

    assert DormantEvent.model_validate(example).msisdn_hash == example["msisdn_hash"]


def test_naive_timestamps_are_read_as_utc(event_payload):
    payload = event_payload()
    payload["sim_swap"]["ts"] = "2024-05-05T12:00:00"

    event = DormantEvent.model_validate(payload)

    assert event.sim_swap.ts == datetime(2024, 5, 5, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "mutate, field",
    [
        (lambda p: p.pop("msisdn_hash"), "msisdn_hash"),
        (lambda p: p.update(msisdn_hash=""), "msisdn_hash"),
        (lambda p: p.update(msisdn_hash=12345), "msisdn_hash"),
        (lambda p: p.update(fraud_flag="false"), "fraud_flag"),
        (lambda p: p.update(line_type="prepaid"), "line_type"),
        (lambda p: p["sim_swap"].update(occurred=1), "sim_swap.occurred"),
        (lambda p: p["sim_swap"].update(ts=1714557600), "sim_swap.ts"),
        (lambda p: p["sim_swap"].update(ts="yesterday"), "sim_swap.ts"),
        (lambda p: p.pop("old_device_reachability"), "old_device_reachability"),
        (lambda p: p.update(metadata={"swap_count_30d": -1}), "metadata.swap_count_30d"),
        (lambda p: p.update(metadata={"opt_out": "yes"}), "metadata.opt_out"),
    ],
)
def test_invalid_event_is_rejected(event_payload, mutate, field):
    payload = event_payload()
    mutate(payload)

    with pytest.raises(ValidationError) as exc_info:
        DormantEvent.model_validate(payload)

    assert field in _error_fields(exc_info)


def test_query_defaults():
    query = QueryLeads()

    assert query.status is None
    assert query.tier is None
    assert query.limit == 100
    assert query.offset == 0


def test_query_accepts_camel_case_aliases():
    query = QueryLeads.model_validate(
        {
            "status": "contacted",
            "tier": "4",
            "lastActiveBefore": "2024-05-10T00:00:00Z",
            "lastActiveAfter": "2024-05-01T00:00:00+02:00",
            "limit": "50",
            "offset": "10",
        }
    )

    assert query.status == LeadStatus.CONTACTED
    assert query.tier == 4
    assert query.last_active_before == datetime(2024, 5, 10, tzinfo=timezone.utc)
    assert query.last_active_after.utcoffset().total_seconds() == 7200
    assert (query.limit, query.offset) == (50, 10)


def test_query_accepts_field_names():
    query = QueryLeads(last_active_before=datetime(2024, 5, 10, tzinfo=timezone.utc))

    assert query.last_active_before.year == 2024


@pytest.mark.parametrize(
    "params, field",
    [
        ({"status": "archived"}, "status"),
        ({"tier": "abc"}, "tier"),
        ({"tier": "-1"}, "tier"),
        ({"limit": "0"}, "limit"),
        ({"offset": "-3"}, "offset"),
        ({"lastActiveBefore": "not-a-date"}, "lastActiveBefore"),
    ],
)
def test_invalid_query_is_rejected(params, field):
    with pytest.raises(ValidationError) as exc_info:
        QueryLeads.model_validate(params)

    assert field in _error_fields(exc_info)


def test_lead_response_from_lead(make_lead, now):
    lead = make_lead(device_tier=3)

    response = LeadResponse.from_lead(lead, now)

    assert response.lead_id == lead.id
    assert response.status == LeadStatus.ELIGIBLE
    assert response.signals.swap_count_30d == 1
    assert response.device_tier == 3


def test_phone_model_keywords_are_normalized():
    model = PhoneModel(
        id="apple-iphone-13-128",
        brand="Apple",
        model="iPhone 13",
        storage="128GB",
        keywords=["iPhone", " apple ", "iphone", ""],
        avg_price_tier=3,
    )

    assert model.keywords == ["apple", "iphone"]


def test_phone_model_tier_is_bounded():
    with pytest.raises(ValidationError):
        PhoneModel(id="x", brand="X", model="Y", storage="64GB", avg_price_tier=6)


def test_lead_response_reports_lapsed_lead_as_expired(make_lead, now):
    lead = make_lead(expires_at=now - timedelta(minutes=1))

    response = LeadResponse.from_lead(lead, now)

    assert lead.status == LeadStatus.ELIGIBLE
    assert response.status == LeadStatus.EXPIRED
