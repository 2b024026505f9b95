"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from dormant_leads.domain.entities.lead import Lead
from dormant_leads.domain.value_objects.dormant_signals import DormantSignals, NextAction


@pytest.fixture
def now():
    """Fixed reference time."""
    return datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def event_payload(now):
    """Factory for dormant event payloads relative to ``now``."""

    def _make(
        msisdn_hash="a1b2c3d4e5f6a7b8c9d0",
        days_since_swap=5,
        occurred=True,
        reachable=False,
        days_since_activity=5,
        line_type="consumer",
        fraud_flag=False,
        metadata=None,
    ):
        reachability = {
            "reachable": reachable,
            "checked_ts": now.isoformat(),
        }
        if days_since_activity is not None:
            reachability["last_activity_ts"] = (
                now - timedelta(days=days_since_activity)
            ).isoformat()
        payload = {
            "msisdn_hash": msisdn_hash,
            "sim_swap": {
                "occurred": occurred,
                "ts": (now - timedelta(days=days_since_swap)).isoformat(),
            },
            "old_device_reachability": reachability,
            "line_type": line_type,
            "fraud_flag": fraud_flag,
        }
        if metadata is not None:
            payload["metadata"] = metadata
        return payload

    return _make


@pytest.fixture
def make_lead(now):
    """Factory for Lead entities created at ``now``."""

    def _make(
        msisdn_hash="a1b2c3d4e5f6a7b8c9d0",
        dormant_score=0.8,
        eligible=True,
        next_action=NextAction.SEND_NUDGE,
        created_at=None,
        expires_at=None,
        device_tier=None,
    ):
        created_at = created_at or now
        return Lead(
            msisdn_hash=msisdn_hash,
            dormant_score=dormant_score,
            eligible=eligible,
            activation_window_days=9,
            next_action=next_action,
            exclusions=[] if eligible else ["fraud_flag"],
            signals=DormantSignals(days_since_swap=5.0, days_unreachable=5.0, swap_count_30d=1),
            expires_at=expires_at or created_at + timedelta(days=30),
            device_tier=device_tier,
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
