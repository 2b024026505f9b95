"""Dormant event and lead DTOs."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict, Field, NonNegativeInt, StrictBool, StrictStr

from dormant_leads.application.dtos.base import DTO, IsoTimestamp
from dormant_leads.domain.entities.lead import Lead
from dormant_leads.domain.value_objects.dormant_signals import LineType, NextAction
from dormant_leads.domain.value_objects.lead_status import LeadStatus


class SimSwap(DTO):
    """SIM swap signal."""

    occurred: StrictBool
    ts: IsoTimestamp


class Reachability(DTO):
    """Reachability status of the subscriber's previous device."""

    reachable: StrictBool
    checked_ts: IsoTimestamp
    last_activity_ts: Optional[IsoTimestamp] = None


class EventMetadata(DTO):
    """Optional subscriber history attached to a dormant event."""

    swap_count_30d: Optional[NonNegativeInt] = None
    opt_out: Optional[StrictBool] = None
    last_contact_ts: Optional[IsoTimestamp] = None


class DormantEvent(DTO):
    """Telecom signal report for one subscriber line."""

    msisdn_hash: StrictStr = Field(min_length=1)
    sim_swap: SimSwap
    old_device_reachability: Reachability
    line_type: LineType
    fraud_flag: StrictBool
    metadata: Optional[EventMetadata] = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "msisdn_hash": "9f2c1a7e4b0d3c6f8a1e2d4c6b8a0f1e3d5c7b9a1f3e5d7c9b1a3f5e7d9c1b3a",
                "sim_swap": {"occurred": True, "ts": "2024-05-01T10:00:00Z"},
                "old_device_reachability": {
                    "reachable": False,
                    "checked_ts": "2024-05-06T10:00:00Z",
                    "last_activity_ts": "2024-05-01T09:30:00Z",
                },
                "line_type": "consumer",
                "fraud_flag": False,
                "metadata": {"swap_count_30d": 1, "opt_out": False},
            }
        },
    )


class LeadSignals(DTO):
    """Signals summary exposed on a lead."""

    days_since_swap: float
    days_unreachable: float
    swap_count_30d: NonNegativeInt


class LeadResponse(DTO):
    """Lead as returned by the dormant API."""

    lead_id: str
    msisdn_hash: str
    dormant_score: float = Field(ge=0.0, le=1.0)
    eligible: bool
    activation_window_days: NonNegativeInt
    next_action: NextAction
    exclusions: list[str]
    signals: LeadSignals
    status: LeadStatus
    contact_count: NonNegativeInt = 0
    device_tier: Optional[NonNegativeInt] = None
    created_at: datetime
    expires_at: datetime

    @classmethod
    def from_lead(cls, lead: Lead, now: Optional[datetime] = None) -> "LeadResponse":
        """
        Build the response DTO from a Lead entity.

        Args:
            lead: Lead to expose
            now: Reference time for reporting a lapsed lead as expired

        Returns:
            LeadResponse DTO
        """
        return cls(
            lead_id=lead.id,
            msisdn_hash=lead.msisdn_hash,
            dormant_score=lead.dormant_score,
            eligible=lead.eligible,
            activation_window_days=lead.activation_window_days,
            next_action=lead.next_action,
            exclusions=list(lead.exclusions),
            signals=LeadSignals(**lead.signals.as_dict()),
            status=lead.effective_status(now or datetime.now(timezone.utc)),
            contact_count=lead.contact_count,
            device_tier=lead.device_tier,
            created_at=lead.created_at,
            expires_at=lead.expires_at,
        )


class LeadStatusUpdate(DTO):
    """Request body for moving a lead through its lifecycle."""

    status: LeadStatus


class LeadDeviceUpdate(DTO):
    """Request body for attaching a catalog phone model to a lead."""

    phone_model_id: StrictStr = Field(min_length=1)
