"""Lead query DTOs."""

from typing import Optional

from pydantic import ConfigDict, Field, NonNegativeInt, PositiveInt

from dormant_leads.application.dtos.base import DTO, IsoTimestamp
from dormant_leads.application.dtos.dormant import LeadResponse
from dormant_leads.domain.value_objects.lead_status import LeadStatus

DEFAULT_LIMIT = 100


class QueryLeads(DTO):
    """Filters for listing leads (campaign manager)."""

    status: Optional[LeadStatus] = None
    tier: Optional[NonNegativeInt] = None
    last_active_before: Optional[IsoTimestamp] = Field(default=None, alias="lastActiveBefore")
    last_active_after: Optional[IsoTimestamp] = Field(default=None, alias="lastActiveAfter")
    limit: PositiveInt = DEFAULT_LIMIT
    offset: NonNegativeInt = 0

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LeadFilters(DTO):
    """Filters echoed back in a lead list response."""

    status: Optional[LeadStatus] = None
    tier: Optional[int] = None
    lastActiveBefore: Optional[str] = None
    lastActiveAfter: Optional[str] = None


class LeadListResponse(DTO):
    """Page of leads matching a query."""

    leads: list[LeadResponse]
    total: int
    limit: int
    offset: int
    filters: LeadFilters


class StatusBreakdown(DTO):
    """Lead counts per lifecycle status."""

    eligible: int = 0
    contacted: int = 0
    responded: int = 0
    converted: int = 0
    expired: int = 0


class TierBreakdown(DTO):
    """Lead counts per device price tier."""

    tier_0: int = 0
    tier_1: int = 0
    tier_2: int = 0
    tier_3: int = 0
    tier_4: int = 0
    tier_5: int = 0


class ConversionFunnel(DTO):
    """Cumulative counts of leads that reached each outreach stage."""

    eligible: int = 0
    contacted: int = 0
    responded: int = 0
    converted: int = 0
    conversion_rate: float = 0.0  # percentage of eligible leads converted


class DormantStatsResponse(DTO):
    """Dashboard statistics for dormant leads."""

    total_leads: int
    by_status: StatusBreakdown
    by_tier: TierBreakdown
    conversion_funnel: ConversionFunnel
