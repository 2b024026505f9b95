"""Lead query and statistics use case."""

from datetime import datetime, timezone
from typing import Callable, Optional

from dormant_leads.application.dtos.dormant import LeadResponse
from dormant_leads.application.dtos.query_leads import (
    DEFAULT_LIMIT,
    ConversionFunnel,
    DormantStatsResponse,
    LeadFilters,
    LeadListResponse,
    QueryLeads,
    StatusBreakdown,
    TierBreakdown,
)
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.domain.exceptions import LeadNotFoundError
from dormant_leads.domain.value_objects.lead_status import LeadStatus

MAX_TIER = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LeadQueries:
    """Read side of the lead store: lookups, filtered lists and statistics."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        max_contacts_per_lead: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Lead storage
            max_contacts_per_lead: Contact attempts after which a lead is no longer nudged
            clock: Function returning the current aware datetime
        """
        self._lead_repository = lead_repository
        self._max_contacts = max_contacts_per_lead
        self._clock = clock or _utcnow

    async def get(self, lead_id: str) -> LeadResponse:
        """
        Get a lead by id.

        Raises:
            LeadNotFoundError: If no lead has this id
        """
        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            raise LeadNotFoundError(lead_id)
        return LeadResponse.from_lead(lead, self._clock())

    async def eligible(self, limit: int = DEFAULT_LIMIT) -> list[LeadResponse]:
        """List leads ready for a nudge campaign, best score first."""
        now = self._clock()
        leads = await self._lead_repository.list_eligible(limit, self._max_contacts, now)
        return [LeadResponse.from_lead(lead, now) for lead in leads]

    async def query(self, filters: QueryLeads) -> LeadListResponse:
        """
        Filter and page leads for the campaign manager.

        Args:
            filters: Validated query filters

        Returns:
            Page of leads with the total count and echoed filters
        """
        now = self._clock()
        leads, total = await self._lead_repository.query(filters, now)
        return LeadListResponse(
            leads=[LeadResponse.from_lead(lead, now) for lead in leads],
            total=total,
            limit=filters.limit,
            offset=filters.offset,
            filters=LeadFilters(
                status=filters.status,
                tier=filters.tier,
                lastActiveBefore=(
                    filters.last_active_before.isoformat() if filters.last_active_before else None
                ),
                lastActiveAfter=(
                    filters.last_active_after.isoformat() if filters.last_active_after else None
                ),
            ),
        )

    async def stats(self) -> DormantStatsResponse:
        """Compute dashboard statistics over every stored lead."""
        now = self._clock()
        leads = await self._lead_repository.list_all()

        by_status = {status.value: 0 for status in LeadStatus}
        by_tier = {f"tier_{tier}": 0 for tier in range(MAX_TIER + 1)}
        funnel = {"eligible": 0, "contacted": 0, "responded": 0, "converted": 0}

        for lead in leads:
            by_status[lead.effective_status(now).value] += 1

            tier = min(max(lead.device_tier or 0, 0), MAX_TIER)
            by_tier[f"tier_{tier}"] += 1

            # Funnel stages are cumulative: a converted lead was also contacted
            converted = lead.converted_at is not None
            responded = converted or lead.status == LeadStatus.RESPONDED
            contacted = responded or lead.contact_count > 0
            if lead.eligible or contacted:
                funnel["eligible"] += 1
            if contacted:
                funnel["contacted"] += 1
            if responded:
                funnel["responded"] += 1
            if converted:
                funnel["converted"] += 1

        conversion_rate = 0.0
        if funnel["eligible"] > 0:
            conversion_rate = round(funnel["converted"] / funnel["eligible"] * 100, 2)

        return DormantStatsResponse(
            total_leads=len(leads) - by_status[LeadStatus.EXPIRED.value],
            by_status=StatusBreakdown(**by_status),
            by_tier=TierBreakdown(**by_tier),
            conversion_funnel=ConversionFunnel(**funnel, conversion_rate=conversion_rate),
        )
