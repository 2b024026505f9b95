"""In-memory lead repository adapter."""

from copy import deepcopy
from datetime import datetime
from typing import Optional

from dormant_leads.application.dtos.query_leads import QueryLeads
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.domain.entities.lead import Lead
from dormant_leads.domain.value_objects.lead_status import LeadStatus


def _matches(lead: Lead, filters: QueryLeads, now: datetime) -> bool:
    """Apply query filters to a single lead."""
    status = lead.effective_status(now)
    if filters.status is None:
        if status == LeadStatus.EXPIRED:
            return False
    elif status != filters.status:
        return False
    elif filters.status == LeadStatus.ELIGIBLE and not lead.eligible:
        return False

    if filters.tier is not None and lead.device_tier != filters.tier:
        return False
    if filters.last_active_before is not None and lead.created_at > filters.last_active_before:
        return False
    if filters.last_active_after is not None and lead.created_at < filters.last_active_after:
        return False
    return True


def _by_score(lead: Lead) -> tuple[float, datetime]:
    return (lead.dormant_score, lead.created_at)


class InMemoryLeadRepository(LeadRepository):
    """In-memory implementation of lead repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, Lead] = {}

    async def get(self, lead_id: str) -> Optional[Lead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Copy of the stored lead, or None if not found
        """
        lead = self._storage.get(lead_id)
        return deepcopy(lead) if lead is not None else None

    async def find_created_between(
        self, msisdn_hash: str, start: datetime, end: datetime
    ) -> Optional[Lead]:
        for lead in self._storage.values():
            if lead.msisdn_hash == msisdn_hash and start <= lead.created_at < end:
                return deepcopy(lead)
        return None

    async def save(self, lead: Lead) -> None:
        """
        Save a lead, replacing any stored lead with the same id.

        Args:
            lead: Lead entity to save
        """
        self._storage[lead.id] = deepcopy(lead)

    async def list_all(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            Copies of all stored leads
        """
        return [deepcopy(lead) for lead in self._storage.values()]

    async def query(self, filters: QueryLeads, now: datetime) -> tuple[list[Lead], int]:
        matching = [lead for lead in self._storage.values() if _matches(lead, filters, now)]
        matching.sort(key=_by_score, reverse=True)
        page = matching[filters.offset : filters.offset + filters.limit]
        return [deepcopy(lead) for lead in page], len(matching)

    async def list_eligible(self, limit: int, max_contacts: int, now: datetime) -> list[Lead]:
        eligible = [
            lead for lead in self._storage.values() if lead.is_nudgeable(now, max_contacts)
        ]
        eligible.sort(key=_by_score, reverse=True)
        return [deepcopy(lead) for lead in eligible[:limit]]

    async def expire_overdue(self, now: datetime) -> int:
        expired = 0
        for lead in self._storage.values():
            if lead.is_past_expiry(now) and lead.expire(now):
                expired += 1
        return expired
