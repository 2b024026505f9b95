"""Lead repository port."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from dormant_leads.application.dtos.query_leads import QueryLeads
from dormant_leads.domain.entities.lead import Lead


class LeadRepository(ABC):
    """Port interface for lead repository."""

    @abstractmethod
    async def get(self, lead_id: str) -> Optional[Lead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        pass

    @abstractmethod
    async def find_created_between(
        self, msisdn_hash: str, start: datetime, end: datetime
    ) -> Optional[Lead]:
        """
        Find a lead for a subscriber created in ``[start, end)``.

        Args:
            msisdn_hash: Hashed subscriber identifier
            start: Inclusive lower bound on created_at
            end: Exclusive upper bound on created_at

        Returns:
            Lead entity, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, lead: Lead) -> None:
        """
        Save a lead (insert or update by id).

        Args:
            lead: Lead entity to save
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[Lead]:
        """
        List all leads, expired ones included.

        Returns:
            List of all leads
        """
        pass

    @abstractmethod
    async def query(self, filters: QueryLeads, now: datetime) -> tuple[list[Lead], int]:
        """
        Filter, order by dormant_score (descending) and page leads.

        Args:
            filters: Query filters, limit and offset
            now: Reference time for TTL checks

        Returns:
            Tuple of (page of leads, total matching count before paging)
        """
        pass

    @abstractmethod
    async def list_eligible(self, limit: int, max_contacts: int, now: datetime) -> list[Lead]:
        """
        List leads ready for a nudge, best score first.

        Args:
            limit: Maximum number of leads to return
            max_contacts: Leads contacted this many times are skipped
            now: Reference time for TTL checks

        Returns:
            List of eligible leads
        """
        pass

    @abstractmethod
    async def expire_overdue(self, now: datetime) -> int:
        """
        Mark every lead past its TTL as expired, in place.

        Args:
            now: Reference time

        Returns:
            Number of leads whose status changed
        """
        pass
