"""Lead lifecycle use cases."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from dormant_leads.application.dtos.dormant import LeadResponse
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.application.ports.network_event_repository import NetworkEventRepository
from dormant_leads.application.ports.phone_model_repository import PhoneModelRepository
from dormant_leads.domain.exceptions import LeadNotFoundError, PhoneModelNotFoundError
from dormant_leads.domain.value_objects.lead_status import LeadStatus
from dormant_leads.infrastructure.logging.logger import log_event


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UpdateLeadStatus:
    """Moves leads through outreach and attaches device information."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        phone_model_repository: PhoneModelRepository,
        max_contacts_per_lead: int = 2,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._lead_repository = lead_repository
        self._phone_model_repository = phone_model_repository
        self._max_contacts = max_contacts_per_lead
        self._clock = clock or _utcnow

    async def transition(self, lead_id: str, status: LeadStatus) -> LeadResponse:
        """
        Move a lead to a new status.

        Args:
            lead_id: Lead identifier
            status: Target status

        Returns:
            Updated lead

        Raises:
            LeadNotFoundError: If no lead has this id
            InvalidLeadTransitionError: If the lifecycle forbids the move
        """
        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            raise LeadNotFoundError(lead_id)

        now = self._clock()
        previous = lead.status
        lead.transition_to(status, now, max_contacts=self._max_contacts)
        await self._lead_repository.save(lead)

        log_event(
            component="lifecycle",
            lead_id=lead.id,
            status_before=previous.value,
            status_after=lead.status.value,
            contact_count=lead.contact_count,
        )
        return LeadResponse.from_lead(lead, now)

    async def assign_device(self, lead_id: str, phone_model_id: str) -> LeadResponse:
        """
        Record the handset behind a lead, taking its price tier from the catalog.

        Raises:
            LeadNotFoundError: If no lead has this id
            PhoneModelNotFoundError: If the phone model is not in the catalog
        """
        lead = await self._lead_repository.get(lead_id)
        if lead is None:
            raise LeadNotFoundError(lead_id)

        phone_model = await self._phone_model_repository.get(phone_model_id)
        if phone_model is None:
            raise PhoneModelNotFoundError(phone_model_id)

        now = self._clock()
        lead.device_tier = phone_model.avg_price_tier
        lead.touch(now)
        await self._lead_repository.save(lead)
        return LeadResponse.from_lead(lead, now)


class LeadMaintenance:
    """TTL enforcement for leads and retention for raw events."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        event_repository: NetworkEventRepository,
        event_retention_days: int = 90,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._lead_repository = lead_repository
        self._event_repository = event_repository
        self._event_retention_days = event_retention_days
        self._clock = clock or _utcnow

    async def purge(self) -> dict[str, int]:
        """
        Expire overdue leads in place and delete old processed events.

        Returns:
            Counts of expired leads and cleaned events
        """
        now = self._clock()
        leads_expired = await self._lead_repository.expire_overdue(now)
        events_cleaned = await self._event_repository.cleanup(
            now - timedelta(days=self._event_retention_days)
        )

        log_event(
            component="maintenance",
            leads_expired=leads_expired,
            events_cleaned=events_cleaned,
        )
        return {"leads_expired": leads_expired, "events_cleaned": events_cleaned}
