"""Process dormant event use case."""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from dormant_leads.application.dtos.dormant import DormantEvent, LeadResponse
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.application.ports.network_event_repository import NetworkEventRepository
from dormant_leads.application.use_cases.dormant_rules import DormantRules
from dormant_leads.domain.entities.lead import Lead
from dormant_leads.domain.entities.network_event import DORMANT_CHECK, NetworkEvent
from dormant_leads.infrastructure.logging.logger import log_lead_decision


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProcessDormantEvent:
    """Turns a dormant event into a scored lead."""

    def __init__(
        self,
        lead_repository: LeadRepository,
        event_repository: NetworkEventRepository,
        rules: DormantRules,
        lead_ttl_days: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        """
        Initialize use case.

        Args:
            lead_repository: Lead storage
            event_repository: Raw event storage
            rules: Dormant rule engine
            lead_ttl_days: Days before a new lead expires
            clock: Function returning the current aware datetime
        """
        self._lead_repository = lead_repository
        self._event_repository = event_repository
        self._rules = rules
        self._lead_ttl_days = lead_ttl_days
        self._clock = clock or _utcnow

    async def execute(self, event: DormantEvent) -> LeadResponse:
        """
        Store, evaluate and persist a dormant event.

        A subscriber gets at most one lead per UTC day: a second event on
        the same day updates that lead instead of creating another.

        Args:
            event: Validated dormant event

        Returns:
            Lead response for the created or updated lead
        """
        now = self._clock()

        event_id = await self._event_repository.store(
            NetworkEvent(
                msisdn_hash=event.msisdn_hash,
                payload=event.model_dump(mode="json"),
                event_type=DORMANT_CHECK,
                created_at=now,
            )
        )

        assessment = self._rules.evaluate(event, now)

        day_start = now.astimezone(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
        existing = await self._lead_repository.find_created_between(
            event.msisdn_hash, day_start, day_start + timedelta(days=1)
        )

        if existing is not None:
            existing.reassess(assessment, now)
            lead = existing
        else:
            lead = Lead.from_assessment(event.msisdn_hash, assessment, now, self._lead_ttl_days)

        await self._lead_repository.save(lead)
        await self._event_repository.mark_processed(event_id)

        log_lead_decision(
            lead_id=lead.id,
            msisdn_hash=lead.msisdn_hash,
            dormant_score=lead.dormant_score,
            next_action=lead.next_action.value,
            exclusions=lead.exclusions,
            created=existing is None,
            event_id=event_id,
        )

        return LeadResponse.from_lead(lead, now)
