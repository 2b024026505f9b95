"""Lead entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from dormant_leads.domain.exceptions import InvalidLeadTransitionError
from dormant_leads.domain.value_objects.dormant_signals import (
    DormantSignals,
    LeadAssessment,
    NextAction,
)
from dormant_leads.domain.value_objects.lead_status import (
    TERMINAL_STATUSES,
    LeadStatus,
    can_transition,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Lead:
    """Sales lead derived from dormant-line signals."""

    msisdn_hash: str
    dormant_score: float
    eligible: bool
    activation_window_days: int
    next_action: NextAction
    exclusions: list[str]
    signals: DormantSignals
    expires_at: datetime
    id: str = field(default_factory=lambda: str(uuid4()))
    status: LeadStatus = LeadStatus.ELIGIBLE
    contact_count: int = 0
    last_contact_at: Optional[datetime] = None
    converted_at: Optional[datetime] = None
    device_tier: Optional[int] = None  # avg_price_tier of the line's handset
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_assessment(
        cls,
        msisdn_hash: str,
        assessment: LeadAssessment,
        now: datetime,
        ttl_days: int,
    ) -> "Lead":
        """
        Create a new lead from a rule engine assessment.

        Args:
            msisdn_hash: Hashed subscriber identifier
            assessment: Rule engine output
            now: Creation time
            ttl_days: Days until the lead expires

        Returns:
            New Lead entity
        """
        return cls(
            msisdn_hash=msisdn_hash,
            dormant_score=assessment.dormant_score,
            eligible=assessment.eligible,
            activation_window_days=assessment.activation_window_days,
            next_action=assessment.next_action,
            exclusions=[reason.value for reason in assessment.exclusions],
            signals=assessment.signals,
            expires_at=now + timedelta(days=ttl_days),
            created_at=now,
            updated_at=now,
        )

    def touch(self, now: Optional[datetime] = None) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = now or _utcnow()

    def reassess(self, assessment: LeadAssessment, now: Optional[datetime] = None) -> None:
        """Overwrite scoring fields with a fresh assessment of the same line."""
        self.dormant_score = assessment.dormant_score
        self.eligible = assessment.eligible
        self.activation_window_days = assessment.activation_window_days
        self.next_action = assessment.next_action
        self.exclusions = [reason.value for reason in assessment.exclusions]
        self.signals = assessment.signals
        self.touch(now)

    def is_past_expiry(self, now: datetime) -> bool:
        """Check whether the lead TTL has elapsed."""
        return self.expires_at <= now

    def effective_status(self, now: datetime) -> LeadStatus:
        """Status of the lead, treating a lapsed TTL as expired."""
        if self.status not in TERMINAL_STATUSES and self.is_past_expiry(now):
            return LeadStatus.EXPIRED
        return self.status

    def is_nudgeable(self, now: datetime, max_contacts: int) -> bool:
        """Check whether the lead should receive a nudge."""
        return (
            self.eligible
            and self.next_action == NextAction.SEND_NUDGE
            and self.contact_count < max_contacts
            and self.status not in TERMINAL_STATUSES
            and not self.is_past_expiry(now)
        )

    def transition_to(
        self,
        target: LeadStatus,
        now: Optional[datetime] = None,
        max_contacts: int = 2,
    ) -> None:
        """
        Move the lead to a new lifecycle status.

        Args:
            target: Requested status
            now: Transition time (defaults to current UTC time)
            max_contacts: Maximum number of contact attempts allowed

        Raises:
            InvalidLeadTransitionError: If the transition is not allowed
        """
        now = now or _utcnow()
        current = self.effective_status(now)
        if not can_transition(current, target):
            raise InvalidLeadTransitionError(self.id, current.value, target.value)

        if target == LeadStatus.CONTACTED:
            if self.contact_count >= max_contacts:
                raise InvalidLeadTransitionError(
                    self.id,
                    current.value,
                    target.value,
                    reason=f"contact limit of {max_contacts} reached",
                )
            self.contact_count += 1
            self.last_contact_at = now
        elif target == LeadStatus.CONVERTED:
            self.converted_at = now

        self.status = target
        self.touch(now)

    def expire(self, now: Optional[datetime] = None) -> bool:
        """
        Mark the lead expired in place.

        Returns:
            True if the status changed, False if the lead was already terminal
        """
        if self.status in TERMINAL_STATUSES:
            return False
        self.status = LeadStatus.EXPIRED
        self.touch(now)
        return True
