"""Lead lifecycle status value object."""

from enum import Enum


class LeadStatus(str, Enum):
    """Outreach stage of a lead."""

    ELIGIBLE = "eligible"
    CONTACTED = "contacted"
    RESPONDED = "responded"
    CONVERTED = "converted"
    EXPIRED = "expired"


# Once a lead reaches these, it stops moving
TERMINAL_STATUSES = frozenset({LeadStatus.CONVERTED, LeadStatus.EXPIRED})

TRANSITIONS: dict[LeadStatus, frozenset[LeadStatus]] = {
    LeadStatus.ELIGIBLE: frozenset({LeadStatus.CONTACTED, LeadStatus.EXPIRED}),
    LeadStatus.CONTACTED: frozenset(
        {
            LeadStatus.CONTACTED,  # follow-up contact
            LeadStatus.RESPONDED,
            LeadStatus.CONVERTED,
            LeadStatus.EXPIRED,
        }
    ),
    LeadStatus.RESPONDED: frozenset({LeadStatus.CONVERTED, LeadStatus.EXPIRED}),
    LeadStatus.CONVERTED: frozenset(),
    LeadStatus.EXPIRED: frozenset(),
}


def can_transition(current: LeadStatus, target: LeadStatus) -> bool:
    """Check whether a lead may move from ``current`` to ``target``."""
    return target in TRANSITIONS[current]
