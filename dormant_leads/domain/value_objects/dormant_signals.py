"""Dormant line value objects."""

from dataclasses import dataclass
from enum import Enum


class LineType(str, Enum):
    """Subscription class of a mobile line."""

    CONSUMER = "consumer"
    BUSINESS = "business"
    M2M = "m2m"


class NextAction(str, Enum):
    """What outreach should do next with a lead."""

    SEND_NUDGE = "send_nudge"
    HOLD = "hold"
    EXCLUDE = "exclude"
    EXPIRED = "expired"


class ExclusionReason(str, Enum):
    """Reason codes that disqualify a line from outreach."""

    NO_SWAP_DETECTED = "no_swap_detected"
    TOO_SOON_AFTER_SWAP = "too_soon_after_swap"
    BUSINESS_LINE = "business_line"
    M2M_LINE = "m2m_line"
    FRAUD_FLAG = "fraud_flag"
    OPT_OUT = "opt_out"
    RECENTLY_CONTACTED = "recently_contacted"
    MULTIPLE_SWAPS_DETECTED = "multiple_swaps_detected"
    DEVICE_STILL_REACHABLE = "device_still_reachable"


@dataclass(frozen=True)
class DormantSignals:
    """Signal metrics derived from a dormant event."""

    days_since_swap: float
    days_unreachable: float
    swap_count_30d: int

    def __post_init__(self) -> None:
        """Validate signal values."""
        if self.days_unreachable < 0:
            raise ValueError("days_unreachable cannot be negative")
        if self.swap_count_30d < 0:
            raise ValueError("swap_count_30d cannot be negative")

    def as_dict(self) -> dict[str, float]:
        """Serialize signals for storage and responses."""
        return {
            "days_since_swap": self.days_since_swap,
            "days_unreachable": self.days_unreachable,
            "swap_count_30d": self.swap_count_30d,
        }


@dataclass(frozen=True)
class LeadAssessment:
    """Outcome of running the dormant rules against one event."""

    signals: DormantSignals
    exclusions: tuple[ExclusionReason, ...]
    dormant_score: float
    eligible: bool
    next_action: NextAction
    activation_window_days: int
