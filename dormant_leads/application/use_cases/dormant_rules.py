"""Dormant line rule engine."""

import math
from datetime import datetime

from dormant_leads.application.dtos.dormant import DormantEvent
from dormant_leads.domain.value_objects.dormant_signals import (
    DormantSignals,
    ExclusionReason,
    LeadAssessment,
    LineType,
    NextAction,
)

SECONDS_PER_DAY = 86400.0

# Score weights
SWAP_WEIGHT = 0.40
UNREACHABILITY_WEIGHT = 0.35
TIME_WINDOW_WEIGHT = 0.15
HISTORY_WEIGHT = 0.10

# Days of unreachability at which the signal saturates
UNREACHABILITY_SATURATION_DAYS = 7
# Swaps in 30 days at which the history signal reaches zero
HISTORY_SWAP_CEILING = 3


def _days_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


class DormantRules:
    """Scores a dormant event and decides what outreach should do with it."""

    def __init__(
        self,
        min_days_after_swap: int = 3,
        max_activation_window_days: int = 14,
        max_swaps_30d_threshold: int = 2,
        min_days_between_contacts: int = 14,
    ) -> None:
        """
        Initialize the rule engine.

        Args:
            min_days_after_swap: Days to wait after a swap before outreach
            max_activation_window_days: Days after a swap during which outreach is useful
            max_swaps_30d_threshold: Swaps in 30 days above which a line is suspicious
            min_days_between_contacts: Minimum gap between two contacts
        """
        if max_activation_window_days <= min_days_after_swap:
            raise ValueError("max_activation_window_days must exceed min_days_after_swap")
        self.min_days_after_swap = min_days_after_swap
        self.max_activation_window_days = max_activation_window_days
        self.max_swaps_30d_threshold = max_swaps_30d_threshold
        self.min_days_between_contacts = min_days_between_contacts

    def evaluate(self, event: DormantEvent, now: datetime) -> LeadAssessment:
        """
        Run every rule against an event.

        Args:
            event: Validated dormant event
            now: Reference time for all day computations

        Returns:
            Lead assessment with signals, exclusions, score and decision
        """
        signals = self.calculate_signals(event, now)
        exclusions = self.check_exclusions(event, signals, now)
        dormant_score = self.calculate_score(event, signals, exclusions)
        eligible = not exclusions and signals.days_since_swap >= self.min_days_after_swap

        return LeadAssessment(
            signals=signals,
            exclusions=tuple(exclusions),
            dormant_score=dormant_score,
            eligible=eligible,
            next_action=self.determine_next_action(signals, exclusions),
            activation_window_days=self.calculate_activation_window(signals),
        )

    def calculate_signals(self, event: DormantEvent, now: datetime) -> DormantSignals:
        """Derive day counts and swap history from the raw event."""
        days_since_swap = _days_between(event.sim_swap.ts, now)

        reachability = event.old_device_reachability
        if reachability.reachable:
            days_unreachable = 0.0
        elif reachability.last_activity_ts is not None:
            days_unreachable = _days_between(reachability.last_activity_ts, now)
        else:
            # No activity timestamp: assume unreachable since the swap
            days_unreachable = days_since_swap

        swap_count_30d = 1
        if event.metadata is not None and event.metadata.swap_count_30d:
            swap_count_30d = event.metadata.swap_count_30d

        return DormantSignals(
            days_since_swap=days_since_swap,
            days_unreachable=max(0.0, days_unreachable),
            swap_count_30d=swap_count_30d,
        )

    def check_exclusions(
        self,
        event: DormantEvent,
        signals: DormantSignals,
        now: datetime,
    ) -> list[ExclusionReason]:
        """Collect every exclusion rule the event trips, in rule order."""
        exclusions: list[ExclusionReason] = []
        metadata = event.metadata

        if not event.sim_swap.occurred:
            exclusions.append(ExclusionReason.NO_SWAP_DETECTED)

        if signals.days_since_swap < self.min_days_after_swap:
            exclusions.append(ExclusionReason.TOO_SOON_AFTER_SWAP)

        if event.line_type == LineType.BUSINESS:
            exclusions.append(ExclusionReason.BUSINESS_LINE)

        if event.line_type == LineType.M2M:
            exclusions.append(ExclusionReason.M2M_LINE)

        if event.fraud_flag:
            exclusions.append(ExclusionReason.FRAUD_FLAG)

        if metadata is not None and metadata.opt_out:
            exclusions.append(ExclusionReason.OPT_OUT)

        if metadata is not None and metadata.last_contact_ts is not None:
            days_since_contact = _days_between(metadata.last_contact_ts, now)
            if days_since_contact < self.min_days_between_contacts:
                exclusions.append(ExclusionReason.RECENTLY_CONTACTED)

        if signals.swap_count_30d > self.max_swaps_30d_threshold:
            exclusions.append(ExclusionReason.MULTIPLE_SWAPS_DETECTED)

        if event.old_device_reachability.reachable:
            exclusions.append(ExclusionReason.DEVICE_STILL_REACHABLE)

        return exclusions

    def calculate_score(
        self,
        event: DormantEvent,
        signals: DormantSignals,
        exclusions: list[ExclusionReason],
    ) -> float:
        """
        Compute the weighted dormant score in [0, 1].

        score = 0.40 * swap + 0.35 * unreachability + 0.15 * time_window + 0.10 * history

        Excluded events always score 0.
        """
        if exclusions:
            return 0.0

        swap_signal = 1.0 if event.sim_swap.occurred else 0.0
        unreachability_signal = min(signals.days_unreachable / UNREACHABILITY_SATURATION_DAYS, 1.0)
        time_window_signal = self._time_window_signal(signals.days_since_swap)
        history_signal = max(0.0, 1 - signals.swap_count_30d / HISTORY_SWAP_CEILING)

        score = (
            SWAP_WEIGHT * swap_signal
            + UNREACHABILITY_WEIGHT * unreachability_signal
            + TIME_WINDOW_WEIGHT * time_window_signal
            + HISTORY_WEIGHT * history_signal
        )
        return min(1.0, max(0.0, score))

    def _time_window_signal(self, days_since_swap: float) -> float:
        """Full signal inside the activation window, linear decay outside it."""
        if self.min_days_after_swap <= days_since_swap <= self.max_activation_window_days:
            return 1.0
        midpoint = (self.min_days_after_swap + self.max_activation_window_days) / 2
        spread = self.max_activation_window_days - self.min_days_after_swap
        return max(0.0, 1 - abs(days_since_swap - midpoint) / spread)

    def determine_next_action(
        self,
        signals: DormantSignals,
        exclusions: list[ExclusionReason],
    ) -> NextAction:
        """Pick the next outreach step."""
        if exclusions:
            return NextAction.EXCLUDE
        if signals.days_since_swap < self.min_days_after_swap:
            return NextAction.HOLD
        if signals.days_since_swap > self.max_activation_window_days:
            return NextAction.EXPIRED
        return NextAction.SEND_NUDGE

    def calculate_activation_window(self, signals: DormantSignals) -> int:
        """Whole days left in the activation window (at least 1)."""
        days_remaining = self.max_activation_window_days - signals.days_since_swap
        return max(1, math.ceil(days_remaining))
