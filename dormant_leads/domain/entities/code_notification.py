"""Verification code notification entity."""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

DEFAULT_DURATION_MS = 10000


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CodeNotification:
    """
    Dismissible banner that shows a one-time verification code.

    The banner starts visible and hides for good once its duration has
    elapsed or the user dismisses it. Changing the code or the duration
    re-arms the timer but never brings back a hidden banner.
    """

    code: str
    duration_ms: int = DEFAULT_DURATION_MS
    shown_at: datetime = field(default_factory=_utcnow)
    _hidden: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate duration."""
        if self.duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

    @property
    def deadline(self) -> datetime:
        """Time at which the banner hides itself."""
        return self.shown_at + timedelta(milliseconds=self.duration_ms)

    def is_visible(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the banner is still shown.

        Args:
            now: Current time (defaults to current UTC time)

        Returns:
            False once dismissed or once the deadline has passed
        """
        if self._hidden:
            return False
        if (now or _utcnow()) >= self.deadline:
            self._hidden = True
            return False
        return True

    def dismiss(self) -> None:
        """Hide the banner immediately."""
        self._hidden = True

    def update(
        self,
        code: Optional[str] = None,
        duration_ms: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """
        Change the code or duration, re-arming the timer if either changed.

        Args:
            code: New verification code
            duration_ms: New display duration in milliseconds
            now: Current time (defaults to current UTC time)
        """
        now = now or _utcnow()
        new_code = self.code if code is None else code
        new_duration = self.duration_ms if duration_ms is None else duration_ms
        if new_duration < 0:
            raise ValueError("duration_ms cannot be negative")

        changed = new_code != self.code or new_duration != self.duration_ms
        # Settle the old timer before swapping it out
        self.is_visible(now)
        self.code = new_code
        self.duration_ms = new_duration
        if changed:
            self.shown_at = now

    def remaining_seconds(self, now: Optional[datetime] = None) -> int:
        """Whole seconds left before the banner hides itself (0 when hidden)."""
        now = now or _utcnow()
        if not self.is_visible(now):
            return 0
        return math.ceil((self.deadline - now).total_seconds())
