"""Network event entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

DORMANT_CHECK = "dormant_check"


@dataclass
class NetworkEvent:
    """Raw signal event as received, kept for audit and reprocessing."""

    msisdn_hash: str
    payload: dict[str, Any]
    event_type: str = DORMANT_CHECK
    processed: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
