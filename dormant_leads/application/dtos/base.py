"""Base DTO class and shared field types."""

from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict


def _require_string(value: Any) -> Any:
    """Reject timestamps that were not sent as strings."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("must be an ISO-8601 date string")
    return value


def _assume_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ISO-8601 date string parsed into an aware datetime
IsoTimestamp = Annotated[
    datetime,
    BeforeValidator(_require_string),
    AfterValidator(_assume_utc),
]


class DTO(BaseModel):
    """Base class for application DTOs."""

    model_config = ConfigDict(frozen=True)
