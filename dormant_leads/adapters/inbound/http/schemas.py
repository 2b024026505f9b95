"""HTTP adapter schemas."""

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    status: str = "ok"


class PurgeResponse(BaseModel):
    """Result of the maintenance purge."""

    leads_expired: int
    events_cleaned: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "leads_expired": 12,
                "events_cleaned": 340,
            }
        }
    )
