"""Phone model catalog adapters."""

from dormant_leads.adapters.outbound.phone_model.json_catalog import load_phone_models
from dormant_leads.adapters.outbound.phone_model.phone_model_repository import (
    InMemoryPhoneModelRepository,
)
from dormant_leads.adapters.outbound.phone_model.postgres_phone_model_repository import (  # noqa: E501
    PostgresPhoneModelRepository,
)

__all__ = [
    "InMemoryPhoneModelRepository",
    "PostgresPhoneModelRepository",
    "load_phone_models",
]
