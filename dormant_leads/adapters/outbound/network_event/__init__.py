"""Network event repository adapters."""

from dormant_leads.adapters.outbound.network_event.network_event_repository import (
    InMemoryNetworkEventRepository,
)
from dormant_leads.adapters.outbound.network_event.postgres_network_event_repository import (  # noqa: E501
    PostgresNetworkEventRepository,
)

__all__ = [
    "InMemoryNetworkEventRepository",
    "PostgresNetworkEventRepository",
]
