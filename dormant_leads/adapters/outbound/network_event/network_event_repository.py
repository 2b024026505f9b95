"""In-memory network event repository adapter."""

from datetime import datetime

from dormant_leads.application.ports.network_event_repository import NetworkEventRepository
from dormant_leads.domain.entities.network_event import NetworkEvent


class InMemoryNetworkEventRepository(NetworkEventRepository):
    """In-memory implementation of network event repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, NetworkEvent] = {}

    async def store(self, event: NetworkEvent) -> str:
        self._storage[event.id] = event
        return event.id

    async def mark_processed(self, event_id: str) -> None:
        event = self._storage.get(event_id)
        if event is None:
            raise KeyError(f"Network event not found: {event_id}")
        event.processed = True

    async def list_unprocessed(self, limit: int = 100) -> list[NetworkEvent]:
        pending = [event for event in self._storage.values() if not event.processed]
        pending.sort(key=lambda event: event.created_at)
        return pending[:limit]

    async def cleanup(self, older_than: datetime) -> int:
        stale = [
            event_id
            for event_id, event in self._storage.items()
            if event.processed and event.created_at < older_than
        ]
        for event_id in stale:
            del self._storage[event_id]
        return len(stale)
