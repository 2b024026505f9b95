"""Network event repository port."""

from abc import ABC, abstractmethod
from datetime import datetime

from dormant_leads.domain.entities.network_event import NetworkEvent


class NetworkEventRepository(ABC):
    """Port interface for raw network event storage."""

    @abstractmethod
    async def store(self, event: NetworkEvent) -> str:
        """
        Store an event.

        Args:
            event: Network event to store

        Returns:
            Stored event id
        """
        pass

    @abstractmethod
    async def mark_processed(self, event_id: str) -> None:
        """
        Flag an event as processed.

        Args:
            event_id: Event identifier
        """
        pass

    @abstractmethod
    async def list_unprocessed(self, limit: int = 100) -> list[NetworkEvent]:
        """
        List events still waiting for processing, oldest first.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of unprocessed events
        """
        pass

    @abstractmethod
    async def cleanup(self, older_than: datetime) -> int:
        """
        Delete processed events created before a cutoff.

        Args:
            older_than: Cutoff timestamp

        Returns:
            Number of deleted events
        """
        pass
