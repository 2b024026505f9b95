"""In-memory phone model repository adapter."""

from typing import Optional

from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.ports.phone_model_repository import PhoneModelRepository


class InMemoryPhoneModelRepository(PhoneModelRepository):
    """In-memory implementation of phone model repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, PhoneModel] = {}

    async def delete_all(self) -> int:
        count = len(self._storage)
        self._storage.clear()
        return count

    async def add(self, phone_model: PhoneModel) -> None:
        """
        Insert a phone model.

        Raises:
            ValueError: If the id is already in the catalog
        """
        if phone_model.id in self._storage:
            raise ValueError(f"Duplicate phone model id: {phone_model.id}")
        self._storage[phone_model.id] = phone_model

    async def get(self, phone_model_id: str) -> Optional[PhoneModel]:
        return self._storage.get(phone_model_id)

    async def list_all(self) -> list[PhoneModel]:
        """List the catalog ordered by brand, model and storage."""
        return sorted(
            self._storage.values(),
            key=lambda phone_model: (phone_model.brand, phone_model.model, phone_model.storage),
        )
