"""Phone model repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from dormant_leads.application.dtos.phone_model import PhoneModel


class PhoneModelRepository(ABC):
    """Port interface for the phone model catalog."""

    @abstractmethod
    async def delete_all(self) -> int:
        """
        Remove every catalog row.

        Returns:
            Number of deleted rows
        """
        pass

    @abstractmethod
    async def add(self, phone_model: PhoneModel) -> None:
        """
        Insert a phone model.

        Args:
            phone_model: Catalog entry to insert
        """
        pass

    @abstractmethod
    async def get(self, phone_model_id: str) -> Optional[PhoneModel]:
        """
        Get a phone model by id.

        Args:
            phone_model_id: Catalog identifier

        Returns:
            PhoneModel DTO, or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[PhoneModel]:
        """
        List all phone models.

        Returns:
            List of catalog entries
        """
        pass
