"""Phone model catalog use cases."""

from typing import Optional

from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.ports.phone_model_repository import PhoneModelRepository
from dormant_leads.infrastructure.logging.logger import log_seed_progress

PROGRESS_EVERY = 10


def _normalize_text(text: str) -> str:
    """Normalize text for matching (case-insensitive, trimmed)."""
    return text.lower().strip()


class PhoneModelCatalog:
    """Read access to the phone model catalog."""

    def __init__(self, repository: PhoneModelRepository) -> None:
        self._repository = repository

    async def search(self, query: Optional[str] = None) -> list[PhoneModel]:
        """
        Search phone models by free text.

        Every whitespace-separated token of the query must appear in the
        model's brand, model name, storage or keywords.

        Args:
            query: Free-text query; empty or None returns the whole catalog

        Returns:
            Matching phone models
        """
        models = await self._repository.list_all()
        tokens = _normalize_text(query or "").split()
        if not tokens:
            return models
        return [model for model in models if self._matches(model, tokens)]

    def _matches(self, model: PhoneModel, tokens: list[str]) -> bool:
        haystack = " ".join(
            [model.brand, model.model, model.storage, *model.keywords]
        )
        haystack = _normalize_text(haystack)
        return all(token in haystack for token in tokens)


class SeedPhoneModels:
    """Replaces the catalog contents with a list of phone models."""

    def __init__(self, repository: PhoneModelRepository) -> None:
        self._repository = repository

    async def run(self, phone_models: list[PhoneModel]) -> int:
        """
        Clear the catalog, then insert every model in order.

        There is no transaction around the run: if an insert fails the
        error propagates and the catalog is left partly cleared.

        Args:
            phone_models: Models to insert

        Returns:
            Number of inserted rows
        """
        total = len(phone_models)
        log_seed_progress(created=0, total=total, stage="start")

        deleted = await self._repository.delete_all()
        log_seed_progress(created=0, total=total, stage="cleared", deleted=deleted)

        created = 0
        for phone_model in phone_models:
            await self._repository.add(phone_model)
            created += 1
            if created % PROGRESS_EVERY == 0:
                log_seed_progress(created=created, total=total, stage="insert")

        log_seed_progress(created=created, total=total, stage="done")
        return created
