"""Unit tests for Postgres phone model repository using SQLite in-memory."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from dormant_leads.adapters.outbound.persistence.base import Base
from dormant_leads.adapters.outbound.phone_model.models import PhoneModelModel
from dormant_leads.adapters.outbound.phone_model.postgres_phone_model_repository import (
    PostgresPhoneModelRepository,
)
from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.use_cases.phone_model_catalog import SeedPhoneModels


@pytest.fixture
def repository(monkeypatch):
    """Create Postgres repository with SQLite in-memory database for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine, tables=[PhoneModelModel.__table__])
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    monkeypatch.setattr(
        "dormant_leads.adapters.outbound.phone_model.postgres_phone_model_repository"
        ".get_db_session",
        lambda: SessionLocal(),
    )

    return PostgresPhoneModelRepository()


def _phone(model_id, brand, model, tier=2):
    return PhoneModel(
        id=model_id,
        brand=brand,
        model=model,
        storage="128GB",
        keywords=[brand.lower()],
        avg_price_tier=tier,
        release_year=2022,
    )


@pytest.mark.asyncio
async def test_add_and_get(repository):
    await repository.add(_phone("google-pixel-7a-128", "Google", "Pixel 7a", tier=3))

    stored = await repository.get("google-pixel-7a-128")

    assert stored is not None
    assert stored.brand == "Google"
    assert stored.keywords == ["google"]
    assert stored.avg_price_tier == 3
    assert stored.release_year == 2022
    assert await repository.get("missing") is None


@pytest.mark.asyncio
async def test_list_all_is_sorted(repository):
    await repository.add(_phone("samsung-a54", "Samsung", "Galaxy A54"))
    await repository.add(_phone("apple-15", "Apple", "iPhone 15"))
    await repository.add(_phone("apple-13", "Apple", "iPhone 13"))

    assert [model.id for model in await repository.list_all()] == [
        "apple-13",
        "apple-15",
        "samsung-a54",
    ]


@pytest.mark.asyncio
async def test_duplicate_id_is_rejected(repository):
    await repository.add(_phone("apple-13", "Apple", "iPhone 13"))

    with pytest.raises(IntegrityError):
        await repository.add(_phone("apple-13", "Apple", "iPhone 13"))


@pytest.mark.asyncio
async def test_seed_replaces_rows(repository):
    await repository.add(_phone("nokia-3310", "Nokia", "3310"))
    models = [_phone(f"model-{i}", "Brand", f"Model {i}") for i in range(12)]

    created = await SeedPhoneModels(repository).run(models)

    assert created == 12
    stored = await repository.list_all()
    assert len(stored) == 12
    assert await repository.get("nokia-3310") is None
