"""Phone model catalog DTOs."""

from typing import Optional

from pydantic import ConfigDict, Field, StrictStr, field_validator

from dormant_leads.application.dtos.base import DTO

MAX_PRICE_TIER = 5


class PhoneModel(DTO):
    """Catalog entry for a handset model and storage variant."""

    id: StrictStr = Field(min_length=1)
    brand: StrictStr = Field(min_length=1)
    model: StrictStr = Field(min_length=1)
    storage: StrictStr
    keywords: list[StrictStr] = Field(default_factory=list)
    avg_price_tier: int = Field(ge=0, le=MAX_PRICE_TIER)
    release_year: Optional[int] = Field(default=None, ge=1990)
    image_url: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "apple-iphone-13-128",
                "brand": "Apple",
                "model": "iPhone 13",
                "storage": "128GB",
                "keywords": ["iphone", "iphone 13", "apple"],
                "avg_price_tier": 3,
                "release_year": 2021,
                "image_url": None,
            }
        },
    )

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, keywords: list[str]) -> list[str]:
        """Keywords are a set of search terms: lowercase, trimmed, unique, sorted."""
        return sorted({keyword.strip().lower() for keyword in keywords if keyword.strip()})
