"""SQLAlchemy ORM models for the phone model catalog."""

from sqlalchemy import JSON, Column, Integer, String

from dormant_leads.adapters.outbound.persistence.base import Base


class PhoneModelModel(Base):
    """SQLAlchemy model for phone_models table."""

    __tablename__ = "phone_models"

    id = Column(String, primary_key=True)
    brand = Column(String, nullable=False, index=True)
    model = Column(String, nullable=False)
    storage = Column(String, nullable=False)
    keywords = Column(JSON, nullable=False, default=list)
    avg_price_tier = Column(Integer, nullable=False)
    release_year = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)
