"""SQLAlchemy ORM models for network events."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, String

from dormant_leads.adapters.outbound.persistence.base import Base


class NetworkEventModel(Base):
    """SQLAlchemy model for network_events table."""

    __tablename__ = "network_events"

    id = Column(String, primary_key=True)
    msisdn_hash = Column(String, nullable=False, index=True)
    event_type = Column(String, nullable=False)
    payload = Column(JSON, nullable=False)
    processed = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
