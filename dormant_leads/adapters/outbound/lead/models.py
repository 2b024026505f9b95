"""SQLAlchemy ORM models for leads."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String

from dormant_leads.adapters.outbound.persistence.base import Base


class LeadModel(Base):
    """SQLAlchemy model for leads table."""

    __tablename__ = "leads"

    id = Column(String, primary_key=True)
    msisdn_hash = Column(String, nullable=False, index=True)
    dormant_score = Column(Float, nullable=False, default=0.0)
    eligible = Column(Boolean, nullable=False, default=False)
    activation_window_days = Column(Integer, nullable=False)
    next_action = Column(String, nullable=False)
    exclusions = Column(JSON, nullable=False, default=list)
    signals = Column(JSON, nullable=False)
    status = Column(String, nullable=False, default="eligible", index=True)
    contact_count = Column(Integer, nullable=False, default=0)
    last_contact_at = Column(DateTime(timezone=True), nullable=True)
    converted_at = Column(DateTime(timezone=True), nullable=True)
    device_tier = Column(Integer, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
