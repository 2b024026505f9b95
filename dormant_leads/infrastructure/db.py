"""SQLAlchemy engine and session factory for the postgres repositories."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dormant_leads.adapters.outbound.persistence.base import Base
from dormant_leads.infrastructure.config.settings import settings

# Built on first use; in-memory deployments never open a connection
_engine = None
_SessionLocal = None


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required for postgres repositories")
        _engine = create_engine(
            settings.database_url,
            pool_pre_ping=True,
            echo=settings.debug_mode,
        )
    return _engine


def get_db_session() -> Session:
    """
    Open a session on the lead database.

    Returns:
        SQLAlchemy session (caller closes it)

    Raises:
        ValueError: If DATABASE_URL is not configured
    """
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal()


def create_tables() -> list[str]:
    """
    Create the leads, network_events and phone_models tables if missing.

    Development shortcut for databases not managed by the alembic migrations.

    Returns:
        Names of the tables known to the schema
    """
    # Registers every table on Base.metadata
    from dormant_leads.adapters.outbound.lead.models import LeadModel  # noqa: F401
    from dormant_leads.adapters.outbound.network_event.models import (  # noqa: F401
        NetworkEventModel,
    )
    from dormant_leads.adapters.outbound.phone_model.models import (  # noqa: F401
        PhoneModelModel,
    )

    Base.metadata.create_all(bind=_get_engine())
    return sorted(Base.metadata.tables)


def dispose_engine() -> None:
    """Close pooled connections and forget the engine."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
