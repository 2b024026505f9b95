"""Postgres-backed network event repository adapter."""

from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dormant_leads.application.ports.network_event_repository import NetworkEventRepository
from dormant_leads.domain.entities.network_event import NetworkEvent
from dormant_leads.infrastructure.db import get_db_session
from dormant_leads.infrastructure.logging.logger import logger

from .models import NetworkEventModel


class PostgresNetworkEventRepository(NetworkEventRepository):
    """Postgres implementation of network event repository."""

    def _model_to_entity(self, model: NetworkEventModel) -> NetworkEvent:
        created_at = model.created_at
        if created_at and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return NetworkEvent(
            id=model.id,
            msisdn_hash=model.msisdn_hash,
            event_type=model.event_type,
            payload=dict(model.payload),
            processed=model.processed,
            created_at=created_at,
        )

    async def store(self, event: NetworkEvent) -> str:
        """
        Insert an event.

        Args:
            event: Network event to store

        Returns:
            Stored event id
        """
        db: Session = get_db_session()
        try:
            db.add(
                NetworkEventModel(
                    id=event.id,
                    msisdn_hash=event.msisdn_hash,
                    event_type=event.event_type,
                    payload=event.payload,
                    processed=event.processed,
                    created_at=event.created_at,
                )
            )
            db.commit()
            return event.id
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while storing network event {event.id}: {str(e)}")
            raise
        finally:
            db.close()

    async def mark_processed(self, event_id: str) -> None:
        db: Session = get_db_session()
        try:
            updated = (
                db.query(NetworkEventModel)
                .filter(NetworkEventModel.id == event_id)
                .update({NetworkEventModel.processed: True}, synchronize_session=False)
            )
            if updated == 0:
                raise KeyError(f"Network event not found: {event_id}")
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while marking event {event_id} processed: {str(e)}")
            raise
        finally:
            db.close()

    async def list_unprocessed(self, limit: int = 100) -> list[NetworkEvent]:
        db: Session = get_db_session()
        try:
            models = (
                db.query(NetworkEventModel)
                .filter(NetworkEventModel.processed.is_(False))
                .order_by(NetworkEventModel.created_at.asc())
                .limit(limit)
                .all()
            )
            return [self._model_to_entity(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing unprocessed events: {str(e)}")
            raise
        finally:
            db.close()

    async def cleanup(self, older_than: datetime) -> int:
        db: Session = get_db_session()
        try:
            count = (
                db.query(NetworkEventModel)
                .filter(
                    NetworkEventModel.processed.is_(True),
                    NetworkEventModel.created_at < older_than,
                )
                .delete(synchronize_session=False)
            )
            db.commit()
            return count
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while cleaning up network events: {str(e)}")
            raise
        finally:
            db.close()
