"""Postgres-backed phone model repository adapter."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.ports.phone_model_repository import PhoneModelRepository
from dormant_leads.infrastructure.db import get_db_session
from dormant_leads.infrastructure.logging.logger import logger

from .models import PhoneModelModel


class PostgresPhoneModelRepository(PhoneModelRepository):
    """Postgres implementation of phone model repository."""

    def _model_to_dto(self, model: PhoneModelModel) -> PhoneModel:
        return PhoneModel(
            id=model.id,
            brand=model.brand,
            model=model.model,
            storage=model.storage,
            keywords=list(model.keywords or []),
            avg_price_tier=model.avg_price_tier,
            release_year=model.release_year,
            image_url=model.image_url,
        )

    async def delete_all(self) -> int:
        """
        Delete every catalog row.

        Returns:
            Number of deleted rows
        """
        db: Session = get_db_session()
        try:
            count = db.query(PhoneModelModel).delete(synchronize_session=False)
            db.commit()
            return count
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while clearing phone models: {str(e)}")
            raise
        finally:
            db.close()

    async def add(self, phone_model: PhoneModel) -> None:
        """
        Insert one phone model in its own commit.

        Args:
            phone_model: Catalog entry to insert
        """
        db: Session = get_db_session()
        try:
            db.add(
                PhoneModelModel(
                    id=phone_model.id,
                    brand=phone_model.brand,
                    model=phone_model.model,
                    storage=phone_model.storage,
                    keywords=list(phone_model.keywords),
                    avg_price_tier=phone_model.avg_price_tier,
                    release_year=phone_model.release_year,
                    image_url=phone_model.image_url,
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while inserting phone model {phone_model.id}: {str(e)}")
            raise
        finally:
            db.close()

    async def get(self, phone_model_id: str) -> Optional[PhoneModel]:
        db: Session = get_db_session()
        try:
            model = db.query(PhoneModelModel).filter(PhoneModelModel.id == phone_model_id).first()
            return self._model_to_dto(model) if model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting phone model {phone_model_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def list_all(self) -> list[PhoneModel]:
        db: Session = get_db_session()
        try:
            models = (
                db.query(PhoneModelModel)
                .order_by(PhoneModelModel.brand, PhoneModelModel.model, PhoneModelModel.storage)
                .all()
            )
            return [self._model_to_dto(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing phone models: {str(e)}")
            raise
        finally:
            db.close()
