"""Postgres-backed lead repository adapter."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from dormant_leads.application.dtos.query_leads import QueryLeads
from dormant_leads.application.ports.lead_repository import LeadRepository
from dormant_leads.domain.entities.lead import Lead
from dormant_leads.domain.value_objects.dormant_signals import DormantSignals, NextAction
from dormant_leads.domain.value_objects.lead_status import TERMINAL_STATUSES, LeadStatus
from dormant_leads.infrastructure.db import get_db_session
from dormant_leads.infrastructure.logging.logger import logger

from .models import LeadModel

_TERMINAL = [status.value for status in TERMINAL_STATUSES]


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Ensure datetimes are timezone-aware (SQLite returns naive datetimes)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _status_clause(status: Optional[LeadStatus], now: datetime):
    """SQL equivalent of Lead.effective_status filtering."""
    live = and_(LeadModel.status.notin_(_TERMINAL), LeadModel.expires_at > now)
    if status is None:
        return or_(LeadModel.status == LeadStatus.CONVERTED.value, live)
    if status == LeadStatus.EXPIRED:
        return or_(
            LeadModel.status == LeadStatus.EXPIRED.value,
            and_(LeadModel.status.notin_(_TERMINAL), LeadModel.expires_at <= now),
        )
    if status == LeadStatus.CONVERTED:
        return LeadModel.status == LeadStatus.CONVERTED.value
    clause = and_(LeadModel.status == status.value, LeadModel.expires_at > now)
    if status == LeadStatus.ELIGIBLE:
        clause = and_(clause, LeadModel.eligible.is_(True))
    return clause


class PostgresLeadRepository(LeadRepository):
    """Postgres implementation of lead repository."""

    def _model_to_entity(self, model: LeadModel) -> Lead:
        """
        Convert LeadModel to Lead entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            Lead entity
        """
        signals = model.signals or {}
        return Lead(
            id=model.id,
            msisdn_hash=model.msisdn_hash,
            dormant_score=model.dormant_score,
            eligible=model.eligible,
            activation_window_days=model.activation_window_days,
            next_action=NextAction(model.next_action),
            exclusions=list(model.exclusions or []),
            signals=DormantSignals(
                days_since_swap=signals.get("days_since_swap", 0.0),
                days_unreachable=signals.get("days_unreachable", 0.0),
                swap_count_30d=signals.get("swap_count_30d", 0),
            ),
            status=LeadStatus(model.status),
            contact_count=model.contact_count,
            last_contact_at=_aware(model.last_contact_at),
            converted_at=_aware(model.converted_at),
            device_tier=model.device_tier,
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
            expires_at=_aware(model.expires_at),
        )

    def _entity_to_model(self, lead: Lead, model: Optional[LeadModel] = None) -> LeadModel:
        """
        Copy a Lead entity onto a LeadModel (for upsert).

        Args:
            lead: Lead entity
            model: Existing model instance (for update) or None (for insert)

        Returns:
            LeadModel instance
        """
        if model is None:
            model = LeadModel(id=lead.id, created_at=lead.created_at)

        model.msisdn_hash = lead.msisdn_hash
        model.dormant_score = lead.dormant_score
        model.eligible = lead.eligible
        model.activation_window_days = lead.activation_window_days
        model.next_action = lead.next_action.value
        model.exclusions = list(lead.exclusions)
        model.signals = lead.signals.as_dict()
        model.status = lead.status.value
        model.contact_count = lead.contact_count
        model.last_contact_at = lead.last_contact_at
        model.converted_at = lead.converted_at
        model.device_tier = lead.device_tier
        model.updated_at = lead.updated_at
        model.expires_at = lead.expires_at
        return model

    async def save(self, lead: Lead) -> None:
        """
        Save a lead (upsert by id).

        Args:
            lead: Lead entity to save
        """
        db: Session = get_db_session()
        try:
            model = db.query(LeadModel).filter(LeadModel.id == lead.id).first()
            if model:
                self._entity_to_model(lead, model)
            else:
                db.add(self._entity_to_model(lead))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving lead {lead.id}: {str(e)}")
            raise
        finally:
            db.close()

    async def get(self, lead_id: str) -> Optional[Lead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        db: Session = get_db_session()
        try:
            model = db.query(LeadModel).filter(LeadModel.id == lead_id).first()
            if model is None:
                return None
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting lead {lead_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def find_created_between(
        self, msisdn_hash: str, start: datetime, end: datetime
    ) -> Optional[Lead]:
        db: Session = get_db_session()
        try:
            model = (
                db.query(LeadModel)
                .filter(
                    LeadModel.msisdn_hash == msisdn_hash,
                    LeadModel.created_at >= start,
                    LeadModel.created_at < end,
                )
                .order_by(LeadModel.created_at.asc())
                .first()
            )
            return self._model_to_entity(model) if model is not None else None
        except SQLAlchemyError as e:
            logger.error(f"Database error while looking up daily lead: {str(e)}")
            raise
        finally:
            db.close()

    async def list_all(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            List of all leads
        """
        db: Session = get_db_session()
        try:
            models = db.query(LeadModel).all()
            return [self._model_to_entity(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing leads: {str(e)}")
            raise
        finally:
            db.close()

    def _filtered(self, db: Session, filters: QueryLeads, now: datetime) -> Query:
        query = db.query(LeadModel).filter(_status_clause(filters.status, now))
        if filters.tier is not None:
            query = query.filter(LeadModel.device_tier == filters.tier)
        if filters.last_active_before is not None:
            query = query.filter(LeadModel.created_at <= filters.last_active_before)
        if filters.last_active_after is not None:
            query = query.filter(LeadModel.created_at >= filters.last_active_after)
        return query

    async def query(self, filters: QueryLeads, now: datetime) -> tuple[list[Lead], int]:
        db: Session = get_db_session()
        try:
            query = self._filtered(db, filters, now)
            total = query.count()
            models = (
                query.order_by(LeadModel.dormant_score.desc(), LeadModel.created_at.desc())
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )
            return [self._model_to_entity(model) for model in models], total
        except SQLAlchemyError as e:
            logger.error(f"Database error while querying leads: {str(e)}")
            raise
        finally:
            db.close()

    async def list_eligible(self, limit: int, max_contacts: int, now: datetime) -> list[Lead]:
        db: Session = get_db_session()
        try:
            models = (
                db.query(LeadModel)
                .filter(
                    LeadModel.eligible.is_(True),
                    LeadModel.next_action == NextAction.SEND_NUDGE.value,
                    LeadModel.contact_count < max_contacts,
                    LeadModel.status.notin_(_TERMINAL),
                    LeadModel.expires_at > now,
                )
                .order_by(LeadModel.dormant_score.desc(), LeadModel.created_at.desc())
                .limit(limit)
                .all()
            )
            return [self._model_to_entity(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing eligible leads: {str(e)}")
            raise
        finally:
            db.close()

    async def expire_overdue(self, now: datetime) -> int:
        db: Session = get_db_session()
        try:
            count = (
                db.query(LeadModel)
                .filter(LeadModel.status.notin_(_TERMINAL), LeadModel.expires_at <= now)
                .update(
                    {LeadModel.status: LeadStatus.EXPIRED.value, LeadModel.updated_at: now},
                    synchronize_session=False,
                )
            )
            db.commit()
            return count
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while expiring leads: {str(e)}")
            raise
        finally:
            db.close()
