"""HTTP routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from dormant_leads.adapters.inbound.http.schemas import HealthResponse, PurgeResponse
from dormant_leads.adapters.outbound.phone_model import load_phone_models
from dormant_leads.application.dtos.dormant import (
    DormantEvent,
    LeadDeviceUpdate,
    LeadResponse,
    LeadStatusUpdate,
)
from dormant_leads.application.dtos.phone_model import PhoneModel
from dormant_leads.application.dtos.query_leads import (
    DEFAULT_LIMIT,
    DormantStatsResponse,
    LeadListResponse,
    QueryLeads,
)
from dormant_leads.domain.exceptions import (
    InvalidLeadTransitionError,
    LeadNotFoundError,
    PhoneModelNotFoundError,
)
from dormant_leads.infrastructure.config.settings import settings
from dormant_leads.infrastructure.logging.logger import log_event, mask_hash
from dormant_leads.infrastructure.wiring.dependencies import (
    create_lead_maintenance,
    create_lead_queries,
    create_lead_repository,
    create_network_event_repository,
    create_phone_model_catalog,
    create_phone_model_repository,
    create_process_dormant_event_use_case,
    create_seed_phone_models_use_case,
    create_update_lead_status_use_case,
)

router = APIRouter()

# Repositories are shared by every use case so in-memory state stays consistent
_lead_repository = create_lead_repository()
_event_repository = create_network_event_repository()
_phone_model_repository = create_phone_model_repository()

_process_dormant_event = create_process_dormant_event_use_case(_lead_repository, _event_repository)
_lead_queries = create_lead_queries(_lead_repository)
_update_lead_status = create_update_lead_status_use_case(_lead_repository, _phone_model_repository)
_lead_maintenance = create_lead_maintenance(_lead_repository, _event_repository)
_phone_model_catalog = create_phone_model_catalog(_phone_model_repository)


async def load_in_memory_catalog() -> int:
    """
    Fill the in-memory phone model catalog from the JSON seed file.

    Does nothing when the catalog is stored in Postgres (use the seed script).

    Returns:
        Number of loaded phone models
    """
    if settings.phone_model_repository == "postgres":
        return 0
    phone_models = load_phone_models(settings.phone_models_path or None)
    return await create_seed_phone_models_use_case(_phone_model_repository).run(phone_models)


def query_leads_params(
    status_filter: Optional[str] = Query(None, alias="status"),
    tier: Optional[str] = Query(None),
    last_active_before: Optional[str] = Query(None, alias="lastActiveBefore"),
    last_active_after: Optional[str] = Query(None, alias="lastActiveAfter"),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
) -> QueryLeads:
    """
    Validate lead query parameters into a QueryLeads DTO.

    Raises:
        RequestValidationError: With one entry per offending parameter
    """
    raw = {
        "status": status_filter,
        "tier": tier,
        "lastActiveBefore": last_active_before,
        "lastActiveAfter": last_active_after,
        "limit": limit,
        "offset": offset,
    }
    try:
        return QueryLeads.model_validate({k: v for k, v in raw.items() if v is not None})
    except ValidationError as err:
        errors = []
        for error in err.errors(include_url=False, include_context=False):
            errors.append({**error, "loc": ("query", *error["loc"])})
        raise RequestValidationError(errors) from err


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return HealthResponse().model_dump()


@router.post(
    "/dormant/process",
    status_code=status.HTTP_200_OK,
    response_model=LeadResponse,
)
async def process_dormant_event(event: DormantEvent) -> LeadResponse:
    """
    Evaluate a dormant event and create or update the subscriber's lead.

    Args:
        event: Telecom signal report

    Returns:
        Lead with score, eligibility and next action
    """
    log_event(
        component="http",
        action="process_dormant_event",
        msisdn_hash=mask_hash(event.msisdn_hash),
        line_type=event.line_type.value,
    )
    return await _process_dormant_event.execute(event)


@router.get("/dormant/leads", status_code=status.HTTP_200_OK, response_model=LeadListResponse)
async def query_leads(filters: QueryLeads = Depends(query_leads_params)) -> LeadListResponse:
    """
    Query leads with filters (for campaign manager).

    Example: GET /dormant/leads?status=eligible&tier=4&limit=50
    """
    return await _lead_queries.query(filters)


@router.get("/dormant/leads/{lead_id}", status_code=status.HTTP_200_OK, response_model=LeadResponse)
async def get_lead(lead_id: str) -> LeadResponse:
    """
    Get lead details by id.

    Raises:
        HTTPException: 404 if the lead does not exist
    """
    try:
        return await _lead_queries.get(lead_id)
    except LeadNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.post(
    "/dormant/leads/{lead_id}/status",
    status_code=status.HTTP_200_OK,
    response_model=LeadResponse,
)
async def update_lead_status(lead_id: str, body: LeadStatusUpdate) -> LeadResponse:
    """
    Move a lead through its outreach lifecycle.

    Raises:
        HTTPException: 404 if the lead does not exist, 409 if the transition is not allowed
    """
    try:
        return await _update_lead_status.transition(lead_id, body.status)
    except LeadNotFoundError as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err
    except InvalidLeadTransitionError as err:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err)) from err


@router.post(
    "/dormant/leads/{lead_id}/device",
    status_code=status.HTTP_200_OK,
    response_model=LeadResponse,
)
async def assign_lead_device(lead_id: str, body: LeadDeviceUpdate) -> LeadResponse:
    """
    Attach a catalog phone model to a lead, setting its device tier.

    Raises:
        HTTPException: 404 if the lead or the phone model does not exist
    """
    try:
        return await _update_lead_status.assign_device(lead_id, body.phone_model_id)
    except (LeadNotFoundError, PhoneModelNotFoundError) as err:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(err)) from err


@router.get("/dormant/eligible", status_code=status.HTTP_200_OK, response_model=list[LeadResponse])
async def get_eligible_leads(
    limit: int = Query(DEFAULT_LIMIT, ge=1),
) -> list[LeadResponse]:
    """Get eligible leads for a nudge campaign, best score first."""
    return await _lead_queries.eligible(limit)


@router.get("/dormant/stats", status_code=status.HTTP_200_OK, response_model=DormantStatsResponse)
async def get_stats() -> DormantStatsResponse:
    """Get dormant lead statistics for the dashboard."""
    return await _lead_queries.stats()


@router.post(
    "/dormant/maintenance/purge",
    status_code=status.HTTP_200_OK,
    response_model=PurgeResponse,
)
async def purge_expired() -> PurgeResponse:
    """
    Expire overdue leads in place and clean up old processed events.

    Leads are never deleted; only raw network events are.
    """
    return PurgeResponse(**await _lead_maintenance.purge())


@router.get("/phone-models", status_code=status.HTTP_200_OK, response_model=list[PhoneModel])
async def list_phone_models(q: Optional[str] = Query(None, max_length=100)) -> list[PhoneModel]:
    """
    List the phone model catalog, optionally filtered by a free-text query.

    Args:
        q: Search text matched against brand, model, storage and keywords
    """
    return await _phone_model_catalog.search(q)
