"""Legacy query-string redirects to path-based lead URLs."""

from urllib.parse import quote

from fastapi import APIRouter, Request, status
from fastapi.datastructures import QueryParams
from fastapi.responses import RedirectResponse

DEFAULT_LEAD_ID = "demo-lead"
# Checked in order; the first non-empty value wins
LEAD_ID_PARAMS = ("id", "lead", "leadId")

router = APIRouter()


def resolve_lead_id(params: QueryParams) -> str:
    """
    Pick the lead id from query parameters.

    Args:
        params: Query parameters; a repeated name contributes its first value

    Returns:
        Trimmed lead id, or the demo lead when none is usable
    """
    for name in LEAD_ID_PARAMS:
        values = params.getlist(name)
        if values and values[0]:
            return values[0].strip() or DEFAULT_LEAD_ID
    return DEFAULT_LEAD_ID


def lead_path(lead_id: str, page: str) -> str:
    """Build the path-based URL for a lead page."""
    return f"/lead/{quote(lead_id, safe='')}/{page}"


def _redirect(request: Request, page: str) -> RedirectResponse:
    lead_id = resolve_lead_id(request.query_params)
    return RedirectResponse(
        url=lead_path(lead_id, page),
        status_code=status.HTTP_308_PERMANENT_REDIRECT,
    )


@router.get("/ship", include_in_schema=False)
async def ship_redirect(request: Request) -> RedirectResponse:
    """Redirect /ship?id=... to /lead/{id}/ship."""
    return _redirect(request, "ship")


@router.get("/store", include_in_schema=False)
async def store_redirect(request: Request) -> RedirectResponse:
    """Redirect /store?id=... to /lead/{id}/store."""
    return _redirect(request, "store")
