"""Admin dashboard endpoint (Bearer token forwarded to the commerce API)."""

from fastapi import APIRouter, Depends, Query

from marche241.core.dependencies import get_admin_commerce_client, get_boutique
from marche241.core.exceptions import ProblemDetailError
from marche241.schemas.boutique import BoutiqueConfig
from marche241.schemas.dashboard import ALLOWED_PERIODS, DashboardResponse
from marche241.services.commerce_client import CommerceClient
from marche241.services.dashboard import build_dashboard
from marche241.services.statistics import DEFAULT_PERIOD_DAYS

router = APIRouter()


@router.get("/{slug}/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    periode: int = Query(DEFAULT_PERIOD_DAYS),
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_admin_commerce_client),
) -> DashboardResponse:
    """Stats for the period, configuration alerts and quick actions."""
    if periode not in ALLOWED_PERIODS:
        raise ProblemDetailError(
            status=422,
            title="Validation Error",
            detail=f"periode must be one of {', '.join(map(str, ALLOWED_PERIODS))}",
        )
    slug, config = boutique
    return await build_dashboard(client, slug, config.name, periode)
