"""Health check endpoint."""

import httpx
from fastapi import APIRouter, Depends

from marche241.core.dependencies import get_http_client
from marche241.services.boutique_registry import BoutiqueRegistry, get_registry

router = APIRouter()


@router.get("/health")
async def health_check(
    http: httpx.AsyncClient = Depends(get_http_client),
    registry: BoutiqueRegistry = Depends(get_registry),
):
    """Check commerce API reachability."""
    commerce_status = "ok"
    try:
        await http.get("/")
    except httpx.HTTPError:
        commerce_status = "error"

    return {
        "status": "ok" if commerce_status == "ok" else "degraded",
        "commerce_api": commerce_status,
        "boutiques": len(registry),
        "version": "0.1.0",
    }
