"""Boutique registry endpoints (public, no auth)."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from marche241.core.dependencies import get_boutique
from marche241.schemas.boutique import BoutiqueConfig, BoutiqueLink, BoutiqueResponse
from marche241.services.boutique_registry import BoutiqueRegistry, get_registry

router = APIRouter()


@router.get("", response_model=list[BoutiqueLink])
async def list_boutiques(
    registry: BoutiqueRegistry = Depends(get_registry),
) -> list[BoutiqueLink]:
    """Every boutique served by this deployment, with its storefront path."""
    return list(registry.links())


@router.get("/{slug}", response_model=BoutiqueResponse)
async def get_boutique_config(
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
) -> BoutiqueResponse:
    slug, config = boutique
    return BoutiqueResponse(slug=slug, **config.model_dump())


@router.get("/{slug}/theme.css", response_class=PlainTextResponse)
async def get_boutique_theme_css(
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
) -> PlainTextResponse:
    """Theme colours as CSS custom properties on ``.boutique-container``."""
    _slug, config = boutique
    lines = [f"  {name}: {value};" for name, value in config.theme.css_variables().items()]
    body = ".boutique-container {\n" + "\n".join(lines) + "\n}\n"
    return PlainTextResponse(body, media_type="text/css")
