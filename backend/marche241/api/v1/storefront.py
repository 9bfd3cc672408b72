"""Public storefront catalog endpoints, tenant-scoped by slug.

Flow: slug -> registry (404 with boutique links on miss) -> commerce API.
"""

from fastapi import APIRouter, Depends, Query

from marche241.core.dependencies import get_boutique, get_commerce_client
from marche241.schemas.boutique import BoutiqueConfig
from marche241.schemas.order import OrderCreate
from marche241.services import catalog
from marche241.services.commerce_client import CommerceClient
from marche241.services.orders import create_order

router = APIRouter()

DEFAULT_PAGE_SIZE = 20


@router.get("/{slug}/products")
async def list_storefront_products(
    page: int = Query(1, ge=1),
    limite: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    categorie_id: int | None = Query(None),
    featured: bool = Query(False),
    nouveaux: bool = Query(False),
    promotion: bool = Query(False),
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> dict:
    slug, _config = boutique
    return await catalog.list_products(
        client,
        slug,
        page=page,
        limite=limite,
        categorie_id=categorie_id,
        featured=featured,
        nouveaux=nouveaux,
        promotion=promotion,
    )


@router.get("/{slug}/products/{product_id}")
async def get_storefront_product(
    product_id: int,
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> dict:
    slug, _config = boutique
    return await catalog.get_product(client, slug, product_id)


@router.get("/{slug}/categories")
async def list_storefront_categories(
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> list:
    slug, _config = boutique
    return await catalog.list_categories(client, slug)


@router.get("/{slug}/trending")
async def get_trending_by_category(
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> dict:
    slug, _config = boutique
    return await catalog.products_by_category(client, slug)


@router.get("/{slug}/communes")
async def list_delivery_communes(
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> list:
    slug, _config = boutique
    return await catalog.list_delivery_communes(client, slug)


@router.post("/{slug}/commandes", status_code=201)
async def create_storefront_order(
    body: OrderCreate,
    boutique: tuple[str, BoutiqueConfig] = Depends(get_boutique),
    client: CommerceClient = Depends(get_commerce_client),
) -> dict:
    """Place an order for this boutique. Failures -> 502 generic message."""
    slug, _config = boutique
    return await create_order(client, slug, body)
