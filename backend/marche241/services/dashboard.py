"""Admin dashboard assembly: statistics, configuration alerts, quick actions."""

import asyncio
import logging

from pydantic import TypeAdapter, ValidationError

from marche241.schemas.dashboard import ConfigAlert, DashboardResponse, QuickAction
from marche241.schemas.order import Order
from marche241.services.commerce_client import CommerceApiError, CommerceClient, expect_object
from marche241.services.statistics import compute_dashboard_stats

logger = logging.getLogger(__name__)

ORDERS_FETCH_LIMIT = 100

_ORDERS_ADAPTER = TypeAdapter(list[Order])

QUICK_ACTIONS: tuple[tuple[str, str], ...] = (
    ("products", "Gérer les produits"),
    ("orders", "Voir les commandes"),
    ("categories", "Gérer les catégories"),
)


def build_quick_actions(slug: str) -> list[QuickAction]:
    return [
        QuickAction(key=key, label=label, href=f"/admin/{slug}/{key}")
        for key, label in QUICK_ACTIONS
    ]


def build_config_alerts(slug: str, total_products: int, shipping_zones: int) -> list[ConfigAlert]:
    """Alerts for a boutique that cannot take orders yet."""
    alerts = []
    if total_products == 0:
        alerts.append(
            ConfigAlert(
                type="products",
                title="Aucun produit dans votre boutique",
                description=(
                    "Commencez par ajouter des produits pour que vos clients "
                    "puissent passer des commandes."
                ),
                action_label="Ajouter un produit",
                action_href=f"/admin/{slug}/products",
            )
        )
    if shipping_zones == 0:
        alerts.append(
            ConfigAlert(
                type="shipping",
                title="Aucune zone de livraison configurée",
                description=(
                    "Ajoutez des communes et leurs frais de livraison pour permettre "
                    "à vos clients de commander."
                ),
                action_label="Configurer la livraison",
                action_href=f"/admin/{slug}/shipping",
            )
        )
    return alerts


async def fetch_remote_boutique_id(client: CommerceClient, slug: str) -> int:
    data = await client.get(f"/boutiques/{slug}")
    boutique = data.get("boutique") if isinstance(data, dict) else None
    if not boutique:
        raise CommerceApiError(f"Boutique {slug!r} introuvable", 404, data)
    try:
        return int(boutique["id"])
    except (KeyError, TypeError, ValueError) as exc:
        raise CommerceApiError(
            f"Identifiant invalide pour la boutique {slug!r}", 502, data
        ) from exc


async def fetch_orders(client: CommerceClient, boutique_id: int) -> list[Order]:
    """Orders of the boutique; one malformed order fails the whole read."""
    data = expect_object(
        await client.get(
            "/commandes", params={"boutique_id": boutique_id, "limite": ORDERS_FETCH_LIMIT}
        ),
        "commandes",
    )
    try:
        return _ORDERS_ADAPTER.validate_python(data.get("commandes") or [])
    except ValidationError as exc:
        logger.warning("Malformed orders for boutique %s: %s", boutique_id, exc)
        raise CommerceApiError("Commandes invalides", 502, data) from exc


async def fetch_product_count(client: CommerceClient, boutique_id: int) -> int:
    data = expect_object(
        await client.get("/produits", params={"boutique_id": boutique_id, "limite": 1}),
        "produits",
    )
    try:
        if data.get("total") is not None:
            return int(data["total"])
        return len(data.get("produits") or [])
    except (TypeError, ValueError) as exc:
        raise CommerceApiError("Nombre de produits invalide", 502, data) from exc


async def fetch_shipping_zone_count(client: CommerceClient, boutique_id: int) -> int:
    data = expect_object(
        await client.get(f"/communes/boutique/{boutique_id}/actives"), "communes"
    )
    communes = data.get("communes") or []
    if not isinstance(communes, list):
        raise CommerceApiError("Communes invalides", 502, data)
    return len(communes)


async def fetch_view_stats(client: CommerceClient, boutique_id: int) -> tuple[int, int]:
    """Return (views this month, total views); zeros when unavailable."""
    try:
        data = await client.get(f"/boutiques/{boutique_id}/stats")
        stats = (data.get("statistiques") if isinstance(data, dict) else None) or {}
        return int(stats.get("vues_30_jours") or 0), int(stats.get("vues_totales") or 0)
    except (CommerceApiError, AttributeError, TypeError, ValueError) as exc:
        logger.warning("View stats unavailable for boutique %s: %s", boutique_id, exc)
        return 0, 0


async def build_dashboard(
    client: CommerceClient, slug: str, boutique_name: str, period_days: int
) -> DashboardResponse:
    boutique_id = await fetch_remote_boutique_id(client, slug)
    orders, total_products, shipping_zones, (views_month, views_total) = await asyncio.gather(
        fetch_orders(client, boutique_id),
        fetch_product_count(client, boutique_id),
        fetch_shipping_zone_count(client, boutique_id),
        fetch_view_stats(client, boutique_id),
    )

    stats = compute_dashboard_stats(
        orders,
        period_days,
        total_products=total_products,
        views_month=views_month,
        views_total=views_total,
    )
    return DashboardResponse(
        slug=slug,
        boutique_name=boutique_name,
        periode=period_days,
        stats=stats,
        alerts=build_config_alerts(slug, total_products, shipping_zones),
        quick_actions=build_quick_actions(slug),
    )
