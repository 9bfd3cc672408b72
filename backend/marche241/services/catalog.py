"""Storefront catalog reads, scoped to a boutique by slug."""

from marche241.services.commerce_client import CommerceApiError, CommerceClient
from marche241.services.dashboard import fetch_remote_boutique_id


def _unwrap(data, key: str, what: str, kind: type = object):
    if not isinstance(data, dict) or not data.get("success", True):
        raise CommerceApiError(f"Erreur lors de la récupération des {what}", 502, data)
    value = data.get(key)
    if value is None or not isinstance(value, kind):
        raise CommerceApiError(f"Erreur lors de la récupération des {what}", 502, data)
    return value


async def list_products(
    client: CommerceClient,
    slug: str,
    *,
    page: int | None = None,
    limite: int | None = None,
    categorie_id: int | None = None,
    featured: bool = False,
    nouveaux: bool = False,
    promotion: bool = False,
) -> dict:
    boutique_id = await fetch_remote_boutique_id(client, slug)
    params = {
        "boutique_id": boutique_id,
        "page": page,
        "limite": limite,
        "categorie_id": categorie_id,
        "featured": "true" if featured else None,
        "nouveaux": "true" if nouveaux else None,
        "promotion": "true" if promotion else None,
    }
    data = await client.get("/produits", params=params)
    return {
        "produits": _unwrap(data, "produits", "produits", list),
        "total": data.get("total"),
        "page": data.get("page"),
        "limite": data.get("limite"),
    }


async def get_product(client: CommerceClient, slug: str, product_id: int) -> dict:
    """Fetch one product, refusing products that belong to another boutique."""
    boutique_id = await fetch_remote_boutique_id(client, slug)
    data = await client.get(f"/produits/{product_id}")
    product = _unwrap(data, "produit", "produits", dict)
    owner = product.get("boutique_id")
    try:
        foreign = owner is not None and int(owner) != boutique_id
    except (TypeError, ValueError) as exc:
        raise CommerceApiError("Produit invalide", 502, data) from exc
    if foreign:
        raise CommerceApiError(f"Produit avec l'ID {product_id} introuvable", 404, None)
    return product


async def list_categories(client: CommerceClient, slug: str) -> list:
    boutique_id = await fetch_remote_boutique_id(client, slug)
    data = await client.get("/categories", params={"boutique_id": boutique_id})
    return _unwrap(data, "categories", "catégories", list)


async def products_by_category(client: CommerceClient, slug: str) -> dict:
    """Products grouped by category slug, for the trending section."""
    boutique_id = await fetch_remote_boutique_id(client, slug)
    data = await client.get("/produits/categories", params={"boutique_id": boutique_id})
    return _unwrap(data, "categories", "produits par catégorie", dict)


async def list_delivery_communes(client: CommerceClient, slug: str) -> list:
    """Active delivery communes with their ``tarif_livraison``, used to price checkout."""
    boutique_id = await fetch_remote_boutique_id(client, slug)
    data = await client.get(f"/communes/boutique/{boutique_id}/actives")
    return _unwrap(data, "communes", "communes", list)
