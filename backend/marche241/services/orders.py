"""Storefront checkout: order creation against the commerce API.

The boutique is always taken from the resolved slug, never from the client
payload. Failures surface as ``OrderCreationError`` with a generic message;
the cause is logged and chained.
"""

import logging

from marche241.schemas.order import OrderCreate
from marche241.services.commerce_client import CommerceApiError, CommerceClient, expect_object
from marche241.services.dashboard import fetch_remote_boutique_id

logger = logging.getLogger(__name__)

ORDER_CREATION_FAILED_MESSAGE = "Impossible de créer la commande. Veuillez réessayer."


class OrderCreationError(Exception):
    def __init__(self, message: str = ORDER_CREATION_FAILED_MESSAGE):
        super().__init__(message)
        self.message = message


async def create_order(client: CommerceClient, slug: str, order: OrderCreate) -> dict:
    """Create one order for the boutique behind ``slug`` and return the stored record."""
    boutique_id = await fetch_remote_boutique_id(client, slug)
    payload = {"boutique_id": boutique_id, **order.model_dump()}
    try:
        data = expect_object(await client.post("/commandes", payload), "commande")
        commande = data.get("commande")
        if not data.get("success", True) or not isinstance(commande, dict):
            raise CommerceApiError("Commande non créée", 502, data)
    except CommerceApiError as exc:
        logger.exception("Order creation failed (boutique=%s)", slug)
        raise OrderCreationError() from exc

    logger.info(
        "Order created (boutique=%s, numero=%s)", slug, commande.get("numero_commande")
    )
    return commande
