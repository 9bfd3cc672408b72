"""Order status labels and chart colours shared by the admin views."""

from typing import NamedTuple


class StatusDisplay(NamedTuple):
    label: str
    color: str


ORDER_STATUSES: dict[str, StatusDisplay] = {
    "en_attente": StatusDisplay("En attente", "#f59e0b"),
    "confirmee": StatusDisplay("Confirmée", "#3b82f6"),
    "en_preparation": StatusDisplay("En préparation", "#8b5cf6"),
    "expedie": StatusDisplay("Expédiée", "#6366f1"),
    "livree": StatusDisplay("Livrée", "#10b981"),
    "annulee": StatusDisplay("Annulée", "#ef4444"),
    "remboursee": StatusDisplay("Remboursée", "#f97316"),
}

# Statuses that count towards revenue
CONFIRMED_STATUSES = frozenset({"confirmee", "en_preparation", "expedie", "livree"})

UNKNOWN_STATUS_COLOR = "#6b7280"


def get_status_display(status: str) -> StatusDisplay:
    return ORDER_STATUSES.get(status.lower(), StatusDisplay(status, UNKNOWN_STATUS_COLOR))


def is_confirmed(status: str) -> bool:
    return status.lower() in CONFIRMED_STATUSES
