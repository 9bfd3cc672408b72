"""Dashboard statistics computed from a boutique's orders.

Revenue (chiffre d'affaires) only counts confirmed orders; order counts and
unique clients cover every order in the period.
"""

from collections import Counter
from datetime import UTC, datetime, timedelta

from marche241.schemas.dashboard import DashboardStats, RevenuePoint, StatusBreakdown
from marche241.schemas.order import Order
from marche241.services.formatting import format_price
from marche241.services.order_status import get_status_display, is_confirmed

DEFAULT_PERIOD_DAYS = 30


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def _revenue(orders: list[Order]) -> float:
    return sum(o.total for o in orders if is_confirmed(o.statut))


def compute_dashboard_stats(
    orders: list[Order],
    period_days: int = DEFAULT_PERIOD_DAYS,
    now: datetime | None = None,
    *,
    total_products: int = 0,
    views_month: int = 0,
    views_total: int = 0,
) -> DashboardStats:
    now = _as_utc(now or datetime.now(UTC))
    start = now - timedelta(days=period_days)
    previous_start = start - timedelta(days=period_days)

    current = [o for o in orders if start <= _as_utc(o.date_commande) <= now]
    previous = [o for o in orders if previous_start <= _as_utc(o.date_commande) < start]

    per_day: Counter = Counter()
    for order in current:
        if is_confirmed(order.statut):
            per_day[_as_utc(order.date_commande).date()] += order.total

    today = now.date()
    evolution = [
        RevenuePoint(date=day, montant=per_day.get(day, 0))
        for day in (today - timedelta(days=offset) for offset in range(period_days - 1, -1, -1))
    ]

    ca_total = _revenue(current)
    ca_previous = _revenue(previous)
    if ca_previous > 0:
        variation = (ca_total - ca_previous) / ca_previous * 100
    else:
        variation = 100.0 if ca_total > 0 else 0.0

    total_orders = len(current)
    by_status = Counter(o.statut for o in current)
    breakdown = []
    for status, count in by_status.items():
        display = get_status_display(status)
        breakdown.append(
            StatusBreakdown(
                statut=status,
                label=display.label,
                color=display.color,
                nombre=count,
                pourcentage=count / total_orders * 100,
            )
        )

    return DashboardStats(
        ca_evolution=evolution,
        ca_total=ca_total,
        ca_total_formatted=format_price(ca_total),
        ca_periode_precedente=ca_previous,
        variation_ca=variation,
        commandes_par_statut=breakdown,
        total_commandes=total_orders,
        total_produits=total_products,
        total_clients=len({o.client_telephone for o in current}),
        vues_mois=views_month,
        vues_total=views_total,
    )
