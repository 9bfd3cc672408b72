"""Admin dashboard response schemas."""

import datetime
from typing import Literal

from pydantic import BaseModel

ALLOWED_PERIODS = (7, 30, 90, 365)


class RevenuePoint(BaseModel):
    date: datetime.date
    montant: float


class StatusBreakdown(BaseModel):
    statut: str
    label: str
    color: str
    nombre: int
    pourcentage: float


class DashboardStats(BaseModel):
    ca_evolution: list[RevenuePoint]
    ca_total: float
    ca_total_formatted: str
    ca_periode_precedente: float
    variation_ca: float
    commandes_par_statut: list[StatusBreakdown]
    total_commandes: int
    total_produits: int
    total_clients: int
    vues_mois: int
    vues_total: int


class ConfigAlert(BaseModel):
    type: Literal["products", "shipping"]
    title: str
    description: str
    action_label: str
    action_href: str


class QuickAction(BaseModel):
    key: str
    label: str
    href: str


class DashboardResponse(BaseModel):
    slug: str
    boutique_name: str
    periode: int
    stats: DashboardStats
    alerts: list[ConfigAlert]
    quick_actions: list[QuickAction]
