"""Order schemas: records returned by the commerce API and the checkout payload."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Order(BaseModel):
    id: int
    numero_commande: str
    boutique_id: int
    client_nom: str
    client_telephone: str
    client_adresse: str | None = None
    client_ville: str | None = None
    client_commune: str | None = None
    date_commande: datetime
    statut: str
    statut_paiement: str | None = None
    methode_paiement: str | None = None
    sous_total: float = 0
    frais_livraison: float = 0
    taxes: float = 0
    remise: float = 0
    total: float

    model_config = {"extra": "ignore"}


class OrderItemCreate(BaseModel):
    produit_id: int
    quantite: int = Field(..., ge=1)
    prix_unitaire: float = Field(..., ge=0)
    nom_produit: str = Field(..., min_length=1)
    description: str = ""
    variants_selectionnes: dict[str, Any] | None = None


class OrderCreate(BaseModel):
    """Storefront checkout payload; the boutique comes from the URL slug."""

    client_nom: str = Field(..., min_length=1, max_length=255)
    client_telephone: str = Field(..., min_length=8, max_length=20)
    client_adresse: str = Field(..., min_length=1)
    client_ville: str = Field(..., min_length=1)
    client_commune: str = Field(..., min_length=1)
    client_instructions: str = ""
    frais_livraison: float = Field(0, ge=0)
    taxes: float = Field(0, ge=0)
    remise: float = Field(0, ge=0)
    articles: list[OrderItemCreate] = Field(..., min_length=1)

    @field_validator("client_nom", "client_adresse", "client_ville", "client_commune")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Must not be blank")
        return v.strip()
