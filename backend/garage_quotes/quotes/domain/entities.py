from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Entités du Domaine "Quotes" (immuables une fois construites)


class ClientInfo(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: Optional[str] = None  # Format non validé


class VehicleInfo(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: Optional[str] = Field(None, pattern=r"^\d{1,4}$")


class ServiceLineItem(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    unit_price: Decimal = Field(..., gt=0)
    description: Optional[str] = None


class Quote(BaseModel):
    """Devis finalisé, prêt pour le rendu. Toute modification produit un nouveau devis."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    quote_number: str = Field(..., min_length=1)
    issue_date: date
    client: ClientInfo
    vehicle: VehicleInfo
    line_items: Tuple[ServiceLineItem, ...] = Field(..., min_length=1)

    @computed_field
    @property
    def total(self) -> Decimal:
        # Toujours dérivé des lignes, jamais stocké
        return sum((item.unit_price for item in self.line_items), Decimal(0))
