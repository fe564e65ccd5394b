"""Brouillon de devis (état du formulaire) et règles de validation.

Le brouillon est une structure explicite et sérialisable: il est créé vide à
l'ouverture du formulaire, modifié à chaque saisie, puis soit transformé en
`Quote` par le QuoteBuilder après validation, soit abandonné.
"""
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from garage_quotes.catalog.services import ServiceCatalog, service_catalog
from garage_quotes.quotes.domain.exceptions import QuoteValidationError

logger = logging.getLogger(__name__)

YEAR_MAX_DIGITS = 4
CENT = Decimal("0.01")


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """Convertit une saisie de prix en Decimal.

    Retourne None pour une saisie vide, non numérique, NaN ou infinie.
    Aucune lecture partielle: "450abc" est refusé, pas lu comme 450.
    """
    if text is None:
        return None
    stripped = str(text).strip()
    if not stripped:
        return None
    try:
        value = Decimal(stripped)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def parse_price(text: Optional[str]) -> Optional[Decimal]:
    """Prix arrondi au centime (demi-pair), tel qu'il sera affiché et transmis.

    Retourne None si la saisie est illisible ou trop grande pour être arrondie.
    """
    value = parse_decimal(text)
    if value is None:
        return None
    try:
        return value.quantize(CENT)
    except InvalidOperation:
        return None


class ClientDraft(BaseModel):
    name: str = ""
    phone: str = ""
    email: str = ""


class VehicleDraft(BaseModel):
    make: str = ""
    model: str = ""
    year: str = ""


class QuoteFormState(BaseModel):
    """Brouillon modifiable d'un devis en cours de composition."""

    client: ClientDraft = Field(default_factory=ClientDraft)
    vehicle: VehicleDraft = Field(default_factory=VehicleDraft)
    # Ordre d'insertion = ordre de sélection
    selected_services: List[str] = Field(default_factory=list)
    service_prices: Dict[str, str] = Field(default_factory=dict)
    service_descriptions: Dict[str, str] = Field(default_factory=dict)

    # --- Client / véhicule ---

    def set_client(self, **patch: str) -> None:
        """Mise à jour partielle des informations client."""
        for key, value in patch.items():
            if key not in ClientDraft.model_fields:
                raise ValueError(f"Champ client inconnu: '{key}'")
            setattr(self.client, key, value or "")

    def set_vehicle(self, **patch: str) -> None:
        """Mise à jour partielle du véhicule.

        Changer la marque efface le modèle, sauf si le même patch fournit un modèle.
        """
        for key in patch:
            if key not in VehicleDraft.model_fields:
                raise ValueError(f"Champ véhicule inconnu: '{key}'")

        if "make" in patch:
            new_make = patch["make"] or ""
            if new_make != self.vehicle.make and "model" not in patch:
                self.vehicle.model = ""
            self.vehicle.make = new_make
        if "model" in patch:
            self.vehicle.model = patch["model"] or ""
        if "year" in patch:
            # Masque de saisie: chiffres uniquement, 4 au maximum
            self.vehicle.year = re.sub(r"\D", "", patch["year"] or "")[:YEAR_MAX_DIGITS]

    # --- Prestations ---

    def is_selected(self, name: str) -> bool:
        return name in self.selected_services

    def toggle_service(self, name: str) -> bool:
        """Ajoute ou retire une prestation. Retourne True si elle est désormais sélectionnée."""
        # Aucune conservation du prix/description entre deux sélections
        self.service_prices.pop(name, None)
        self.service_descriptions.pop(name, None)
        if name in self.selected_services:
            self.selected_services.remove(name)
            return False
        self.selected_services.append(name)
        return True

    def set_service_price(self, name: str, raw_text: str) -> None:
        self.service_prices[name] = raw_text

    def set_service_description(self, name: str, text: str) -> None:
        self.service_descriptions[name] = text

    def price_of(self, name: str) -> str:
        return self.service_prices.get(name, "")

    def description_of(self, name: str) -> str:
        return self.service_descriptions.get(name, "")

    # --- Calculs dérivés ---

    def compute_total(self) -> Decimal:
        """Total courant des prix arrondis au centime; vides ou illisibles comptent pour zéro."""
        total = Decimal(0)
        for name in self.selected_services:
            total += parse_price(self.price_of(name)) or Decimal(0)
        return total

    # --- Validation ---

    def validation_errors(self) -> List[QuoteValidationError]:
        """Toutes les erreurs, dans l'ordre d'évaluation des règles."""
        errors: List[QuoteValidationError] = []
        if not self.client.name.strip():
            errors.append(QuoteValidationError("Please enter client name", "client.name"))
        if not self.client.phone.strip():
            errors.append(QuoteValidationError("Please enter client phone number", "client.phone"))
        if not self.vehicle.make.strip():
            errors.append(QuoteValidationError("Please select vehicle make", "vehicle.make"))
        if not self.vehicle.model.strip():
            errors.append(QuoteValidationError("Please select vehicle model", "vehicle.model"))
        if not self.selected_services:
            errors.append(QuoteValidationError("Please select at least one service", "services"))
        for name in self.selected_services:
            price = parse_price(self.price_of(name))
            if price is None or price <= 0:
                errors.append(
                    QuoteValidationError(
                        f"Please enter a valid price for {name}",
                        f"services.{name}.price",
                    )
                )
        return errors

    def validate(self) -> None:
        """Lève la première erreur de validation rencontrée (une seule à la fois)."""
        errors = self.validation_errors()
        if errors:
            logger.debug(f"[QuoteFormState] Validation échouée: {errors[0].field}")
            raise errors[0]

    def description_enabled(self, name: str, catalog: Optional[ServiceCatalog] = None) -> bool:
        return (catalog or service_catalog).supports_description(name)
