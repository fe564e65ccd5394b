from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from garage_quotes.quotes.domain.entities import ClientInfo, Quote, ServiceLineItem, VehicleInfo
from garage_quotes.quotes.domain.exceptions import MalformedPayloadError
from garage_quotes.quotes.domain.form_state import QuoteFormState, parse_price


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Schémas pour le brouillon (formulaire) ---

class ClientDraftIn(CamelModel):
    name: str = ""
    phone: str = ""
    email: str = ""


class VehicleDraftIn(CamelModel):
    make: str = ""
    model: str = ""
    year: str = ""


class ServiceDraftIn(CamelModel):
    name: str = Field(..., min_length=1)
    price: str = ""
    description: str = ""


class QuoteDraftRequest(CamelModel):
    """Brouillon transmis par le formulaire; les services dans l'ordre de sélection."""
    client: ClientDraftIn = Field(default_factory=ClientDraftIn)
    vehicle: VehicleDraftIn = Field(default_factory=VehicleDraftIn)
    services: List[ServiceDraftIn] = Field(default_factory=list)

    def to_form_state(self) -> QuoteFormState:
        """Rejoue les saisies sur un brouillon vide."""
        form = QuoteFormState()
        form.set_client(name=self.client.name, phone=self.client.phone, email=self.client.email)
        form.set_vehicle(make=self.vehicle.make, model=self.vehicle.model, year=self.vehicle.year)
        for service in self.services:
            if not form.is_selected(service.name):
                form.toggle_service(service.name)
            form.set_service_price(service.name, service.price)
            if service.description:
                form.set_service_description(service.name, service.description)
        return form


class DraftTotalResponse(CamelModel):
    total: str
    selected_count: int


class DraftValidationResponse(CamelModel):
    valid: bool
    field: Optional[str] = None
    message: Optional[str] = None


# --- Payload transmis du builder vers le rendu ---

class LineItemPayload(CamelModel):
    name: str
    price: str
    description: Optional[str] = None


class QuotePayload(CamelModel):
    """Forme sérialisée d'un `Quote` (champs client/véhicule en chaînes)."""
    quote_number: Optional[str] = None
    issue_date: Optional[date] = None
    client_name: str
    client_phone: str
    client_email: str = ""
    vehicle_make: str
    vehicle_model: str
    vehicle_year: str = ""
    line_items: List[LineItemPayload]

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuotePayload":
        return cls(
            quote_number=quote.quote_number,
            issue_date=quote.issue_date,
            client_name=quote.client.name,
            client_phone=quote.client.phone,
            client_email=quote.client.email or "",
            vehicle_make=quote.vehicle.make,
            vehicle_model=quote.vehicle.model,
            vehicle_year=quote.vehicle.year or "",
            line_items=[
                LineItemPayload(
                    name=item.name,
                    price=f"{item.unit_price:.2f}",
                    description=item.description,
                )
                for item in quote.line_items
            ],
        )

    def to_quote(self, fallback_number: str, fallback_date: date) -> Quote:
        """Reconstruit le `Quote`. Lève MalformedPayloadError si une donnée est inutilisable."""
        if not self.line_items:
            raise MalformedPayloadError("payload sans ligne de prestation")

        items = []
        for line in self.line_items:
            price = parse_price(line.price)
            if price is None or price <= 0:
                raise MalformedPayloadError(f"prix invalide pour '{line.name}': {line.price!r}")
            description = (line.description or "").strip()
            items.append(ServiceLineItem(name=line.name, unit_price=price, description=description or None))

        return Quote(
            quote_number=self.quote_number or fallback_number,
            issue_date=self.issue_date or fallback_date,
            client=ClientInfo(
                name=self.client_name,
                phone=self.client_phone,
                email=self.client_email.strip() or None,
            ),
            vehicle=VehicleInfo(
                make=self.vehicle_make,
                model=self.vehicle_model,
                year=self.vehicle_year.strip() or None,
            ),
            line_items=tuple(items),
        )
