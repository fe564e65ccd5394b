import logging
from datetime import datetime
from typing import Callable, Optional

from garage_quotes.catalog.services import ServiceCatalog, service_catalog
from garage_quotes.quotes.domain.entities import ClientInfo, Quote, ServiceLineItem, VehicleInfo
from garage_quotes.quotes.domain.form_state import QuoteFormState, parse_price

logger = logging.getLogger(__name__)

QUOTE_NUMBER_DIGITS = 8


def generate_quote_number(prefix: str, instant: datetime) -> str:
    """Numéro de devis: préfixe + 8 derniers chiffres du timestamp en millisecondes.

    Unicité non garantie en cas de générations rapprochées, acceptable pour
    un usage mono-opérateur.
    """
    millis = int(instant.timestamp() * 1000)
    return f"{prefix}-{str(millis)[-QUOTE_NUMBER_DIGITS:]}"


class QuoteBuilder:
    """Transforme un brouillon déjà validé en `Quote` immuable.

    Le builder ne revalide pas: l'appelant doit avoir appelé
    `QuoteFormState.validate()` avec succès.
    """

    def __init__(
        self,
        quote_number_prefix: str = "HAG",
        catalog: Optional[ServiceCatalog] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.quote_number_prefix = quote_number_prefix
        self.catalog = catalog or service_catalog
        self.clock = clock

    def build(self, form: QuoteFormState) -> Quote:
        now = self.clock()
        quote_number = generate_quote_number(self.quote_number_prefix, now)

        line_items = []
        for name in form.selected_services:
            description = form.description_of(name).strip()
            if description and not self.catalog.supports_description(name):
                logger.debug(f"[QuoteBuilder] Description ignorée pour '{name}' (non descriptible).")
                description = ""
            line_items.append(
                ServiceLineItem(
                    name=name,
                    unit_price=parse_price(form.price_of(name)),
                    description=description or None,
                )
            )

        quote = Quote(
            quote_number=quote_number,
            issue_date=now.date(),
            client=ClientInfo(
                name=form.client.name.strip(),
                phone=form.client.phone.strip(),
                email=form.client.email.strip() or None,
            ),
            vehicle=VehicleInfo(
                make=form.vehicle.make.strip(),
                model=form.vehicle.model.strip(),
                year=form.vehicle.year.strip() or None,
            ),
            line_items=tuple(line_items),
        )
        logger.info(f"[QuoteBuilder] Devis {quote.quote_number} construit ({len(line_items)} ligne(s), total {quote.total}).")
        return quote
