import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional

from garage_quotes.config import Settings
from garage_quotes.documents.domain.document import (
    DocumentField,
    DocumentSection,
    DocumentTableRow,
    EmbeddedImage,
    QuoteDocument,
    SectionKind,
)
from garage_quotes.quotes.domain.entities import Quote

logger = logging.getLogger(__name__)

TOTAL_LABEL = "Total Amount"
SERVICE_COLUMNS = ["Service Description", "Amount"]


def format_money(value: Decimal, currency_symbol: str) -> str:
    """Montant à deux décimales avec le symbole monétaire: R 450.00"""
    return f"{currency_symbol} {Decimal(value):.2f}"


def format_long_date(value: date) -> str:
    """Format de date long (en-ZA): 19 October 2026"""
    return f"{value.day} {value.strftime('%B')} {value.year}"


class DocumentRenderer:
    """Transforme un `Quote` en modèle de document indépendant du moteur PDF.

    Aucune entrée/sortie ici: le logo éventuel est fourni déjà téléchargé.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def render(self, quote: Quote, logo: Optional[EmbeddedImage] = None) -> QuoteDocument:
        logger.debug(f"[DocumentRenderer] Rendu du devis {quote.quote_number} (logo: {logo is not None}).")
        sections = [
            self._header_section(),
            self._metadata_section(quote),
            self._client_section(quote),
            self._vehicle_section(quote),
            self._services_section(quote),
            self._total_section(quote),
            self._footer_section(),
        ]
        return QuoteDocument(
            title=f"Quote {quote.quote_number}",
            quote_number=quote.quote_number,
            logo=logo,
            sections=sections,
        )

    def money(self, value: Decimal) -> str:
        return format_money(value, self.settings.CURRENCY_SYMBOL)

    # --- Sections ---

    def _header_section(self) -> DocumentSection:
        return DocumentSection(
            kind=SectionKind.HEADER,
            title=self.settings.BUSINESS_NAME,
            notes=[self.settings.BUSINESS_TAGLINE, self.settings.BUSINESS_CONTACT_LINE],
        )

    def _metadata_section(self, quote: Quote) -> DocumentSection:
        return DocumentSection(
            kind=SectionKind.METADATA,
            fields=[
                DocumentField(label="Quote Number", value=quote.quote_number),
                DocumentField(label="Date", value=format_long_date(quote.issue_date)),
            ],
        )

    def _client_section(self, quote: Quote) -> DocumentSection:
        fields = [
            DocumentField(label="Name", value=quote.client.name),
            DocumentField(label="Phone", value=quote.client.phone),
        ]
        if quote.client.email:
            fields.append(DocumentField(label="Email", value=quote.client.email))
        return DocumentSection(kind=SectionKind.CLIENT, title="Client Information", fields=fields)

    def _vehicle_section(self, quote: Quote) -> DocumentSection:
        fields = [
            DocumentField(label="Make", value=quote.vehicle.make),
            DocumentField(label="Model", value=quote.vehicle.model),
        ]
        if quote.vehicle.year:
            fields.append(DocumentField(label="Year", value=quote.vehicle.year))
        return DocumentSection(kind=SectionKind.VEHICLE, title="Vehicle Information", fields=fields)

    def _services_section(self, quote: Quote) -> DocumentSection:
        rows: List[DocumentTableRow] = [
            DocumentTableRow(
                description=item.name,
                sub_line=item.description,
                amount=self.money(item.unit_price),
                shaded=index % 2 == 0,
            )
            for index, item in enumerate(quote.line_items)
        ]
        return DocumentSection(
            kind=SectionKind.SERVICES,
            title="Services Quoted",
            columns=list(SERVICE_COLUMNS),
            rows=rows,
        )

    def _total_section(self, quote: Quote) -> DocumentSection:
        return DocumentSection(
            kind=SectionKind.TOTAL,
            fields=[DocumentField(label=TOTAL_LABEL, value=self.money(quote.total))],
        )

    def _footer_section(self) -> DocumentSection:
        # Contenu statique, indépendant du devis
        return DocumentSection(
            kind=SectionKind.FOOTER,
            title=self.settings.BUSINESS_NAME,
            notes=list(self.settings.BUSINESS_BLURB),
            footnotes=[
                f"This quote is valid for {self.settings.QUOTE_VALIDITY_DAYS} days from the date of issue.",
                f"All prices are in {self.settings.CURRENCY_NAME} and include VAT where applicable.",
            ],
        )
