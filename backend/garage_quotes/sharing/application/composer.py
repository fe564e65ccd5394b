import re
from urllib.parse import quote as url_quote

from garage_quotes.documents.application.renderer import format_money
from garage_quotes.documents.application.services import PDF_MIME_TYPE, quote_filename
from garage_quotes.quotes.domain.entities import Quote
from garage_quotes.sharing.domain.share import SharePayload

# Mêmes caractères non échappés que encodeURIComponent côté mobile
_URI_COMPONENT_SAFE = "!~*'()"


def phone_digits(phone: str) -> str:
    """Ne garde que les chiffres: '+27 76 268 3721' -> '27762683721'."""
    return re.sub(r"\D", "", phone or "")


class ShareComposer:
    """Construit le message WhatsApp, les liens profonds et le nom de fichier.

    Aucune validation: un téléphone mal formé donne simplement un lien inopérant.
    """

    def __init__(self, business_name: str, currency_symbol: str = "R"):
        self.business_name = business_name
        self.currency_symbol = currency_symbol

    def filename(self, quote: Quote) -> str:
        return quote_filename(quote.quote_number)

    def message(self, quote: Quote) -> str:
        vehicle = f"{quote.vehicle.make} {quote.vehicle.model}"
        if quote.vehicle.year:
            vehicle += f" ({quote.vehicle.year})"
        return (
            f"Hi {quote.client.name}, here's your quote from {self.business_name}.\n\n"
            f"Quote #{quote.quote_number}\n"
            f"Vehicle: {vehicle}\n"
            f"Total: {format_money(quote.total, self.currency_symbol)}\n\n"
            "Please find the detailed quote attached."
        )

    def compose(self, quote: Quote) -> SharePayload:
        digits = phone_digits(quote.client.phone)
        text = self.message(quote)
        encoded = url_quote(text, safe=_URI_COMPONENT_SAFE)
        return SharePayload(
            filename=self.filename(quote),
            mime_type=PDF_MIME_TYPE,
            message_text=text,
            recipient_phone_digits=digits,
            whatsapp_url=f"whatsapp://send?phone={digits}&text={encoded}",
            whatsapp_web_url=f"https://wa.me/{digits}?text={encoded}",
        )
