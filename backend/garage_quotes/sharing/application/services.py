import logging

from garage_quotes.documents.application.services import PDFService
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.quotes.domain.entities import Quote
from garage_quotes.sharing.domain.exceptions import TransportFailure
from garage_quotes.sharing.domain.share import AbstractShareTransport, ShareResult

from .composer import ShareComposer

logger = logging.getLogger(__name__)


class ShareService:
    """Partage d'un devis: attend le PDF, compose le message puis livre.

    Une seule tentative: toute erreur remonte à l'appelant, qui relance l'action.
    """

    def __init__(self, pdf_service: PDFService, composer: ShareComposer, transport: AbstractShareTransport):
        self.pdf_service = pdf_service
        self.composer = composer
        self.transport = transport

    async def share_quote(self, quote: Quote) -> ShareResult:
        logger.info(f"[ShareService] Partage du devis #{quote.quote_number}.")
        try:
            rendered = await self.pdf_service.render_quote_pdf(quote)
        except PDFGenerationException:
            logger.warning(f"[ShareService] Partage annulé, rendu du devis #{quote.quote_number} en échec.")
            raise

        share = self.composer.compose(quote)
        try:
            receipt = await self.transport.deliver(share, rendered.content)
        except TransportFailure as e:
            logger.warning(f"[ShareService] Transport indisponible pour #{quote.quote_number}: {e.message}")
            raise
        return ShareResult(share=share, receipt=receipt)
