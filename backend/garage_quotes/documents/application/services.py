import logging
from typing import Optional

from pydantic import BaseModel

# Domain
from garage_quotes.documents.domain.document import EmbeddedImage, QuoteDocument
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.documents.domain.generator import AbstractLogoFetcher, AbstractPDFGenerator
from garage_quotes.quotes.domain.entities import Quote

# Application
from .renderer import DocumentRenderer

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def quote_filename(quote_number: str) -> str:
    return f"Quote_{quote_number}.pdf"


class RenderedQuotePDF(BaseModel):
    filename: str
    content: bytes
    mime_type: str = PDF_MIME_TYPE


class PDFService:
    """Service applicatif: logo -> modèle de document -> PDF."""

    def __init__(
        self,
        pdf_generator: AbstractPDFGenerator,
        renderer: DocumentRenderer,
        logo_fetcher: AbstractLogoFetcher,
    ):
        self.pdf_generator = pdf_generator
        self.renderer = renderer
        self.logo_fetcher = logo_fetcher
        logger.info("[PDFService] Initialisé.")

    async def render_document(self, quote: Quote) -> QuoteDocument:
        """Télécharge le logo (une fois par rendu) et construit le modèle de document."""
        logo: Optional[EmbeddedImage] = None
        content = await self.logo_fetcher.fetch_logo()
        if content:
            logo = EmbeddedImage.from_bytes(content)
        else:
            logger.info(f"[PDFService] Devis #{quote.quote_number}: en-tête texte (pas de logo).")
        return self.renderer.render(quote, logo=logo)

    async def render_quote_pdf(self, quote: Quote, output_path: Optional[str] = None) -> RenderedQuotePDF:
        """Génère le PDF d'un devis.

        Raises:
            PDFGenerationException: Si la génération échoue.
        """
        logger.info(f"[PDFService] Demande de génération PDF pour devis #{quote.quote_number}.")
        try:
            document = await self.render_document(quote)
            pdf_bytes = await self.pdf_generator.generate_quote_pdf(
                document=document,
                output_path=output_path
            )
        except PDFGenerationException as e:
            logger.error(f"[PDFService] Échec génération PDF devis #{quote.quote_number}: {e}")
            raise  # Propage l'exception
        except Exception as e:
            logger.error(f"[PDFService] Erreur inattendue génération PDF devis #{quote.quote_number}: {e}", exc_info=True)
            raise PDFGenerationException(f"Erreur inattendue: {e}", original_exception=e)

        return RenderedQuotePDF(filename=quote_filename(quote.quote_number), content=pdf_bytes)
