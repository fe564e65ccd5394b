from abc import ABC, abstractmethod
from typing import Optional

from garage_quotes.documents.domain.document import QuoteDocument


class AbstractPDFGenerator(ABC):
    """Interface abstraite pour un générateur de documents PDF.
    Approche orientée données, l'implémentation gère la mise en page.
    """

    @abstractmethod
    async def generate_quote_pdf(
        self,
        document: QuoteDocument,
        output_path: Optional[str] = None
    ) -> bytes:
        """Génère le PDF d'un devis.

        Args:
            document: Modèle de document produit par le DocumentRenderer.
            output_path: Si fourni, sauvegarde le PDF à ce chemin.
                         Sinon, le contenu binaire est uniquement retourné.

        Returns:
            Le contenu binaire du PDF généré.

        Raises:
            PDFGenerationException: Si une erreur survient durant la génération.
        """
        raise NotImplementedError


class AbstractLogoFetcher(ABC):
    """Source du logo embarqué dans l'en-tête du devis."""

    @abstractmethod
    async def fetch_logo(self) -> Optional[bytes]:
        """Retourne les octets du logo, ou None s'il est indisponible."""
        raise NotImplementedError
