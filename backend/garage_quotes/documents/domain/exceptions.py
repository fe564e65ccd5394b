"""Exceptions spécifiques au domaine PDF."""

from typing import Optional


class PDFDomainException(Exception):
    """Classe de base pour les exceptions du domaine PDF."""
    pass


class PDFGenerationException(PDFDomainException):
    """Levée lorsqu'une erreur survient pendant le rendu d'un devis (moteur PDF, écriture)."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        full_message = f"PDF generation failed: {message}"
        if original_exception:
            full_message += f" ({original_exception})"
        super().__init__(full_message)
        self.message = message
        self.original_exception = original_exception


# Nom métier de l'échec de rendu
RenderingFailure = PDFGenerationException
