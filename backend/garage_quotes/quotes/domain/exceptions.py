"""Exceptions spécifiques au domaine Quote."""

from typing import Optional


class QuoteDomainException(Exception):
    """Classe de base pour les exceptions du domaine Quote."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class QuoteValidationError(QuoteDomainException):
    """Levée lorsqu'un brouillon de devis ne passe pas la validation.

    Porte un message lisible et le champ fautif; la soumission est bloquée
    et le brouillon reste inchangé.
    """
    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field

    def __eq__(self, other):
        if not isinstance(other, QuoteValidationError):
            return NotImplemented
        return (self.message, self.field) == (other.message, other.field)

    def __hash__(self):
        return hash((self.message, self.field))


class MalformedPayloadError(QuoteDomainException):
    """Levée lorsque le payload de devis reçu est absent ou illisible."""
    def __init__(self, reason: Optional[str] = None):
        super().__init__("No quote data available")
        self.reason = reason
