"""Exceptions spécifiques au domaine Partage."""

from typing import Optional


class ShareDomainException(Exception):
    """Classe de base pour les exceptions du domaine Partage."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class TransportFailure(ShareDomainException):
    """Levée lorsque le canal de partage est indisponible (stockage, messagerie)."""
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        super().__init__(message)
        self.original_exception = original_exception
