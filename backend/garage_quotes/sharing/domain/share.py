from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SharePayload(BaseModel):
    """Ce que la couche de transport reçoit pour partager un devis."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    filename: str
    mime_type: str = "application/pdf"
    message_text: str
    recipient_phone_digits: str
    whatsapp_url: str = Field(..., description="Lien profond de l'application (whatsapp://)")
    whatsapp_web_url: str = Field(..., description="Lien web (https://wa.me/)")


class DeliveryReceipt(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    location: str
    size_bytes: int


class ShareResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    share: SharePayload
    receipt: Optional[DeliveryReceipt] = None


class AbstractShareTransport(ABC):
    """Interface du canal qui livre le PDF (système de fichiers, feuille de partage...)."""

    @abstractmethod
    async def deliver(self, share: SharePayload, content: bytes) -> DeliveryReceipt:
        """Livre le PDF.

        Raises:
            TransportFailure: Si le canal est indisponible.
        """
        raise NotImplementedError
