import logging
import os

from garage_quotes.sharing.domain.exceptions import TransportFailure
from garage_quotes.sharing.domain.share import AbstractShareTransport, DeliveryReceipt, SharePayload

logger = logging.getLogger(__name__)


class LocalFileTransport(AbstractShareTransport):
    """Dépose le PDF sous son nom de partage dans le dossier d'export."""

    def __init__(self, export_dir: str):
        self.export_dir = export_dir

    async def deliver(self, share: SharePayload, content: bytes) -> DeliveryReceipt:
        target = os.path.join(self.export_dir, os.path.basename(share.filename))
        try:
            os.makedirs(self.export_dir, exist_ok=True)
            with open(target, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"[LocalFileTransport] Échec écriture {target}: {e}", exc_info=True)
            # Aucun fichier partiel ne doit rester référencé
            if os.path.exists(target):
                os.remove(target)
            raise TransportFailure(f"Unable to save {share.filename}: {e.strerror or e}", original_exception=e)

        logger.info(f"[LocalFileTransport] Devis déposé: {target} ({len(content)} bytes).")
        return DeliveryReceipt(location=target, size_bytes=len(content))
