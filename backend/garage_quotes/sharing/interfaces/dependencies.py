import logging
from typing import Annotated

from fastapi import Depends

from garage_quotes.documents.interfaces.dependencies import AppSettingsDep, PDFServiceDep

from garage_quotes.sharing.domain.share import AbstractShareTransport
from garage_quotes.sharing.infrastructure.filesystem_transport import LocalFileTransport
from garage_quotes.sharing.application.composer import ShareComposer
from garage_quotes.sharing.application.services import ShareService

logger = logging.getLogger(__name__)

# --- Composer / Transport ---

def get_share_composer(app_settings: AppSettingsDep) -> ShareComposer:
    return ShareComposer(
        business_name=app_settings.BUSINESS_NAME,
        currency_symbol=app_settings.CURRENCY_SYMBOL,
    )

ShareComposerDep = Annotated[ShareComposer, Depends(get_share_composer)]

def get_share_transport(app_settings: AppSettingsDep) -> AbstractShareTransport:
    """Injecte LocalFileTransport."""
    logger.debug("Fourniture de LocalFileTransport")
    return LocalFileTransport(export_dir=app_settings.EXPORT_DIR)

ShareTransportDep = Annotated[AbstractShareTransport, Depends(get_share_transport)]

# --- Service ---

def get_share_service(
    pdf_service: PDFServiceDep,
    composer: ShareComposerDep,
    transport: ShareTransportDep,
) -> ShareService:
    return ShareService(pdf_service=pdf_service, composer=composer, transport=transport)

ShareServiceDep = Annotated[ShareService, Depends(get_share_service)]
