import logging
from typing import Annotated

from fastapi import Depends

from garage_quotes.catalog.router import ServiceCatalogDep
from garage_quotes.documents.interfaces.dependencies import AppSettingsDep

# Application
from garage_quotes.quotes.application.builder import QuoteBuilder
from garage_quotes.quotes.application.services import QuoteService

logger = logging.getLogger(__name__)

# --- Dépendances Builder ---
def get_quote_builder(app_settings: AppSettingsDep, catalog: ServiceCatalogDep) -> QuoteBuilder:
    """Injecte QuoteBuilder avec le préfixe de numérotation configuré."""
    return QuoteBuilder(quote_number_prefix=app_settings.QUOTE_NUMBER_PREFIX, catalog=catalog)

QuoteBuilderDep = Annotated[QuoteBuilder, Depends(get_quote_builder)]

# --- Dépendances Service ---
def get_quote_service(builder: QuoteBuilderDep) -> QuoteService:
    """Injecte QuoteService avec ses dépendances."""
    logger.debug("Fourniture de QuoteService")
    return QuoteService(builder=builder)

QuoteServiceDep = Annotated[QuoteService, Depends(get_quote_service)]
