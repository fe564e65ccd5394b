import logging
from typing import Optional

import httpx

from garage_quotes.documents.domain.generator import AbstractLogoFetcher

logger = logging.getLogger(__name__)


class HttpLogoFetcher(AbstractLogoFetcher):
    """Télécharge le logo depuis une URL fixe, une fois par rendu.

    En cas d'échec (réseau, statut HTTP, contenu vide) retourne None:
    l'en-tête du devis retombe alors sur le nom de l'entreprise en texte.
    """

    def __init__(
        self,
        logo_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.logo_url = logo_url
        self.timeout = timeout
        self.transport = transport  # Injecté dans les tests (httpx.MockTransport)

    async def fetch_logo(self) -> Optional[bytes]:
        if not self.logo_url:
            logger.info("[LogoFetcher] Aucune URL de logo configurée, en-tête texte.")
            return None
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.logo_url, follow_redirects=True)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"[LogoFetcher] Logo indisponible ({self.logo_url}): {e}")
            return None

        if not response.content:
            logger.warning(f"[LogoFetcher] Logo vide reçu depuis {self.logo_url}.")
            return None
        logger.debug(f"[LogoFetcher] Logo chargé ({len(response.content)} bytes).")
        return response.content

