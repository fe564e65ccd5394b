"""Catalogue statique des prestations proposées par l'atelier."""
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ServiceDefinition(BaseModel):
    """Une prestation du catalogue."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Libellé affiché sur le devis")
    supports_description: bool = Field(
        default=False,
        description="La prestation accepte un texte descriptif détaillé",
    )


SERVICE_CATALOG: List[ServiceDefinition] = [
    ServiceDefinition(name="Full vehicle diagnostics & mechanical repairs"),
    ServiceDefinition(name="ECU / engine management upgrades & remapping"),
    ServiceDefinition(name="Suspension, exhaust & drivetrain work"),
    ServiceDefinition(name="Vehicle inspections & maintenance scheduling"),
    ServiceDefinition(name="Lexus V8 engine conversions", supports_description=True),
    ServiceDefinition(name="Performance tuning & custom builds"),
    ServiceDefinition(name="Routine servicing (oil, filters, brakes)"),
    ServiceDefinition(name="Panel beating"),
    ServiceDefinition(name="Spray painting"),
]


class ServiceCatalog:
    """Recherche dans le catalogue des prestations."""

    def __init__(self, services: Optional[List[ServiceDefinition]] = None):
        self._services = list(SERVICE_CATALOG if services is None else services)
        self._by_name = {service.name: service for service in self._services}

    def list_services(self) -> List[ServiceDefinition]:
        return list(self._services)

    def names(self) -> List[str]:
        return [service.name for service in self._services]

    def get(self, name: str) -> Optional[ServiceDefinition]:
        return self._by_name.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def supports_description(self, name: str) -> bool:
        """Indique si une prestation peut porter une description.

        Les prestations hors catalogue (texte libre) sont toujours descriptibles.
        """
        service = self.get(name)
        if service is None:
            logger.debug(f"[ServiceCatalog] Prestation hors catalogue: '{name}'")
            return True
        return service.supports_description


service_catalog = ServiceCatalog()
