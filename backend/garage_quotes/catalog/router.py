import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from garage_quotes.catalog.services import ServiceCatalog, service_catalog
from garage_quotes.catalog.vehicles import VehicleCatalog, vehicle_catalog

logger = logging.getLogger(__name__)

# --- Dépendances ---

def get_service_catalog() -> ServiceCatalog:
    return service_catalog

def get_vehicle_catalog() -> VehicleCatalog:
    return vehicle_catalog

ServiceCatalogDep = Annotated[ServiceCatalog, Depends(get_service_catalog)]
VehicleCatalogDep = Annotated[VehicleCatalog, Depends(get_vehicle_catalog)]

# --- Schémas ---

class ServiceEntryResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    supports_description: bool = Field(False, description="Champ description proposé")

# --- Création du Routeur ---
catalog_router = APIRouter(
    prefix="/catalog",
    tags=["Catalog"]
)


@catalog_router.get("/services", response_model=List[ServiceEntryResponse], response_model_by_alias=True)
async def list_services(catalog: ServiceCatalogDep):
    """Liste les prestations proposables sur un devis."""
    return [
        ServiceEntryResponse(name=s.name, supports_description=s.supports_description)
        for s in catalog.list_services()
    ]


@catalog_router.get("/vehicles/makes", response_model=List[str])
async def list_makes(catalog: VehicleCatalogDep):
    """Liste les marques connues."""
    return catalog.list_makes()


@catalog_router.get("/vehicles/makes/{make}/models", response_model=List[str])
async def list_models(make: str, catalog: VehicleCatalogDep):
    """Liste les modèles d'une marque (vide si saisie libre)."""
    models = catalog.models_for(make)
    if not models:
        logger.debug(f"Aucun modèle catalogué pour la marque '{make}', saisie libre.")
    return models
