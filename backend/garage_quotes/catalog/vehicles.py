"""Catalogue statique marques -> modèles."""
from typing import Dict, List, Optional

CAR_MAKES: List[str] = [
    "Audi",
    "BMW",
    "Chevrolet",
    "Ford",
    "Honda",
    "Hyundai",
    "Isuzu",
    "Kia",
    "Land Rover",
    "Lexus",
    "Mazda",
    "Mercedes-Benz",
    "Mitsubishi",
    "Nissan",
    "Renault",
    "Suzuki",
    "Toyota",
    "Volkswagen",
    "Other",
]

POPULAR_MODELS: Dict[str, List[str]] = {
    "Audi": ["A3", "A4", "A5", "Q3", "Q5", "Q7"],
    "BMW": ["1 Series", "3 Series", "5 Series", "X1", "X3", "X5"],
    "Chevrolet": ["Spark", "Aveo", "Cruze", "Utility", "Trailblazer"],
    "Ford": ["Fiesta", "Focus", "EcoSport", "Ranger", "Everest", "Mustang"],
    "Honda": ["Jazz", "Civic", "Ballade", "CR-V", "HR-V"],
    "Hyundai": ["i10", "i20", "Accent", "Creta", "Tucson", "H100"],
    "Isuzu": ["D-Max", "MU-X", "KB"],
    "Kia": ["Picanto", "Rio", "Seltos", "Sportage", "Sorento"],
    "Land Rover": ["Defender", "Discovery", "Range Rover", "Range Rover Sport", "Freelander"],
    "Lexus": ["IS", "ES", "GS", "LX", "GX", "RX"],
    "Mazda": ["Mazda2", "Mazda3", "CX-3", "CX-5", "BT-50"],
    "Mercedes-Benz": ["A-Class", "C-Class", "E-Class", "GLC", "GLE", "Sprinter"],
    "Mitsubishi": ["ASX", "Outlander", "Pajero", "Pajero Sport", "Triton"],
    "Nissan": ["Micra", "Almera", "Qashqai", "X-Trail", "Navara", "NP200"],
    "Renault": ["Kwid", "Sandero", "Clio", "Duster", "Captur"],
    "Suzuki": ["Celerio", "Swift", "Baleno", "Vitara Brezza", "Jimny", "Ertiga"],
    "Toyota": ["Corolla", "Corolla Cross", "Yaris", "Hilux", "Fortuner", "Land Cruiser", "Prado", "Quantum"],
    "Volkswagen": ["Polo", "Polo Vivo", "Golf", "T-Cross", "Tiguan", "Amarok"],
}


class VehicleCatalog:
    """Sélection marque/modèle avec modèles dépendants de la marque."""

    def __init__(
        self,
        makes: Optional[List[str]] = None,
        models: Optional[Dict[str, List[str]]] = None,
    ):
        self._makes = list(CAR_MAKES if makes is None else makes)
        self._models = dict(POPULAR_MODELS if models is None else models)

    def list_makes(self) -> List[str]:
        return list(self._makes)

    def models_for(self, make: str) -> List[str]:
        """Modèles connus pour une marque; liste vide si saisie libre."""
        return list(self._models.get(make, []))

    def has_models(self, make: str) -> bool:
        return bool(self._models.get(make))

    def is_known_make(self, make: str) -> bool:
        return make in self._makes


vehicle_catalog = VehicleCatalog()
