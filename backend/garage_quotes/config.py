import logging
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Charger les variables d'environnement AVANT de définir la classe Settings
load_dotenv()


class Settings(BaseSettings):
    """Paramètres globaux de l'application de devis."""

    # --- Application ---
    APP_NAME: str = "Hardings Auto Garage - Quote Builder"
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://localhost:8081",
        "http://localhost:19006",
        "http://127.0.0.1:8081",
    ]

    # --- Entreprise (en-tête et pied de page du devis) ---
    BUSINESS_NAME: str = "Hardings Auto Garage"
    BUSINESS_TAGLINE: str = "Swartruggens' Trusted Destination for Expert Mechanical Work"
    BUSINESS_CONTACT_LINE: str = "Phone: +27 76 268 3721 | WhatsApp Available"
    BUSINESS_BLURB: List[str] = [
        "Expert mechanical work, performance upgrades, and reliable servicing",
        "From routine maintenance to full Lexus V8 engine conversions",
    ]

    # --- Devis ---
    QUOTE_NUMBER_PREFIX: str = "HAG"
    CURRENCY_SYMBOL: str = "R"
    CURRENCY_NAME: str = "South African Rand (ZAR)"
    QUOTE_VALIDITY_DAYS: int = 30

    # --- Partage ---
    EXPORT_DIR: str = "exported_quotes"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignorer les variables d'env non définies dans le modèle
    )


# Instance globale unique des paramètres
settings = Settings()

logger.info(
    f"Configuration chargée: business={settings.BUSINESS_NAME}, "
    f"prefix={settings.QUOTE_NUMBER_PREFIX}, export={settings.EXPORT_DIR}"
)
