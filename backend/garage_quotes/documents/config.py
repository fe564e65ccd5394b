"""Configuration spécifique au module documents/PDF.

Utilise Pydantic BaseSettings pour permettre la surcharge par
des variables d'environnement si nécessaire.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentSettings(BaseSettings):
    """Paramètres de configuration pour le rendu des devis."""

    LOGO_URL: str = "https://hardingsautogarage.co.za/static/logo.png"
    LOGO_FETCH_TIMEOUT: float = 5.0

    # Couleurs stockées en HEX
    PRIMARY_COLOR_HEX: str = "#2B4C7E"
    DARK_COLOR_HEX: str = "#1D3557"
    ACCENT_COLOR_HEX: str = "#E63946"
    MUTED_COLOR_HEX: str = "#6C757D"
    ZEBRA_COLOR_HEX: str = "#F8F9FA"
    BORDER_COLOR_HEX: str = "#DEE2E6"

    PAGE_MARGIN_MM: float = 15.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Instance globale unique des paramètres (peut être utilisée directement ou injectée)
document_settings = DocumentSettings()
