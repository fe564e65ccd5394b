"""Backend de génération de devis pour Hardings Auto Garage."""

__version__ = "1.0.0"
