"""
Module principal de l'application FastAPI de devis Hardings Auto Garage.

Ce module configure et initialise l'instance FastAPI, ajoute le middleware CORS
et inclut les routeurs (catalogues, devis, documents, partage).
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from garage_quotes import __version__
from garage_quotes.config import settings

# --- Importer les routeurs ---
from garage_quotes.catalog.router import catalog_router
from garage_quotes.quotes.interfaces.api import quote_router

# Configurer le logging
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="API de composition de devis, rendu PDF et partage WhatsApp.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# ======================================================
# Inclure les routeurs
# ======================================================
app.include_router(catalog_router, prefix=settings.API_V1_PREFIX)
app.include_router(quote_router, prefix=settings.API_V1_PREFIX)

logger.info(f"Application '{settings.APP_NAME}' prête (API {settings.API_V1_PREFIX}).")
