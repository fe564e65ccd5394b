from typing import Annotated

from fastapi import Depends

# Configuration
from garage_quotes.config import Settings, settings
from garage_quotes.documents.config import DocumentSettings, document_settings

# Domain
from garage_quotes.documents.domain.generator import AbstractLogoFetcher, AbstractPDFGenerator

# Infrastructure
from garage_quotes.documents.infrastructure.logo_client import HttpLogoFetcher
from garage_quotes.documents.infrastructure.reportlab_generator import ReportLabPDFGenerator

# Application
from garage_quotes.documents.application.renderer import DocumentRenderer
from garage_quotes.documents.application.services import PDFService

# --- Settings Dependencies ---

def get_app_settings() -> Settings:
    """Retourne l'instance globale des paramètres de l'application."""
    return settings

AppSettingsDep = Annotated[Settings, Depends(get_app_settings)]

def get_document_settings() -> DocumentSettings:
    """Retourne l'instance globale des paramètres de rendu."""
    return document_settings

DocumentSettingsDep = Annotated[DocumentSettings, Depends(get_document_settings)]

# --- PDF Generator Dependency ---

def get_pdf_generator(doc_settings: DocumentSettingsDep) -> AbstractPDFGenerator:
    """Fournit une instance de l'implémentation concrète du PDF Generator.

    Actuellement, utilise ReportLabPDFGenerator.
    """
    return ReportLabPDFGenerator(settings=doc_settings)

PDFGeneratorDep = Annotated[AbstractPDFGenerator, Depends(get_pdf_generator)]

# --- Logo Dependency ---

def get_logo_fetcher(doc_settings: DocumentSettingsDep) -> AbstractLogoFetcher:
    return HttpLogoFetcher(logo_url=doc_settings.LOGO_URL, timeout=doc_settings.LOGO_FETCH_TIMEOUT)

LogoFetcherDep = Annotated[AbstractLogoFetcher, Depends(get_logo_fetcher)]

# --- Renderer / Service Dependencies ---

def get_document_renderer(app_settings: AppSettingsDep) -> DocumentRenderer:
    return DocumentRenderer(settings=app_settings)

DocumentRendererDep = Annotated[DocumentRenderer, Depends(get_document_renderer)]

def get_pdf_service(
    pdf_generator: PDFGeneratorDep,
    renderer: DocumentRendererDep,
    logo_fetcher: LogoFetcherDep,
) -> PDFService:
    """Injecte le PDF Generator, le renderer et le logo; fournit une instance de PDFService."""
    return PDFService(pdf_generator=pdf_generator, renderer=renderer, logo_fetcher=logo_fetcher)

PDFServiceDep = Annotated[PDFService, Depends(get_pdf_service)]
