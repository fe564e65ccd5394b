import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, HTTPException, Response, status

# Services Applicatifs (via dépendances)
from .dependencies import QuoteServiceDep
from garage_quotes.documents.interfaces.dependencies import PDFServiceDep
from garage_quotes.sharing.interfaces.dependencies import ShareServiceDep

# Schémas/DTOs
from garage_quotes.quotes.application.schemas import (
    DraftTotalResponse, DraftValidationResponse, QuoteDraftRequest, QuotePayload
)
from garage_quotes.documents.domain.document import QuoteDocument
from garage_quotes.sharing.domain.share import ShareResult

# Exceptions du Domaine (pour mapping)
from garage_quotes.quotes.domain.exceptions import MalformedPayloadError, QuoteValidationError
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.sharing.domain.exceptions import TransportFailure

logger = logging.getLogger(__name__)

# --- Création du Routeur ---
quote_router = APIRouter(
    prefix="/quotes",
    tags=["Quotes"]
)

# Payload brut: relu et vérifié par le service, jamais rendu partiellement
RawQuotePayload = Annotated[Any, Body()]


def _parse_or_422(quote_service, raw: Any):
    try:
        return quote_service.parse_payload(raw)
    except MalformedPayloadError as e:
        # Littéral: le nom de la constante 422 varie selon la version de Starlette
        raise HTTPException(status_code=422, detail=e.message)


# --- Endpoints Brouillon ---

@quote_router.post("/drafts/total", response_model=DraftTotalResponse, response_model_by_alias=True)
async def draft_total(draft: QuoteDraftRequest, quote_service: QuoteServiceDep):
    """Total courant du brouillon (prix vides ou illisibles comptés à zéro)."""
    total = quote_service.compute_draft_total(draft)
    return DraftTotalResponse(total=f"{total:.2f}", selected_count=len(draft.services))


@quote_router.post("/drafts/validate", response_model=DraftValidationResponse)
async def draft_validate(draft: QuoteDraftRequest, quote_service: QuoteServiceDep):
    """Retourne la première erreur de validation du brouillon, s'il y en a une."""
    return quote_service.check_draft(draft)


# --- Endpoints Devis ---

@quote_router.post("/", response_model=QuotePayload, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
async def create_quote(draft: QuoteDraftRequest, quote_service: QuoteServiceDep):
    """Valide le brouillon et construit le devis; retourne son payload."""
    try:
        quote = quote_service.create_quote(draft)
    except QuoteValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": e.field, "message": e.message},
        )
    logger.info(f"API create_quote: devis {quote.quote_number} créé.")
    return quote_service.to_payload(quote)


@quote_router.post("/document", response_model=QuoteDocument)
async def render_document(
    quote_service: QuoteServiceDep,
    pdf_service: PDFServiceDep,
    payload: RawQuotePayload = None,
):
    """Modèle de document structuré (sections, lignes, total) d'un devis."""
    quote = _parse_or_422(quote_service, payload)
    return await pdf_service.render_document(quote)


@quote_router.post("/pdf")
async def download_pdf(
    quote_service: QuoteServiceDep,
    pdf_service: PDFServiceDep,
    payload: RawQuotePayload = None,
):
    """Génère le PDF du devis et le retourne en pièce jointe."""
    quote = _parse_or_422(quote_service, payload)
    try:
        rendered = await pdf_service.render_quote_pdf(quote)
    except PDFGenerationException as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    return Response(
        content=rendered.content,
        media_type=rendered.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{rendered.filename}"'},
    )


@quote_router.post("/share", response_model=ShareResult, response_model_by_alias=True)
async def share_quote(
    quote_service: QuoteServiceDep,
    share_service: ShareServiceDep,
    payload: RawQuotePayload = None,
):
    """Génère le PDF, le dépose et retourne le message WhatsApp prêt à l'envoi."""
    quote = _parse_or_422(quote_service, payload)
    try:
        return await share_service.share_quote(quote)
    except PDFGenerationException as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))
    except TransportFailure as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Sharing is unavailable: {e.message}",
        )
