import logging
from decimal import Decimal
from typing import Any

from pydantic import ValidationError

# Domaine
from garage_quotes.quotes.domain.entities import Quote
from garage_quotes.quotes.domain.exceptions import MalformedPayloadError, QuoteValidationError
from garage_quotes.quotes.domain.form_state import QuoteFormState

# Application
from garage_quotes.quotes.application.builder import QuoteBuilder, generate_quote_number
from .schemas import DraftValidationResponse, QuoteDraftRequest, QuotePayload

logger = logging.getLogger(__name__)

RawPayload = Any  # dict, JSON (str/bytes), QuotePayload ou None


class QuoteService:
    """Service applicatif: brouillon -> devis, et devis <-> payload."""

    def __init__(self, builder: QuoteBuilder):
        self.builder = builder

    def compute_draft_total(self, draft: QuoteDraftRequest) -> Decimal:
        return draft.to_form_state().compute_total()

    def check_draft(self, draft: QuoteDraftRequest) -> DraftValidationResponse:
        """Valide sans lever: retourne la première erreur éventuelle."""
        try:
            draft.to_form_state().validate()
        except QuoteValidationError as e:
            return DraftValidationResponse(valid=False, field=e.field, message=e.message)
        return DraftValidationResponse(valid=True)

    def create_quote(self, draft: QuoteDraftRequest) -> Quote:
        """Valide le brouillon puis construit le devis. Aucun devis partiel n'est produit."""
        form = draft.to_form_state()
        return self.submit(form)

    def submit(self, form: QuoteFormState) -> Quote:
        try:
            form.validate()
        except QuoteValidationError as e:
            logger.warning(f"[QuoteService] Soumission bloquée ({e.field}): {e.message}")
            raise
        return self.builder.build(form)

    def to_payload(self, quote: Quote) -> QuotePayload:
        return QuotePayload.from_quote(quote)

    def parse_payload(self, raw: RawPayload) -> Quote:
        """Relit un payload de devis (dict, JSON ou modèle).

        Raises:
            MalformedPayloadError: payload absent, JSON illisible ou données invalides.
        """
        if raw is None or raw == "" or raw == b"":
            logger.warning("[QuoteService] Payload de devis absent.")
            raise MalformedPayloadError("payload absent")

        try:
            if isinstance(raw, QuotePayload):
                payload = raw
            elif isinstance(raw, (str, bytes)):
                payload = QuotePayload.model_validate_json(raw)
            else:
                payload = QuotePayload.model_validate(raw)
            now = self.builder.clock()
            return payload.to_quote(
                fallback_number=generate_quote_number(self.builder.quote_number_prefix, now),
                fallback_date=now.date(),
            )
        except MalformedPayloadError as e:
            logger.warning(f"[QuoteService] Payload de devis rejeté: {e.reason}")
            raise
        except (ValidationError, TypeError) as e:
            logger.warning(f"[QuoteService] Payload de devis illisible: {e}")
            raise MalformedPayloadError(str(e)) from e
