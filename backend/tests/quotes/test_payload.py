"""
Tests pour le payload de devis et sa relecture par le QuoteService.
"""
import json
from datetime import date
from decimal import Decimal

import pytest

from garage_quotes.quotes.application.schemas import QuoteDraftRequest, QuotePayload
from garage_quotes.quotes.application.services import QuoteService
from garage_quotes.quotes.domain.exceptions import MalformedPayloadError, QuoteValidationError


@pytest.fixture
def quote_service(builder) -> QuoteService:
    return QuoteService(builder=builder)


def test_payload_round_trip(quote_service, sample_quote):
    """Un devis sérialisé puis relu est identique."""
    payload = quote_service.to_payload(sample_quote)
    data = payload.model_dump(by_alias=True, mode="json")
    assert data["quoteNumber"] == sample_quote.quote_number
    assert data["lineItems"][0]["price"] == "85000.00"
    assert data["clientEmail"] == "jane@example.com"

    assert quote_service.parse_payload(data) == sample_quote
    assert quote_service.parse_payload(json.dumps(data)) == sample_quote
    assert quote_service.parse_payload(payload) == sample_quote


def test_parse_payload(quote_service, sample_payload):
    quote = quote_service.parse_payload(sample_payload)
    assert quote.quote_number == "HAG-12345678"
    assert quote.issue_date == date(2026, 10, 19)
    assert quote.client.email is None
    assert quote.vehicle.year == "2019"
    assert quote.total == Decimal("1650.00")


def test_parse_payload_without_number_uses_fallback(quote_service, sample_payload, fixed_now):
    del sample_payload["quoteNumber"]
    del sample_payload["issueDate"]
    quote = quote_service.parse_payload(sample_payload)
    assert quote.quote_number.startswith("HAG-")
    assert quote.issue_date == fixed_now.date()


@pytest.mark.parametrize("raw", [None, "", b"", "{not json", {"clientName": "Jane"}, ["a", "b"]])
def test_parse_payload_malformed(quote_service, raw):
    """Payload absent ou illisible: 'No quote data available'."""
    with pytest.raises(MalformedPayloadError) as exc_info:
        quote_service.parse_payload(raw)
    assert exc_info.value.message == "No quote data available"


def test_parse_payload_empty_line_items(quote_service, sample_payload):
    sample_payload["lineItems"] = []
    with pytest.raises(MalformedPayloadError):
        quote_service.parse_payload(sample_payload)


def test_parse_payload_bad_price(quote_service, sample_payload):
    sample_payload["lineItems"][1]["price"] = "free"
    with pytest.raises(MalformedPayloadError) as exc_info:
        quote_service.parse_payload(sample_payload)
    assert "Panel beating" in exc_info.value.reason


def test_from_quote_formats_prices(sample_quote):
    payload = QuotePayload.from_quote(sample_quote)
    assert [line.price for line in payload.line_items] == ["85000.00", "1250.50"]
    assert payload.line_items[0].description == "1UR-FE swap incl. wiring loom"


def test_draft_request_to_form_state():
    """Le brouillon reçu rejoue les saisies dans l'ordre."""
    draft = QuoteDraftRequest.model_validate({
        "client": {"name": "Jane Doe", "phone": "0821234567"},
        "vehicle": {"make": "Toyota", "model": "Corolla", "year": "2019"},
        "services": [
            {"name": "Panel beating", "price": "1200"},
            {"name": "Routine servicing (oil, filters, brakes)", "price": "450.00"},
        ],
    })
    form = draft.to_form_state()
    assert form.selected_services == ["Panel beating", "Routine servicing (oil, filters, brakes)"]
    assert form.vehicle.model == "Corolla"
    assert form.compute_total() == Decimal("1650.00")


def test_check_draft(quote_service):
    draft = QuoteDraftRequest.model_validate({
        "client": {"name": "Jane Doe", "phone": "0821234567"},
        "vehicle": {"make": "Toyota", "model": "Corolla"},
        "services": [{"name": "Panel beating", "price": ""}],
    })
    result = quote_service.check_draft(draft)
    assert result.valid is False
    assert result.field == "services.Panel beating.price"
    assert result.message == "Please enter a valid price for Panel beating"

    with pytest.raises(QuoteValidationError):
        quote_service.create_quote(draft)


@pytest.mark.parametrize("field", ["clientName", "clientPhone", "vehicleMake", "vehicleModel"])
def test_parse_payload_blank_required_field(quote_service, sample_payload, field):
    """Un champ obligatoire composé d'espaces rend le payload inutilisable."""
    sample_payload[field] = "   "
    with pytest.raises(MalformedPayloadError) as exc_info:
        quote_service.parse_payload(sample_payload)
    assert exc_info.value.message == "No quote data available"


def test_parse_payload_trims_optional_fields(quote_service, sample_payload):
    sample_payload["clientName"] = "  Jane Doe "
    sample_payload["clientEmail"] = "   "
    sample_payload["vehicleYear"] = "  "
    quote = quote_service.parse_payload(sample_payload)
    assert quote.client.name == "Jane Doe"
    assert quote.client.email is None
    assert quote.vehicle.year is None


def test_payload_round_trip_after_rounding(quote_service, sample_form):
    """Le prix arrondi au centime survit à l'aller-retour."""
    sample_form.set_service_price("Routine servicing (oil, filters, brakes)", "450.005")
    quote = quote_service.submit(sample_form)
    assert quote.line_items[0].unit_price == Decimal("450.00")
    payload = quote_service.to_payload(quote).model_dump(by_alias=True, mode="json")
    assert quote_service.parse_payload(payload) == quote
