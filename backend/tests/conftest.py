# Standard Library
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

# Third-Party Libraries
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# First-Party Libraries
from garage_quotes.main import app
from garage_quotes.config import Settings
from garage_quotes.documents.domain.document import QuoteDocument
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.documents.domain.generator import AbstractLogoFetcher, AbstractPDFGenerator
from garage_quotes.documents.interfaces.dependencies import get_logo_fetcher, get_pdf_generator
from garage_quotes.quotes.application.builder import QuoteBuilder
from garage_quotes.quotes.domain.entities import Quote
from garage_quotes.quotes.domain.form_state import QuoteFormState
from garage_quotes.sharing.infrastructure.filesystem_transport import LocalFileTransport
from garage_quotes.sharing.interfaces.dependencies import get_share_transport

FIXED_NOW = datetime(2026, 10, 19, 9, 30, 15, 123000, tzinfo=timezone.utc)

# --- Fixtures de Base ---

@pytest.fixture
def app_settings() -> Settings:
    """Paramètres par défaut, indépendants d'un éventuel .env."""
    return Settings(_env_file=None)

@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW

@pytest.fixture
def builder(fixed_now: datetime) -> QuoteBuilder:
    """QuoteBuilder avec une horloge figée."""
    return QuoteBuilder(quote_number_prefix="HAG", clock=lambda: fixed_now)

@pytest.fixture
def sample_form() -> QuoteFormState:
    """Brouillon valide: Jane Doe, Toyota Corolla, entretien à 450.00."""
    form = QuoteFormState()
    form.set_client(name="Jane Doe", phone="0821234567")
    form.set_vehicle(make="Toyota")
    form.set_vehicle(model="Corolla")
    form.toggle_service("Routine servicing (oil, filters, brakes)")
    form.set_service_price("Routine servicing (oil, filters, brakes)", "450.00")
    return form

@pytest.fixture
def sample_quote(builder: QuoteBuilder) -> Quote:
    """Devis à deux lignes, dont une avec description."""
    form = QuoteFormState()
    form.set_client(name="Jane Doe", phone="+27 76 268 3721", email="jane@example.com")
    form.set_vehicle(make="Lexus", model="LX", year="2012")
    form.toggle_service("Lexus V8 engine conversions")
    form.set_service_price("Lexus V8 engine conversions", "85000")
    form.set_service_description("Lexus V8 engine conversions", "1UR-FE swap incl. wiring loom")
    form.toggle_service("Spray painting")
    form.set_service_price("Spray painting", "1250.50")
    form.validate()
    return builder.build(form)

@pytest.fixture
def sample_payload() -> dict:
    """Payload tel qu'envoyé par l'écran de composition."""
    return {
        "quoteNumber": "HAG-12345678",
        "issueDate": "2026-10-19",
        "clientName": "Jane Doe",
        "clientPhone": "+27 76 268 3721",
        "clientEmail": "",
        "vehicleMake": "Toyota",
        "vehicleModel": "Corolla",
        "vehicleYear": "2019",
        "lineItems": [
            {"name": "Routine servicing (oil, filters, brakes)", "price": "450.00"},
            {"name": "Panel beating", "price": "1200.00"},
        ],
    }

# --- Fixtures PDF ---

class MockPDFGenerator(AbstractPDFGenerator):
    """Un générateur PDF simulé pour les tests."""

    def __init__(self):
        self.documents = []

    async def generate_quote_pdf(
        self,
        document: QuoteDocument,
        output_path: Optional[str] = None
    ) -> bytes:
        self.documents.append(document)
        if document.quote_number == "HAG-FAIL0000":  # Condition d'échec simulée
            raise PDFGenerationException("Mock quote generation failed intentionally.")
        return f"%PDF-mock {document.quote_number}".encode("utf-8")


class MockLogoFetcher(AbstractLogoFetcher):
    """Logo indisponible: force l'en-tête texte."""

    def __init__(self, content: Optional[bytes] = None):
        self.content = content
        self.calls = 0

    async def fetch_logo(self) -> Optional[bytes]:
        self.calls += 1
        return self.content


@pytest.fixture
def mock_pdf_generator() -> MockPDFGenerator:
    return MockPDFGenerator()

@pytest.fixture
def mock_logo_fetcher() -> MockLogoFetcher:
    return MockLogoFetcher()

@pytest_asyncio.fixture(scope="function")
async def test_client(mock_pdf_generator, mock_logo_fetcher, tmp_path) -> AsyncGenerator[AsyncClient, None]:
    """
    Fournit un AsyncClient httpx avec un générateur PDF mocké,
    sans accès réseau pour le logo et un dossier d'export temporaire.
    """
    app.dependency_overrides[get_pdf_generator] = lambda: mock_pdf_generator
    app.dependency_overrides[get_logo_fetcher] = lambda: mock_logo_fetcher
    app.dependency_overrides[get_share_transport] = lambda: LocalFileTransport(export_dir=str(tmp_path / "exports"))

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
