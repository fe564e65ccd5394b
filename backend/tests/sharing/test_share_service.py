"""
Tests pour le service de partage et le transport fichier.
"""
import os
from unittest.mock import AsyncMock

import pytest

from garage_quotes.documents.application.renderer import DocumentRenderer
from garage_quotes.documents.application.services import PDFService
from garage_quotes.documents.domain.exceptions import PDFGenerationException
from garage_quotes.sharing.application.composer import ShareComposer
from garage_quotes.sharing.application.services import ShareService
from garage_quotes.sharing.domain.exceptions import TransportFailure
from garage_quotes.sharing.domain.share import DeliveryReceipt, SharePayload
from garage_quotes.sharing.infrastructure.filesystem_transport import LocalFileTransport


@pytest.fixture
def pdf_service(mock_pdf_generator, mock_logo_fetcher, app_settings) -> PDFService:
    return PDFService(
        pdf_generator=mock_pdf_generator,
        renderer=DocumentRenderer(settings=app_settings),
        logo_fetcher=mock_logo_fetcher,
    )


@pytest.fixture
def composer(app_settings) -> ShareComposer:
    return ShareComposer(business_name=app_settings.BUSINESS_NAME, currency_symbol=app_settings.CURRENCY_SYMBOL)


@pytest.fixture
def mock_transport():
    """Fixture pour un mock du transport."""
    transport = AsyncMock()
    transport.deliver.return_value = DeliveryReceipt(location="/tmp/x.pdf", size_bytes=10)
    return transport


@pytest.mark.asyncio
async def test_share_quote(pdf_service, composer, mock_transport, sample_quote):
    """Le PDF est généré puis livré avec le message composé."""
    service = ShareService(pdf_service=pdf_service, composer=composer, transport=mock_transport)
    result = await service.share_quote(sample_quote)

    mock_transport.deliver.assert_awaited_once()
    share, content = mock_transport.deliver.call_args[0]
    assert share == result.share
    assert content == f"%PDF-mock {sample_quote.quote_number}".encode("utf-8")
    assert result.share.filename == f"Quote_{sample_quote.quote_number}.pdf"


@pytest.mark.asyncio
async def test_share_quote_generation_failure(pdf_service, composer, mock_transport, sample_quote):
    """Rendu en échec: rien n'est livré."""
    service = ShareService(pdf_service=pdf_service, composer=composer, transport=mock_transport)
    failing = sample_quote.model_copy(update={"quote_number": "HAG-FAIL0000"})
    with pytest.raises(PDFGenerationException):
        await service.share_quote(failing)
    mock_transport.deliver.assert_not_awaited()


@pytest.mark.asyncio
async def test_share_quote_transport_failure(pdf_service, composer, mock_transport, sample_quote):
    mock_transport.deliver.side_effect = TransportFailure("Sharing channel unavailable")
    service = ShareService(pdf_service=pdf_service, composer=composer, transport=mock_transport)
    with pytest.raises(TransportFailure) as exc_info:
        await service.share_quote(sample_quote)
    assert exc_info.value.message == "Sharing channel unavailable"


@pytest.mark.asyncio
async def test_local_file_transport(tmp_path, composer, sample_quote):
    """Le PDF est déposé sous son nom de partage."""
    transport = LocalFileTransport(export_dir=str(tmp_path / "exports"))
    share = composer.compose(sample_quote)
    receipt = await transport.deliver(share, b"%PDF-1.4 test")

    assert receipt.location == os.path.join(str(tmp_path / "exports"), share.filename)
    assert receipt.size_bytes == len(b"%PDF-1.4 test")
    with open(receipt.location, "rb") as f:
        assert f.read() == b"%PDF-1.4 test"


@pytest.mark.asyncio
async def test_local_file_transport_strips_directories(tmp_path):
    transport = LocalFileTransport(export_dir=str(tmp_path))
    share = SharePayload(
        filename="../../Quote_HAG-1.pdf",
        message_text="Hi",
        recipient_phone_digits="27",
        whatsapp_url="whatsapp://send?phone=27&text=Hi",
        whatsapp_web_url="https://wa.me/27?text=Hi",
    )
    receipt = await transport.deliver(share, b"%PDF")
    assert receipt.location == os.path.join(str(tmp_path), "Quote_HAG-1.pdf")


@pytest.mark.asyncio
async def test_local_file_transport_failure(tmp_path, composer, sample_quote):
    """Dossier d'export inutilisable: TransportFailure."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    transport = LocalFileTransport(export_dir=str(blocker))
    with pytest.raises(TransportFailure) as exc_info:
        await transport.deliver(composer.compose(sample_quote), b"%PDF")
    assert exc_info.value.message.startswith("Unable to save Quote_")
