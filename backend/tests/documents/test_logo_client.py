"""
Tests pour le téléchargement du logo (httpx.MockTransport, aucun accès réseau).
"""
import httpx
import pytest

from garage_quotes.documents.infrastructure.logo_client import HttpLogoFetcher

LOGO_URL = "https://example.test/logo.png"


def _fetcher(handler) -> HttpLogoFetcher:
    return HttpLogoFetcher(logo_url=LOGO_URL, timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_fetch_logo_success():
    """Test le téléchargement réussi du logo."""
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, content=b"\x89PNG-logo")

    assert await _fetcher(handler).fetch_logo() == b"\x89PNG-logo"
    assert requested == [LOGO_URL]


@pytest.mark.asyncio
async def test_fetch_logo_http_error():
    """Statut d'erreur: pas de logo."""
    fetcher = _fetcher(lambda request: httpx.Response(404))
    assert await fetcher.fetch_logo() is None


@pytest.mark.asyncio
async def test_fetch_logo_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    assert await _fetcher(handler).fetch_logo() is None


@pytest.mark.asyncio
async def test_fetch_logo_empty_content():
    fetcher = _fetcher(lambda request: httpx.Response(200, content=b""))
    assert await fetcher.fetch_logo() is None


@pytest.mark.asyncio
async def test_fetch_logo_without_url():
    assert await HttpLogoFetcher(logo_url="").fetch_logo() is None


@pytest.mark.asyncio
async def test_fetch_logo_invalid_url():
    """URL de logo mal configurée: pas de logo, pas d'exception."""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    assert await _fetcher(handler).fetch_logo() is None
