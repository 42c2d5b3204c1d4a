"""Global test configuration and fixtures.

Provides shared fixtures for all test levels including environment setup,
canned CoinMarketCap payloads and mocked aiohttp sessions. Ensures tests
never touch the real network.
"""

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

# Test constants
TEST_BOT_TOKEN = "test_bot_token_placeholder"
TEST_API_KEY = "test-cmc-api-key"
TEST_BASE_URL = "https://cmc.example.test/v2"

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Setup test environment variables for all tests."""
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", TEST_BOT_TOKEN)
    monkeypatch.setenv("COINMARKETCAP_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    for name in ("CMC_BASE_URL", "CMC_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def make_listing(
    listing_id: int,
    symbol: str,
    name: str | None = None,
    price: float = 1.0,
    percent_change_24h: float = 0.0,
    market_cap: float = 0.0,
    volume_24h: float = 0.0,
    last_updated: str = "2024-05-14T09:28:00.000Z",
    currencies: tuple[str, ...] = ("USD",),
) -> dict[str, Any]:
    """Build one raw listing in the CoinMarketCap v2 shape."""
    quote = {
        currency: {
            "price": price,
            "volume_24h": volume_24h,
            "percent_change_1h": 0.1,
            "percent_change_24h": percent_change_24h,
            "percent_change_7d": 0.7,
            "market_cap": market_cap,
            "market_cap_dominance": 1.0,
            "fully_diluted_market_cap": market_cap,
            "tvl": None,
            "last_updated": last_updated,
        }
        for currency in currencies
    }
    return {
        "id": listing_id,
        "name": name or symbol.title(),
        "symbol": symbol,
        "slug": (name or symbol).lower(),
        "tags": [],
        "platform": None,
        "last_updated": last_updated,
        "quote": quote,
    }


def make_payload(
    data: dict[str, list[dict[str, Any]] | None],
    error_code: int = 0,
    error_message: Any = None,
) -> bytes:
    """Wrap symbol groups in a status envelope and encode as JSON bytes."""
    body = {
        "status": {
            "timestamp": "2024-05-14T09:30:12.345Z",
            "error_code": error_code,
            "error_message": error_message,
            "elapsed": 10,
            "credit_count": 1,
            "notice": None,
        },
        "data": data,
    }
    return json.dumps(body).encode()


def make_response(status: int = 200, body: bytes = b"") -> MagicMock:
    """Mock aiohttp response with readable body."""
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=body.decode(errors="replace"))
    return response


def make_session(response: MagicMock | None = None) -> MagicMock:
    """Mock aiohttp.ClientSession whose get() yields the given response."""
    session = MagicMock(spec=aiohttp.ClientSession)
    session.closed = False
    session.close = AsyncMock()
    context = session.get.return_value
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return session


@pytest.fixture
def load_test_fixture():
    """Load raw bytes of a payload fixture."""

    def _load_fixture(filename: str) -> bytes:
        return (FIXTURES_DIR / filename).read_bytes()

    return _load_fixture


@pytest.fixture
def btc_eth_payload(load_test_fixture) -> bytes:
    """Realistic response with a duplicated BTC ticker and one ETH listing."""
    return load_test_fixture("quotes_latest_btc_eth.json")
