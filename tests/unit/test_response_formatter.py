"""Tests for quote reply formatting."""

import pytest

from cmc_bot.bot.messages import ERROR_PREFIX, QUOTES_LIST_HEADER
from cmc_bot.bot.response_formatter import (
    ResponseFormatter,
    format_market_cap,
    format_percent_change,
    format_price,
    format_volume,
)
from cmc_bot.models import QuoteRecord
from cmc_bot.services.errors import ServerError, TransportError


def _quote(**overrides) -> QuoteRecord:
    values = {
        "id": 1,
        "name": "Bitcoin",
        "symbol": "BTC",
        "price": 61845.1234,
        "percent_change_24h": 1.874,
        "market_cap": 1_217_934_567_890.12,
        "volume_24h": 28_123_456_789.5,
        "last_updated": "2024-05-14T09:28:00Z",
    }
    values.update(overrides)
    return QuoteRecord(**values)


@pytest.mark.parametrize(
    "price, expected",
    [
        (61845.1234, "61845.12"),
        (1, "1.00"),
        (0.5, "0.50000000"),
        (0.00001234, "0.00001234"),
    ],
)
def test_format_price(price, expected):
    """Prices below $1 keep 8 decimals."""
    assert format_price(price) == expected


@pytest.mark.parametrize(
    "change, expected",
    [
        (1.874, "📈 +1.87%"),
        (-0.75, "📉 -0.75%"),
        (0, "0.00%"),
    ],
)
def test_format_percent_change(change, expected):
    """Positive and negative changes get markers, zero does not."""
    assert format_percent_change(change) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1_217_934_567_890.12, "1.22T"),
        (349_718_702_265.4, "349.72B"),
        (5_250_000, "5.25M"),
        (999.5, "999.50"),
    ],
)
def test_format_market_cap(value, expected):
    """Market cap uses T/B/M suffixes."""
    assert format_market_cap(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (1_217_934_567_890.12, "1217.93B"),
        (28_123_456_789.5, "28.12B"),
        (12_500_000, "12.50M"),
        (15.2, "15.20"),
    ],
)
def test_format_volume(value, expected):
    """Volume tops out at the B suffix."""
    assert format_volume(value) == expected


def test_single_quote_uses_detailed_card():
    """One record renders the detail card."""
    response = ResponseFormatter().format_quotes([_quote()])

    lines = response.splitlines()
    assert lines[0] == "💰 *Bitcoin (BTC)*"
    assert "💵 Цена: $61845.12" in lines
    assert "📊 Изменение за 24ч: 📈 +1.87%" in lines
    assert "📈 Рыночная капитализация: $1.22T" in lines
    assert "💹 Объем за 24ч: $28.12B" in lines


def test_multiple_quotes_use_compact_list():
    """Several records render one line each, in order."""
    quotes = [
        _quote(),
        _quote(id=1027, name="Ethereum", symbol="ETH", price=2912.5, percent_change_24h=-0.75),
    ]

    response = ResponseFormatter().format_quotes(quotes)

    lines = response.splitlines()
    assert lines[0] == QUOTES_LIST_HEADER
    assert lines[-2:] == [
        "• *BTC* - $61845.12 (📈 +1.87%)",
        "• *ETH* - $2912.50 (📉 -0.75%)",
    ]


def test_markdown_characters_in_names_are_escaped():
    """Names with Markdown markers cannot break the reply."""
    response = ResponseFormatter().format_quote(_quote(name="Wrapped_Token", symbol="W_T"))

    assert "Wrapped\\_Token (W\\_T)" in response.splitlines()[0]


@pytest.mark.parametrize(
    "error",
    [
        ServerError("временная ошибка сервера, попробуйте позже", 503),
        TransportError("ошибка выполнения запроса: timeout"),
    ],
)
def test_format_error_prefixes_failure_marker(error):
    """Errors are rendered as prefix plus the error message."""
    response = ResponseFormatter().format_error(error)

    assert response.startswith("❌")
    assert response == f"{ERROR_PREFIX}{error.message}"
