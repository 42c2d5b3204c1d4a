"""Response formatting for quote replies and errors.

Renders normalized quote records as Telegram Markdown text: a detailed card
for a single symbol and a compact list for several symbols.
"""

from telegram.helpers import escape_markdown

from ..models import QuoteRecord
from ..services.errors import MarketDataError
from .messages import (
    CHANGE_DOWN_PREFIX,
    CHANGE_UP_PREFIX,
    ERROR_PREFIX,
    QUOTE_CHANGE_LINE,
    QUOTE_HEADER,
    QUOTE_MARKET_CAP_LINE,
    QUOTE_PRICE_LINE,
    QUOTE_VOLUME_LINE,
    QUOTES_LIST_HEADER,
    QUOTES_LIST_LINE,
)


def format_number(value: float, decimals: int) -> str:
    """Format a number with a fixed count of decimal places."""
    return f"{value:.{decimals}f}"


def format_price(price: float) -> str:
    """Format a USD price: 2 decimals from $1 upwards, 8 below."""
    if price >= 1:
        return format_number(price, 2)
    return format_number(price, 8)


def format_percent_change(change: float) -> str:
    """Format a percent change with an up/down marker."""
    prefix = ""
    if change > 0:
        prefix = CHANGE_UP_PREFIX
    elif change < 0:
        prefix = CHANGE_DOWN_PREFIX
    return f"{prefix}{format_number(change, 2)}%"


def format_market_cap(market_cap: float) -> str:
    """Format market capitalization with T/B/M suffixes."""
    if market_cap >= 1e12:
        return format_number(market_cap / 1e12, 2) + "T"
    if market_cap >= 1e9:
        return format_number(market_cap / 1e9, 2) + "B"
    if market_cap >= 1e6:
        return format_number(market_cap / 1e6, 2) + "M"
    return format_number(market_cap, 2)


def format_volume(volume: float) -> str:
    """Format trading volume with B/M suffixes."""
    if volume >= 1e9:
        return format_number(volume / 1e9, 2) + "B"
    if volume >= 1e6:
        return format_number(volume / 1e6, 2) + "M"
    return format_number(volume, 2)


class ResponseFormatter:
    """Formats bot responses for quotes and market data errors."""

    def format_quotes(self, quotes: list[QuoteRecord]) -> str:
        """Format quotes for a reply.

        Args:
            quotes: Non-empty list of quote records.

        Returns:
            Detailed card for a single record, compact list otherwise.
        """
        if len(quotes) == 1:
            return self.format_quote(quotes[0])
        return self.format_quote_list(quotes)

    def format_quote(self, quote: QuoteRecord) -> str:
        """Format a detailed card for one cryptocurrency."""
        lines = [
            QUOTE_HEADER.format(
                name=escape_markdown(quote.name), symbol=escape_markdown(quote.symbol)
            ),
            "",
            QUOTE_PRICE_LINE.format(price=format_price(quote.price)),
            QUOTE_CHANGE_LINE.format(change=format_percent_change(quote.percent_change_24h)),
            QUOTE_MARKET_CAP_LINE.format(market_cap=format_market_cap(quote.market_cap)),
            QUOTE_VOLUME_LINE.format(volume=format_volume(quote.volume_24h)),
        ]
        return "\n".join(lines)

    def format_quote_list(self, quotes: list[QuoteRecord]) -> str:
        """Format one summary line per cryptocurrency."""
        lines = [QUOTES_LIST_HEADER, ""]
        for quote in quotes:
            lines.append(
                QUOTES_LIST_LINE.format(
                    symbol=escape_markdown(quote.symbol),
                    price=format_price(quote.price),
                    change=format_percent_change(quote.percent_change_24h),
                )
            )
        return "\n".join(lines)

    def format_error(self, error: MarketDataError) -> str:
        """Format a market data failure for the user (plain text)."""
        return f"{ERROR_PREFIX}{error.message}"
