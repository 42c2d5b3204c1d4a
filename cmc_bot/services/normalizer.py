"""Normalization of CoinMarketCap `quotes/latest` responses.

The v2 API groups listings by ticker symbol and may return several coins
for one ticker (tokens reusing "BTC", for example). For every symbol the
listing with the lowest CoinMarketCap id is taken as canonical and its USD
quote is flattened into a QuoteRecord.
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from pydantic import ValidationError

from ..models import ApiListing, ApiQuote, ApiQuoteResponse, QuoteRecord
from .errors import DecodeError, NotFoundError, UpstreamError

logger = logging.getLogger(__name__)

QUOTE_CURRENCY = "USD"


def normalize(raw_body: bytes, requested: Sequence[str] | None = None) -> list[QuoteRecord]:
    """Turn a raw API response into one quote record per symbol.

    Args:
        raw_body: Response body as received from the API.
        requested: Symbols in the order the user asked for them. When given,
            records follow this order; symbols the user did not ask for keep
            payload order after the requested ones.

    Returns:
        Non-empty list of quote records.

    Raises:
        DecodeError: Body is not valid JSON or does not match the schema.
        UpstreamError: Status envelope carries a non-zero error code.
        NotFoundError: No symbol produced a usable USD quote.
    """
    try:
        response = ApiQuoteResponse.model_validate_json(raw_body)
    except ValidationError as e:
        logger.error(
            f"Failed to decode API response: {e.error_count()} errors, "
            f"body length: {len(raw_body)}"
        )
        raise DecodeError(f"ошибка парсинга JSON: {_first_error(e)}") from e

    status = response.status
    if status.error_code != 0:
        message = "неизвестная ошибка"
        if isinstance(status.error_message, str) and status.error_message:
            message = status.error_message
        logger.error(
            f"API returned error: error_code={status.error_code}, "
            f"error_message={status.error_message!r}"
        )
        raise UpstreamError(message, status.error_code)

    records: list[tuple[str, QuoteRecord]] = []
    for symbol, listings in response.data.items():
        if not listings:
            logger.warning(f"Empty listing array for symbol: {symbol}")
            continue

        listing = select_canonical(listings)
        if QUOTE_CURRENCY not in listing.quote:
            logger.warning(f"USD quote not found for symbol: {symbol} (ID: {listing.id})")
            continue

        # null quote object decodes as all-zero values
        usd_quote = listing.quote[QUOTE_CURRENCY] or ApiQuote()

        records.append(
            (
                symbol,
                QuoteRecord(
                    id=listing.id,
                    name=listing.name,
                    symbol=listing.symbol,
                    price=usd_quote.price,
                    percent_change_24h=usd_quote.percent_change_24h,
                    market_cap=usd_quote.market_cap,
                    volume_24h=usd_quote.volume_24h,
                    last_updated=format_rfc3339(usd_quote.last_updated),
                ),
            )
        )

    if not records:
        logger.error("No cryptocurrencies found in API response")
        raise NotFoundError("криптовалюты не найдены")

    if requested:
        records = _order_by_request(records, requested)

    logger.info(f"Successfully parsed {len(records)} cryptocurrencies")
    return [record for _, record in records]


def select_canonical(listings: Sequence[ApiListing]) -> ApiListing:
    """Pick the listing with the lowest id; the first one wins a tie."""
    return min(listings, key=lambda listing: listing.id)


def format_rfc3339(value: datetime | None) -> str:
    """Format a timestamp as RFC 3339 with second precision.

    Naive timestamps are treated as UTC. UTC is written as "Z".

    Args:
        value: Timestamp to format, None when upstream sent nothing.

    Returns:
        Formatted string, empty when value is None.
    """
    if value is None:
        return ""

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    text = value.replace(microsecond=0).isoformat()
    if value.utcoffset() == timezone.utc.utcoffset(None):
        text = text[: -len("+00:00")] + "Z"
    return text


def _order_by_request(
    records: list[tuple[str, QuoteRecord]], requested: Sequence[str]
) -> list[tuple[str, QuoteRecord]]:
    """Sort records by the position of their symbol in the request.

    sorted() is stable, so unrequested symbols keep their payload order.
    """
    positions: dict[str, int] = {}
    for index, symbol in enumerate(requested):
        positions.setdefault(symbol.upper(), index)
    fallback = len(positions)
    return sorted(records, key=lambda item: positions.get(item[0].upper(), fallback))


def _first_error(error: ValidationError) -> str:
    details = error.errors()
    if not details:
        return str(error)
    first = details[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]
