"""Data models for the price bot application.

Defines Pydantic models for the quote records returned to bot handlers and
for the raw CoinMarketCap `quotes/latest` (v2) response. The raw models
mirror the upstream schema: every documented field is parsed even though
only the USD quote of the canonical listing is consumed.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QuoteRecord(BaseModel):
    """Normalized USD quote for one cryptocurrency.

    Attributes:
        id: CoinMarketCap identifier of the canonical listing.
        name: Display name, e.g. "Bitcoin".
        symbol: Ticker symbol, e.g. "BTC".
        price: Price in USD.
        percent_change_24h: Price change over 24 hours, in percent.
        market_cap: Market capitalization in USD.
        volume_24h: Trading volume over 24 hours in USD.
        last_updated: RFC 3339 timestamp of the quote, empty if unknown.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    symbol: str
    price: float
    percent_change_24h: float
    market_cap: float
    volume_24h: float
    last_updated: str = ""


class ApiModel(BaseModel):
    """Base for upstream payload models.

    CoinMarketCap sends `null` for many scalar fields. A null falls back to
    the field default instead of failing validation, while a value of the
    wrong type is still rejected. Nulls inside mappings (a symbol group or a
    currency quote) are kept as None and handled by the normalizer.
    """

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ApiTag(ApiModel):
    """Listing tag."""

    slug: str = ""
    name: str = ""
    category: str = ""


class ApiQuote(ApiModel):
    """Market data of a listing in one currency."""

    price: float = 0.0
    volume_24h: float = 0.0
    volume_change_24h: float = 0.0
    percent_change_1h: float = 0.0
    percent_change_24h: float = 0.0
    percent_change_7d: float = 0.0
    percent_change_30d: float = 0.0
    percent_change_60d: float = 0.0
    percent_change_90d: float = 0.0
    market_cap: float = 0.0
    market_cap_dominance: float = 0.0
    fully_diluted_market_cap: float = 0.0
    tvl: Any = None
    last_updated: datetime | None = None


class ApiListing(ApiModel):
    """One coin listed under a ticker symbol."""

    id: int = 0
    name: str = ""
    symbol: str = ""
    slug: str = ""
    num_market_pairs: int = 0
    date_added: datetime | None = None
    tags: list[ApiTag] = Field(default_factory=list)
    max_supply: float | None = None
    circulating_supply: float = 0.0
    total_supply: float = 0.0
    is_active: int = 0
    infinite_supply: bool = False
    minted_market_cap: float = 0.0
    platform: Any = None
    cmc_rank: int = 0
    is_fiat: int = 0
    self_reported_circulating_supply: Any = None
    self_reported_market_cap: Any = None
    tvl_ratio: Any = None
    last_updated: datetime | None = None
    quote: dict[str, ApiQuote | None] = Field(default_factory=dict)


class ApiStatus(ApiModel):
    """Status envelope present in every API response.

    Attributes:
        error_code: 0 on success, any other value invalidates the response.
        error_message: Upstream message, usually a string or null.
    """

    timestamp: datetime | None = None
    error_code: int = 0
    error_message: Any = None
    elapsed: int = 0
    credit_count: int = 0
    notice: Any = None


class ApiQuoteResponse(ApiModel):
    """Top-level `quotes/latest` response grouped by symbol."""

    status: ApiStatus = Field(default_factory=ApiStatus)
    data: dict[str, list[ApiListing] | None] = Field(default_factory=dict)
