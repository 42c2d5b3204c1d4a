"""CoinMarketCap Pro API client.

Builds authenticated `quotes/latest` requests, classifies transport and
HTTP failures into the market data error taxonomy, and hands successful
response bodies to the normalizer. The client keeps no per-request state;
one instance with its connection pool is shared by all bot handlers.
"""

import asyncio
import logging

import aiohttp

from ..config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from ..models import QuoteRecord
from .errors import (
    ClientError,
    InvalidInputError,
    ReadError,
    ServerError,
    TransportError,
    UnexpectedStatusError,
)
from .normalizer import normalize

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-CMC_PRO_API_KEY"
QUOTES_PATH = "/cryptocurrency/quotes/latest"


def sanitize_symbols(symbols_csv: str) -> list[str]:
    """Split a comma-separated symbol list into clean tickers.

    Args:
        symbols_csv: Raw user input, e.g. "btc, eth ,bnb".

    Returns:
        Trimmed upper-case symbols with empty parts dropped, e.g.
        ["BTC", "ETH", "BNB"].
    """
    symbols = []
    for part in symbols_csv.split(","):
        cleaned = part.strip().upper()
        if cleaned:
            symbols.append(cleaned)
    return symbols


class CoinMarketCapClient:
    """Async client for the CoinMarketCap Pro API.

    Attributes:
        base_url: API root including the version segment.
        timeout: Total timeout applied to every request.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            api_key: CoinMarketCap Pro API key.
            base_url: API root, defaults to the public v2 endpoint.
            timeout: Request timeout in seconds.
            session: Shared HTTP session. When omitted the client creates its
                own on first use and closes it in close().
        """
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "CoinMarketCapClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.info("CoinMarketCap HTTP session closed")

    async def get_quotes(self, symbols_csv: str) -> list[QuoteRecord]:
        """Fetch latest USD quotes for one or more symbols.

        Args:
            symbols_csv: Single symbol or comma-separated symbols, any case.

        Returns:
            One QuoteRecord per symbol found, in the requested order.

        Raises:
            InvalidInputError: No usable symbols in the input.
            TransportError: Network failure or timeout.
            ClientError: API answered 4xx.
            ServerError: API answered 5xx; the caller may retry later.
            UnexpectedStatusError: API answered another non-2xx status.
            ReadError: Response body could not be read.
            DecodeError, UpstreamError, NotFoundError: Raised by the normalizer.
        """
        symbols = sanitize_symbols(symbols_csv)
        if not symbols:
            logger.error(f"No cryptocurrency symbols in request: {symbols_csv!r}")
            raise InvalidInputError("не указаны символы криптовалют")

        symbols_param = ",".join(symbols)
        logger.info(f"Requesting quotes for symbols: {symbols_param}")

        # Failures are logged where they are raised
        body = await self._request(QUOTES_PATH, {"symbol": symbols_param})
        return normalize(body, requested=symbols)

    async def _request(self, path: str, params: dict[str, str]) -> bytes:
        """Perform an authenticated GET and return the raw body of a 2xx response."""
        url = f"{self.base_url}{path}"
        headers = {
            API_KEY_HEADER: self._api_key,
            "Accept": "application/json",
        }

        try:
            async with self._get_session().get(
                url, params=params, headers=headers, timeout=self.timeout
            ) as response:
                if not 200 <= response.status < 300:
                    body_text = await self._read_error_body(response)
                    raise self._classify_status(response.status, body_text, url)

                try:
                    return await response.read()
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    logger.error(f"Failed to read response body: {e!r}, URL: {url}")
                    raise ReadError(f"ошибка чтения ответа: {e}") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"HTTP request failed: {e!r}, URL: {url}")
            reason = str(e) or type(e).__name__
            raise TransportError(f"ошибка выполнения запроса: {reason}") from e

    @staticmethod
    async def _read_error_body(response: aiohttp.ClientResponse) -> str:
        """Read an error response body for diagnostics, empty if unreadable."""
        try:
            return await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read error response body: {e!r}")
            return ""

    @staticmethod
    def _classify_status(
        status: int, body: str, url: str
    ) -> ClientError | ServerError | UnexpectedStatusError:
        """Map a non-2xx status to the matching error."""
        if 400 <= status < 500:
            logger.error(f"Client error (4xx): status {status}, URL: {url}, Response: {body}")
            return ClientError("некорректный запрос или не найден символ", status)

        if 500 <= status < 600:
            logger.error(f"Server error (5xx): status {status}, URL: {url}, Response: {body}")
            return ServerError("временная ошибка сервера, попробуйте позже", status)

        logger.error(f"API returned unexpected status: {status}, URL: {url}, Response: {body}")
        return UnexpectedStatusError(status, body)
