"""Market data error taxonomy.

Every failure of the CoinMarketCap client or the response normalizer is
raised as a subclass of MarketDataError carrying a user-facing message.
Bot handlers are the only place that renders these errors to users.
"""


class MarketDataError(Exception):
    """Base class for market data failures.

    Attributes:
        message: Human-readable description shown to the end user.
        retryable: Whether the caller may repeat the same request later.
    """

    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(MarketDataError):
    """No usable symbols were supplied."""


class TransportError(MarketDataError):
    """Connection failure, DNS failure or timeout before a response arrived."""


class HTTPStatusError(MarketDataError):
    """Upstream answered with a non-2xx status.

    Attributes:
        status: HTTP status code of the response.
    """

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class ClientError(HTTPStatusError):
    """4xx response: bad request or unknown symbol."""


class ServerError(HTTPStatusError):
    """5xx response: temporary upstream failure."""

    retryable = True


class UnexpectedStatusError(HTTPStatusError):
    """Non-2xx response outside the 4xx and 5xx ranges.

    Attributes:
        body: Raw response body text.
    """

    def __init__(self, status: int, body: str):
        super().__init__(f"API вернул статус {status}: {body}", status)
        self.body = body


class ReadError(MarketDataError):
    """Response body could not be read after a successful status."""


class DecodeError(MarketDataError):
    """Response body is not valid JSON or does not match the API schema."""


class UpstreamError(MarketDataError):
    """API reported a non-zero error code in its status envelope.

    Attributes:
        error_code: Code from the status envelope.
    """

    def __init__(self, message: str, error_code: int):
        super().__init__(f"API ошибка: {message}")
        self.error_code = error_code


class NotFoundError(MarketDataError):
    """Well-formed response without a single usable quote."""
