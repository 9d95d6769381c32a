"""
Domain error taxonomy for outbound data fetches.

Transient failures (rate limiting, flaky transports) are worth retrying;
fatal ones (unknown symbol, undecodable payload) never are. Adapters
translate provider-specific failures into these types so the retry layer
can classify them without knowing any SDK.
"""

from typing import Optional


class FetchError(Exception):
    """Base class for any failure fetching data from a remote provider."""


class RateLimitedError(FetchError):
    """The provider throttled the request (HTTP 429 or equivalent)."""


class NotFoundError(FetchError):
    """The requested resource does not exist (HTTP 404 or equivalent)."""


class MalformedPayloadError(FetchError):
    """The provider answered, but the payload could not be interpreted."""


class ProviderNotConfiguredError(FetchError):
    """The adapter lacks credentials or settings needed to call the provider."""


class TransientFetchError(FetchError):
    """Any other provider or transport failure that may succeed on retry."""


class RetriesExhaustedError(FetchError):
    """Every allowed attempt failed; carries the last observed error."""

    def __init__(self, label: str, attempts: int, last_error: Optional[BaseException]) -> None:
        self.label = label
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{label} failed after {attempts} attempt(s): {last_error}")


FATAL_ERRORS: tuple[type[FetchError], ...] = (
    NotFoundError,
    MalformedPayloadError,
    ProviderNotConfiguredError,
)


def is_fatal(exc: BaseException) -> bool:
    return isinstance(exc, FATAL_ERRORS)


class ResourceUnavailableError(Exception):
    """A hard-required input for the request could not be obtained."""

    def __init__(self, resource: str, symbol: str, message: str = "Stock data unavailable") -> None:
        self.resource = resource
        self.symbol = symbol
        self.message = message
        super().__init__(f"{message}: {resource} for {symbol!r}")
