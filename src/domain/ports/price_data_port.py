"""
Port (interface) for daily price-history providers.
Infrastructure adapters (e.g. YFinancePriceDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.entities.price_series import PriceSeries


class IPriceDataProvider(ABC):
    @abstractmethod
    async def get_price_history(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        interval: str = "1d",
    ) -> PriceSeries:
        """Return the bars between *start* and *end*, oldest first.

        Raises:
            RateLimitedError:      the provider throttled the request.
            NotFoundError:         the symbol is unknown or has no data.
            MalformedPayloadError: the response could not be interpreted.
        """
        ...

    @abstractmethod
    async def get_latest_price(self, symbol: str) -> float:
        """Return the most recent close for *symbol*. Raises as above."""
        ...
