"""
Use-case: daily price history, technical indicators and fundamentals for a symbol.
Depends only on Domain ports, entities and application services.
"""

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from src.application.services.market_data_client import FundamentalsAndNewsClient
from src.application.services.resilient_fetcher import ResilientFetcher
from src.domain.entities.stock_report import StockDataReport
from src.domain.ports.price_data_port import IPriceDataProvider
from src.domain.services.indicator_engine import DEFAULT_PERIOD, compute_indicator_set

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GetStockDataUseCase:
    DEFAULT_DAYS: int = 250
    MAX_DAYS: int = 36500

    def __init__(
        self,
        provider: IPriceDataProvider,
        market_data: FundamentalsAndNewsClient,
        fetcher: ResilientFetcher,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._provider = provider
        self._market_data = market_data
        self._fetcher = fetcher
        self._clock = clock

    async def execute(self, symbol: str, days: int = DEFAULT_DAYS) -> StockDataReport:
        """Fetch *days* of daily bars for *symbol* and derive indicators.

        History and fundamentals are independent, so both are awaited
        together; fundamentals never raise.

        Raises:
            ValueError: if *symbol* is blank or *days* is outside 1..MAX_DAYS.
            FetchError: propagated from the history fetch (NotFoundError for
                        unknown symbols, RetriesExhaustedError otherwise).
        """
        if not symbol or not symbol.strip():
            raise ValueError("Stock symbol is required")
        if days <= 0 or days > self.MAX_DAYS:
            raise ValueError("Invalid duration parameter")
        symbol = symbol.upper().strip()

        end = self._clock()
        start = end - timedelta(days=days)
        logger.info("Fetching %d days of data for %s", days, symbol)

        series, fundamentals = await asyncio.gather(
            self._fetcher.fetch(
                lambda: self._provider.get_price_history(symbol, start, end, interval="1d"),
                label=f"history:{symbol}",
            ),
            self._market_data.get_fundamentals(symbol),
        )

        return StockDataReport(
            series=series,
            indicators=compute_indicator_set(series.closes, DEFAULT_PERIOD),
            fundamentals=fundamentals,
        )
