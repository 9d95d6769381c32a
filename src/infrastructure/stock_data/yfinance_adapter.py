"""
Infrastructure adapter: yfinance → IPriceDataProvider.
All yfinance-specific details (Ticker.history(), its DataFrame layout and
its exception types) are confined here; the rest of the codebase depends
only on IPriceDataProvider.

yfinance is synchronous, so each call runs in a worker thread via
asyncio.to_thread.
"""

import asyncio
import math
from datetime import datetime

import pandas as pd
import yfinance as yf
from yfinance.exceptions import YFRateLimitError, YFTickerMissingError

from src.domain.entities.price_series import PriceBar, PriceSeries
from src.domain.errors import MalformedPayloadError, NotFoundError, RateLimitedError
from src.domain.ports.price_data_port import IPriceDataProvider

_REQUIRED_COLUMNS = ("Open", "High", "Low", "Close", "Volume")


def _to_float(value, fallback: float) -> float:
    number = float(value)
    return round(number, 4) if math.isfinite(number) else fallback


class YFinancePriceDataProvider(IPriceDataProvider):
    """Fetches daily bars from Yahoo Finance via the yfinance library."""

    async def get_price_history(
        self,
        symbol: str,
        start: datetime,
        end: datetime,
        interval: str = "1d",
    ) -> PriceSeries:
        history = await asyncio.to_thread(self._download, symbol, start=start, end=end, interval=interval)
        return PriceSeries(symbol=symbol, interval=interval, bars=self._to_bars(symbol, history))

    async def get_latest_price(self, symbol: str) -> float:
        history = await asyncio.to_thread(self._download, symbol, period="5d", interval="1d")
        bars = self._to_bars(symbol, history)
        return bars[-1].close

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _download(symbol: str, **kwargs) -> pd.DataFrame:
        try:
            return yf.Ticker(symbol).history(raise_errors=True, **kwargs)
        except YFRateLimitError as exc:
            raise RateLimitedError(f"Yahoo Finance rate limited the request for {symbol!r}") from exc
        except YFTickerMissingError as exc:
            raise NotFoundError(f"No price data available for symbol: {symbol!r} ({exc})") from exc

    @staticmethod
    def _to_bars(symbol: str, history: pd.DataFrame) -> list[PriceBar]:
        if history is None or history.empty:
            raise NotFoundError(f"No price data available for symbol: {symbol!r}")
        missing = [column for column in _REQUIRED_COLUMNS if column not in history.columns]
        if missing:
            raise MalformedPayloadError(f"Price data for {symbol!r} is missing columns: {missing}")

        # Bars without a close cannot feed the indicator engine
        history = history.dropna(subset=["Close"])
        if history.empty:
            raise NotFoundError(f"No price data available for symbol: {symbol!r}")

        bars = []
        for date, row in history.iterrows():
            close = round(float(row["Close"]), 4)
            volume = row["Volume"]
            bars.append(
                PriceBar(
                    date=date.strftime("%Y-%m-%d"),
                    open=_to_float(row["Open"], close),
                    high=_to_float(row["High"], close),
                    low=_to_float(row["Low"], close),
                    close=close,
                    volume=0 if pd.isna(volume) else int(volume),
                )
            )
        return bars
