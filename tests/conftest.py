"""
In-memory fakes for every port, plus fixtures wiring them together.
"""

from datetime import datetime
from typing import Optional

import pytest

from src.application.services.insights_cache import InsightsCache
from src.application.services.market_data_client import FundamentalsAndNewsClient
from src.application.services.resilient_fetcher import ResilientFetcher
from src.domain.entities.fundamentals import Fundamentals
from src.domain.entities.price_series import PriceBar, PriceSeries
from src.domain.ports.fundamentals_port import IFundamentalsProvider
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.news_port import INewsProvider
from src.domain.ports.predictor_port import IPricePredictor
from src.domain.ports.price_data_port import IPriceDataProvider
from src.domain.ports.sentiment_port import ISentimentClassifier


class SleepRecorder:
    """Stands in for asyncio.sleep and remembers every requested delay."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_series(symbol: str, closes: list[float]) -> PriceSeries:
    bars = [
        PriceBar(
            date=f"2024-01-{day + 1:02d}",
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=1_000 * (day + 1),
        )
        for day, close in enumerate(closes)
    ]
    return PriceSeries(symbol=symbol, interval="1d", bars=bars)


class FakePriceProvider(IPriceDataProvider):
    def __init__(self, closes: Optional[list[float]] = None, error: Optional[Exception] = None) -> None:
        self.closes = closes if closes is not None else [100.0 + i for i in range(40)]
        self.error = error
        self.history_calls: list[tuple[str, datetime, datetime, str]] = []
        self.price_calls: list[str] = []

    async def get_price_history(self, symbol, start, end, interval="1d"):
        self.history_calls.append((symbol, start, end, interval))
        if self.error:
            raise self.error
        return make_series(symbol, self.closes)

    async def get_latest_price(self, symbol):
        self.price_calls.append(symbol)
        if self.error:
            raise self.error
        return self.closes[-1]


class FakeFundamentalsProvider(IFundamentalsProvider):
    def __init__(self, result: Optional[Fundamentals] = None, error: Optional[Exception] = None) -> None:
        self.result = result or Fundamentals(pe_ratio=28.5, roe=1.47, eps=6.43, debt_to_equity=1.8)
        self.error = error
        self.calls = 0

    async def get_fundamentals(self, symbol):
        self.calls += 1
        if self.error:
            raise self.error
        return self.result


class FakeNewsProvider(INewsProvider):
    def __init__(self, headlines: Optional[list[str]] = None, error: Optional[Exception] = None) -> None:
        self.headlines = headlines if headlines is not None else [
            "Apple beats earnings expectations",
            "iPhone sales climb in Asia",
            "Analysts raise price targets",
            "An older story that should be dropped",
        ]
        self.error = error
        self.calls = 0

    async def search_headlines(self, query):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.headlines)


class FakeSentiment(ISentimentClassifier):
    def __init__(self, label: str = "Positive", error: Optional[Exception] = None) -> None:
        self.label = label
        self.error = error
        self.texts: list[str] = []

    async def classify(self, text):
        self.texts.append(text)
        if self.error:
            raise self.error
        return self.label


class FakeLanguageModel(ILanguageModel):
    def __init__(self, reply: str = "", error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.reply


class FakePredictor(IPricePredictor):
    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    async def predict(self, symbol, prices):
        self.calls.append((symbol, len(prices)))
        return {"symbol": symbol, "predicted_price": 123.45}


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher(sleeper) -> ResilientFetcher:
    return ResilientFetcher(max_retries=3, rate_limit_backoff=2.0, sleep=sleeper)


@pytest.fixture
def cache(clock) -> InsightsCache:
    return InsightsCache(clock=clock)


@pytest.fixture
def price_provider() -> FakePriceProvider:
    return FakePriceProvider()


@pytest.fixture
def fundamentals_provider() -> FakeFundamentalsProvider:
    return FakeFundamentalsProvider()


@pytest.fixture
def news_provider() -> FakeNewsProvider:
    return FakeNewsProvider()


@pytest.fixture
def sentiment() -> FakeSentiment:
    return FakeSentiment()


@pytest.fixture
def llm() -> FakeLanguageModel:
    return FakeLanguageModel(reply="**Recommendation:** Buy\n\n**Explanation:** Strong fundamentals.")


@pytest.fixture
def predictor() -> FakePredictor:
    return FakePredictor()


@pytest.fixture
def market_data(fundamentals_provider, news_provider, fetcher, cache) -> FundamentalsAndNewsClient:
    return FundamentalsAndNewsClient(
        fundamentals_provider=fundamentals_provider,
        news_provider=news_provider,
        fetcher=fetcher,
        cache=cache,
        news_ttl_seconds=600,
    )
