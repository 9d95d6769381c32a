from datetime import datetime, timedelta, timezone

import pytest

from src.application.use_cases.analyze_sentiment import AnalyzeSentimentUseCase
from src.application.use_cases.compute_indicators import ComputeIndicatorsUseCase
from src.application.use_cases.get_stock_data import GetStockDataUseCase
from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.application.use_cases.predict_price import PredictPriceUseCase
from src.domain.entities.fundamentals import Fundamentals
from src.domain.errors import NotFoundError, TransientFetchError
from src.domain.services.indicator_engine import compute_indicator_set

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)


@pytest.fixture
def stock_data(price_provider, market_data, fetcher) -> GetStockDataUseCase:
    return GetStockDataUseCase(price_provider, market_data, fetcher, clock=lambda: NOW)


async def test_history_indicators_and_fundamentals(stock_data, price_provider, fundamentals_provider):
    report = await stock_data.execute("msft", days=30)

    symbol, start, end, interval = price_provider.history_calls[0]
    assert (symbol, interval) == ("MSFT", "1d")
    assert end == NOW
    assert start == NOW - timedelta(days=30)

    assert report.series.closes == price_provider.closes
    assert report.indicators == compute_indicator_set(price_provider.closes, 14)
    assert report.fundamentals == fundamentals_provider.result


async def test_fundamentals_failure_keeps_history(stock_data, fundamentals_provider):
    fundamentals_provider.error = TransientFetchError("HTTP 500")

    report = await stock_data.execute("MSFT")
    assert report.fundamentals == Fundamentals.neutral()
    assert len(report.indicators.rsi) == len(report.series.bars)


async def test_unknown_symbol_propagates(stock_data, price_provider):
    price_provider.error = NotFoundError("No price data available for symbol: 'ZZZZ'")

    with pytest.raises(NotFoundError):
        await stock_data.execute("ZZZZ")
    assert len(price_provider.history_calls) == 1


@pytest.mark.parametrize(
    "symbol, days, message",
    [
        ("", 250, "Stock symbol is required"),
        ("AAPL", 0, "Invalid duration parameter"),
        ("AAPL", 1_000_000, "Invalid duration parameter"),
    ],
)
async def test_request_validation(stock_data, symbol, days, message):
    with pytest.raises(ValueError, match=message):
        await stock_data.execute(symbol, days)


def test_compute_indicators_rejects_non_finite_prices():
    with pytest.raises(ValueError):
        ComputeIndicatorsUseCase().execute([1.0, float("inf"), 2.0])


def test_compute_indicators_returns_aligned_set():
    result = ComputeIndicatorsUseCase().execute([float(i) for i in range(1, 31)], period=5)
    assert len(result.sma) == 30
    assert result.sma[5] == 3.0


async def test_insights_default_symbol(market_data):
    summary = await GetStockInsightsUseCase(market_data).execute("")
    assert summary.symbol == "AAPL"
    assert summary.summary.startswith("Apple beats earnings expectations. iPhone sales")


async def test_sentiment_use_case_requires_text(sentiment):
    use_case = AnalyzeSentimentUseCase(sentiment)
    with pytest.raises(ValueError):
        await use_case.execute("")
    assert await use_case.execute(" Stocks rally ") == "Positive"
    assert sentiment.texts == ["Stocks rally"]


async def test_predict_validates_window_shape(predictor):
    use_case = PredictPriceUseCase(predictor)

    with pytest.raises(ValueError, match=r"Expected \(150, 10\) but got \(2, 10\)"):
        await use_case.execute("AAPL", [[0.0] * 10, [0.0] * 10])

    result = await use_case.execute("aapl", [[0.0] * 10 for _ in range(150)])
    assert result["predicted_price"] == 123.45
    assert predictor.calls == [("AAPL", 150)]
