import pytest
from fastapi.testclient import TestClient

from src.application.use_cases.analyze_sentiment import AnalyzeSentimentUseCase
from src.application.use_cases.compute_indicators import ComputeIndicatorsUseCase
from src.application.use_cases.get_stock_data import GetStockDataUseCase
from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.application.use_cases.predict_price import PredictPriceUseCase
from src.application.use_cases.recommend_stock import RecommendStockUseCase
from src.domain.errors import NotFoundError, TransientFetchError
from src.infrastructure.entrypoints.container import Container
from src.infrastructure.entrypoints.fastapi_app import create_app


@pytest.fixture
def client(price_provider, market_data, sentiment, llm, fetcher, predictor):
    container = Container(
        recommend_stock=RecommendStockUseCase(price_provider, market_data, sentiment, llm, fetcher),
        get_stock_data=GetStockDataUseCase(price_provider, market_data, fetcher),
        get_stock_insights=GetStockInsightsUseCase(market_data),
        analyze_sentiment=AnalyzeSentimentUseCase(sentiment),
        compute_indicators=ComputeIndicatorsUseCase(),
        predict_price=PredictPriceUseCase(predictor),
    )
    with TestClient(create_app(container)) as test_client:
        yield test_client


def test_chatbot_returns_combined_payload(client):
    response = client.post("/chatbot", json={"stockSymbol": "aapl", "question": "Buy or not?"})

    assert response.status_code == 200
    body = response.json()
    assert body["symbol"] == "AAPL"
    assert body["price"] == 139.0
    assert body["sentiment"] == "Positive"
    assert body["decision"] == {"action": "Buy", "explanation": "Strong fundamentals."}
    assert body["aiDecision"].startswith("📢 **Recommendation:** Buy")


def test_chatbot_survives_news_outage(client, news_provider):
    news_provider.error = TransientFetchError("newsapi down")

    response = client.post("/chatbot", json={"stockSymbol": "AAPL"})
    assert response.status_code == 200
    assert response.json()["newsText"] == "No recent news available."


def test_chatbot_reports_missing_price(client, price_provider):
    price_provider.error = NotFoundError("unknown ticker")

    response = client.post("/chatbot", json={"stockSymbol": "aapl"})
    assert response.status_code == 503
    assert response.json() == {"error": "Stock data unavailable", "resource": "price", "symbol": "AAPL"}


def test_stock_data_payload(client, price_provider):
    response = client.get("/stock-data", params={"symbol": "msft", "days": 60})

    assert response.status_code == 200
    body = response.json()
    assert body["symbol"] == "MSFT"
    assert len(body["timestamps"]) == len(price_provider.closes)
    assert body["indicators"]["SMA_14"][:14] == [None] * 14
    assert len(body["indicators"]["Signal_Line"]) == len(body["close"])
    assert body["fundamentals"]["PE_Ratio"] == 28.5


@pytest.mark.parametrize(
    "params, message",
    [
        ({}, "Stock symbol is required"),
        ({"symbol": "AAPL", "days": 0}, "Invalid duration parameter"),
        ({"symbol": "AAPL", "days": 1_000_000}, "Invalid duration parameter"),
    ],
)
def test_stock_data_validation(client, params, message):
    response = client.get("/stock-data", params=params)
    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_stock_data_unknown_symbol(client, price_provider):
    price_provider.error = NotFoundError("No price data available for symbol: 'ZZZZ'")

    response = client.get("/stock-data", params={"symbol": "ZZZZ"})
    assert response.status_code == 404


def test_stock_data_upstream_outage(client, price_provider):
    price_provider.error = TransientFetchError("HTTP 502")

    response = client.get("/stock-data", params={"symbol": "AAPL"})
    assert response.status_code == 502
    assert "history:AAPL" in response.json()["error"]


def test_indicators_endpoint(client):
    response = client.post("/indicators", json={"close": [1, 2, 3, 4, 5], "period": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["SMA_2"] == [None, None, 1.5, 2.5, 3.5]
    assert body["EMA_2"][0] == 1


def test_stock_insights(client):
    response = client.get("/stock-insights", params={"symbol": "aapl"})

    assert response.status_code == 200
    assert response.json()["stock"] == "AAPL"
    assert response.json()["summary"].endswith("Analysts raise price targets")


def test_stock_insights_without_news(client, news_provider):
    news_provider.headlines = []

    response = client.get("/stock-insights", params={"symbol": "AAPL"})
    assert response.status_code == 404
    assert response.json() == {"error": "No financial news found for AAPL."}


def test_sentiment_analysis(client):
    response = client.post("/sentiment-analysis", json={"text": "Record quarter"})
    assert response.json() == {"sentiment": "Positive"}


def test_predict_rejects_bad_shape(client):
    response = client.post("/predict", json={"stockSymbol": "AAPL", "prices": [[1.0, 2.0]]})
    assert response.status_code == 400
    assert "Invalid input shape" in response.json()["error"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
