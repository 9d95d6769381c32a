"""
FastAPI entry point: HTTP surface of the stock insights service.

create_app() builds the default Container from environment variables
unless one is passed in. Fatal-to-request failures are rendered as
structured JSON errors naming the unavailable resource.

Run locally:
    uvicorn --factory src.infrastructure.entrypoints.fastapi_app:create_app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities.recommendation import StockRecommendation
from src.domain.entities.stock_report import StockDataReport
from src.domain.errors import FetchError, NotFoundError, ResourceUnavailableError
from src.domain.services.indicator_engine import DEFAULT_PERIOD
from src.infrastructure.config import Settings
from src.infrastructure.entrypoints.container import Container, build_container
from src.infrastructure.logging_config import configure_logging

logger = logging.getLogger(__name__)


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stock_symbol: str = Field(alias="stockSymbol")
    question: str | None = None


class IndicatorsRequest(BaseModel):
    close: list[float]
    period: int = Field(default=DEFAULT_PERIOD, ge=1)


class SentimentRequest(BaseModel):
    text: str


class PredictRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stock_symbol: str = Field(alias="stockSymbol")
    prices: list[list[float]]


def _recommendation_payload(result: StockRecommendation) -> dict:
    return {
        "symbol": result.symbol,
        "price": result.price,
        "newsText": result.news_text,
        "sentiment": result.sentiment,
        "decision": result.decision.as_dict(),
        "aiDecision": result.decision.to_markdown(),
    }


def _stock_data_payload(report: StockDataReport) -> dict:
    bars = report.series.bars
    return {
        "symbol": report.series.symbol,
        "timestamps": report.series.dates,
        "open": [bar.open for bar in bars],
        "high": [bar.high for bar in bars],
        "low": [bar.low for bar in bars],
        "close": report.series.closes,
        "volume": [bar.volume for bar in bars],
        "indicators": report.indicators.as_dict(),
        "fundamentals": report.fundamentals.as_dict(),
    }


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValueError)
    async def _bad_request(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(ResourceUnavailableError)
    async def _unavailable(request: Request, exc: ResourceUnavailableError):
        return JSONResponse(
            status_code=503,
            content={"error": exc.message, "resource": exc.resource, "symbol": exc.symbol},
        )

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(FetchError)
    async def _upstream_failed(request: Request, exc: FetchError):
        logger.error("%s %s failed upstream: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=502, content={"error": str(exc)})


def create_app(container: Optional[Container] = None) -> FastAPI:
    if container is None:
        load_dotenv()
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        container = build_container(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        yield
        await container.aclose()

    app = FastAPI(title="Stock Insights API", lifespan=lifespan)
    _register_error_handlers(app)

    @app.post("/chatbot")
    async def chatbot(body: ChatRequest):
        """Buy/Sell/Hold recommendation synthesised from price, news and sentiment."""
        result = await container.recommend_stock.execute(body.stock_symbol, body.question)
        return _recommendation_payload(result)

    @app.get("/stock-data")
    async def stock_data(symbol: str | None = None, days: int = 250):
        """Daily OHLCV history with SMA/EMA/RSI/MACD and fundamentals."""
        report = await container.get_stock_data.execute(symbol or "", days)
        return _stock_data_payload(report)

    @app.post("/indicators")
    async def indicators(body: IndicatorsRequest):
        result = container.compute_indicators.execute(body.close, body.period)
        return result.as_dict()

    @app.get("/stock-insights")
    async def stock_insights(symbol: str = "AAPL"):
        summary = await container.get_stock_insights.execute(symbol)
        return {"stock": summary.symbol, "summary": summary.summary}

    @app.post("/sentiment-analysis")
    async def sentiment_analysis(body: SentimentRequest):
        return {"sentiment": await container.analyze_sentiment.execute(body.text)}

    @app.post("/predict")
    async def predict(body: PredictRequest):
        return await container.predict_price.execute(body.stock_symbol, body.prices)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
