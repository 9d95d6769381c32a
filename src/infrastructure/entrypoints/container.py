"""
Composition Root: wires infrastructure adapters into the application layer.

build_container() is the only place that knows which concrete adapter
backs each port. Entry points receive the resulting Container, so tests
can hand them one built from in-memory fakes instead.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from src.application.services.insights_cache import InsightsCache
from src.application.services.market_data_client import FundamentalsAndNewsClient
from src.application.services.resilient_fetcher import ResilientFetcher
from src.application.use_cases.analyze_sentiment import AnalyzeSentimentUseCase
from src.application.use_cases.compute_indicators import ComputeIndicatorsUseCase
from src.application.use_cases.get_stock_data import GetStockDataUseCase
from src.application.use_cases.get_stock_insights import GetStockInsightsUseCase
from src.application.use_cases.predict_price import PredictPriceUseCase
from src.application.use_cases.recommend_stock import RecommendStockUseCase
from src.domain.ports.llm_port import ILanguageModel
from src.infrastructure.config import Settings
from src.infrastructure.llm.huggingface_adapter import HuggingFaceInferenceAdapter
from src.infrastructure.market_data.alpha_vantage_adapter import AlphaVantageFundamentalsProvider
from src.infrastructure.market_data.newsapi_adapter import NewsApiProvider
from src.infrastructure.prediction.huggingface_predictor import HuggingFacePricePredictor
from src.infrastructure.sentiment.finbert_adapter import FinBertSentimentClassifier
from src.infrastructure.stock_data.yfinance_adapter import YFinancePriceDataProvider

logger = logging.getLogger(__name__)


@dataclass
class Container:
    recommend_stock: RecommendStockUseCase
    get_stock_data: GetStockDataUseCase
    get_stock_insights: GetStockInsightsUseCase
    analyze_sentiment: AnalyzeSentimentUseCase
    compute_indicators: ComputeIndicatorsUseCase
    predict_price: PredictPriceUseCase
    http_client: Optional[httpx.AsyncClient] = None

    async def aclose(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()


def build_llm(settings: Settings, client: httpx.AsyncClient) -> ILanguageModel:
    if settings.llm_provider == "huggingface":
        return HuggingFaceInferenceAdapter(client, settings.hf_chat_model, settings.hf_api_key)
    if settings.llm_provider == "bedrock":
        # langchain_aws is only imported when Bedrock is selected
        from src.infrastructure.llm.bedrock_adapter import BedrockChatAdapter
        return BedrockChatAdapter(region=settings.aws_region)
    raise ValueError(f"Unknown LLM_PROVIDER {settings.llm_provider!r}; expected 'bedrock' or 'huggingface'")


def build_container(settings: Settings) -> Container:
    client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)

    fetcher = ResilientFetcher(
        max_retries=settings.fetch_max_retries,
        rate_limit_backoff=settings.rate_limit_backoff_seconds,
    )
    cache = InsightsCache()
    price_provider = YFinancePriceDataProvider()
    market_data = FundamentalsAndNewsClient(
        fundamentals_provider=AlphaVantageFundamentalsProvider(client, settings.alpha_vantage_api_key),
        news_provider=NewsApiProvider(client, settings.news_api_key),
        fetcher=fetcher,
        cache=cache,
        news_ttl_seconds=settings.news_cache_ttl_seconds,
    )
    sentiment = FinBertSentimentClassifier(client, settings.sentiment_api_url)

    logger.info("Using %s language model provider", settings.llm_provider)
    return Container(
        recommend_stock=RecommendStockUseCase(
            price_provider=price_provider,
            market_data=market_data,
            sentiment=sentiment,
            llm=build_llm(settings, client),
            fetcher=fetcher,
        ),
        get_stock_data=GetStockDataUseCase(price_provider, market_data, fetcher),
        get_stock_insights=GetStockInsightsUseCase(market_data),
        analyze_sentiment=AnalyzeSentimentUseCase(sentiment),
        compute_indicators=ComputeIndicatorsUseCase(),
        predict_price=PredictPriceUseCase(
            HuggingFacePricePredictor(client, settings.predictor_api_url, settings.hf_api_key)
        ),
        http_client=client,
    )
