"""
Use-case: produce a Buy/Sell/Hold recommendation for a stock symbol.
Depends only on Domain ports, entities and application services.

Call order, awaited strictly in sequence:
    price -> news -> sentiment -> prompt -> model -> extractor

Only the price is required: without it the request fails with
ResourceUnavailableError. Every later step degrades to its entry in the
fallback table and the request still succeeds.
"""

import logging
from typing import Optional

from src.application.prompts import build_recommendation_prompt
from src.application.services.market_data_client import FundamentalsAndNewsClient
from src.application.services.resilient_fetcher import ResilientFetcher
from src.domain.entities.recommendation import StockRecommendation
from src.domain.errors import FetchError, ResourceUnavailableError
from src.domain.fallbacks import DEFAULT_FALLBACKS, Fallbacks
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.price_data_port import IPriceDataProvider
from src.domain.ports.sentiment_port import ISentimentClassifier
from src.domain.services.recommendation_extractor import extract_recommendation

logger = logging.getLogger(__name__)


class RecommendStockUseCase:
    def __init__(
        self,
        price_provider: IPriceDataProvider,
        market_data: FundamentalsAndNewsClient,
        sentiment: ISentimentClassifier,
        llm: ILanguageModel,
        fetcher: ResilientFetcher,
        fallbacks: Fallbacks = DEFAULT_FALLBACKS,
    ) -> None:
        self._price_provider = price_provider
        self._market_data = market_data
        self._sentiment = sentiment
        self._llm = llm
        self._fetcher = fetcher
        self._fallbacks = fallbacks

    async def execute(self, symbol: str, question: Optional[str] = None) -> StockRecommendation:
        """Run the full aggregation for *symbol* (uppercased).

        Raises:
            ValueError: if *symbol* is blank.
            ResourceUnavailableError: if no current price could be obtained.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        symbol = symbol.upper().strip()

        price = await self._fetch_price(symbol)
        news = await self._market_data.get_news_summary(symbol)
        sentiment = await self._classify(news.text)

        prompt = build_recommendation_prompt(
            symbol=symbol,
            price=price,
            sentiment=sentiment,
            news_text=news.text,
            question=question,
        )
        generated = await self._generate(prompt)
        decision = extract_recommendation(generated, self._fallbacks)
        logger.info("Recommendation for %s: %s", symbol, decision.label)

        return StockRecommendation(
            symbol=symbol,
            price=price,
            news_text=news.text,
            sentiment=sentiment,
            decision=decision,
            question=question,
        )

    async def _fetch_price(self, symbol: str) -> float:
        try:
            price = await self._fetcher.fetch(
                lambda: self._price_provider.get_latest_price(symbol),
                label=f"price:{symbol}",
            )
        except FetchError as exc:
            logger.error("Stock price not available for %s: %s", symbol, exc)
            raise ResourceUnavailableError("price", symbol) from exc
        if price is None:
            logger.error("Stock price not available for %s: empty response", symbol)
            raise ResourceUnavailableError("price", symbol)
        return price

    async def _classify(self, text: str) -> str:
        try:
            label = await self._sentiment.classify(text)
        except Exception as exc:
            logger.warning("Sentiment analysis failed, defaulting to %s: %s", self._fallbacks.sentiment, exc)
            return self._fallbacks.sentiment
        return label or self._fallbacks.sentiment

    async def _generate(self, prompt: str) -> str:
        try:
            text = await self._llm.generate(prompt)
        except Exception as exc:
            logger.warning("Model call failed: %s", exc)
            return self._fallbacks.generated_text
        return text.strip() if text and text.strip() else self._fallbacks.generated_text
