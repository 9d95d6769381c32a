"""
Application service: supplementary market context (fundamentals and news).

Both reads go through ResilientFetcher. They are fail-open: fundamentals
and headlines are context for the recommendation, not critical-path data,
so any unrecoverable failure is logged and replaced by the neutral value
from the fallback table.
"""

import logging

from src.application.services.insights_cache import NEWS_TTL_SECONDS, InsightsCache
from src.application.services.resilient_fetcher import ResilientFetcher
from src.domain.entities.fundamentals import Fundamentals
from src.domain.entities.news import NewsSummary
from src.domain.errors import NotFoundError
from src.domain.fallbacks import DEFAULT_FALLBACKS, Fallbacks
from src.domain.ports.fundamentals_port import IFundamentalsProvider
from src.domain.ports.news_port import INewsProvider

logger = logging.getLogger(__name__)


class FundamentalsAndNewsClient:
    MAX_HEADLINES: int = 3

    def __init__(
        self,
        fundamentals_provider: IFundamentalsProvider,
        news_provider: INewsProvider,
        fetcher: ResilientFetcher,
        cache: InsightsCache,
        news_ttl_seconds: float = NEWS_TTL_SECONDS,
        fallbacks: Fallbacks = DEFAULT_FALLBACKS,
    ) -> None:
        self._fundamentals_provider = fundamentals_provider
        self._news_provider = news_provider
        self._fetcher = fetcher
        self._cache = cache
        self._news_ttl_seconds = news_ttl_seconds
        self._fallbacks = fallbacks

    async def get_fundamentals(self, symbol: str) -> Fundamentals:
        """Return the fundamentals snapshot, or the neutral record on any failure."""
        try:
            return await self._fetcher.fetch(
                lambda: self._fundamentals_provider.get_fundamentals(symbol),
                label=f"fundamentals:{symbol}",
            )
        except Exception as exc:
            logger.warning("Fundamentals unavailable for %s, using neutral values: %s", symbol, exc)
            return self._fallbacks.fundamentals

    async def fetch_news_summary(self, symbol: str) -> NewsSummary:
        """Return the cached or freshly fetched headline summary.

        Raises:
            NotFoundError: when the provider has no articles for *symbol*.
            FetchError:    when the provider could not be reached.
        """
        return await self._cache.get_or_fetch(
            f"news:{symbol}",
            self._news_ttl_seconds,
            lambda: self._load_news(symbol),
        )

    async def get_news_summary(self, symbol: str) -> NewsSummary:
        """Like fetch_news_summary(), but never raises."""
        try:
            return await self.fetch_news_summary(symbol)
        except Exception as exc:
            logger.warning("News unavailable for %s: %s", symbol, exc)
            return NewsSummary(symbol=symbol, text=self._fallbacks.news_text)

    async def _load_news(self, symbol: str) -> NewsSummary:
        titles = await self._fetcher.fetch(
            lambda: self._news_provider.search_headlines(symbol),
            label=f"news:{symbol}",
        )
        headlines = [title.strip() for title in titles if title and title.strip()]
        if not headlines:
            raise NotFoundError(f"No financial news found for {symbol}.")
        logger.info("Selected %d headline(s) for %s", min(len(headlines), self.MAX_HEADLINES), symbol)
        return NewsSummary.from_headlines(symbol, headlines[: self.MAX_HEADLINES])
