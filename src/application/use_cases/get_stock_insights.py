"""
Use-case: condensed recent headlines for a symbol, served from the insights cache.
Depends only on application services.
"""

from src.application.services.market_data_client import FundamentalsAndNewsClient
from src.domain.entities.news import NewsSummary


class GetStockInsightsUseCase:
    DEFAULT_SYMBOL: str = "AAPL"

    def __init__(self, market_data: FundamentalsAndNewsClient) -> None:
        self._market_data = market_data

    async def execute(self, symbol: str = DEFAULT_SYMBOL) -> NewsSummary:
        """Return the headline summary for *symbol* (uppercased).

        Blank symbols fall back to DEFAULT_SYMBOL.

        Raises:
            NotFoundError: if no articles exist for the symbol.
            FetchError:    if the news provider could not be reached.
        """
        symbol = (symbol or "").upper().strip() or self.DEFAULT_SYMBOL
        return await self._market_data.fetch_news_summary(symbol)
