"""
Infrastructure adapter: NewsAPI /v2/everything → INewsProvider.
"""

from typing import Optional

import httpx

from src.domain.errors import MalformedPayloadError, ProviderNotConfiguredError, RateLimitedError
from src.domain.ports.news_port import INewsProvider
from src.infrastructure.http.errors import request_json


class NewsApiProvider(INewsProvider):
    """Searches NewsAPI for articles mentioning a query term."""

    BASE_URL = "https://newsapi.org/v2/everything"

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        page_size: int = 10,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._page_size = page_size

    async def search_headlines(self, query: str) -> list[str]:
        if not self._api_key:
            raise ProviderNotConfiguredError("NEWS_API_KEY is not set")

        payload = await request_json(
            self._client,
            "GET",
            self.BASE_URL,
            resource=f"news for {query}",
            params={"q": query, "pageSize": self._page_size, "sortBy": "relevancy"},
            headers={"X-Api-Key": self._api_key},
        )
        if not isinstance(payload, dict):
            raise MalformedPayloadError(f"Unexpected news payload for {query}")
        if payload.get("status") == "error":
            if payload.get("code") == "rateLimited":
                raise RateLimitedError(f"NewsAPI: {payload.get('message')}")
            raise MalformedPayloadError(f"NewsAPI error: {payload.get('message')}")

        articles = payload.get("articles") or []
        return [article["title"] for article in articles if isinstance(article, dict) and article.get("title")]
