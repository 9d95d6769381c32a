"""
Infrastructure adapter: FinBERT sentiment space → ISentimentClassifier.
The space reads the text from the query string and ignores the body.
"""

import httpx

from src.domain.errors import MalformedPayloadError
from src.domain.ports.sentiment_port import ISentimentClassifier
from src.infrastructure.http.errors import request_json


class FinBertSentimentClassifier(ISentimentClassifier):
    def __init__(self, client: httpx.AsyncClient, url: str) -> None:
        self._client = client
        self._url = url

    async def classify(self, text: str) -> str:
        payload = await request_json(
            self._client,
            "POST",
            self._url,
            resource="sentiment analysis",
            params={"text": text},
            json={},
            headers={"Accept": "application/json"},
        )
        sentiment = payload.get("sentiment") if isinstance(payload, dict) else None
        if not isinstance(sentiment, str) or not sentiment.strip():
            raise MalformedPayloadError("Sentiment response has no 'sentiment' field")
        return sentiment.strip()
