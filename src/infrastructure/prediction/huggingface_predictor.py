"""
Infrastructure adapter: hosted price-prediction space → IPricePredictor.
"""

from typing import Optional

import httpx

from src.domain.errors import MalformedPayloadError
from src.domain.ports.predictor_port import IPricePredictor
from src.infrastructure.http.errors import request_json


class HuggingFacePricePredictor(IPricePredictor):
    def __init__(self, client: httpx.AsyncClient, url: str, api_key: Optional[str] = None) -> None:
        self._client = client
        self._url = url
        self._api_key = api_key

    async def predict(self, symbol: str, prices: list[list[float]]) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        payload = await request_json(
            self._client,
            "POST",
            self._url,
            resource=f"prediction for {symbol}",
            json={"stock_symbol": symbol, "prices": prices},
            headers=headers,
        )
        if not isinstance(payload, dict):
            raise MalformedPayloadError(f"Unexpected prediction payload for {symbol}")
        return payload
