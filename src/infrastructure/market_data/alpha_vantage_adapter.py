"""
Infrastructure adapter: Alpha Vantage OVERVIEW endpoint → IFundamentalsProvider.
All Alpha Vantage field names and throttling conventions are confined here.
"""

from typing import Optional

import httpx

from src.domain.entities.fundamentals import Fundamentals, parse_metric
from src.domain.errors import (
    MalformedPayloadError,
    NotFoundError,
    ProviderNotConfiguredError,
    RateLimitedError,
)
from src.domain.ports.fundamentals_port import IFundamentalsProvider
from src.infrastructure.http.errors import request_json


class AlphaVantageFundamentalsProvider(IFundamentalsProvider):
    """Reads P/E, ROE, EPS and debt-to-equity from the company overview."""

    BASE_URL = "https://www.alphavantage.co/query"

    # Alpha Vantage answers throttled calls with HTTP 200 and one of these keys
    _THROTTLE_KEYS = ("Note", "Information")

    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str]) -> None:
        self._client = client
        self._api_key = api_key

    async def get_fundamentals(self, symbol: str) -> Fundamentals:
        if not self._api_key:
            raise ProviderNotConfiguredError("ALPHA_VANTAGE_API_KEY is not set")

        payload = await request_json(
            self._client,
            "GET",
            self.BASE_URL,
            resource=f"fundamentals for {symbol}",
            params={"function": "OVERVIEW", "symbol": symbol, "apikey": self._api_key},
        )
        if not isinstance(payload, dict):
            raise MalformedPayloadError(f"Unexpected fundamentals payload for {symbol}")
        for key in self._THROTTLE_KEYS:
            if key in payload:
                raise RateLimitedError(f"Alpha Vantage: {payload[key]}")
        if "Error Message" in payload or not payload:
            raise NotFoundError(f"No data returned for {symbol}")

        return Fundamentals(
            pe_ratio=parse_metric(payload.get("PERatio")),
            roe=parse_metric(payload.get("ReturnOnEquityTTM")),
            eps=parse_metric(payload.get("EPS")),
            debt_to_equity=parse_metric(payload.get("DebtToEquity")),
        )
