"""
Use-case: forward a feature window to the remote price predictor.
Depends only on Domain ports.
"""

from src.domain.ports.predictor_port import IPricePredictor

WINDOW_LENGTH = 150
FEATURE_COUNT = 10


class PredictPriceUseCase:
    def __init__(self, predictor: IPricePredictor) -> None:
        self._predictor = predictor

    async def execute(self, symbol: str, prices: list[list[float]]) -> dict:
        """
        Raises:
            ValueError: if *symbol* is blank or *prices* is not a
                        (WINDOW_LENGTH, FEATURE_COUNT) matrix.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")

        rows = len(prices or [])
        columns = len(prices[0]) if rows else 0
        if rows != WINDOW_LENGTH or any(len(row) != FEATURE_COUNT for row in prices):
            raise ValueError(
                f"Invalid input shape: Expected ({WINDOW_LENGTH}, {FEATURE_COUNT}) "
                f"but got ({rows}, {columns})"
            )
        return await self._predictor.predict(symbol.upper().strip(), prices)
