"""
Port (interface) for remote price predictors.
Infrastructure adapters (e.g. HuggingFacePricePredictor) must implement this interface.
"""

from abc import ABC, abstractmethod


class IPricePredictor(ABC):
    @abstractmethod
    async def predict(self, symbol: str, prices: list[list[float]]) -> dict:
        """Forward a feature window to the model and return its raw response."""
        ...
