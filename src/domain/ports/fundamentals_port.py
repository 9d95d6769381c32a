"""
Port (interface) for company fundamentals providers.
Infrastructure adapters (e.g. AlphaVantageFundamentalsProvider) must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.fundamentals import Fundamentals


class IFundamentalsProvider(ABC):
    @abstractmethod
    async def get_fundamentals(self, symbol: str) -> Fundamentals:
        """Fetch the scalar snapshot for *symbol*.

        Absent or non-numeric fields are returned as 0.0; transport and
        throttling failures are raised as FetchError subclasses.
        """
        ...
