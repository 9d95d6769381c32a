"""
Port (interface) for news article providers.
Infrastructure adapters (e.g. NewsApiProvider) must implement this interface.
"""

from abc import ABC, abstractmethod


class INewsProvider(ABC):
    @abstractmethod
    async def search_headlines(self, query: str) -> list[str]:
        """Return article titles matching *query*, most relevant first."""
        ...
