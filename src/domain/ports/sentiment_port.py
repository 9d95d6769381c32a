"""
Port (interface) for text sentiment classifiers.
Infrastructure adapters (e.g. FinBertSentimentClassifier) must implement this interface.
"""

from abc import ABC, abstractmethod


class ISentimentClassifier(ABC):
    @abstractmethod
    async def classify(self, text: str) -> str:
        """Return a sentiment label such as "Positive", "Negative" or "Neutral"."""
        ...
