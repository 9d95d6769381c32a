"""
Use-case: classify the sentiment of a block of financial text.
Depends only on Domain ports.
"""

from src.domain.ports.sentiment_port import ISentimentClassifier


class AnalyzeSentimentUseCase:
    def __init__(self, classifier: ISentimentClassifier) -> None:
        self._classifier = classifier

    async def execute(self, text: str) -> str:
        """
        Raises:
            ValueError: if *text* is blank.
            Any exception propagated from the ISentimentClassifier.
        """
        if not text or not text.strip():
            raise ValueError("text must be a non-empty string")
        return await self._classifier.classify(text.strip())
