"""
Port (interface) for generative language model providers.
Infrastructure adapters (e.g. BedrockChatAdapter) must implement this interface.
"""

from abc import ABC, abstractmethod


class ILanguageModel(ABC):
    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send *prompt* to the model and return the first generated continuation."""
        ...
