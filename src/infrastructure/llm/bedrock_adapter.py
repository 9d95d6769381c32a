"""
Infrastructure adapter: Amazon Bedrock (ChatBedrock) → ILanguageModel.
All ChatBedrock / langchain_aws details are confined here.
"""

from typing import Any

from langchain_aws import ChatBedrock
from langchain_core.messages import HumanMessage

from src.domain.ports.llm_port import ILanguageModel


class BedrockChatAdapter(ILanguageModel):
    """Wraps ChatBedrock and exposes the ILanguageModel interface."""

    MODEL_ID = "us.amazon.nova-pro-v1:0"

    def __init__(self, region: str = "us-east-1", _runnable: Any = None) -> None:
        """
        Args:
            region:    AWS region hosting the Bedrock model.
            _runnable: Optional pre-configured Runnable exposing ainvoke()
                       (used by tests). Pass nothing for normal instantiation.
        """
        if _runnable is not None:
            self._llm = _runnable
        else:
            self._llm = ChatBedrock(
                model=self.MODEL_ID,
                model_kwargs={"temperature": 0.0},
                region_name=region,
            )

    async def generate(self, prompt: str) -> str:
        message = await self._llm.ainvoke([HumanMessage(content=prompt)])
        return self._text_of(message.content)

    @staticmethod
    def _text_of(content: Any) -> str:
        # Multi-part responses arrive as a list of blocks; keep the text ones
        if isinstance(content, str):
            return content
        parts = []
        for block in content or []:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
