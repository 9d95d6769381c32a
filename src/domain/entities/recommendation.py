"""
Domain entities for a parsed investment recommendation.
Zero external dependencies: pure Python only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

NO_CLEAR_RECOMMENDATION = "No clear recommendation found"
NO_EXPLANATION = "No explanation provided"


class Action(str, Enum):
    BUY = "Buy"
    SELL = "Sell"
    HOLD = "Hold"
    UNKNOWN = "Unknown"

    @classmethod
    def from_word(cls, word: str) -> "Action":
        """Map a case-insensitive action word to its member, else UNKNOWN."""
        for member in (cls.BUY, cls.SELL, cls.HOLD):
            if member.value.lower() == word.strip().lower():
                return member
        return cls.UNKNOWN


@dataclass(frozen=True)
class RecommendationDecision:
    action: Action
    explanation: str

    @property
    def label(self) -> str:
        if self.action is Action.UNKNOWN:
            return NO_CLEAR_RECOMMENDATION
        return self.action.value

    def to_markdown(self) -> str:
        return (
            f"📢 **Recommendation:** {self.label}\n\n"
            f"📝 **Explanation:** {self.explanation}"
        )

    def as_dict(self) -> dict:
        return {"action": self.action.value, "explanation": self.explanation}


@dataclass(frozen=True)
class StockRecommendation:
    """Combined payload for one aggregation request."""

    symbol: str
    price: float
    news_text: str
    sentiment: str
    decision: RecommendationDecision
    question: Optional[str] = None
