"""
Degrade-to-default policy for every supplementary dependency.

Each fail-open call site reads its substitute value from this table, so
the neutral defaults can be audited in one place.
"""

from dataclasses import dataclass, field

from src.domain.entities.fundamentals import Fundamentals
from src.domain.entities.recommendation import NO_CLEAR_RECOMMENDATION, NO_EXPLANATION


@dataclass(frozen=True)
class Fallbacks:
    fundamentals: Fundamentals = field(default_factory=Fundamentals.neutral)
    news_text: str = "No recent news available."
    sentiment: str = "Neutral"
    generated_text: str = "No response generated."
    recommendation: str = NO_CLEAR_RECOMMENDATION
    explanation: str = NO_EXPLANATION


DEFAULT_FALLBACKS = Fallbacks()
