"""
Recommendation extractor: free-form model output -> RecommendationDecision.

The generative model is asked for a labelled recommendation and
explanation, but its formatting drifts. Parsing therefore runs in two
stages that each return a ParseResult with optional fields:

  1. strict_parse    - label regexes ("Recommendation: Buy", "Explanation: ...").
  2. heuristic_parse - reverse line scan for lines mentioning the labels.

extract_recommendation() merges them field by field (first success wins)
and fills whatever is still missing from the fallback table. It never
raises; UNKNOWN is a normal result.
"""

import re
from dataclasses import dataclass
from typing import Optional

from src.domain.entities.recommendation import Action, RecommendationDecision
from src.domain.fallbacks import DEFAULT_FALLBACKS, Fallbacks

_EMPHASIS = r"(?:\*\*|__|\*|_)?"

_STRICT_RECOMMENDATION = re.compile(
    rf"recommendation\s*{_EMPHASIS}\s*:\s*{_EMPHASIS}\s*(buy|sell|hold)\b",
    re.IGNORECASE,
)
_STRICT_EXPLANATION = re.compile(
    rf"explanation\s*{_EMPHASIS}\s*:\s*{_EMPHASIS}\s*(.*)",
    re.IGNORECASE | re.DOTALL,
)
_ACTION_WORD = re.compile(r"\b(buy|sell|hold)\b", re.IGNORECASE)
_EXPLANATION_LABEL = re.compile(r"^[\W_]*explanation\b[\s*_:#-]*", re.IGNORECASE)


@dataclass(frozen=True)
class ParseResult:
    action: Optional[Action] = None
    explanation: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.action is not None and self.explanation is not None

    def merge(self, other: "ParseResult") -> "ParseResult":
        """Keep fields already found here, borrow the rest from *other*."""
        return ParseResult(
            action=self.action if self.action is not None else other.action,
            explanation=self.explanation if self.explanation is not None else other.explanation,
        )


def strict_parse(text: str) -> ParseResult:
    action = None
    explanation = None

    rec_match = _STRICT_RECOMMENDATION.search(text)
    if rec_match:
        action = Action.from_word(rec_match.group(1))

    exp_match = _STRICT_EXPLANATION.search(text)
    if exp_match and exp_match.group(1).strip():
        explanation = exp_match.group(1).strip()

    return ParseResult(action=action, explanation=explanation)


def heuristic_parse(text: str) -> ParseResult:
    """Reverse line scan used when the labelled structure is broken.

    A line mentioning "recommendation" adopts the first buy/sell/hold word
    found from that line onwards; a line mentioning "explanation" takes
    everything from that line to the end. Because the scan runs backwards
    and keeps overwriting, the earliest qualifying line wins.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    action = None
    explanation = None

    for i in range(len(lines) - 1, -1, -1):
        lowered = lines[i].lower()

        if "recommendation" in lowered:
            for candidate in lines[i:]:
                word = _ACTION_WORD.search(candidate)
                if word:
                    action = Action.from_word(word.group(1))
                    break

        if "explanation" in lowered:
            head = _EXPLANATION_LABEL.sub("", lines[i], count=1)
            joined = " ".join(part for part in [head, *lines[i + 1:]] if part).strip()
            if joined:
                explanation = joined

    return ParseResult(action=action, explanation=explanation)


def extract_recommendation(
    text: Optional[str],
    fallbacks: Fallbacks = DEFAULT_FALLBACKS,
) -> RecommendationDecision:
    if not text or not text.strip():
        return RecommendationDecision(action=Action.UNKNOWN, explanation=fallbacks.explanation)

    result = strict_parse(text)
    if not result.complete:
        result = result.merge(heuristic_parse(text))

    return RecommendationDecision(
        action=result.action or Action.UNKNOWN,
        explanation=result.explanation or fallbacks.explanation,
    )
