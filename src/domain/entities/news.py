"""
Domain entity for a condensed set of recent headlines.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NewsSummary:
    symbol: str
    text: str
    headlines: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.headlines

    @property
    def summary(self) -> str:
        """Headlines as a single sentence-joined line."""
        return ". ".join(self.headlines) if self.headlines else self.text

    @classmethod
    def from_headlines(cls, symbol: str, headlines: list[str]) -> "NewsSummary":
        return cls(
            symbol=symbol,
            headlines=list(headlines),
            text="\n".join(f"- {title}" for title in headlines),
        )
