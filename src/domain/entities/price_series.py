"""
Domain entities for daily price data.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class PriceBar:
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class PriceSeries:
    """Daily bars for one symbol, strictly increasing by date.

    Gaps (holidays, halted sessions) are tolerated but never filled.
    """

    symbol: str
    interval: str
    bars: list[PriceBar] = field(default_factory=list)

    @property
    def dates(self) -> list[str]:
        return [bar.date for bar in self.bars]

    @property
    def closes(self) -> list[float]:
        return [bar.close for bar in self.bars]

    @property
    def latest_close(self) -> Optional[float]:
        return self.bars[-1].close if self.bars else None
