"""
Domain entities for technical indicator output.
Zero external dependencies: pure Python dataclasses only.

Every sequence is aligned index-for-index with the close prices it was
computed from. None marks an entry that is still inside the indicator's
warm-up period.
"""

from dataclasses import dataclass
from typing import Optional

Series = list[Optional[float]]


@dataclass(frozen=True)
class MACDResult:
    macd: list[float]
    signal_line: list[float]


@dataclass(frozen=True)
class IndicatorSet:
    period: int
    sma: Series
    ema: list[float]
    rsi: Series
    macd: list[float]
    signal_line: list[float]

    def as_dict(self) -> dict:
        """Serialise with the field names the chart front-end expects."""
        return {
            f"SMA_{self.period}": self.sma,
            f"EMA_{self.period}": self.ema,
            f"RSI_{self.period}": self.rsi,
            "MACD": self.macd,
            "Signal_Line": self.signal_line,
        }
