"""
Domain entity for a scalar fundamentals snapshot.
Zero external dependencies: pure Python dataclass only.
"""

import math
from dataclasses import dataclass
from typing import Any


def parse_metric(raw: Any) -> float:
    """Parse one provider field, defaulting to 0.0 when absent or unusable.

    Providers send numbers as strings and use placeholders such as
    "None" or "-" for missing values.
    """
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


@dataclass(frozen=True)
class Fundamentals:
    pe_ratio: float = 0.0
    roe: float = 0.0
    eps: float = 0.0
    debt_to_equity: float = 0.0

    @classmethod
    def neutral(cls) -> "Fundamentals":
        return cls()

    def as_dict(self) -> dict:
        return {
            "PE_Ratio": self.pe_ratio,
            "ROE": self.roe,
            "EPS": self.eps,
            "Debt_to_Equity": self.debt_to_equity,
        }
