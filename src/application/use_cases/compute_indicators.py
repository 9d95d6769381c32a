"""
Use-case: compute the indicator set for a caller-supplied close series.
Pure computation; no ports involved.
"""

import math
from typing import Sequence

from src.domain.entities.indicators import IndicatorSet
from src.domain.services.indicator_engine import DEFAULT_PERIOD, compute_indicator_set


class ComputeIndicatorsUseCase:
    def execute(self, closes: Sequence[float], period: int = DEFAULT_PERIOD) -> IndicatorSet:
        """
        Raises:
            ValueError: if *period* is not positive or a close is not finite.
        """
        if period < 1:
            raise ValueError("period must be a positive integer")
        if any(not math.isfinite(value) for value in closes):
            raise ValueError("close prices must be finite numbers")
        return compute_indicator_set(closes, period)
