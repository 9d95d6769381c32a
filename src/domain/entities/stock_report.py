"""
Domain entity bundling a price history with its derived indicators.
Zero external dependencies: pure Python dataclass only.
"""

from dataclasses import dataclass

from src.domain.entities.fundamentals import Fundamentals
from src.domain.entities.indicators import IndicatorSet
from src.domain.entities.price_series import PriceSeries


@dataclass(frozen=True)
class StockDataReport:
    series: PriceSeries
    indicators: IndicatorSet
    fundamentals: Fundamentals
