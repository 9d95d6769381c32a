"""
Technical indicator engine: SMA, EMA, RSI and MACD over close prices.

Pure, stateless functions. Every output has the same length as its input;
entries still inside a warm-up period are None rather than 0. Empty input
yields empty output. Non-finite prices are not filtered and propagate
through the arithmetic, so callers sanitise raw feed data first.
"""

from typing import Optional, Sequence

from src.domain.entities.indicators import IndicatorSet, MACDResult

DEFAULT_PERIOD = 14
MACD_SHORT = 12
MACD_LONG = 26
MACD_SIGNAL = 9


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be a positive integer, got {period!r}")


def sma(series: Sequence[float], period: int) -> list[Optional[float]]:
    """Simple moving average over the trailing window [i - period, i).

    The window excludes bar i itself, so the value at i only uses bars
    strictly before it.
    """
    _check_period(period)
    values = list(series)
    result: list[Optional[float]] = []
    for i in range(len(values)):
        if i < period:
            result.append(None)
        else:
            result.append(sum(values[i - period:i]) / period)
    return result


def ema(series: Sequence[float], period: int) -> list[float]:
    """Exponential moving average seeded with the first price.

    Defined at every index (no warm-up), with k = 2 / (period + 1).
    """
    _check_period(period)
    k = 2 / (period + 1)
    result: list[float] = []
    for i, value in enumerate(series):
        if i == 0:
            result.append(value)
        else:
            result.append(value * k + result[i - 1] * (1 - k))
    return result


def rsi(series: Sequence[float], period: int) -> list[Optional[float]]:
    """Relative Strength Index over `period` price changes.

    RSI at close i averages the gains and losses of the `period` changes
    ending at i. When the average loss is zero, RS is taken as 100.
    """
    _check_period(period)
    values = list(series)
    gains: list[float] = []
    losses: list[float] = []
    for previous, current in zip(values, values[1:]):
        change = current - previous
        gains.append(max(0.0, change))
        losses.append(max(0.0, -change))

    result: list[Optional[float]] = [None] * min(period, len(values))
    for i in range(period, len(values)):
        avg_gain = sum(gains[i - period:i]) / period
        avg_loss = sum(losses[i - period:i]) / period
        rs = 100 if avg_loss == 0 else avg_gain / avg_loss
        result.append(100 - 100 / (1 + rs))
    return result


def macd(
    series: Sequence[float],
    short: int = MACD_SHORT,
    long: int = MACD_LONG,
    signal: int = MACD_SIGNAL,
) -> MACDResult:
    short_ema = ema(series, short)
    long_ema = ema(series, long)
    line = [s - l for s, l in zip(short_ema, long_ema)]
    return MACDResult(macd=line, signal_line=ema(line, signal))


def compute_indicator_set(closes: Sequence[float], period: int = DEFAULT_PERIOD) -> IndicatorSet:
    values = list(closes)
    macd_result = macd(values)
    return IndicatorSet(
        period=period,
        sma=sma(values, period),
        ema=ema(values, period),
        rsi=rsi(values, period),
        macd=macd_result.macd,
        signal_line=macd_result.signal_line,
    )
