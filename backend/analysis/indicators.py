"""Technical analysis indicators for daily price series.

Every function returns the indicator value at the most recent bar. Short
inputs fall back to a defined value instead of raising.
"""
from typing import List, Sequence

import numpy as np

NEUTRAL_OSCILLATOR = 50.0


class TechnicalIndicators:
    """Calculate technical analysis indicators."""

    @staticmethod
    def moving_average(prices: Sequence[float], period: int) -> float:
        """Simple Moving Average of the last ``period`` values.

        With fewer than ``period`` values the most recent value is returned.
        """
        if len(prices) == 0:
            return 0.0
        if len(prices) < period:
            return float(prices[-1])
        return float(np.mean(np.asarray(prices[-period:], dtype=float)))

    @staticmethod
    def momentum_oscillator(prices: Sequence[float], period: int = 14) -> float:
        """RSI-style momentum score (0-100).

        Gains and losses over exactly the last ``period`` deltas are averaged
        with a plain mean, not Wilder smoothing.
        """
        if len(prices) < period + 1:
            return NEUTRAL_OSCILLATOR

        changes = np.diff(np.asarray(prices[-(period + 1):], dtype=float))
        avg_gain = float(changes[changes > 0].sum()) / period
        avg_loss = float(-changes[changes < 0].sum()) / period

        if avg_loss == 0:
            return 100.0
        rs = avg_gain / avg_loss
        return 100 - (100 / (1 + rs))

    @staticmethod
    def ema_series(prices: Sequence[float], period: int) -> List[float]:
        """Exponential Moving Average at every bar.

        Bars before the SMA seed carry their own price, so the value at
        index ``i`` matches :meth:`ema` of ``prices[:i + 1]``.
        """
        values = [float(p) for p in prices]
        if len(values) < period:
            return values

        multiplier = 2 / (period + 1)
        result = values[:period - 1]

        # First EMA value is the SMA
        ema = sum(values[:period]) / period
        result.append(ema)
        for price in values[period:]:
            ema = (price - ema) * multiplier + ema
            result.append(ema)
        return result

    @staticmethod
    def ema(prices: Sequence[float], period: int) -> float:
        """Exponential Moving Average; the last value when history is short."""
        if len(prices) == 0:
            return 0.0
        return TechnicalIndicators.ema_series(prices, period)[-1]

    @staticmethod
    def atr(
        highs: Sequence[float],
        lows: Sequence[float],
        closes: Sequence[float],
        period: int = 14,
    ) -> float:
        """Average True Range as a simple mean of the last ``period`` true ranges."""
        if len(highs) < period + 1:
            return 0.0

        h = np.asarray(highs, dtype=float)
        l = np.asarray(lows, dtype=float)
        prev_close = np.asarray(closes, dtype=float)[:-1]

        true_ranges = np.maximum.reduce([
            h[1:] - l[1:],
            np.abs(h[1:] - prev_close),
            np.abs(l[1:] - prev_close),
        ])
        return TechnicalIndicators.moving_average(true_ranges, period)

    @staticmethod
    def std_dev(prices: Sequence[float], period: int) -> float:
        """Population standard deviation of the last ``period`` values."""
        if len(prices) < period:
            return 0.0
        return float(np.std(np.asarray(prices[-period:], dtype=float), ddof=0))


# Module-level shortcuts
moving_average = TechnicalIndicators.moving_average
momentum_oscillator = TechnicalIndicators.momentum_oscillator
