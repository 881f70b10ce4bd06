"""Short/long trend classification from moving-average relationships."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Sequence

from .indicators import TechnicalIndicators

TREND_BAND = 0.02


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    SIDEWAYS = "sideways"


@dataclass(frozen=True)
class TrendAnalysis:
    """Trend state at the most recent bar."""
    short_term: TrendDirection
    long_term: TrendDirection
    sma20: float
    sma50: float
    current_price: float
    strength: int  # 40 (conflicting), 50 (unclassified), 80 (aligned)

    @classmethod
    def neutral(cls) -> TrendAnalysis:
        """Zeroed trend used when there is not enough history."""
        return cls(
            short_term=TrendDirection.SIDEWAYS,
            long_term=TrendDirection.SIDEWAYS,
            sma20=0.0,
            sma50=0.0,
            current_price=0.0,
            strength=50,
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["short_term"] = self.short_term.value
        data["long_term"] = self.long_term.value
        return data


def _classify(value: float, reference: float, band: float) -> TrendDirection:
    if value > reference * (1 + band):
        return TrendDirection.UP
    if value < reference * (1 - band):
        return TrendDirection.DOWN
    return TrendDirection.SIDEWAYS


def analyze_trend(closes: Sequence[float], band: float = TREND_BAND) -> TrendAnalysis:
    """Classify trend from price vs SMA20 (short) and SMA20 vs SMA50 (long)."""
    current_price = float(closes[-1])
    sma20 = TechnicalIndicators.moving_average(closes, 20)
    sma50 = TechnicalIndicators.moving_average(closes, 50)

    short_term = _classify(current_price, sma20, band)
    long_term = _classify(sma20, sma50, band)

    if short_term == long_term and short_term != TrendDirection.SIDEWAYS:
        strength = 80
    elif short_term != long_term:
        strength = 40
    else:
        strength = 50

    return TrendAnalysis(
        short_term=short_term,
        long_term=long_term,
        sma20=sma20,
        sma50=sma50,
        current_price=current_price,
        strength=strength,
    )
