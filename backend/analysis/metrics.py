"""Supporting metrics: oscillator/volume state, pillars, ranges, S/R roles, R/R."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .indicators import TechnicalIndicators
from .levels import (
    FibonacciLevels,
    PivotLevels,
    calculate_fib_levels,
    calculate_pivot_points,
    detect_confluence_zones,
)
from .patterns import PatternResult
from .series import PriceSeries
from .trend import TrendAnalysis, TrendDirection

OVERSOLD = 30.0
OVERBOUGHT = 70.0
VOLUME_WINDOW = 10
VOLUME_BAND = 20.0
LONG_MA_WINDOW = 60

# (minimum ratio, status), checked top-down
RR_BANDS: list[tuple[float, str]] = [
    (3.0, "excellent"),
    (2.0, "good"),
    (1.5, "risky"),
]
RR_DEFAULT = "bad"


@dataclass(frozen=True)
class KeyMetrics:
    """Metrics shown next to the detected patterns."""
    rsi: float
    rsi_status: str  # "oversold", "normal", "overbought"
    volume_change: float  # % vs 10-bar average
    volume_status: str  # "weak", "normal", "strong"
    sma200: float  # long average over up to 60 bars
    above_sma200: bool
    week52_high: float
    week52_low: float
    distance_from_52_high: float
    distance_from_52_low: float
    score_3_pillars: int
    pillar_trend: bool
    pillar_value: bool
    pillar_momentum: bool
    support_level: float
    resistance_level: float
    sma50_role: str  # "support" or "resistance"
    sma20_role: str
    pivot_levels: PivotLevels
    fib_levels: FibonacciLevels
    confluence_zones: list[str] = field(default_factory=list)
    rr_ratio: float | None = None
    rr_status: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {
            name: getattr(self, name)
            for name in self.__dataclass_fields__
            if name not in ("pivot_levels", "fib_levels", "confluence_zones")
        }
        data["pivot_levels"] = self.pivot_levels.to_dict()
        data["fib_levels"] = self.fib_levels.to_dict()
        data["confluence_zones"] = list(self.confluence_zones)
        return data


def oscillator_status(rsi: float) -> str:
    if rsi < OVERSOLD:
        return "oversold"
    if rsi > OVERBOUGHT:
        return "overbought"
    return "normal"


def volume_change_percent(volumes: Sequence[float]) -> float:
    """Today's volume against the mean of the last 10 bars (today included)."""
    if len(volumes) == 0:
        return 0.0
    avg = float(np.mean(np.asarray(volumes[-VOLUME_WINDOW:], dtype=float)))
    if avg <= 0:
        return 0.0
    return (float(volumes[-1]) - avg) / avg * 100


def volume_status(change: float) -> str:
    if change > VOLUME_BAND:
        return "strong"
    if change < -VOLUME_BAND:
        return "weak"
    return "normal"


def support_resistance_roles(
    price: float,
    trend: TrendAnalysis,
    range_high: float,
    range_low: float,
) -> tuple[float, float]:
    """Pick (support, resistance) from where price sits against the averages.

    A moving average below price acts as support; above price it is the
    first resistance to reclaim.
    """
    if price > trend.sma50:
        return trend.sma50, range_high
    if price > trend.sma20:
        return trend.sma20, trend.sma50
    return range_low, trend.sma20


def risk_reward(
    patterns: Sequence[PatternResult],
    price: float,
) -> tuple[float | None, str | None]:
    """R/R from the first pattern (detector order) with a target and a stop.

    Undefined when price is already at or below the stop.
    """
    first = next(
        (p for p in patterns if p.target_price is not None and p.stop_loss is not None),
        None,
    )
    if first is None:
        return None, None

    potential_loss = price - first.stop_loss
    if potential_loss <= 0:
        return None, None

    ratio = (first.target_price - price) / potential_loss
    for minimum, status in RR_BANDS:
        if ratio >= minimum:
            return ratio, status
    return ratio, RR_DEFAULT


def calculate_metrics(
    series: PriceSeries,
    trend: TrendAnalysis,
    patterns: Sequence[PatternResult],
    rsi: float,
) -> KeyMetrics:
    """Build the metrics bundle for one analysis."""
    closes, highs, lows = series.closes, series.highs, series.lows
    price = trend.current_price

    change = volume_change_percent(series.volumes)
    sma200 = TechnicalIndicators.moving_average(closes, min(len(closes), LONG_MA_WINDOW))

    week52_high = float(np.max(highs))
    week52_low = float(np.min(lows))

    pillar_trend = (
        trend.short_term == TrendDirection.UP and trend.long_term != TrendDirection.DOWN
    )
    pillar_value = OVERSOLD <= rsi <= OVERBOUGHT
    pillar_momentum = change > -VOLUME_BAND

    support, resistance = support_resistance_roles(price, trend, week52_high, week52_low)
    rr_ratio, rr_status = risk_reward(patterns, price)

    pivots = calculate_pivot_points(highs, lows, closes)
    fib = calculate_fib_levels(highs, lows, price)
    zones = detect_confluence_zones(fib, pivots, trend.sma20, trend.sma50, price)

    return KeyMetrics(
        rsi=rsi,
        rsi_status=oscillator_status(rsi),
        volume_change=change,
        volume_status=volume_status(change),
        sma200=sma200,
        above_sma200=price > sma200,
        week52_high=week52_high,
        week52_low=week52_low,
        distance_from_52_high=(week52_high - price) / week52_high * 100,
        distance_from_52_low=(price - week52_low) / week52_low * 100,
        score_3_pillars=sum([pillar_trend, pillar_value, pillar_momentum]),
        pillar_trend=pillar_trend,
        pillar_value=pillar_value,
        pillar_momentum=pillar_momentum,
        support_level=support,
        resistance_level=resistance,
        sma50_role="support" if price > trend.sma50 else "resistance",
        sma20_role="support" if price > trend.sma20 else "resistance",
        pivot_levels=pivots,
        fib_levels=fib,
        confluence_zones=zones,
        rr_ratio=rr_ratio,
        rr_status=rr_status,
    )
