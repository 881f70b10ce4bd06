"""Entry-oriented chart pattern detectors.

Each detector shares one signature, ``(DetectionContext) -> PatternResult | None``,
and never raises: a missing pattern is ``None``. :data:`DETECTOR_ORDER` fixes
the evaluation order, which is part of the contract because downstream
consumers (risk/reward) read the first qualifying pattern.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from .levels import KeyLevels
from .series import PriceSeries
from .thresholds import DEFAULT_THRESHOLDS, PatternThresholds
from .trend import TrendAnalysis

logger = logging.getLogger(__name__)


class PatternType(str, Enum):
    REVERSAL = "reversal"
    CONTINUATION = "continuation"


class PatternSignal(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PatternStatus(str, Enum):
    FORMING = "forming"
    READY = "ready"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class EntryZone:
    low: float
    high: float


@dataclass(frozen=True)
class PatternResult:
    """A detected pattern. Never mutated after the detector returns it."""
    name: str
    type: PatternType
    signal: PatternSignal
    status: PatternStatus
    confidence: int  # 0 to 100
    description: str
    entry_zone: EntryZone | None = None
    breakout_level: float | None = None
    distance_to_breakout_percent: float | None = None
    target_price: float | None = None
    stop_loss: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "type": self.type.value,
            "signal": self.signal.value,
            "status": self.status.value,
            "confidence": self.confidence,
            "description": self.description,
            "entry_zone": (
                {"low": self.entry_zone.low, "high": self.entry_zone.high}
                if self.entry_zone else None
            ),
            "breakout_level": self.breakout_level,
            "distance_to_breakout_percent": self.distance_to_breakout_percent,
            "target_price": self.target_price,
            "stop_loss": self.stop_loss,
        }


@dataclass(frozen=True, eq=False)
class DetectionContext:
    """Everything a detector may read, computed once per analysis."""
    series: PriceSeries
    trend: TrendAnalysis
    levels: KeyLevels
    oscillator: float
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS

    @property
    def price(self) -> float:
        return self.trend.current_price


Detector = Callable[[DetectionContext], "PatternResult | None"]


def _distance_pct(level: float, price: float) -> float:
    return (level - price) / price * 100


def detect_pullback_to_support(ctx: DetectionContext) -> PatternResult | None:
    """Uptrend price pulled back to SMA20 or just above the recent low."""
    th = ctx.thresholds
    price = ctx.price
    sma20, sma50 = ctx.trend.sma20, ctx.trend.sma50
    levels = ctx.levels

    if not (sma20 > sma50 and price > sma50):
        return None

    near_sma20 = abs(price - sma20) / sma20 < th.pullback_sma_tolerance
    near_support = (price - levels.recent_low) / levels.recent_low < th.pullback_support_tolerance
    if not near_sma20 and not near_support:
        return None

    bouncing = th.pullback_bounce_low < ctx.oscillator < th.pullback_bounce_high
    if near_sma20:
        description = f"Pulled back to test SMA20 ({sma20:.2f}); buy zone"
    else:
        description = f"Pulled back near support ({levels.recent_low:.2f}); buy zone"

    return PatternResult(
        name="Pullback to Support",
        type=PatternType.CONTINUATION,
        signal=PatternSignal.BULLISH,
        status=PatternStatus.READY,
        confidence=th.pullback_confidence_bouncing if bouncing else th.pullback_confidence,
        description=description,
        entry_zone=EntryZone(low=levels.recent_low, high=sma20),
        breakout_level=levels.recent_high,
        distance_to_breakout_percent=_distance_pct(levels.recent_high, price),
        target_price=levels.recent_high,
        stop_loss=levels.recent_low * th.pullback_stop_factor,
    )


def detect_near_breakout(ctx: DetectionContext) -> PatternResult | None:
    """Price just under resistance while lows keep rising (compression)."""
    th = ctx.thresholds
    price = ctx.price
    resistance = ctx.levels.resistance
    lows = ctx.series.lows

    distance = _distance_pct(resistance, price)
    if not 0 < distance < th.breakout_max_distance_pct:
        return None

    window = th.higher_lows_window
    if len(lows) < window:
        return None
    half = window // 2
    recent_lows = lows[-window:]
    avg_first = float(np.mean(recent_lows[:half]))
    avg_second = float(np.mean(recent_lows[half:]))
    if avg_second <= avg_first:
        return None

    return PatternResult(
        name="Near Breakout",
        type=PatternType.CONTINUATION,
        signal=PatternSignal.BULLISH,
        status=PatternStatus.READY,
        confidence=th.breakout_confidence,
        description=f"Close to breaking resistance ({resistance:.2f}); watch for the breakout",
        entry_zone=EntryZone(low=avg_second, high=resistance),
        breakout_level=resistance,
        distance_to_breakout_percent=distance,
        target_price=resistance * th.breakout_target_factor,
        stop_loss=avg_second * th.breakout_stop_factor,
    )


def detect_oversold_bounce(ctx: DetectionContext) -> PatternResult | None:
    """Oversold oscillator; ready once today's close clears yesterday's low."""
    th = ctx.thresholds
    if ctx.oscillator >= th.oversold_level:
        return None

    closes, lows = ctx.series.closes, ctx.series.lows
    if len(closes) < 2:
        return None

    price = ctx.price
    sma50 = ctx.trend.sma50
    stop = ctx.levels.recent_low * th.oversold_stop_factor
    bouncing = closes[-1] > lows[-2]

    if not bouncing:
        return PatternResult(
            name="Oversold (Forming)",
            type=PatternType.REVERSAL,
            signal=PatternSignal.BULLISH,
            status=PatternStatus.FORMING,
            confidence=th.oversold_forming_confidence,
            description=f"RSI {ctx.oscillator:.0f} is oversold; wait for a bounce before entering",
            breakout_level=sma50,
            distance_to_breakout_percent=_distance_pct(sma50, price),
            stop_loss=stop,
        )

    return PatternResult(
        name="Oversold Bounce",
        type=PatternType.REVERSAL,
        signal=PatternSignal.BULLISH,
        status=PatternStatus.READY,
        confidence=th.oversold_ready_confidence,
        description=f"RSI {ctx.oscillator:.0f} and price starting to bounce; entry possible",
        entry_zone=EntryZone(low=ctx.levels.recent_low, high=price * th.oversold_entry_factor),
        breakout_level=sma50,
        distance_to_breakout_percent=_distance_pct(sma50, price),
        target_price=sma50,
        stop_loss=stop,
    )


def detect_overbought(ctx: DetectionContext) -> PatternResult | None:
    """Overbought at the recent high: the move already happened."""
    th = ctx.thresholds
    if ctx.oscillator < th.overbought_level:
        return None
    if ctx.price < ctx.levels.recent_high * th.overbought_high_factor:
        return None

    return PatternResult(
        name="Overbought (Late)",
        type=PatternType.REVERSAL,
        signal=PatternSignal.BEARISH,
        status=PatternStatus.CONFIRMED,
        confidence=th.overbought_confidence,
        description=f"RSI {ctx.oscillator:.0f} at the highs; buying here is risky",
        breakout_level=ctx.levels.recent_high,
        distance_to_breakout_percent=0.0,
    )


def detect_consolidation(ctx: DetectionContext) -> PatternResult | None:
    """Tight 15-bar box with price near its top (ready) or bottom (forming)."""
    th = ctx.thresholds
    window = th.consolidation_window
    highs, lows = ctx.series.highs, ctx.series.lows
    if len(highs) == 0:
        return None

    range_high = float(np.max(highs[-window:]))
    range_low = float(np.min(lows[-window:]))
    width = range_high - range_low
    if width <= 0:
        return None

    range_pct = width / range_low
    if range_pct >= th.consolidation_max_range:
        return None

    price = ctx.price
    position = (price - range_low) / width
    distance = _distance_pct(range_high, price)

    if position > th.consolidation_top:
        return PatternResult(
            name="Consolidation (Near Top)",
            type=PatternType.CONTINUATION,
            signal=PatternSignal.BULLISH,
            status=PatternStatus.READY,
            confidence=th.consolidation_top_confidence,
            description=(
                f"Tight {range_pct * 100:.1f}% box near its top; "
                f"breakout above {range_high:.2f} likely"
            ),
            entry_zone=EntryZone(low=range_low, high=price),
            breakout_level=range_high,
            distance_to_breakout_percent=distance,
            target_price=range_high + width,
            stop_loss=range_low * th.consolidation_stop_factor,
        )

    if position < th.consolidation_bottom:
        return PatternResult(
            name="Consolidation (Near Bottom)",
            type=PatternType.CONTINUATION,
            signal=PatternSignal.BULLISH,
            status=PatternStatus.FORMING,
            confidence=th.consolidation_bottom_confidence,
            description=f"Tight box with price near support {range_low:.2f}; wait for confirmation",
            entry_zone=EntryZone(low=range_low, high=range_low * th.consolidation_entry_factor),
            breakout_level=range_high,
            distance_to_breakout_percent=distance,
            target_price=range_high,
            stop_loss=range_low * th.consolidation_stop_factor,
        )

    return None


# Evaluation order; the first entry has the highest priority.
DETECTOR_ORDER: tuple[tuple[str, Detector], ...] = (
    ("pullback_to_support", detect_pullback_to_support),
    ("near_breakout", detect_near_breakout),
    ("oversold_bounce", detect_oversold_bounce),
    ("overbought", detect_overbought),
    ("consolidation", detect_consolidation),
)


def detect_patterns(
    ctx: DetectionContext,
    detectors: tuple[tuple[str, Detector], ...] = DETECTOR_ORDER,
) -> list[PatternResult]:
    """Run every detector in order and collect the hits."""
    patterns: list[PatternResult] = []
    for key, detector in detectors:
        result = detector(ctx)
        if result is not None:
            logger.debug("Detector %s fired: %s (%s)", key, result.name, result.status.value)
            patterns.append(result)
    return patterns
