"""Analysis engine: the single entry point that runs the full pipeline."""

from dataclasses import dataclass, field
from typing import Any
import logging

from analysis.advanced import AdvancedIndicators, calculate_advanced
from analysis.indicators import TechnicalIndicators
from analysis.levels import find_key_levels
from analysis.metrics import KeyMetrics, calculate_metrics
from analysis.patterns import DetectionContext, PatternResult, detect_patterns
from analysis.series import PriceSeries
from analysis.signals import (
    EntryStatus,
    OverallSignal,
    aggregate_signal,
)
from analysis.thresholds import DEFAULT_THRESHOLDS, PatternThresholds
from analysis.trend import TrendAnalysis, analyze_trend

logger = logging.getLogger(__name__)

MIN_BARS = 30


@dataclass(frozen=True)
class AnalysisResponse:
    """Everything produced for one price series."""
    current_price: float
    price_change: float
    price_change_percent: float
    trend: TrendAnalysis
    overall_signal: OverallSignal
    signal_strength: int
    entry_status: EntryStatus
    decision_reason: str
    patterns: list[PatternResult] = field(default_factory=list)
    metrics: KeyMetrics | None = None
    advanced: AdvancedIndicators | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "current_price": self.current_price,
            "price_change": self.price_change,
            "price_change_percent": self.price_change_percent,
            "patterns": [p.to_dict() for p in self.patterns],
            "trend": self.trend.to_dict(),
            "overall_signal": self.overall_signal.value,
            "signal_strength": self.signal_strength,
            "entry_status": self.entry_status.value,
            "decision_reason": self.decision_reason,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "advanced": self.advanced.to_dict() if self.advanced else None,
        }


def neutral_response(reason: str = "Not enough price history") -> AnalysisResponse:
    """Well-formed HOLD/wait response used when the series is too short."""
    return AnalysisResponse(
        current_price=0.0,
        price_change=0.0,
        price_change_percent=0.0,
        trend=TrendAnalysis.neutral(),
        overall_signal=OverallSignal.HOLD,
        signal_strength=DEFAULT_THRESHOLDS.base_strength,
        entry_status=EntryStatus.WAIT,
        decision_reason=reason,
    )


def analyze(
    series: PriceSeries,
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS,
    min_bars: int = MIN_BARS,
) -> AnalysisResponse:
    """
    Run the full pattern analysis on a validated price series.

    Pure and deterministic: the same series always gives the same response.

    Args:
        series: Daily OHLCV snapshot, oldest first.
        thresholds: Detector and aggregation constants.
        min_bars: Below this length the neutral response is returned.
            Values under 2 are raised to 2.

    Returns:
        AnalysisResponse with patterns, trend, signal and metrics.
    """
    # The price change needs a previous close
    floor = max(min_bars, 2)
    if len(series) < floor:
        logger.info(
            "Series has %d bars (< %d); returning neutral response",
            len(series),
            floor,
        )
        return neutral_response()

    closes = series.closes
    current_price = series.current_price
    previous_close = float(closes[-2])
    price_change = current_price - previous_close
    price_change_percent = price_change / previous_close * 100

    trend = analyze_trend(closes, thresholds.trend_band)
    levels = find_key_levels(
        series.highs,
        series.lows,
        closes,
        resistance_window=thresholds.resistance_window,
        recent_window=thresholds.recent_window,
    )
    oscillator = TechnicalIndicators.momentum_oscillator(closes, thresholds.oscillator_period)

    ctx = DetectionContext(
        series=series,
        trend=trend,
        levels=levels,
        oscillator=oscillator,
        thresholds=thresholds,
    )
    patterns = detect_patterns(ctx)
    decision = aggregate_signal(patterns, trend, thresholds)

    metrics = calculate_metrics(series, trend, patterns, oscillator)
    advanced = calculate_advanced(series, trend, oscillator)

    return AnalysisResponse(
        current_price=current_price,
        price_change=price_change,
        price_change_percent=price_change_percent,
        patterns=patterns,
        trend=trend,
        overall_signal=decision.overall_signal,
        signal_strength=decision.signal_strength,
        entry_status=decision.entry_status,
        decision_reason=decision.reason,
        metrics=metrics,
        advanced=advanced,
    )
