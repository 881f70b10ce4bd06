"""Fixed thresholds used by the pattern detectors and signal aggregation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PatternThresholds:
    """Detector and signal-aggregation constants in one place.

    Percentages are fractions (0.03 == 3%) unless the name ends in ``_pct``.
    Display-only bands (oscillator and volume status in ``metrics``, the
    neutral oscillator value in ``indicators``) stay module constants there.
    """

    # Windows
    resistance_window: int = 40
    recent_window: int = 20
    consolidation_window: int = 15
    higher_lows_window: int = 10
    oscillator_period: int = 14

    # Trend classification
    trend_band: float = 0.02

    # Pullback to Support
    pullback_sma_tolerance: float = 0.03
    pullback_support_tolerance: float = 0.05
    pullback_bounce_low: float = 30.0
    pullback_bounce_high: float = 50.0
    pullback_confidence_bouncing: int = 75
    pullback_confidence: int = 60
    pullback_stop_factor: float = 0.97

    # Near Breakout
    breakout_max_distance_pct: float = 3.0
    breakout_target_factor: float = 1.1
    breakout_stop_factor: float = 0.97
    breakout_confidence: int = 70

    # Oversold Bounce
    oversold_level: float = 35.0
    oversold_entry_factor: float = 1.02
    oversold_stop_factor: float = 0.95
    oversold_forming_confidence: int = 45
    oversold_ready_confidence: int = 65

    # Overbought
    overbought_level: float = 70.0
    overbought_high_factor: float = 0.98
    overbought_confidence: int = 60

    # Consolidation
    consolidation_max_range: float = 0.08
    consolidation_top: float = 0.7
    consolidation_bottom: float = 0.3
    consolidation_entry_factor: float = 1.02
    consolidation_stop_factor: float = 0.97
    consolidation_top_confidence: int = 60
    consolidation_bottom_confidence: int = 50

    # Signal aggregation
    base_strength: int = 50
    late_strength: int = 30
    ready_base_strength: int = 60
    strength_per_pattern: int = 10
    trend_alignment_bonus: int = 10
    max_strength: int = 90


DEFAULT_THRESHOLDS = PatternThresholds()
