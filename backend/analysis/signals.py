"""Aggregate detected patterns into an entry status and an overall signal."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .patterns import PatternResult, PatternSignal, PatternStatus
from .thresholds import DEFAULT_THRESHOLDS, PatternThresholds
from .trend import TrendAnalysis, TrendDirection


class EntryStatus(str, Enum):
    READY = "ready"
    WAIT = "wait"
    LATE = "late"


class OverallSignal(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


@dataclass(frozen=True)
class SignalDecision:
    """Result of signal aggregation."""
    entry_status: EntryStatus
    overall_signal: OverallSignal
    signal_strength: int  # 0 to 90
    reason: str


def determine_entry_status(patterns: Sequence[PatternResult]) -> EntryStatus:
    """Confirmed patterns take precedence over ready ones."""
    statuses = {p.status for p in patterns}
    if PatternStatus.CONFIRMED in statuses:
        return EntryStatus.LATE
    if PatternStatus.READY in statuses:
        return EntryStatus.READY
    return EntryStatus.WAIT


def aggregate_signal(
    patterns: Sequence[PatternResult],
    trend: TrendAnalysis,
    thresholds: PatternThresholds = DEFAULT_THRESHOLDS,
) -> SignalDecision:
    """Derive BUY/SELL/HOLD and its strength from the detected patterns.

    Only ``ready`` patterns vote, and only when the entry status is ready.
    A late entry forces HOLD at a fixed low strength.
    """
    entry_status = determine_entry_status(patterns)

    if entry_status == EntryStatus.LATE:
        return SignalDecision(
            entry_status=entry_status,
            overall_signal=OverallSignal.HOLD,
            signal_strength=thresholds.late_strength,
            reason="Move already happened (confirmed pattern); entry is late",
        )

    if entry_status == EntryStatus.WAIT:
        return SignalDecision(
            entry_status=entry_status,
            overall_signal=OverallSignal.HOLD,
            signal_strength=thresholds.base_strength,
            reason="No actionable pattern yet; wait",
        )

    ready = [p for p in patterns if p.status == PatternStatus.READY]
    bullish = sum(1 for p in ready if p.signal == PatternSignal.BULLISH)
    bearish = sum(1 for p in ready if p.signal == PatternSignal.BEARISH)

    if bullish > bearish:
        signal, votes, aligned_with = OverallSignal.BUY, bullish, TrendDirection.UP
    elif bearish > bullish:
        signal, votes, aligned_with = OverallSignal.SELL, bearish, TrendDirection.DOWN
    else:
        return SignalDecision(
            entry_status=entry_status,
            overall_signal=OverallSignal.HOLD,
            signal_strength=thresholds.base_strength,
            reason=f"Ready patterns disagree ({bullish} bullish vs {bearish} bearish)",
        )

    strength = thresholds.ready_base_strength + thresholds.strength_per_pattern * votes
    reason = f"{votes} ready {'bullish' if signal == OverallSignal.BUY else 'bearish'} pattern(s)"
    if trend.short_term == aligned_with:
        strength += thresholds.trend_alignment_bonus
        reason += f", aligned with short-term {aligned_with.value}trend"
    strength = min(thresholds.max_strength, strength)

    return SignalDecision(
        entry_status=entry_status,
        overall_signal=signal,
        signal_strength=strength,
        reason=reason,
    )
