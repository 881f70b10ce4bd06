"""Tests for entry status and signal aggregation."""

from __future__ import annotations

from analysis.patterns import PatternResult, PatternSignal, PatternStatus, PatternType
from analysis.signals import (
    EntryStatus,
    OverallSignal,
    aggregate_signal,
    determine_entry_status,
)
from analysis.thresholds import PatternThresholds
from analysis.trend import TrendAnalysis, TrendDirection


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _pattern(
    signal: PatternSignal = PatternSignal.BULLISH,
    status: PatternStatus = PatternStatus.READY,
    name: str = "Test Pattern",
) -> PatternResult:
    return PatternResult(
        name=name,
        type=PatternType.CONTINUATION,
        signal=signal,
        status=status,
        confidence=60,
        description="test",
    )


def _trend(short_term: TrendDirection = TrendDirection.SIDEWAYS) -> TrendAnalysis:
    return TrendAnalysis(
        short_term=short_term,
        long_term=TrendDirection.SIDEWAYS,
        sma20=100.0,
        sma50=100.0,
        current_price=100.0,
        strength=50,
    )


BULL_READY = _pattern()
BEAR_READY = _pattern(signal=PatternSignal.BEARISH)
BULL_FORMING = _pattern(status=PatternStatus.FORMING)
BEAR_CONFIRMED = _pattern(signal=PatternSignal.BEARISH, status=PatternStatus.CONFIRMED)


# ---------------------------------------------------------------------------
# Entry status
# ---------------------------------------------------------------------------

class TestEntryStatus:
    """Confirmed beats ready beats nothing."""

    def test_no_patterns_is_wait(self):
        assert determine_entry_status([]) == EntryStatus.WAIT

    def test_only_forming_is_wait(self):
        assert determine_entry_status([BULL_FORMING]) == EntryStatus.WAIT

    def test_ready(self):
        assert determine_entry_status([BULL_FORMING, BULL_READY]) == EntryStatus.READY

    def test_confirmed_is_late(self):
        assert determine_entry_status([BEAR_CONFIRMED]) == EntryStatus.LATE

    def test_confirmed_takes_precedence_over_ready(self):
        patterns = [BULL_READY, BULL_READY, BULL_READY, BEAR_CONFIRMED]
        assert determine_entry_status(patterns) == EntryStatus.LATE
        assert determine_entry_status(list(reversed(patterns))) == EntryStatus.LATE


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

class TestAggregateSignal:
    """BUY/SELL/HOLD and strength."""

    def test_wait_is_hold_50(self):
        decision = aggregate_signal([BULL_FORMING], _trend())
        assert decision.entry_status == EntryStatus.WAIT
        assert decision.overall_signal == OverallSignal.HOLD
        assert decision.signal_strength == 50

    def test_late_is_hold_30(self):
        decision = aggregate_signal([BULL_READY, BEAR_CONFIRMED], _trend(TrendDirection.UP))
        assert decision.entry_status == EntryStatus.LATE
        assert decision.overall_signal == OverallSignal.HOLD
        assert decision.signal_strength == 30
        assert "late" in decision.reason

    def test_single_bullish_ready(self):
        decision = aggregate_signal([BULL_READY], _trend(TrendDirection.DOWN))
        assert decision.overall_signal == OverallSignal.BUY
        assert decision.signal_strength == 70

    def test_buy_aligned_with_short_term_up(self):
        decision = aggregate_signal([BULL_READY], _trend(TrendDirection.UP))
        assert decision.overall_signal == OverallSignal.BUY
        assert decision.signal_strength == 80
        assert "aligned" in decision.reason

    def test_forming_patterns_do_not_vote(self):
        decision = aggregate_signal([BULL_READY, BULL_FORMING, BULL_FORMING], _trend())
        assert decision.signal_strength == 70

    def test_sell_on_bearish_majority(self):
        decision = aggregate_signal([BEAR_READY, BEAR_READY, BULL_READY], _trend())
        assert decision.overall_signal == OverallSignal.SELL
        assert decision.signal_strength == 80

    def test_sell_aligned_with_short_term_down(self):
        decision = aggregate_signal([BEAR_READY], _trend(TrendDirection.DOWN))
        assert decision.overall_signal == OverallSignal.SELL
        assert decision.signal_strength == 80

    def test_tie_is_hold_50(self):
        decision = aggregate_signal([BULL_READY, BEAR_READY], _trend(TrendDirection.UP))
        assert decision.entry_status == EntryStatus.READY
        assert decision.overall_signal == OverallSignal.HOLD
        assert decision.signal_strength == 50

    def test_strength_capped_at_90(self):
        decision = aggregate_signal([BULL_READY] * 4, _trend(TrendDirection.UP))
        assert decision.signal_strength == 90

    def test_alignment_bonus_applied_before_cap(self):
        # 60 + 2*10 = 80, +10 aligned = 90
        decision = aggregate_signal([BULL_READY] * 2, _trend(TrendDirection.UP))
        assert decision.signal_strength == 90

    def test_custom_thresholds(self):
        thresholds = PatternThresholds(ready_base_strength=40, strength_per_pattern=5)
        decision = aggregate_signal([BULL_READY], _trend(), thresholds)
        assert decision.signal_strength == 45
