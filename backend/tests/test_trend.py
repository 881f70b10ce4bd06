"""Tests for trend classification."""

from __future__ import annotations

import pytest

from analysis.trend import TrendAnalysis, TrendDirection, analyze_trend


class TestAnalyzeTrend:
    """Short term is price vs SMA20, long term is SMA20 vs SMA50."""

    def test_aligned_uptrend(self):
        closes = [100.0 + 2 * i for i in range(60)]
        trend = analyze_trend(closes)

        assert trend.short_term == TrendDirection.UP
        assert trend.long_term == TrendDirection.UP
        assert trend.strength == 80
        assert trend.current_price == 218.0
        assert trend.sma20 == pytest.approx(sum(closes[-20:]) / 20)
        assert trend.sma50 == pytest.approx(sum(closes[-50:]) / 50)

    def test_aligned_downtrend(self):
        closes = [300.0 - 2 * i for i in range(60)]
        trend = analyze_trend(closes)
        assert trend.short_term == TrendDirection.DOWN
        assert trend.long_term == TrendDirection.DOWN
        assert trend.strength == 80

    def test_flat_is_sideways_with_neutral_strength(self):
        trend = analyze_trend([100.0] * 60)
        assert trend.short_term == TrendDirection.SIDEWAYS
        assert trend.long_term == TrendDirection.SIDEWAYS
        assert trend.strength == 50

    def test_conflicting_directions(self):
        # Long rise, then a drop below SMA20
        closes = [float(c) for c in range(100, 150)] + [
            150.0, 151.0, 152.0, 149.0, 147.0, 148.0, 145.0, 144.0, 145.0, 143.0,
        ]
        trend = analyze_trend(closes)
        assert trend.short_term == TrendDirection.DOWN
        assert trend.long_term == TrendDirection.UP
        assert trend.strength == 40

    def test_band_boundary_is_sideways(self):
        # SMA20 = 100.1, and 102 is not above 100.1 * 1.02
        closes = [100.0] * 59 + [102.0]
        trend = analyze_trend(closes)
        assert trend.short_term == TrendDirection.SIDEWAYS

    def test_short_history_falls_back_to_last_price(self):
        trend = analyze_trend([10.0, 11.0, 12.0])
        assert trend.sma20 == 12.0
        assert trend.sma50 == 12.0
        assert trend.short_term == TrendDirection.SIDEWAYS


class TestTrendAnalysis:
    """TrendAnalysis helpers."""

    def test_neutral(self):
        trend = TrendAnalysis.neutral()
        assert trend.strength == 50
        assert trend.current_price == 0.0
        assert trend.short_term == TrendDirection.SIDEWAYS

    def test_to_dict_uses_plain_values(self):
        data = analyze_trend([100.0 + 2 * i for i in range(60)]).to_dict()
        assert data["short_term"] == "up"
        assert data["long_term"] == "up"
        assert set(data) == {"short_term", "long_term", "sma20", "sma50", "current_price", "strength"}
