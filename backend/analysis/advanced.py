"""Informational indicator block attached to every full analysis.

Nothing here feeds back into pattern detection, entry status or the overall
signal; the values are context for whoever reads the response.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence

import numpy as np

from .indicators import TechnicalIndicators
from .series import PriceSeries
from .trend import TrendAnalysis, TrendDirection

logger = logging.getLogger(__name__)

MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
HISTOGRAM_LOOKBACK = 5
OBV_LOOKBACK = 10
DIVERGENCE_WINDOW = 20
TREND_PHASE_BARS = 40
CHANDELIER_PERIOD = 22
CHANDELIER_MULTIPLIER = 3.0
STOP_MULTIPLIER_BELOW_SMA50 = 1.5
STOP_MULTIPLIER_ABOVE_SMA50 = 2.5
REWARD_MULTIPLE = 2


class TrendPhase(str, Enum):
    ACCUMULATION = "accumulation"
    PARTICIPATION = "participation"
    DISTRIBUTION = "distribution"
    MARKDOWN = "markdown"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class MACDResult:
    macd_line: float
    signal_line: float
    histogram: float
    trend: str  # bullish, bearish, neutral
    histogram_trend: str  # expanding, contracting, flat
    loss_of_momentum: bool


@dataclass(frozen=True)
class OBVResult:
    obv: float
    obv_trend: str  # up, down, flat
    obv_divergence: str  # bullish, bearish, none


@dataclass(frozen=True)
class Divergence:
    type: str
    indicator: str
    description: str
    severity: str  # weak, moderate, strong


@dataclass(frozen=True)
class CandlePattern:
    name: str
    signal: str
    confidence: int


NO_CANDLE = CandlePattern(name="None", signal="neutral", confidence=0)


@dataclass(frozen=True)
class AdvancedIndicators:
    """MACD, OBV, divergences, trend phase and volatility-based exits."""
    macd: MACDResult
    obv: OBVResult
    trend_phase: TrendPhase
    candle_pattern: CandlePattern
    atr: float
    chandelier_long: float
    chandelier_short: float
    ema5: float
    is_price_stabilized: bool
    is_momentum_returning: bool
    atr_multiplier: float
    suggested_stop_loss: float
    suggested_take_profit: float
    volume_confirmation: bool
    rsi_interpretation: str
    divergences: List[Divergence] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "macd": asdict(self.macd),
            "obv": asdict(self.obv),
            "divergences": [asdict(d) for d in self.divergences],
            "trend_phase": self.trend_phase.value,
            "candle_pattern": asdict(self.candle_pattern),
            "atr": self.atr,
            "chandelier_exit": {
                "long": self.chandelier_long,
                "short": self.chandelier_short,
            },
            "ema5": self.ema5,
            "is_price_stabilized": self.is_price_stabilized,
            "is_momentum_returning": self.is_momentum_returning,
            "atr_multiplier": self.atr_multiplier,
            "suggested_stop_loss": self.suggested_stop_loss,
            "suggested_take_profit": self.suggested_take_profit,
            "volume_confirmation": self.volume_confirmation,
            "rsi_interpretation": self.rsi_interpretation,
        }


def calculate_macd(closes: Sequence[float]) -> MACDResult:
    """MACD(12, 26, 9) with a histogram trend over the last five bars.

    The MACD history starts at the first bar with a full slow EMA window;
    the signal line is the 9-period EMA of that history.
    """
    fast = TechnicalIndicators.ema_series(closes, MACD_FAST)
    slow = TechnicalIndicators.ema_series(closes, MACD_SLOW)
    macd_line = fast[-1] - slow[-1]

    history = [f - s for f, s in zip(fast[MACD_SLOW - 1:], slow[MACD_SLOW - 1:])]
    if len(history) >= MACD_SIGNAL:
        signal_history = TechnicalIndicators.ema_series(history, MACD_SIGNAL)
        signal_line = signal_history[-1]
    else:
        signal_history = history
        signal_line = macd_line
    histogram = macd_line - signal_line

    recent = [
        abs(m - s)
        for m, s in zip(history[-HISTOGRAM_LOOKBACK:], signal_history[-HISTOGRAM_LOOKBACK:])
    ]
    histogram_trend = "flat"
    if len(recent) >= 3:
        if recent[-1] > recent[-2]:
            histogram_trend = "expanding"
        elif recent[-1] < recent[-2]:
            histogram_trend = "contracting"

    first_recent = recent[0] if recent else 0.0
    loss_of_momentum = histogram_trend == "contracting" and abs(histogram) < first_recent

    if macd_line > signal_line:
        trend = "bullish"
    elif macd_line < signal_line:
        trend = "bearish"
    else:
        trend = "neutral"

    return MACDResult(
        macd_line=macd_line,
        signal_line=signal_line,
        histogram=histogram,
        trend=trend,
        histogram_trend=histogram_trend,
        loss_of_momentum=loss_of_momentum,
    )


def calculate_obv(closes: Sequence[float], volumes: Sequence[float]) -> OBVResult:
    """On-Balance Volume with a 10-bar trend and price divergence check."""
    if len(closes) < 2:
        return OBVResult(obv=0.0, obv_trend="flat", obv_divergence="none")

    c = np.asarray(closes, dtype=float)
    v = np.asarray(volumes, dtype=float)
    direction = np.sign(np.diff(c))
    history = np.concatenate(([0.0], np.cumsum(direction * v[1:])))

    recent = history[-OBV_LOOKBACK:]
    start, end = float(recent[0]), float(recent[-1])
    if end > start * 1.05:
        obv_trend = "up"
    elif end < start * 0.95:
        obv_trend = "down"
    else:
        obv_trend = "flat"

    price_start = float(c[-OBV_LOOKBACK]) if len(c) >= OBV_LOOKBACK else float(c[0])
    price_end = float(c[-1])
    divergence = "none"
    if price_end < price_start and obv_trend == "up":
        divergence = "bullish"
    elif price_end > price_start and obv_trend == "down":
        divergence = "bearish"

    return OBVResult(obv=float(history[-1]), obv_trend=obv_trend, obv_divergence=divergence)


def detect_rsi_divergence(closes: Sequence[float], period: int = 14) -> Optional[Divergence]:
    """Compare price and oscillator extremes across two 10-bar halves."""
    if len(closes) < period + DIVERGENCE_WINDOW:
        return None

    oscillator = [
        TechnicalIndicators.momentum_oscillator(closes[:i], period)
        for i in range(len(closes) - DIVERGENCE_WINDOW + 1, len(closes) + 1)
    ]
    prices = np.asarray(closes[-DIVERGENCE_WINDOW:], dtype=float)
    half = DIVERGENCE_WINDOW // 2
    osc_first, osc_second = oscillator[:half], oscillator[half:]

    price_high_1, price_high_2 = float(prices[:half].max()), float(prices[half:].max())
    osc_high_1, osc_high_2 = max(osc_first), max(osc_second)
    if price_high_2 > price_high_1 and osc_high_2 < osc_high_1 * 0.95:
        return Divergence(
            type="bearish",
            indicator="RSI",
            description="Price made a higher high but RSI a lower high; momentum is fading",
            severity="strong" if osc_high_2 < osc_high_1 * 0.85 else "moderate",
        )

    price_low_1, price_low_2 = float(prices[:half].min()), float(prices[half:].min())
    osc_low_1, osc_low_2 = min(osc_first), min(osc_second)
    if price_low_2 < price_low_1 and osc_low_2 > osc_low_1 * 1.05:
        return Divergence(
            type="bullish",
            indicator="RSI",
            description="Price made a lower low but RSI a higher low; a rebound may follow",
            severity="strong" if osc_low_2 > osc_low_1 * 1.15 else "moderate",
        )

    return None


def detect_trend_phase(
    closes: Sequence[float],
    volumes: Sequence[float],
    rsi: float,
) -> TrendPhase:
    """Dow-theory phase from 10/10/30-bar close means and volume means."""
    if len(closes) < TREND_PHASE_BARS:
        return TrendPhase.UNKNOWN

    c = np.asarray(closes, dtype=float)
    v = np.asarray(volumes, dtype=float)
    avg_recent = float(c[-10:].mean())
    avg_prev10 = float(c[-20:-10].mean())
    avg_prev30 = float(c[-40:-10].mean())
    volume_recent = float(v[-10:].mean())
    volume_prev = float(v[-20:-10].mean())

    if (
        avg_prev30 < avg_recent < avg_prev10 * 1.05
        and rsi < 50
        and volume_recent < volume_prev
    ):
        return TrendPhase.ACCUMULATION
    if (
        avg_recent > avg_prev10 * 1.05
        and avg_recent > avg_prev30 * 1.1
        and volume_recent > volume_prev
    ):
        return TrendPhase.PARTICIPATION
    if avg_recent > avg_prev30 * 1.1 and rsi > 60 and volume_recent < volume_prev * 0.8:
        return TrendPhase.DISTRIBUTION
    if avg_recent < avg_prev10 * 0.95 and avg_recent < avg_prev30 * 0.9:
        return TrendPhase.MARKDOWN
    return TrendPhase.UNKNOWN


def detect_candle_pattern(series: PriceSeries) -> CandlePattern:
    """Classify the last candle; needs opens and at least two bars."""
    if series.opens is None or len(series) < 2:
        return NO_CANDLE

    o, h, l, c = (float(a[-1]) for a in (series.opens, series.highs, series.lows, series.closes))
    prev_open, prev_close = float(series.opens[-2]), float(series.closes[-2])

    body = abs(c - o)
    candle_range = h - l
    upper_shadow = h - max(o, c)
    lower_shadow = min(o, c) - l

    if lower_shadow > body * 2 and upper_shadow < body * 0.5:
        return CandlePattern(name="Bullish Hammer", signal="bullish", confidence=75)
    if c > o and prev_close < prev_open and c > prev_open and o < prev_close:
        return CandlePattern(name="Bullish Engulfing", signal="bullish", confidence=85)
    if body < candle_range * 0.1:
        return CandlePattern(name="Doji", signal="neutral", confidence=50)
    if upper_shadow > body * 2 and lower_shadow < body * 0.5:
        return CandlePattern(name="Inverted Hammer", signal="bullish", confidence=60)
    return NO_CANDLE


def chandelier_exit(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = CHANDELIER_PERIOD,
    multiplier: float = CHANDELIER_MULTIPLIER,
) -> tuple[float, float]:
    """Trailing (long, short) exits from the period extreme and ATR."""
    atr = TechnicalIndicators.atr(highs, lows, closes, period)
    highest = float(np.max(np.asarray(highs[-period:], dtype=float)))
    lowest = float(np.min(np.asarray(lows[-period:], dtype=float)))
    return highest - atr * multiplier, lowest + atr * multiplier


def interpret_rsi(rsi: float, short_term: TrendDirection) -> str:
    """Read the oscillator relative to the short-term regime."""
    if short_term == TrendDirection.UP:
        if 40 <= rsi <= 55:
            return "RSI pulled back to support in an uptrend; buy the dip"
        if rsi > 70:
            return "RSI overbought but the trend is up; no need to sell yet"
        if rsi < 40:
            return "RSI broke below support; the trend may be turning"
        return "RSI normal for an uptrend"

    if short_term == TrendDirection.DOWN:
        if 50 <= rsi <= 60:
            return "RSI rallied into resistance in a downtrend; short the rally"
        if rsi < 30:
            return "RSI oversold but the trend is down; it may keep falling"
        if rsi > 60:
            return "RSI broke above resistance; the trend may be turning"
        return "RSI normal for a downtrend"

    if rsi > 70:
        return "RSI overbought in a range; mean reversion favors selling"
    if rsi < 30:
        return "RSI oversold in a range; mean reversion favors buying"
    return "RSI normal in a sideways market"


def calculate_advanced(
    series: PriceSeries,
    trend: TrendAnalysis,
    rsi: float,
) -> AdvancedIndicators:
    """Compute the full advanced block for a series of at least 30 bars."""
    closes, highs, lows, volumes = series.closes, series.highs, series.lows, series.volumes
    price = trend.current_price

    macd = calculate_macd(closes)
    obv = calculate_obv(closes, volumes)

    divergences: List[Divergence] = []
    rsi_divergence = detect_rsi_divergence(closes)
    if rsi_divergence is not None:
        divergences.append(rsi_divergence)
    if obv.obv_divergence != "none":
        if obv.obv_divergence == "bearish":
            description = "Price rising while OBV falls; volume is leaving"
        else:
            description = "Price falling while OBV rises; volume is accumulating"
        divergences.append(Divergence(
            type=obv.obv_divergence,
            indicator="OBV",
            description=description,
            severity="moderate",
        ))

    atr = TechnicalIndicators.atr(highs, lows, closes)
    chandelier_long, chandelier_short = chandelier_exit(highs, lows, closes)
    ema5 = TechnicalIndicators.ema(closes, 5)

    atr_multiplier = (
        STOP_MULTIPLIER_BELOW_SMA50 if price < trend.sma50 else STOP_MULTIPLIER_ABOVE_SMA50
    )
    if atr > 0:
        stop = price - atr * atr_multiplier
        take_profit = price + (price - stop) * REWARD_MULTIPLE
    else:
        sigma = TechnicalIndicators.std_dev(closes, 20)
        stop = price - 2 * sigma
        take_profit = price + 2 * sigma * REWARD_MULTIPLE
        logger.debug("ATR is zero; using 2-sigma stop %.4f", stop)

    volume_confirmation = (
        (trend.short_term == TrendDirection.UP and obv.obv_trend == "up")
        or (trend.short_term == TrendDirection.DOWN and obv.obv_trend == "down")
    )

    return AdvancedIndicators(
        macd=macd,
        obv=obv,
        divergences=divergences,
        trend_phase=detect_trend_phase(closes, volumes, rsi),
        candle_pattern=detect_candle_pattern(series),
        atr=atr,
        chandelier_long=chandelier_long,
        chandelier_short=chandelier_short,
        ema5=ema5,
        is_price_stabilized=price > ema5,
        is_momentum_returning=(
            macd.histogram_trend == "expanding"
            or (macd.histogram > 0 and macd.trend == "bullish")
        ),
        atr_multiplier=atr_multiplier,
        suggested_stop_loss=stop,
        suggested_take_profit=take_profit,
        volume_confirmation=volume_confirmation,
        rsi_interpretation=interpret_rsi(rsi, trend.short_term),
    )
