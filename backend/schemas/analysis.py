"""Schemas for the pattern analysis endpoint."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# Request
class AnalyzeRequest(BaseModel):
    """Daily OHLCV window for one symbol, oldest first."""
    symbol: str = Field(min_length=1, max_length=20)
    closes: list[float]
    highs: list[float]
    lows: list[float]
    volumes: list[float]
    opens: list[float] | None = None


# Pattern Schemas
class EntryZoneDetail(BaseModel):
    low: float
    high: float


class PatternDetail(BaseModel):
    """Individual detected pattern."""
    name: str
    type: str  # "reversal", "continuation"
    signal: str  # "bullish", "bearish", "neutral"
    status: str  # "forming", "ready", "confirmed"
    confidence: int = Field(ge=0, le=100)
    description: str
    entry_zone: EntryZoneDetail | None = None
    breakout_level: float | None = None
    distance_to_breakout_percent: float | None = None
    target_price: float | None = None
    stop_loss: float | None = None


class TrendDetail(BaseModel):
    short_term: str  # "up", "down", "sideways"
    long_term: str
    sma20: float
    sma50: float
    current_price: float
    strength: int


# Metrics Schemas
class PivotLevelsDetail(BaseModel):
    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float


class FibLevelsDetail(BaseModel):
    swing_high: float
    swing_low: float
    fib236: float
    fib382: float
    fib500: float
    fib618: float
    fib786: float


class MetricsDetail(BaseModel):
    """Supporting metrics for a full analysis."""
    rsi: float = Field(ge=0.0, le=100.0)
    rsi_status: str
    volume_change: float
    volume_status: str
    sma200: float
    above_sma200: bool
    week52_high: float
    week52_low: float
    distance_from_52_high: float
    distance_from_52_low: float
    score_3_pillars: int = Field(ge=0, le=3)
    pillar_trend: bool
    pillar_value: bool
    pillar_momentum: bool
    support_level: float
    resistance_level: float
    sma50_role: str
    sma20_role: str
    rr_ratio: float | None = None
    rr_status: str | None = None
    pivot_levels: PivotLevelsDetail
    fib_levels: FibLevelsDetail
    confluence_zones: list[str] = []


# Advanced Indicator Schemas
class MACDDetail(BaseModel):
    macd_line: float
    signal_line: float
    histogram: float
    trend: str
    histogram_trend: str
    loss_of_momentum: bool


class OBVDetail(BaseModel):
    obv: float
    obv_trend: str
    obv_divergence: str


class DivergenceDetail(BaseModel):
    type: str
    indicator: str
    description: str
    severity: str


class CandleDetail(BaseModel):
    name: str
    signal: str
    confidence: int


class ChandelierDetail(BaseModel):
    long: float
    short: float


class AdvancedDetail(BaseModel):
    """Informational indicators; they never change the signal."""
    macd: MACDDetail
    obv: OBVDetail
    divergences: list[DivergenceDetail] = []
    trend_phase: str
    candle_pattern: CandleDetail
    atr: float
    chandelier_exit: ChandelierDetail
    ema5: float
    is_price_stabilized: bool
    is_momentum_returning: bool
    atr_multiplier: float
    suggested_stop_loss: float
    suggested_take_profit: float
    volume_confirmation: bool
    rsi_interpretation: str


class PatternAnalysisResponse(BaseModel):
    """Response schema for pattern analysis endpoint."""
    model_config = ConfigDict(from_attributes=True)

    symbol: str
    analyzed_at: datetime
    current_price: float
    price_change: float
    price_change_percent: float
    patterns: list[PatternDetail]
    trend: TrendDetail
    overall_signal: str  # "BUY", "SELL", "HOLD"
    signal_strength: int = Field(ge=0, le=90)
    entry_status: str  # "ready", "wait", "late"
    decision_reason: str
    metrics: MetricsDetail | None = None
    advanced: AdvancedDetail | None = None
