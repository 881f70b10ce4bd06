"""Support/resistance level finding from rolling windows and pivots."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Sequence

import numpy as np

RESISTANCE_WINDOW = 40
RECENT_WINDOW = 20
FIB_RECENT_WINDOW = 60
CONFLUENCE_TOLERANCE = 0.02


@dataclass(frozen=True)
class KeyLevels:
    """Rolling-window price levels.

    A single spike dominates its window; there is no outlier smoothing.
    """
    resistance: float
    support: float
    recent_high: float
    recent_low: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PivotLevels:
    """Floor-trader pivot levels derived from the previous bar."""
    pivot: float
    r1: float
    r2: float
    r3: float
    s1: float
    s2: float
    s3: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FibonacciLevels:
    """Retracement levels measured down from the swing high."""
    swing_high: float
    swing_low: float
    fib236: float
    fib382: float
    fib500: float
    fib618: float
    fib786: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _window_max(values: Sequence[float], window: int) -> float:
    return float(np.max(np.asarray(values[-window:], dtype=float)))


def _window_min(values: Sequence[float], window: int) -> float:
    return float(np.min(np.asarray(values[-window:], dtype=float)))


def find_key_levels(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float] | None = None,
    *,
    resistance_window: int = RESISTANCE_WINDOW,
    recent_window: int = RECENT_WINDOW,
) -> KeyLevels:
    """Resistance/support over the last 40 bars, recent swing over the last 20.

    ``closes`` is accepted for call-site symmetry and is not used.
    """
    return KeyLevels(
        resistance=_window_max(highs, resistance_window),
        support=_window_min(lows, resistance_window),
        recent_high=_window_max(highs, recent_window),
        recent_low=_window_min(lows, recent_window),
    )


def calculate_pivot_points(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> PivotLevels:
    """Classic pivot points using the previous bar (the last bar if only one)."""
    idx = -2 if len(closes) >= 2 else -1
    prev_high = float(highs[idx])
    prev_low = float(lows[idx])
    prev_close = float(closes[idx])

    pivot = (prev_high + prev_low + prev_close) / 3
    return PivotLevels(
        pivot=pivot,
        r1=2 * pivot - prev_low,
        r2=pivot + (prev_high - prev_low),
        r3=prev_high + 2 * (pivot - prev_low),
        s1=2 * pivot - prev_high,
        s2=pivot - (prev_high - prev_low),
        s3=prev_low - 2 * (prev_high - pivot),
    )


def calculate_fib_levels(
    highs: Sequence[float],
    lows: Sequence[float],
    current_price: float,
) -> FibonacciLevels:
    """Fibonacci retracements from the full-window swing.

    When the full swing is wider than 50% and price still trades inside the
    last 60 bars' range (with 10% slack), that tighter swing is used.
    """
    swing_high = float(np.max(highs))
    swing_low = float(np.min(lows))

    if swing_low > 0 and (swing_high - swing_low) / swing_low > 0.5:
        recent_high = _window_max(highs, FIB_RECENT_WINDOW)
        recent_low = _window_min(lows, FIB_RECENT_WINDOW)
        if recent_low * 0.9 <= current_price <= recent_high * 1.1:
            swing_high, swing_low = recent_high, recent_low

    diff = swing_high - swing_low
    return FibonacciLevels(
        swing_high=swing_high,
        swing_low=swing_low,
        fib236=swing_high - diff * 0.236,
        fib382=swing_high - diff * 0.382,
        fib500=swing_high - diff * 0.5,
        fib618=swing_high - diff * 0.618,
        fib786=swing_high - diff * 0.786,
    )


def _is_near(a: float, b: float, tolerance: float = CONFLUENCE_TOLERANCE) -> bool:
    larger = max(a, b)
    if larger <= 0:
        return False
    return abs(a - b) / larger < tolerance


def detect_confluence_zones(
    fib: FibonacciLevels,
    pivots: PivotLevels,
    sma20: float,
    sma50: float,
    current_price: float,
) -> list[str]:
    """Label every pair of independent levels sitting within 2% of each other."""
    checks = [
        (fib.fib382, sma20, f"Fib 38.2% ~ SMA20 ({sma20:.2f})"),
        (fib.fib500, sma20, f"Fib 50% ~ SMA20 ({sma20:.2f})"),
        (fib.fib618, sma50, f"Fib 61.8% ~ SMA50 ({sma50:.2f}) strong"),
        (fib.fib382, sma50, f"Fib 38.2% ~ SMA50 ({sma50:.2f})"),
        (fib.fib500, sma50, f"Fib 50% ~ SMA50 ({sma50:.2f}) strong"),
        (pivots.s1, fib.fib382, f"Pivot S1 ~ Fib 38.2% ({pivots.s1:.2f})"),
        (pivots.s1, fib.fib618, f"Pivot S1 ~ Fib 61.8% ({pivots.s1:.2f}) strong"),
        (pivots.r1, fib.fib236, f"Pivot R1 ~ Fib 23.6% ({pivots.r1:.2f})"),
        (current_price, fib.fib618, "Price near Fib 61.8% (golden zone)"),
        (current_price, pivots.pivot, "Price near pivot point"),
    ]
    return [label for a, b, label in checks if _is_near(a, b)]
