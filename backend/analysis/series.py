"""Immutable OHLCV snapshot consumed by the analysis core."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from .exceptions import ValidationError


def _frozen(values: Sequence[float], field: str) -> np.ndarray:
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{field} must contain only numbers", field=field) from exc
    if arr.ndim != 1:
        raise ValidationError(f"{field} must be a flat sequence", field=field)
    if not np.all(np.isfinite(arr)):
        raise ValidationError(f"{field} contains NaN or infinite values", field=field)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class PriceSeries:
    """Parallel daily price arrays, oldest first.

    The caller removes gaps before building the series. Opens are optional
    and only feed the candlestick check.
    """

    closes: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    volumes: np.ndarray
    opens: np.ndarray | None = None

    @classmethod
    def from_lists(
        cls,
        closes: Sequence[float],
        highs: Sequence[float],
        lows: Sequence[float],
        volumes: Sequence[float],
        opens: Sequence[float] | None = None,
    ) -> PriceSeries:
        """Validate raw sequences and build a read-only series.

        Raises:
            ValidationError: On mismatched lengths, non-finite values,
                non-positive prices or negative volumes.
        """
        arrays = {
            "closes": _frozen(closes, "closes"),
            "highs": _frozen(highs, "highs"),
            "lows": _frozen(lows, "lows"),
            "volumes": _frozen(volumes, "volumes"),
        }
        if opens is not None:
            arrays["opens"] = _frozen(opens, "opens")

        expected = len(arrays["closes"])
        for field, arr in arrays.items():
            if len(arr) != expected:
                raise ValidationError(
                    f"{field} has {len(arr)} values, expected {expected}",
                    field=field,
                )
            if field != "volumes" and np.any(arr <= 0):
                raise ValidationError(f"{field} must be positive", field=field)

        if np.any(arrays["volumes"] < 0):
            raise ValidationError("volumes must not be negative", field="volumes")

        return cls(**arrays)

    @classmethod
    def from_prices(cls, prices: list[dict[str, Any]]) -> PriceSeries:
        """Build a series from OHLCV row dicts (``close``, ``high`` ...)."""
        has_opens = bool(prices) and all(p.get("open") is not None for p in prices)
        return cls.from_lists(
            closes=[p["close"] for p in prices],
            highs=[p["high"] for p in prices],
            lows=[p["low"] for p in prices],
            volumes=[p.get("volume", 0.0) for p in prices],
            opens=[p["open"] for p in prices] if has_opens else None,
        )

    def __len__(self) -> int:
        return len(self.closes)

    @property
    def current_price(self) -> float:
        return float(self.closes[-1])
