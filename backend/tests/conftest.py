"""Pytest fixtures for the chart signal analyzer test suite.

Provides:
- FastAPI async test client (httpx.AsyncClient + ASGITransport)
- Scenario price series: pullback, oversold bounce/forming, overbought, short
- Payload builders for the pattern analysis endpoint
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from analysis.series import PriceSeries

# ---------------------------------------------------------------------------
# Scenario closes (highs/lows are close +/- 1, constant volume)
# ---------------------------------------------------------------------------

# Steady rise, then a pullback that tags SMA20 while SMA20 > SMA50.
PULLBACK_CLOSES: list[float] = (
    [float(c) for c in range(100, 150)]
    + [150.0, 151.0, 152.0, 149.0, 147.0, 148.0, 145.0, 144.0, 145.0, 143.0]
)

_OVERSOLD_BASE: list[float] = [100.0] * 46 + [
    98.0, 96.0, 97.0, 95.0, 93.0, 95.0, 93.0, 91.0, 92.0, 90.0, 88.0, 89.0, 87.0,
]
# Oscillator 28 and today's close above yesterday's low.
OVERSOLD_BOUNCE_CLOSES: list[float] = _OVERSOLD_BASE + [89.0]
# Oscillator 20 and today's close below yesterday's low.
OVERSOLD_FORMING_CLOSES: list[float] = _OVERSOLD_BASE + [85.0]

# Base, dip, then a sharp run into the 20-bar high with oscillator 75.
OVERBOUGHT_CLOSES: list[float] = [100.0] * 50 + [
    99.0, 98.0, 97.0, 96.0, 95.0, 98.0, 101.0, 104.0, 107.0, 110.0,
]

VOLUME = 1_000_000.0


def make_series(
    closes: list[float],
    *,
    spread: float = 1.0,
    volume: float = VOLUME,
    volumes: list[float] | None = None,
) -> PriceSeries:
    """Build a PriceSeries with highs/lows at close +/- ``spread``."""
    return PriceSeries.from_lists(
        closes=closes,
        highs=[c + spread for c in closes],
        lows=[c - spread for c in closes],
        volumes=volumes if volumes is not None else [volume] * len(closes),
    )


def make_payload(closes: list[float], symbol: str = "aapl", spread: float = 1.0) -> dict[str, Any]:
    """Request body for ``POST /analysis/patterns``."""
    return {
        "symbol": symbol,
        "closes": closes,
        "highs": [c + spread for c in closes],
        "lows": [c - spread for c in closes],
        "volumes": [VOLUME] * len(closes),
    }


# ---------------------------------------------------------------------------
# Series fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def pullback_series() -> PriceSeries:
    return make_series(PULLBACK_CLOSES)


@pytest.fixture()
def oversold_bounce_series() -> PriceSeries:
    return make_series(OVERSOLD_BOUNCE_CLOSES)


@pytest.fixture()
def oversold_forming_series() -> PriceSeries:
    return make_series(OVERSOLD_FORMING_CLOSES)


@pytest.fixture()
def overbought_series() -> PriceSeries:
    return make_series(OVERBOUGHT_CLOSES)


@pytest.fixture()
def short_series() -> PriceSeries:
    """Twenty bars: below the minimum history."""
    return make_series([100.0 + i for i in range(20)])


# ---------------------------------------------------------------------------
# HTTP client
# ---------------------------------------------------------------------------


@pytest.fixture()
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the FastAPI app."""
    from main import app  # noqa: E402

    transport = ASGITransport(app=app)  # type: ignore[arg-type]
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
