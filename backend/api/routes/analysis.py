"""Analysis API endpoint for chart pattern signals."""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter

from analysis.engine import analyze
from analysis.series import PriceSeries
from api.deps import AppSettings
from api.exceptions import RequestTooLargeError
from schemas.analysis import AnalyzeRequest, PatternAnalysisResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/patterns", response_model=PatternAnalysisResponse)
async def analyze_patterns(
    request: AnalyzeRequest,
    settings: AppSettings,
) -> PatternAnalysisResponse:
    """
    Detect entry patterns and derive a BUY/SELL/HOLD signal.

    Series shorter than MIN_BARS get a neutral HOLD response instead of
    an error. Malformed arrays are rejected with 422.
    """
    bars = len(request.closes)
    if bars > settings.MAX_BARS:
        raise RequestTooLargeError(bars, settings.MAX_BARS)

    series = PriceSeries.from_lists(
        closes=request.closes,
        highs=request.highs,
        lows=request.lows,
        volumes=request.volumes,
        opens=request.opens,
    )
    result = analyze(series, min_bars=settings.MIN_BARS)

    logger.info(
        "Analyzed %s: %d bars, %d patterns, %s (%d), entry %s",
        request.symbol.upper(),
        bars,
        len(result.patterns),
        result.overall_signal.value,
        result.signal_strength,
        result.entry_status.value,
    )

    return PatternAnalysisResponse(
        symbol=request.symbol.upper(),
        analyzed_at=datetime.now(timezone.utc),
        **result.to_dict(),
    )
