from schemas.analysis import (
    AdvancedDetail,
    AnalyzeRequest,
    MetricsDetail,
    PatternAnalysisResponse,
    PatternDetail,
    TrendDetail,
)
from schemas.health import HealthResponse

__all__ = [
    "AdvancedDetail",
    "AnalyzeRequest",
    "HealthResponse",
    "MetricsDetail",
    "PatternAnalysisResponse",
    "PatternDetail",
    "TrendDetail",
]
