"""Chart pattern and technical signal analysis package."""
from .engine import AnalysisResponse, analyze, neutral_response
from .exceptions import AnalysisError, ValidationError
from .indicators import TechnicalIndicators
from .series import PriceSeries
from .thresholds import DEFAULT_THRESHOLDS, PatternThresholds

__all__ = [
    "AnalysisError",
    "AnalysisResponse",
    "DEFAULT_THRESHOLDS",
    "PatternThresholds",
    "PriceSeries",
    "TechnicalIndicators",
    "ValidationError",
    "analyze",
    "neutral_response",
]
