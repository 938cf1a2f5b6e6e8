"""marketpulse - technical indicator engine for crypto market analysis."""

from marketpulse.analysis import analyze, analyze_batch
from marketpulse.config import EngineParameters, load_parameters
from marketpulse.errors import ConfigError, InsufficientDataError, InvalidInputError
from marketpulse.indicators.series import prepare
from marketpulse.models import AnalysisResult, Candle

__version__ = "0.1.0"

__all__ = [
    "analyze",
    "analyze_batch",
    "prepare",
    "load_parameters",
    "AnalysisResult",
    "Candle",
    "EngineParameters",
    "ConfigError",
    "InsufficientDataError",
    "InvalidInputError",
]
