"""Heuristic credibility scoring for news text."""

from .config import Settings, get_settings
from .engine import TruthLensEngine
from .errors import InvalidUrl, MalformedInput, ProviderUnavailable, TruthLensError
from .models import AnalysisResult, SourceRecord, Verdict

__all__ = [
    "AnalysisResult",
    "InvalidUrl",
    "MalformedInput",
    "ProviderUnavailable",
    "Settings",
    "SourceRecord",
    "TruthLensEngine",
    "TruthLensError",
    "Verdict",
    "get_settings",
]

__version__ = "2.0.1"
