"""
Vision Analysis Service - upstream recognizers behind a common interface.

Gemini is the primary model path; the generic tagger is an optional extra
source and the input of the catalog-backed pipeline.
"""

from .base import VisionAnalysis, VisionAnalysisService
from .factory import get_tagger_client, get_vision_client, get_vision_sources
from .gemini_provider import GeminiVisionClient
from .parser import extract_json_array, parse_candidates
from .retry import ErrorKind, RetryPolicy, classify_status
from .tagger import TaggerClient

__all__ = [
    "VisionAnalysis",
    "VisionAnalysisService",
    "GeminiVisionClient",
    "TaggerClient",
    "ErrorKind",
    "RetryPolicy",
    "classify_status",
    "extract_json_array",
    "parse_candidates",
    "get_vision_client",
    "get_tagger_client",
    "get_vision_sources",
]
