"""
Factory for creating vision analysis service instances.

Reads configuration from settings and returns the configured providers.
"""

import logging
from functools import lru_cache

from ingredient_api.core.config import get_settings

from .base import VisionAnalysisService
from .gemini_provider import GeminiVisionClient
from .retry import RetryPolicy
from .tagger import TaggerClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_vision_client() -> GeminiVisionClient:
    """
    Get the configured Gemini vision client.

    Configuration is read from settings:
    - gemini_api_key: Google AI API key
    - gemini_primary_model / gemini_fallback_model: Model names
    - gemini_timeout / gemini_fallback_timeout: Per-call timeouts
    - retry_*: Attempt budget and backoff delays
    """
    settings = get_settings()

    if not settings.is_vision_configured:
        logger.warning("Gemini vision not configured (missing API key)")

    logger.info(
        f"Configuring Gemini provider: primary={settings.gemini_primary_model}, "
        f"fallback={settings.gemini_fallback_model}"
    )

    return GeminiVisionClient(
        api_key=settings.gemini_api_key,
        base_url=settings.gemini_base_url,
        primary_model=settings.gemini_primary_model,
        fallback_model=settings.gemini_fallback_model,
        timeout=settings.gemini_timeout,
        fallback_timeout=settings.gemini_fallback_timeout,
        retry_policy=RetryPolicy.from_settings(settings),
    )


@lru_cache(maxsize=1)
def get_tagger_client() -> TaggerClient:
    """Get the configured generic tagger client."""
    settings = get_settings()
    return TaggerClient(base_url=settings.tagger_base_url, timeout=settings.tagger_timeout)


def get_vision_sources() -> list[VisionAnalysisService]:
    """Sources the vision pipeline fans out to."""
    settings = get_settings()
    sources: list[VisionAnalysisService] = [get_vision_client()]
    if settings.tagger_enabled:
        sources.append(get_tagger_client())
    return sources


def clear_service_cache():
    """Clear the cached client instances (useful for testing)."""
    get_vision_client.cache_clear()
    get_tagger_client.cache_clear()
