"""
Factory for the process-wide catalog cache.

The cache is created once per process and injected wherever it is needed.
"""

import logging
from functools import lru_cache

from ingredient_api.core.config import get_settings

from .cache import CatalogCache
from .client import CatalogClient
from .matcher import CatalogMatcher

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_catalog_client() -> CatalogClient:
    """Get the configured catalog client."""
    settings = get_settings()
    return CatalogClient(base_url=settings.catalog_base_url, timeout=settings.catalog_timeout)


@lru_cache(maxsize=1)
def get_catalog_cache() -> CatalogCache:
    """
    Get the shared catalog cache.

    Configuration is read from settings:
    - catalog_ttl_hours: Cache lifetime
    - catalog_serve_stale: Serve an expired cache if a refresh fails
    - catalog_stale_retry_seconds: Wait between refetches while serving stale
    """
    settings = get_settings()
    logger.info(
        f"Initializing catalog cache: ttl={settings.catalog_ttl_hours}h, "
        f"serve_stale={settings.catalog_serve_stale}"
    )
    return CatalogCache(
        fetcher=get_catalog_client().fetch_all,
        ttl_seconds=settings.catalog_ttl_seconds,
        serve_stale=settings.catalog_serve_stale,
        stale_retry_seconds=settings.catalog_stale_retry_seconds,
    )


@lru_cache(maxsize=1)
def get_catalog_matcher() -> CatalogMatcher:
    """Get a matcher bound to the shared cache."""
    return CatalogMatcher.from_settings(get_catalog_cache(), get_settings())


def clear_service_cache():
    """Clear the cached instances (useful for testing)."""
    get_catalog_matcher.cache_clear()
    get_catalog_cache.cache_clear()
    get_catalog_client.cache_clear()
