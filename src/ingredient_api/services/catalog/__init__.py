"""
Catalog Service - reconciles tags against a reference ingredient vocabulary.
"""

from .cache import CatalogCache
from .client import CatalogClient
from .factory import get_catalog_cache, get_catalog_client, get_catalog_matcher
from .matcher import CatalogMatch, CatalogMatcher, is_latin_text, morphological_variants
from .similarity import similarity

__all__ = [
    "CatalogCache",
    "CatalogClient",
    "CatalogMatch",
    "CatalogMatcher",
    "get_catalog_cache",
    "get_catalog_client",
    "get_catalog_matcher",
    "is_latin_text",
    "morphological_variants",
    "similarity",
]
