"""FastAPI dependency injection factories."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from ingredient_api.core.config import get_settings
from ingredient_api.services.catalog import get_catalog_client, get_catalog_matcher
from ingredient_api.services.catalog import factory as catalog_factory
from ingredient_api.services.classification import FoodClassifier
from ingredient_api.services.consolidation import ResultConsolidator
from ingredient_api.services.recognition import (
    CatalogRecognitionService,
    IngredientRecognitionService,
)
from ingredient_api.services.vision import factory as vision_factory
from ingredient_api.services.vision import get_tagger_client, get_vision_sources


@lru_cache(maxsize=1)
def get_recognition_service() -> IngredientRecognitionService:
    """
    Get the vision pipeline.

    Returns:
        IngredientRecognitionService fanning out to every configured source
    """
    settings = get_settings()
    return IngredientRecognitionService(
        sources=get_vision_sources(),
        food_classifier=FoodClassifier(dominance_ratio=settings.dominance_ratio),
        consolidator=ResultConsolidator.from_settings(settings),
        unknown_model_discount=settings.unknown_model_discount,
        unknown_tagger_discount=settings.unknown_tagger_discount,
    )


@lru_cache(maxsize=1)
def get_catalog_recognition_service() -> CatalogRecognitionService:
    """
    Get the catalog-backed pipeline.

    Returns:
        CatalogRecognitionService sharing the process-wide catalog cache
    """
    return CatalogRecognitionService(
        tagger=get_tagger_client(),
        matcher=get_catalog_matcher(),
        catalog_client=get_catalog_client(),
    )


def clear_service_cache():
    """Clear the cached pipelines and clients (useful for testing)."""
    vision_factory.clear_service_cache()
    catalog_factory.clear_service_cache()
    get_recognition_service.cache_clear()
    get_catalog_recognition_service.cache_clear()


# Type aliases for service dependencies
RecognitionServiceDep = Annotated[
    IngredientRecognitionService, Depends(get_recognition_service)
]
CatalogRecognitionServiceDep = Annotated[
    CatalogRecognitionService, Depends(get_catalog_recognition_service)
]
