"""Pydantic models for the recognition pipeline."""

from .ingredient import (
    CatalogEntry,
    Category,
    HealthStatus,
    IngredientSource,
    ProcessedIngredient,
    RawCandidate,
    RecognitionResponse,
    ScoredCandidate,
)

__all__ = [
    "CatalogEntry",
    "Category",
    "HealthStatus",
    "IngredientSource",
    "ProcessedIngredient",
    "RawCandidate",
    "RecognitionResponse",
    "ScoredCandidate",
]
