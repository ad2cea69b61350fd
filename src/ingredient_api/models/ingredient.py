"""Pydantic models for recognized ingredients.

RawCandidate and ScoredCandidate live only for one request.
ProcessedIngredient is the pipeline's output unit and is immutable.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class Category(str, Enum):
    """Coarse food category."""

    VEGETABLES = "vegetables"
    FRUITS = "fruits"
    MEAT = "meat"
    DAIRY = "dairy"
    GRAINS = "grains"
    LEGUMES = "legumes"
    HERBS = "herbs"
    SPICES = "spices"
    CONDIMENTS = "condiments"
    OTHER = "other"


class IngredientSource(str, Enum):
    """Where an ingredient came from."""

    PRIMARY_MODEL = "primary-model"
    FALLBACK_MODEL = "fallback-model"
    TAGGER = "tagger"  # Generic object tagger used as an extra fan-out source
    CATALOG_EXACT = "catalog-exact"
    CATALOG_PARTIAL = "catalog-partial"
    CATALOG_FUZZY = "catalog-fuzzy"


# =============================================================================
# Pipeline records
# =============================================================================


class RawCandidate(BaseModel):
    """An unvalidated detection surfaced by an upstream service."""

    name: str = Field(..., description="Name as reported upstream")
    confidence: float | None = Field(
        None, ge=0.0, le=1.0, description="Upstream confidence, if reported"
    )
    localized_name: str | None = Field(
        None, description="Translated name supplied by the model (e.g. Italian)"
    )


class ScoredCandidate(BaseModel):
    """A classified candidate waiting for consolidation."""

    name: str
    category: Category = Category.OTHER
    confidence: float = Field(ge=0.0, le=1.0)
    source: IngredientSource
    localized_name: str | None = None
    catalog_id: str | None = None


class ProcessedIngredient(BaseModel):
    """A consolidated ingredient ready for recipe generation."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Normalized name (lowercase, trimmed)")
    category: Category = Field(Category.OTHER, description="Food category")
    confidence: float = Field(ge=0.0, le=1.0, description="Confidence score 0-1")
    source: IngredientSource = Field(..., description="Source of the winning record")
    localized_name: str | None = Field(None, description="Translated name, if known")
    catalog_id: str | None = Field(None, description="Reference catalog ID for catalog matches")


class CatalogEntry(BaseModel):
    """One row of the reference ingredient vocabulary."""

    model_config = ConfigDict(frozen=True)

    id: str
    canonical_name: str
    type: str | None = None


# =============================================================================
# API responses
# =============================================================================


class RecognitionResponse(BaseModel):
    """Response from a recognition endpoint."""

    ingredients: list[ProcessedIngredient] = Field(default_factory=list)
    recognized: bool = Field(
        ..., description="False when nothing was recognized (not an error)"
    )
    sources: list[str] = Field(
        default_factory=list, description="Sources that contributed to the result"
    )
    processing_time_ms: int = Field(0, ge=0)


class HealthStatus(BaseModel):
    """Reachability of the configured upstreams."""

    vision: bool = False
    tagger: bool = False
    catalog: bool = False
    overall: bool = False
