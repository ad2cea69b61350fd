"""
Ingredient recognition pipelines.

Vision pipeline: fan out to every configured source, filter non-food,
resolve known ingredients, categorize the rest, consolidate.
Catalog pipeline: generic tagger -> catalog matcher -> consolidate.

An empty list means "nothing recognized" and is not an error; failures are
raised as RecognitionError subclasses.
"""

import asyncio
import logging
import time
from typing import Sequence

from ingredient_api.core.exceptions import RecognitionError, ValidationError
from ingredient_api.models import (
    HealthStatus,
    IngredientSource,
    ProcessedIngredient,
    RawCandidate,
    RecognitionResponse,
    ScoredCandidate,
)
from ingredient_api.prompts import normalize_language

from .catalog import CatalogClient, CatalogMatcher
from .classification import CategoryClassifier, FoodClassifier, FoodResolver, normalize_name
from .consolidation import ResultConsolidator
from .vision import TaggerClient, VisionAnalysis, VisionAnalysisService

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_CANDIDATE_CONFIDENCE = 0.5  # Used when a model omits confidence
UNKNOWN_MODEL_DISCOUNT = 0.95
UNKNOWN_TAGGER_DISCOUNT = 0.9


def validate_image(image_data: bytes | None, max_bytes: int = MAX_IMAGE_BYTES) -> bytes:
    """Reject empty or oversized images."""
    if not image_data:
        raise ValidationError("Image is empty")
    if len(image_data) > max_bytes:
        raise ValidationError(
            f"Image exceeds maximum size of {max_bytes // (1024 * 1024)} MB",
            details={"size": len(image_data), "max_size": max_bytes},
        )
    return image_data


class IngredientRecognitionService:
    """Vision-model pipeline with multi-source fan-out."""

    def __init__(
        self,
        sources: Sequence[VisionAnalysisService],
        food_classifier: FoodClassifier | None = None,
        category_classifier: CategoryClassifier | None = None,
        consolidator: ResultConsolidator | None = None,
        resolver: FoodResolver | None = None,
        unknown_model_discount: float = UNKNOWN_MODEL_DISCOUNT,
        unknown_tagger_discount: float = UNKNOWN_TAGGER_DISCOUNT,
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            sources: Upstream recognizers, all invoked concurrently
            food_classifier: Food / non-food filter
            category_classifier: Category annotator for unknown ingredients
            consolidator: Dedupe and ranking rules
            resolver: Canonical ingredient lookup and translations
            unknown_model_discount: Confidence multiplier for model detections
                outside the food database
            unknown_tagger_discount: Same, for tagger detections
        """
        if not sources:
            raise ValueError("At least one recognition source is required")
        self.sources = list(sources)
        self.food_classifier = food_classifier or FoodClassifier()
        self.category_classifier = category_classifier or CategoryClassifier()
        self.consolidator = consolidator or ResultConsolidator()
        self.resolver = resolver or FoodResolver()
        self.unknown_model_discount = unknown_model_discount
        self.unknown_tagger_discount = unknown_tagger_discount

    def score_candidates(self, analysis: VisionAnalysis) -> list[ScoredCandidate]:
        """
        Drop non-food candidates and annotate the rest.

        Names in the food database take its canonical key, category and
        Italian name. Other names keep their own, get a guessed category and
        translation, and have their confidence discounted.
        """
        discount = (
            self.unknown_tagger_discount
            if analysis.source == IngredientSource.TAGGER
            else self.unknown_model_discount
        )

        scored = []
        for candidate in analysis.candidates:
            name = normalize_name(candidate.name)
            # Exact database names and aliases count as food on their own
            entry = self.resolver.find_exact(name)
            if entry is None:
                if not self.food_classifier.is_food(name):
                    logger.debug(f"Filtered non-food term from {analysis.source.value}: {name}")
                    continue
                entry = self.resolver.find(name)

            confidence = (
                candidate.confidence
                if candidate.confidence is not None
                else DEFAULT_CANDIDATE_CONFIDENCE
            )
            if entry is not None:
                scored.append(
                    ScoredCandidate(
                        name=entry.key,
                        category=entry.category,
                        confidence=confidence,
                        source=analysis.source,
                        localized_name=entry.name_it,
                    )
                )
                continue

            localized_name = candidate.localized_name or self.resolver.translate(name)
            logger.debug(f"Unknown ingredient from {analysis.source.value}: {name} -> {localized_name}")
            scored.append(
                ScoredCandidate(
                    name=name,
                    category=self.category_classifier.categorize(name),
                    confidence=confidence * discount,
                    source=analysis.source,
                    localized_name=localized_name,
                )
            )
        return scored

    async def _gather(
        self, image_data: bytes, language: str
    ) -> tuple[list[VisionAnalysis], list[RecognitionError]]:
        results = await asyncio.gather(
            *(source.analyze_detailed(image_data, language) for source in self.sources),
            return_exceptions=True,
        )

        analyses: list[VisionAnalysis] = []
        errors: list[RecognitionError] = []
        for source, result in zip(self.sources, results):
            if isinstance(result, VisionAnalysis):
                logger.info(
                    f"{source.provider_name} returned {len(result.candidates)} candidates"
                )
                if not result.candidates and result.raw_response:
                    logger.debug(
                        f"{source.provider_name} raw response with no candidates: "
                        f"{result.raw_response[:500]}"
                    )
                analyses.append(result)
            elif isinstance(result, RecognitionError):
                logger.warning(f"{source.provider_name} failed: {result.message}")
                errors.append(result)
            elif isinstance(result, BaseException):
                # Unexpected failures still must not abort the other sources
                logger.error(f"{source.provider_name} raised unexpectedly: {result!r}")
                errors.append(
                    RecognitionError(
                        message=f"Unexpected error: {result}",
                        error_code="UNEXPECTED_ERROR",
                        provider=source.provider_name,
                    )
                )
        return analyses, errors

    async def recognize_detailed(self, image_data: bytes, language: str = "en") -> RecognitionResponse:
        """
        Run the full pipeline and describe the outcome.

        Raises:
            ValidationError: If the image is unusable
            RecognitionError: If every source failed
        """
        start_time = time.time()
        validate_image(image_data)
        language = normalize_language(language)

        analyses, errors = await self._gather(image_data, language)
        if not analyses and errors:
            raise errors[0]

        scored: list[ScoredCandidate] = []
        for analysis in analyses:
            scored.extend(self.score_candidates(analysis))

        ingredients = self.consolidator.consolidate(scored)
        if not ingredients:
            logger.info("No ingredients recognized")

        return RecognitionResponse(
            ingredients=ingredients,
            recognized=bool(ingredients),
            sources=[analysis.source.value for analysis in analyses],
            processing_time_ms=int((time.time() - start_time) * 1000),
        )

    async def recognize(self, image_data: bytes, language: str = "en") -> list[ProcessedIngredient]:
        """Recognize ingredients in an image; [] when nothing was found."""
        response = await self.recognize_detailed(image_data, language)
        return response.ingredients

    async def health_check(self) -> HealthStatus:
        checks = await asyncio.gather(
            *(source.health_check() for source in self.sources),
            return_exceptions=True,
        )
        status = HealthStatus()
        for source, ok in zip(self.sources, checks):
            healthy = ok is True
            if isinstance(source, TaggerClient):
                status.tagger = healthy
            else:
                status.vision = status.vision or healthy
        status.overall = status.vision or status.tagger
        return status


class CatalogRecognitionService:
    """Tagger + catalog pipeline. The catalog decides what counts as food."""

    def __init__(
        self,
        tagger: TaggerClient,
        matcher: CatalogMatcher,
        catalog_client: CatalogClient | None = None,
    ) -> None:
        self.tagger = tagger
        self.matcher = matcher
        self.catalog_client = catalog_client

    async def recognize_detailed(self, image_data: bytes) -> RecognitionResponse:
        """
        Tag the image and keep only tags that match the catalog.

        Raises:
            ValidationError: If the image is unusable
            UpstreamUnavailable: If the tagger fails
            CatalogUnavailable: If the catalog cannot be loaded
        """
        start_time = time.time()
        validate_image(image_data)

        tags = await self.tagger.tag(image_data)
        logger.info(f"Tagger found {len(tags)} potential items")

        ingredients: list[ProcessedIngredient] = []
        if tags:
            ingredients = await self.matcher.match([RawCandidate(name=tag) for tag in tags])
        if not ingredients:
            logger.info("No ingredients matched the catalog")

        return RecognitionResponse(
            ingredients=ingredients,
            recognized=bool(ingredients),
            sources=sorted({i.source.value for i in ingredients}),
            processing_time_ms=int((time.time() - start_time) * 1000),
        )

    async def recognize(self, image_data: bytes) -> list[ProcessedIngredient]:
        response = await self.recognize_detailed(image_data)
        return response.ingredients

    async def health_check(self) -> HealthStatus:
        tagger_ok, catalog_ok = await asyncio.gather(
            self.tagger.health_check(),
            self.catalog_client.health_check() if self.catalog_client else _false(),
            return_exceptions=True,
        )
        status = HealthStatus(tagger=tagger_ok is True, catalog=catalog_ok is True)
        status.overall = status.tagger and status.catalog
        return status


async def _false() -> bool:
    return False
