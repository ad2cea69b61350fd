"""
Result consolidation: dedupe, merge confidence, threshold, rank, truncate.

Candidates sharing a normalized name corroborate each other: the merged
confidence is the higher of the two plus a fixed boost, capped at 1.0.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from ingredient_api.core.config import Settings
from ingredient_api.models import ProcessedIngredient, ScoredCandidate

from .classification import normalize_name

logger = logging.getLogger(__name__)


@dataclass
class _Merged:
    candidate: ScoredCandidate
    confidence: float


class ResultConsolidator:
    """Merges scored candidates into a ranked ingredient list."""

    DEFAULT_THRESHOLD = 0.5
    DEFAULT_MAX_RESULTS = 12
    DEFAULT_BOOST = 0.15

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        max_results: int = DEFAULT_MAX_RESULTS,
        corroboration_boost: float = DEFAULT_BOOST,
    ) -> None:
        self.threshold = threshold
        self.max_results = max_results
        self.corroboration_boost = corroboration_boost

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResultConsolidator":
        return cls(
            threshold=settings.vision_confidence_threshold,
            max_results=settings.vision_max_results,
            corroboration_boost=settings.corroboration_boost,
        )

    def merge_confidence(self, existing: float, incoming: float) -> float:
        return min(max(existing, incoming) + self.corroboration_boost, 1.0)

    def consolidate(
        self,
        candidates: Iterable[ScoredCandidate],
        threshold: float | None = None,
        max_results: int | None = None,
    ) -> list[ProcessedIngredient]:
        """
        Consolidate candidates into the final ingredient list.

        Args:
            candidates: Classified candidates from any number of sources
            threshold: Minimum merged confidence (defaults to the instance value)
            max_results: Maximum entries returned (defaults to the instance value)

        Returns:
            Ingredients sorted by confidence descending, ties in first-seen
            order. Empty when nothing survives.
        """
        threshold = self.threshold if threshold is None else threshold
        max_results = self.max_results if max_results is None else max_results

        merged: dict[str, _Merged] = {}
        for candidate in candidates:
            key = normalize_name(candidate.name)
            if not key:
                continue
            existing = merged.get(key)
            if existing is None:
                merged[key] = _Merged(candidate=candidate, confidence=candidate.confidence)
                continue

            combined = self.merge_confidence(existing.confidence, candidate.confidence)
            logger.debug(
                f"Combining {key}: {existing.confidence:.2f} + "
                f"{candidate.confidence:.2f} = {combined:.2f}"
            )
            if candidate.confidence > existing.confidence:
                existing.candidate = candidate
            existing.confidence = combined

        survivors = []
        for key, entry in merged.items():
            if entry.confidence < threshold:
                logger.debug(f"Filtered out {key} ({entry.confidence:.2f} < {threshold})")
                continue
            survivors.append((key, entry))

        # sorted() is stable, so equal confidences keep insertion order
        survivors = sorted(survivors, key=lambda item: item[1].confidence, reverse=True)

        results = [
            ProcessedIngredient(
                name=key,
                category=entry.candidate.category,
                confidence=entry.confidence,
                source=entry.candidate.source,
                localized_name=entry.candidate.localized_name,
                catalog_id=entry.candidate.catalog_id,
            )
            for key, entry in survivors[: max(max_results, 0)]
        ]

        logger.info(f"Consolidated {len(merged)} unique candidates into {len(results)} ingredients")
        return results
