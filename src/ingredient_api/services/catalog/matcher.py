"""
Catalog matcher for the tagger-backed pipeline.

Reconciles free-form tags against the reference catalog. The catalog is the
only source of truth here: tags without a match are dropped.

Match tiers, first success wins:
1. Exact normalized name
2. Singular/plural variant
3. Tag contained in a catalog name, with similarity above a cutoff
4. Best catalog name by similarity above a stricter cutoff
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Mapping

from ingredient_api.core.config import Settings
from ingredient_api.models import (
    CatalogEntry,
    IngredientSource,
    ProcessedIngredient,
    RawCandidate,
    ScoredCandidate,
)

from ..classification import CategoryClassifier, normalize_name
from ..consolidation import ResultConsolidator
from .cache import CatalogCache
from .similarity import similarity

logger = logging.getLogger(__name__)

# CJK, Arabic, Cyrillic, Hiragana, Katakana
NON_LATIN_PATTERN = re.compile(r"[\u4e00-\u9fff\u0600-\u06ff\u0400-\u04ff\u3040-\u309f\u30a0-\u30ff]")

GENERIC_TERMS = frozenset({
    "food", "fruit", "vegetable", "meat", "fish", "dairy", "grain", "spice", "herb",
})

EXACT_CONFIDENCE = 0.9
MORPHOLOGICAL_CONFIDENCE = 0.9
PARTIAL_CONFIDENCE = 0.7
MIN_PARTIAL_LENGTH = 3


def is_latin_text(text: str) -> bool:
    return bool(text.strip()) and not NON_LATIN_PATTERN.search(text)


def morphological_variants(name: str) -> list[str]:
    """Singular forms of a plural name, or plural forms of a singular one."""
    if name.endswith("s"):
        variants = [name[:-1]]
        if name.endswith("ies"):
            variants.append(name[:-3] + "y")
        elif name.endswith("es"):
            variants.append(name[:-2])
        return [v for v in variants if v]
    if name.endswith("y"):
        return [name + "s", name[:-1] + "ies"]
    return [name + "s", name + "es"]


@dataclass(frozen=True)
class CatalogMatch:
    entry: CatalogEntry
    source: IngredientSource
    confidence: float


class CatalogMatcher:
    """Matches raw candidates against a CatalogCache."""

    def __init__(
        self,
        cache: CatalogCache,
        consolidator: ResultConsolidator | None = None,
        category_classifier: CategoryClassifier | None = None,
        substring_cutoff: float = 0.6,
        fuzzy_cutoff: float = 0.8,
        generic_terms: Iterable[str] = GENERIC_TERMS,
    ) -> None:
        self.cache = cache
        self.consolidator = consolidator or ResultConsolidator()
        self.category_classifier = category_classifier or CategoryClassifier()
        self.substring_cutoff = substring_cutoff
        self.fuzzy_cutoff = fuzzy_cutoff
        self.generic_terms = frozenset(generic_terms)

    @classmethod
    def from_settings(cls, cache: CatalogCache, settings: Settings) -> "CatalogMatcher":
        return cls(
            cache=cache,
            consolidator=ResultConsolidator.from_settings(settings),
            substring_cutoff=settings.substring_similarity_cutoff,
            fuzzy_cutoff=settings.fuzzy_similarity_cutoff,
        )

    def match_one(self, name: str, entries: Mapping[str, CatalogEntry]) -> CatalogMatch | None:
        """Find the catalog entry for one normalized name."""
        exact = entries.get(name)
        if exact is not None:
            return CatalogMatch(exact, IngredientSource.CATALOG_EXACT, EXACT_CONFIDENCE)

        for variant in morphological_variants(name):
            entry = entries.get(variant)
            if entry is not None:
                return CatalogMatch(entry, IngredientSource.CATALOG_EXACT, MORPHOLOGICAL_CONFIDENCE)

        # Only tag-inside-catalog-name: "vegetable" must not match "vegetable oil" the other way
        if name not in self.generic_terms and len(name) >= MIN_PARTIAL_LENGTH:
            for key, entry in entries.items():
                if name in key and similarity(name, key) > self.substring_cutoff:
                    return CatalogMatch(entry, IngredientSource.CATALOG_PARTIAL, PARTIAL_CONFIDENCE)

        best: tuple[float, CatalogEntry] | None = None
        for key, entry in entries.items():
            score = similarity(name, key)
            if score > self.fuzzy_cutoff and (best is None or score > best[0]):
                best = (score, entry)
        if best is not None:
            # Scaled below the partial tier so confidence falls with each tier
            return CatalogMatch(best[1], IngredientSource.CATALOG_FUZZY, best[0] * PARTIAL_CONFIDENCE)

        return None

    async def match(self, candidates: list[RawCandidate]) -> list[ProcessedIngredient]:
        """
        Match candidates against the catalog and consolidate the hits.

        Raises:
            CatalogUnavailable: If the catalog cannot be loaded
        """
        latin = [c for c in candidates if is_latin_text(c.name)]
        logger.info(
            f"Filtered to {len(latin)} Latin-script candidates "
            f"(removed {len(candidates) - len(latin)})"
        )
        if not latin:
            return []

        entries = await self.cache.ensure_fresh()

        scored = []
        for candidate in latin:
            name = normalize_name(candidate.name)
            found = self.match_one(name, entries)
            if found is None:
                logger.debug(f"No catalog match for: {candidate.name}")
                continue

            logger.debug(
                f"{found.source.value} match: {candidate.name} -> {found.entry.canonical_name}"
            )
            scored.append(
                ScoredCandidate(
                    name=normalize_name(found.entry.canonical_name),
                    category=self.category_classifier.categorize_catalog_entry(found.entry),
                    confidence=found.confidence,
                    source=found.source,
                    localized_name=candidate.localized_name,
                    catalog_id=found.entry.id or None,
                )
            )

        return self.consolidator.consolidate(scored)
