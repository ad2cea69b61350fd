"""
Resolve detected names to canonical ingredients.

Detections such as "cherry tomatoes" and "pomodori" are mapped onto the
same canonical key so they corroborate each other in consolidation.
"""

import logging

from rapidfuzz.distance import Levenshtein

from .food_filter import normalize_name
from .vocabulary import DEFAULT_VOCABULARY, FoodDatabaseEntry, FoodVocabulary

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_CUTOFF = 0.8
MIN_CONTAINED_LENGTH = 4
MIN_FUZZY_LENGTH = 3


class FoodResolver:
    """Lookup over the canonical food database plus Italian translations."""

    def __init__(
        self,
        vocabulary: FoodVocabulary = DEFAULT_VOCABULARY,
        similarity_cutoff: float = DEFAULT_SIMILARITY_CUTOFF,
    ) -> None:
        self.vocabulary = vocabulary
        self.similarity_cutoff = similarity_cutoff

    def find_exact(self, name: str) -> FoodDatabaseEntry | None:
        """Entry listing ``name`` as one of its English names or Italian aliases."""
        term = normalize_name(name)
        for entry in self.vocabulary.food_database:
            if term in entry.names or term in entry.aliases:
                return entry
        return None

    def _similar(self, term: str, target: str) -> bool:
        # Only a more specific detection may contain a database name:
        # "cherry" must not resolve to "cherry tomato".
        if len(target) >= MIN_CONTAINED_LENGTH and target in term:
            return True
        if min(len(term), len(target)) < MIN_FUZZY_LENGTH:
            return False
        return Levenshtein.normalized_similarity(term, target) >= self.similarity_cutoff

    def find(self, name: str) -> FoodDatabaseEntry | None:
        """
        Resolve a name to a database entry.

        Exact names and aliases are tried first across the whole database,
        then containment and edit-distance similarity against English names.

        Returns:
            The matching entry, or None for ingredients outside the database
        """
        entry = self.find_exact(name)
        if entry is not None:
            return entry

        term = normalize_name(name)
        for entry in self.vocabulary.food_database:
            if any(self._similar(term, variant) for variant in entry.names):
                logger.debug(f"Resolved '{term}' to '{entry.key}'")
                return entry
        return None

    def translate(self, name: str) -> str:
        """Best-effort Italian name; the input itself when nothing is known."""
        term = normalize_name(name)
        translations = self.vocabulary.italian_translations
        if term in translations:
            return translations[term]
        for english, italian in translations.items():
            if english in term or term in english:
                return italian
        return name
