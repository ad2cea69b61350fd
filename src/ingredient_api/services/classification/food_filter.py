"""
Heuristic food / non-food filter.

Precision over recall: anything that is not positively recognized as food
is rejected so junk never reaches recipe generation.
"""

import logging
import re

from .vocabulary import DEFAULT_VOCABULARY, FoodVocabulary

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 3
DEFAULT_DOMINANCE_RATIO = 0.7


def normalize_name(name: str) -> str:
    """Lowercase and trim a candidate name."""
    return name.strip().lower()


class FoodClassifier:
    """
    Accept/reject filter over candidate names.

    Order of checks:
    1. Too short -> reject
    2. Exact non-food term -> reject
    3. Contains a non-food term covering more than ``dominance_ratio`` of
       its length -> reject
    4. Contains, or is contained by, a known food word -> accept
    5. Matches a food-family pattern -> accept
    6. Otherwise reject
    """

    def __init__(
        self,
        vocabulary: FoodVocabulary = DEFAULT_VOCABULARY,
        dominance_ratio: float = DEFAULT_DOMINANCE_RATIO,
        min_length: int = MIN_TERM_LENGTH,
    ) -> None:
        self.vocabulary = vocabulary
        self.dominance_ratio = dominance_ratio
        self.min_length = min_length
        self._patterns = [re.compile(p, re.IGNORECASE) for p in vocabulary.food_patterns]

    def _dominated_by_non_food(self, term: str) -> str | None:
        for non_food in self.vocabulary.non_food_terms:
            if non_food in term and len(non_food) / len(term) > self.dominance_ratio:
                return non_food
        return None

    def is_food(self, name: str) -> bool:
        """Return True if ``name`` looks like a cooking ingredient."""
        term = normalize_name(name)

        if len(term) < self.min_length:
            logger.debug(f"Rejected '{term}': too short")
            return False

        if term in self.vocabulary.non_food_terms:
            logger.debug(f"Rejected '{term}': non-food term")
            return False

        dominant = self._dominated_by_non_food(term)
        if dominant:
            logger.debug(f"Rejected '{term}': dominated by non-food term '{dominant}'")
            return False

        if any(food in term or term in food for food in self.vocabulary.known_food_terms):
            return True

        if any(pattern.search(term) for pattern in self._patterns):
            return True

        logger.debug(f"Rejected '{term}': no food signal")
        return False


_default_classifier = FoodClassifier()


def is_food(name: str) -> bool:
    """Module-level shortcut using the default vocabulary."""
    return _default_classifier.is_food(name)
