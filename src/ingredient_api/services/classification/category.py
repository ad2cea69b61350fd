"""Keyword-table category classifier."""

from ingredient_api.models import CatalogEntry, Category

from .food_filter import normalize_name
from .vocabulary import DEFAULT_VOCABULARY, FoodVocabulary


class CategoryClassifier:
    """Maps a normalized ingredient name to a coarse Category."""

    def __init__(self, vocabulary: FoodVocabulary = DEFAULT_VOCABULARY) -> None:
        self.vocabulary = vocabulary

    def categorize(self, name: str) -> Category:
        """First category whose keyword list has a substring match, else OTHER."""
        term = normalize_name(name)
        for category, keywords in self.vocabulary.category_keywords.items():
            if any(keyword in term for keyword in keywords):
                return category
        return Category.OTHER

    def categorize_catalog_entry(self, entry: CatalogEntry) -> Category:
        """Use the catalog's own type when it maps to a category, else guess from the name."""
        entry_type = (entry.type or "").strip().lower()
        if entry_type in self.vocabulary.catalog_type_categories:
            return self.vocabulary.catalog_type_categories[entry_type]
        return self.categorize(entry.canonical_name)


_default_classifier = CategoryClassifier()


def categorize(name: str) -> Category:
    """Module-level shortcut using the default vocabulary."""
    return _default_classifier.categorize(name)
