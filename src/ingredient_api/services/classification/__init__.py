"""Food filtering and categorization."""

from .category import CategoryClassifier, categorize
from .food_filter import FoodClassifier, is_food, normalize_name
from .resolver import FoodResolver
from .vocabulary import DEFAULT_VOCABULARY, FoodDatabaseEntry, FoodVocabulary

__all__ = [
    "CategoryClassifier",
    "FoodClassifier",
    "FoodDatabaseEntry",
    "FoodResolver",
    "FoodVocabulary",
    "DEFAULT_VOCABULARY",
    "categorize",
    "is_food",
    "normalize_name",
]
