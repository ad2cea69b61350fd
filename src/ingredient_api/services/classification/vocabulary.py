"""
Keyword tables for food filtering and categorization.

Kept apart from the matching logic so tests and localizations can swap in
their own tables. Non-food terms are listed in English and Italian.
"""

from dataclasses import dataclass, field

from ingredient_api.models import Category

NON_FOOD_TERMS = frozenset({
    # Containers and utensils
    "plate", "bowl", "dish", "spoon", "fork", "knife", "pan", "pot", "container", "box",
    "bag", "wrapper", "package", "packaging", "bottle", "jar", "can", "tin", "carton",
    "cutting board", "chopping board", "tray", "basket", "cooler", "fridge", "freezer",
    "piatto", "ciotola", "scodella", "cucchiaio", "forchetta", "coltello", "padella", "pentola",
    "contenitore", "scatola", "borsa", "sacchetto", "confezione", "bottiglia", "barattolo",
    "lattina", "vassoio", "cestino", "frigorifero", "frigo", "congelatore",
    # Kitchen and furniture
    "refrigerator", "kitchen", "counter", "table", "surface", "cabinet", "drawer", "shelf",
    "appliance", "home appliance", "door", "handle", "light", "lighting",
    "cucina", "bancone", "tavolo", "superficie", "mobile", "cassetto", "ripiano", "scaffale",
    "elettrodomestico", "porta", "maniglia", "luce", "illuminazione",
    # Actions and states
    "fill", "filled", "open", "opened", "close", "closed", "cut", "sliced", "chopped", "diced",
    "cooking", "preparation", "eating", "drinking", "storage", "storing",
    "riempire", "pieno", "aperto", "chiuso", "tagliato", "affettato", "tritato", "a dadini",
    "cucinare", "cottura", "preparazione", "mangiare", "bere", "conservazione",
    # Materials
    "plastic", "glass", "metal", "wood", "paper", "cardboard", "aluminum", "steel",
    "ceramic", "fabric", "cloth", "rubber",
    "plastica", "vetro", "metallo", "legno", "carta", "cartone", "alluminio", "acciaio",
    "ceramica", "tessuto", "stoffa", "gomma",
    # Colors and light
    "color", "red", "green", "blue", "yellow", "white", "black", "brown", "orange", "purple",
    "pink", "gray", "grey", "silver", "gold", "bright", "dark", "shadow",
    "colore", "rosso", "verde", "blu", "giallo", "bianco", "nero", "marrone", "arancione",
    "viola", "rosa", "grigio", "argento", "oro", "luminoso", "scuro", "chiaro", "ombra",
    # Generic descriptors
    "fresh", "organic", "natural", "healthy", "raw", "cooked", "fried", "baked", "grilled",
    "prepared", "processed", "frozen", "canned", "dried", "pickled",
    "fresco", "biologico", "naturale", "sano", "crudo", "cotto", "fritto", "al forno",
    "grigliato", "preparato", "lavorato", "surgelato", "in scatola", "secco", "sottaceto",
    # People and body parts
    "person", "people", "man", "woman", "human", "hand", "finger", "face", "body",
    "child", "adult", "boy", "girl",
    "persona", "persone", "uomo", "donna", "umano", "mano", "dito", "viso", "corpo",
    "bambino", "adulto", "ragazzo", "ragazza",
    # Places and scenes
    "indoor", "outdoor", "inside", "outside", "home", "house", "room", "wall", "floor",
    "ceiling", "window", "background", "foreground", "scene", "view", "space",
    "interno", "esterno", "dentro", "fuori", "casa", "stanza", "parete", "pavimento",
    "soffitto", "finestra", "sfondo", "primo piano", "scena", "vista", "spazio",
    # Shapes and sizes
    "round", "square", "long", "short", "big", "small", "large", "tiny", "huge",
    "thick", "thin", "wide", "narrow", "tall", "low", "high",
    "rotondo", "quadrato", "lungo", "corto", "grande", "piccolo", "enorme", "minuscolo",
    "spesso", "sottile", "largo", "stretto", "alto", "basso",
    # Too generic to cook with
    "food", "ingredient", "meal", "dinner", "lunch", "breakfast", "snack",
    "vegetable", "fruit", "meat", "dairy", "grain", "produce", "grocery", "item",
    "object", "thing", "stuff", "piece", "part", "section", "area", "place", "spot",
    "cibo", "ingrediente", "pasto", "cena", "pranzo", "colazione", "spuntino",
    "verdura", "frutta", "carne", "latticini", "cereale", "prodotto", "generi alimentari",
    "oggetto", "cosa", "roba", "pezzo", "parte", "sezione", "posto", "punto",
    # Time
    "day", "night", "morning", "evening", "noon", "midnight", "today", "yesterday",
    "time", "hour", "minute", "second", "week", "month", "year",
    "giorno", "notte", "mattina", "sera", "mezzogiorno", "mezzanotte", "oggi", "ieri",
    "tempo", "ora", "minuto", "secondo", "settimana", "mese", "anno",
    # Shopping
    "market", "store", "shop", "shopping", "buying", "selling", "price", "cost",
    "money", "dollar", "euro", "cheap", "expensive",
    "mercato", "negozio", "spesa", "comprare", "vendere", "prezzo", "costo",
    "soldi", "denaro", "dollaro", "economico", "costoso",
})

KNOWN_FOOD_TERMS = (
    # Vegetables
    "tomato", "potato", "onion", "garlic", "carrot", "celery", "pepper", "bell pepper",
    "broccoli", "spinach", "lettuce", "cucumber", "zucchini", "eggplant", "mushroom",
    "cabbage", "cauliflower", "asparagus", "artichoke", "beetroot", "radish", "turnip",
    "leek", "scallion", "chive", "kale", "chard", "arugula", "endive", "fennel", "okra",
    # Fruits
    "apple", "banana", "orange", "lemon", "lime", "strawberry", "blueberry", "raspberry",
    "blackberry", "grape", "peach", "pear", "cherry", "watermelon", "pineapple", "mango",
    "avocado", "kiwi", "papaya", "coconut", "fig", "date", "apricot", "plum", "cantaloupe",
    # Proteins
    "chicken", "beef", "pork", "lamb", "turkey", "duck", "fish", "salmon", "tuna", "cod",
    "shrimp", "crab", "lobster", "egg", "tofu", "tempeh", "seitan", "bacon", "ham", "sausage",
    # Dairy
    "milk", "cheese", "yogurt", "butter", "cream", "mozzarella", "cheddar", "parmesan",
    "ricotta", "feta", "gouda", "swiss",
    # Grains
    "rice", "pasta", "bread", "wheat", "oats", "barley", "quinoa", "flour", "noodles",
    # Legumes
    "beans", "lentils", "chickpeas", "peas",
    # Seasonings
    "salt", "sugar", "honey", "oil", "vinegar", "sauce", "basil", "oregano",
    "thyme", "rosemary", "parsley", "cilantro", "mint", "ginger", "cinnamon", "paprika",
)

FOOD_PATTERNS = (
    r"tomato", r"pepper", r"onion", r"cheese", r"chicken",
    r"beef", r"pork", r"fish", r"salmon", r"egg",
    r"mushroom", r"lettuce", r"cabbage", r"carrot", r"potato",
    r"apple", r"berry", r"fruit", r"meat", r"oil",
    r"sauce", r"herb", r"spice", r"bean", r"seed",
    r"nut", r"milk", r"bread", r"rice", r"pasta",
)

# Ordered: the first category with a matching keyword wins.
CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.VEGETABLES: (
        "tomato", "potato", "onion", "garlic", "carrot", "celery", "pepper", "broccoli", "spinach",
        "lettuce", "cucumber", "zucchini", "eggplant", "mushroom", "cabbage", "cauliflower",
        "asparagus", "artichoke", "beet", "radish", "turnip", "leek", "scallion", "chive",
        "kale", "chard", "arugula", "endive", "fennel", "okra", "pea", "bean",
    ),
    Category.FRUITS: (
        "apple", "banana", "orange", "lemon", "lime", "strawberry", "blueberry", "grape",
        "peach", "pear", "cherry", "watermelon", "pineapple", "mango", "avocado", "kiwi",
        "papaya", "coconut", "fig", "date", "apricot", "plum", "cantaloupe", "honeydew",
        "raspberry", "blackberry", "cranberry", "pomegranate", "passion fruit",
    ),
    Category.MEAT: (
        "chicken", "beef", "pork", "lamb", "fish", "salmon", "tuna", "shrimp", "bacon",
        "sausage", "turkey", "ham", "duck", "goose", "veal", "venison", "rabbit",
        "cod", "halibut", "trout", "sardine", "anchovy", "crab", "lobster", "scallop",
        "mussel", "oyster", "clam", "squid", "octopus",
    ),
    Category.DAIRY: (
        "milk", "cheese", "yogurt", "butter", "cream", "mozzarella", "parmesan", "ricotta",
        "cheddar", "gouda", "brie", "camembert", "feta", "cottage cheese", "sour cream",
        "ice cream", "egg", "eggs",
    ),
    Category.GRAINS: (
        "rice", "pasta", "bread", "flour", "quinoa", "oats", "barley", "wheat", "noodles",
        "spaghetti", "cereal", "couscous", "bulgur", "millet", "buckwheat", "rye",
        "corn", "polenta", "tortilla", "bagel", "croissant",
    ),
    Category.LEGUMES: (
        "beans", "lentils", "chickpeas", "peas", "soybeans", "kidney beans", "black beans",
        "white beans", "lima beans", "navy beans", "pinto beans", "garbanzo",
    ),
    Category.HERBS: (
        "basil", "oregano", "thyme", "rosemary", "parsley", "cilantro", "mint", "sage",
        "dill", "chives", "tarragon", "bay leaf", "lavender",
    ),
    Category.SPICES: (
        "salt", "pepper", "paprika", "cumin", "coriander", "cinnamon", "nutmeg", "ginger",
        "turmeric", "cardamom", "cloves", "allspice", "vanilla", "saffron",
    ),
    Category.CONDIMENTS: (
        "oil", "vinegar", "sauce", "ketchup", "mayonnaise", "mustard", "honey", "pesto",
        "dressing", "syrup",
    ),
}

# Catalog "type" field -> category
CATALOG_TYPE_CATEGORIES: dict[str, Category] = {
    "meat": Category.MEAT,
    "fish": Category.MEAT,
    "seafood": Category.MEAT,
    "vegetable": Category.VEGETABLES,
    "fruit": Category.FRUITS,
    "dairy": Category.DAIRY,
    "grain": Category.GRAINS,
    "spice": Category.SPICES,
    "herb": Category.HERBS,
    "oil": Category.CONDIMENTS,
    "sauce": Category.CONDIMENTS,
}


@dataclass(frozen=True)
class FoodDatabaseEntry:
    """A canonical ingredient with its English variants and Italian aliases."""

    key: str
    names: tuple[str, ...]
    name_it: str
    category: Category
    aliases: tuple[str, ...] = ()


# Variants resolve to ``key`` so they corroborate each other in consolidation.
FOOD_DATABASE: tuple[FoodDatabaseEntry, ...] = (
    # Vegetables
    FoodDatabaseEntry(
        "tomato",
        ("tomato", "tomatoes", "cherry tomato", "roma tomato", "beefsteak tomato"),
        "pomodoro", Category.VEGETABLES, ("pomodoro", "pomodori"),
    ),
    FoodDatabaseEntry(
        "potato",
        ("potato", "potatoes", "russet potato", "red potato", "sweet potato"),
        "patata", Category.VEGETABLES, ("patata", "patate"),
    ),
    FoodDatabaseEntry(
        "onion",
        ("onion", "onions", "red onion", "white onion", "yellow onion", "shallot"),
        "cipolla", Category.VEGETABLES, ("cipolla", "cipolle"),
    ),
    FoodDatabaseEntry(
        "carrot", ("carrot", "carrots", "baby carrot"),
        "carota", Category.VEGETABLES, ("carota", "carote"),
    ),
    FoodDatabaseEntry(
        "bell pepper",
        ("bell pepper", "pepper", "red pepper", "green pepper", "yellow pepper", "capsicum"),
        "peperone", Category.VEGETABLES, ("peperone", "peperoni"),
    ),
    FoodDatabaseEntry(
        "broccoli", ("broccoli", "broccoli florets"),
        "broccoli", Category.VEGETABLES, ("broccoli",),
    ),
    FoodDatabaseEntry(
        "spinach", ("spinach", "baby spinach"),
        "spinaci", Category.VEGETABLES, ("spinaci",),
    ),
    FoodDatabaseEntry(
        "zucchini", ("zucchini", "courgette", "summer squash"),
        "zucchina", Category.VEGETABLES, ("zucchina", "zucchine"),
    ),
    FoodDatabaseEntry(
        "eggplant", ("eggplant", "aubergine"),
        "melanzana", Category.VEGETABLES, ("melanzana", "melanzane"),
    ),
    FoodDatabaseEntry(
        "mushroom",
        ("mushroom", "mushrooms", "button mushroom", "portobello", "shiitake"),
        "fungo", Category.VEGETABLES, ("fungo", "funghi"),
    ),
    # Fruits
    FoodDatabaseEntry(
        "apple", ("apple", "apples", "red apple", "green apple", "granny smith"),
        "mela", Category.FRUITS, ("mela", "mele"),
    ),
    FoodDatabaseEntry(
        "banana", ("banana", "bananas"),
        "banana", Category.FRUITS, ("banana", "banane"),
    ),
    FoodDatabaseEntry(
        "orange", ("orange", "oranges", "navel orange", "blood orange"),
        "arancia", Category.FRUITS, ("arancia", "arance"),
    ),
    FoodDatabaseEntry(
        "lemon", ("lemon", "lemons"),
        "limone", Category.FRUITS, ("limone", "limoni"),
    ),
    FoodDatabaseEntry(
        "strawberry", ("strawberry", "strawberries"),
        "fragola", Category.FRUITS, ("fragola", "fragole"),
    ),
    # Dairy
    FoodDatabaseEntry(
        "cheese", ("cheese", "cheddar", "mozzarella", "parmesan", "gouda", "swiss cheese"),
        "formaggio", Category.DAIRY, ("formaggio", "formaggi"),
    ),
    FoodDatabaseEntry(
        "milk", ("milk", "whole milk", "skim milk", "2% milk"),
        "latte", Category.DAIRY, ("latte",),
    ),
    FoodDatabaseEntry(
        "eggs", ("egg", "eggs", "chicken egg"),
        "uova", Category.DAIRY, ("uovo", "uova"),
    ),
    FoodDatabaseEntry(
        "butter", ("butter", "unsalted butter", "salted butter"),
        "burro", Category.DAIRY, ("burro",),
    ),
    # Meat and fish
    FoodDatabaseEntry(
        "chicken",
        ("chicken", "chicken breast", "chicken thigh", "chicken leg", "poultry"),
        "pollo", Category.MEAT, ("pollo",),
    ),
    FoodDatabaseEntry(
        "beef", ("beef", "steak", "ground beef", "beef roast"),
        "manzo", Category.MEAT, ("manzo", "bovino"),
    ),
    FoodDatabaseEntry(
        "fish", ("fish", "salmon", "tuna", "cod", "tilapia", "seafood"),
        "pesce", Category.MEAT, ("pesce", "pesci"),
    ),
    # Grains
    FoodDatabaseEntry(
        "rice", ("rice", "white rice", "brown rice", "jasmine rice", "basmati rice"),
        "riso", Category.GRAINS, ("riso",),
    ),
    FoodDatabaseEntry(
        "pasta", ("pasta", "spaghetti", "penne", "macaroni", "noodles"),
        "pasta", Category.GRAINS, ("pasta",),
    ),
    FoodDatabaseEntry(
        "bread", ("bread", "white bread", "whole wheat bread", "sourdough"),
        "pane", Category.GRAINS, ("pane",),
    ),
)

# Italian names for common ingredients outside FOOD_DATABASE
ITALIAN_TRANSLATIONS: dict[str, str] = {
    # Vegetables
    "artichoke": "carciofo", "asparagus": "asparago", "avocado": "avocado",
    "beetroot": "barbabietola", "beet": "barbabietola", "cabbage": "cavolo",
    "cauliflower": "cavolfiore", "corn": "mais", "fennel": "finocchio",
    "kale": "cavolo riccio", "leek": "porro", "okra": "okra", "radish": "ravanello",
    "turnip": "rapa",
    # Fruits
    "apricot": "albicocca", "blueberry": "mirtillo", "cantaloupe": "melone",
    "cherry": "ciliegia", "coconut": "cocco", "cranberry": "mirtillo rosso",
    "date": "dattero", "fig": "fico", "grape": "uva", "grapefruit": "pompelmo",
    "kiwi": "kiwi", "lime": "lime", "mango": "mango", "papaya": "papaya",
    "peach": "pesca", "pear": "pera", "pineapple": "ananas", "plum": "prugna",
    "raspberry": "lampone", "watermelon": "anguria",
    # Meat and fish
    "duck": "anatra", "lamb": "agnello", "pork": "maiale", "salmon": "salmone",
    "shrimp": "gamberetto", "tuna": "tonno", "turkey": "tacchino", "veal": "vitello",
    # Grains and legumes
    "barley": "orzo", "chickpeas": "ceci", "lentils": "lenticchie", "oats": "avena",
    "quinoa": "quinoa", "soybeans": "soia",
    # Herbs and spices
    "cilantro": "coriandolo", "cinnamon": "cannella", "cloves": "chiodi di garofano",
    "cumin": "cumino", "dill": "aneto", "ginger": "zenzero", "mint": "menta",
    "nutmeg": "noce moscata", "paprika": "paprika", "rosemary": "rosmarino",
    "sage": "salvia", "thyme": "timo", "turmeric": "curcuma", "vanilla": "vaniglia",
}


@dataclass(frozen=True)
class FoodVocabulary:
    """Bundle of keyword tables used by the classifiers."""

    non_food_terms: frozenset[str] = NON_FOOD_TERMS
    known_food_terms: tuple[str, ...] = KNOWN_FOOD_TERMS
    food_patterns: tuple[str, ...] = FOOD_PATTERNS
    category_keywords: dict[Category, tuple[str, ...]] = field(
        default_factory=lambda: dict(CATEGORY_KEYWORDS)
    )
    catalog_type_categories: dict[str, Category] = field(
        default_factory=lambda: dict(CATALOG_TYPE_CATEGORIES)
    )
    food_database: tuple[FoodDatabaseEntry, ...] = FOOD_DATABASE
    italian_translations: dict[str, str] = field(
        default_factory=lambda: dict(ITALIAN_TRANSLATIONS)
    )


DEFAULT_VOCABULARY = FoodVocabulary()
