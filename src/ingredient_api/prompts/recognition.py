"""Ingredient recognition prompt templates.

One primary and one short fallback template per language. Every template
asks for a bare JSON array of {name, nameIt, confidence} objects.
"""

DEFAULT_LANGUAGE = "en"

RECOGNITION_PROMPT_EN = """You are analyzing a food image. Identify ALL visible food ingredients with maximum precision.

Return ONLY a valid JSON array:
[{"name": "ingredient_name", "nameIt": "nome_italiano", "confidence": 0.95}]

Guidelines:
1. For "name": use specific English names (e.g. "cherry tomatoes", "red bell pepper", "ground beef", "fresh basil leaves")
2. For "nameIt": provide the Italian translation (e.g. "pomodorini", "peperone rosso", "carne macinata", "foglie di basilico fresco")
3. Include ONLY actual food ingredients: vegetables, fruits, meat, fish, dairy, grains, legumes, herbs, spices, nuts, oils
4. EXCLUDE: utensils, containers, packaging, backgrounds, non-food objects, colors and generic descriptors such as "food" or "fresh"
5. Confidence: 0.1-1.0 based on visual clarity
6. Return 1-25 ingredients maximum
7. Include partial/cut ingredients if clearly identifiable
8. Distinguish varieties when possible

Example response:
[{"name": "cherry tomatoes", "nameIt": "pomodorini", "confidence": 0.95}, {"name": "fresh basil", "nameIt": "basilico fresco", "confidence": 0.88}]

Do not include any text outside the JSON array."""

RECOGNITION_PROMPT_IT = """Stai analizzando la foto di alimenti. Identifica TUTTI gli ingredienti alimentari visibili con la massima precisione.

Restituisci SOLO un array JSON valido:
[{"name": "ingredient_name", "nameIt": "nome_italiano", "confidence": 0.95}]

Regole:
1. In "name": usa il nome inglese specifico (es. "cherry tomatoes", "red bell pepper", "ground beef")
2. In "nameIt": il nome italiano (es. "pomodorini", "peperone rosso", "carne macinata")
3. Includi SOLO ingredienti reali: verdure, frutta, carne, pesce, latticini, cereali, legumi, erbe, spezie, frutta secca, oli
4. ESCLUDI: utensili, contenitori, confezioni, sfondi, oggetti non alimentari, colori e descrittori generici come "cibo" o "fresco"
5. Confidenza: 0.1-1.0 in base alla chiarezza visiva
6. Massimo 1-25 ingredienti
7. Includi ingredienti tagliati o parziali se chiaramente riconoscibili

Esempio di risposta:
[{"name": "cherry tomatoes", "nameIt": "pomodorini", "confidence": 0.95}, {"name": "fresh basil", "nameIt": "basilico fresco", "confidence": 0.88}]

Non aggiungere testo fuori dall'array JSON."""

FALLBACK_PROMPT_EN = (
    "Analyze this food image and identify visible ingredients. Return ONLY a JSON array: "
    '[{"name": "ingredient_name", "nameIt": "nome_italiano", "confidence": 0.95}]. '
    'Use specific English names for "name" and Italian translations for "nameIt". '
    "Include only food items (no containers, utensils or generic words), 1-25 items, confidence 0.1-1.0."
)

FALLBACK_PROMPT_IT = (
    "Analizza questa foto e identifica gli ingredienti visibili. Restituisci SOLO un array JSON: "
    '[{"name": "ingredient_name", "nameIt": "nome_italiano", "confidence": 0.95}]. '
    'Usa nomi inglesi specifici in "name" e la traduzione italiana in "nameIt". '
    "Solo alimenti (niente contenitori, utensili o parole generiche), 1-25 elementi, confidenza 0.1-1.0."
)

PROMPTS = {
    "en": {"primary": RECOGNITION_PROMPT_EN, "fallback": FALLBACK_PROMPT_EN},
    "it": {"primary": RECOGNITION_PROMPT_IT, "fallback": FALLBACK_PROMPT_IT},
}

SUPPORTED_LANGUAGES = tuple(PROMPTS)


def normalize_language(language: str | None) -> str:
    """Reduce a language tag like "it-IT" to a supported code, defaulting to English."""
    if not language:
        return DEFAULT_LANGUAGE
    code = language.strip().lower().replace("_", "-").split("-")[0]
    return code if code in PROMPTS else DEFAULT_LANGUAGE


def get_prompt(language: str | None, fallback: bool = False) -> str:
    """Return the instruction template for a language."""
    templates = PROMPTS[normalize_language(language)]
    return templates["fallback" if fallback else "primary"]
