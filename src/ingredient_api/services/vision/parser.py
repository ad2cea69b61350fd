"""Extract candidate lists from free-form model responses.

Vision models often wrap the requested JSON in prose or markdown fences,
so the first substring that decodes to a JSON array is used.
"""

import json
import logging
from typing import Any

from ingredient_api.core.exceptions import ParseError
from ingredient_api.models import RawCandidate

logger = logging.getLogger(__name__)

_decoder = json.JSONDecoder()


def extract_json_array(text: str) -> list[Any] | None:
    """Return the first JSON array embedded in ``text``, or None."""
    start = text.find("[")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, list):
            return value
        start = text.find("[", start + 1)
    return None


def _coerce_confidence(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return min(max(float(value), 0.0), 1.0)
    if isinstance(value, str):
        try:
            return min(max(float(value), 0.0), 1.0)
        except ValueError:
            return None
    return None


def parse_candidates(text: str | None, provider: str = "unknown") -> list[RawCandidate]:
    """
    Parse a model response into RawCandidates.

    Args:
        text: Raw textual response from the model
        provider: Provider name used in error reporting

    Returns:
        Candidates in response order. Malformed items are skipped.

    Raises:
        ParseError: If the response contains no JSON array
    """
    if not text:
        raise ParseError("Empty response from vision model", provider=provider)

    items = extract_json_array(text)
    if items is None:
        raise ParseError(
            "No JSON array found in vision model response",
            provider=provider,
            details={"response_preview": text[:200]},
        )

    candidates = []
    for item in items:
        if not isinstance(item, dict):
            logger.warning(f"Skipping non-object candidate: {item!r}")
            continue
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            logger.warning(f"Skipping candidate without name: {item!r}")
            continue
        localized = item.get("nameIt") or item.get("localizedName")
        candidates.append(
            RawCandidate(
                name=name.strip(),
                confidence=_coerce_confidence(item.get("confidence")),
                localized_name=localized.strip() if isinstance(localized, str) else None,
            )
        )

    logger.debug(f"Parsed {len(candidates)} candidates from {len(items)} items")
    return candidates
