"""Pytest configuration and fixtures."""

import base64
import json

import httpx
import pytest

from ingredient_api.models import CatalogEntry

# Sample test image (1x1 red pixel PNG)
TINY_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIAX8jx0gAAAABJRU5ErkJggg=="
)
TINY_PNG_BYTES = base64.b64decode(TINY_PNG_BASE64)


def gemini_response(text: str, status_code: int = 200) -> httpx.Response:
    """Build a generateContent response wrapping ``text``."""
    return httpx.Response(
        status_code,
        json={"candidates": [{"content": {"parts": [{"text": text}]}}]},
    )


def gemini_items(*items: tuple[str, float]) -> str:
    return json.dumps([{"name": name, "confidence": conf} for name, conf in items])


class FakeSleep:
    """Records requested delays instead of sleeping."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def tiny_png() -> bytes:
    return TINY_PNG_BYTES


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def catalog_entries() -> list[CatalogEntry]:
    """A small slice of the reference catalog."""
    return [
        CatalogEntry(id="1", canonical_name="Chicken", type=None),
        CatalogEntry(id="2", canonical_name="Tomato", type="Vegetable"),
        CatalogEntry(id="3", canonical_name="Olive Oil", type="Oil"),
        CatalogEntry(id="4", canonical_name="Vegetable Oil", type="Oil"),
        CatalogEntry(id="5", canonical_name="Basil", type=None),
        CatalogEntry(id="6", canonical_name="Parmesan Cheese", type=None),
        CatalogEntry(id="7", canonical_name="Eggs", type=None),
        CatalogEntry(id="8", canonical_name="Potatoes", type=None),
    ]
