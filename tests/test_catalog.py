"""Unit tests for the catalog client, cache and matcher."""

import asyncio

import httpx
import pytest

from ingredient_api.core.exceptions import CatalogUnavailable
from ingredient_api.models import Category, IngredientSource, RawCandidate
from ingredient_api.services.catalog import (
    CatalogCache,
    CatalogClient,
    CatalogMatcher,
    is_latin_text,
    morphological_variants,
    similarity,
)


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class CountingFetcher:
    """Fetcher returning a fixed catalog, or raising, and counting calls."""

    def __init__(self, entries, error: Exception | None = None) -> None:
        self.entries = entries
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return list(self.entries)


# =============================================================================
# Client
# =============================================================================


def make_catalog_client(handler) -> CatalogClient:
    client = CatalogClient(base_url="https://catalog.test/api/json/v1/1")
    client._client = httpx.AsyncClient(
        base_url=client.base_url, transport=httpx.MockTransport(handler)
    )
    return client


class TestCatalogClient:
    """Tests for CatalogClient.fetch_all."""

    @pytest.mark.asyncio
    async def test_fetch_all(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "meals": [
                        {"idIngredient": "1", "strIngredient": "Chicken", "strType": None},
                        {"idIngredient": "2", "strIngredient": " Tomato ", "strType": "Vegetable"},
                        {"idIngredient": "3", "strIngredient": ""},
                        "garbage",
                    ]
                },
            )

        entries = await make_catalog_client(handler).fetch_all()

        assert seen[0].url.path.endswith("/list.php")
        assert seen[0].url.params["i"] == "list"
        assert [(e.id, e.canonical_name, e.type) for e in entries] == [
            ("1", "Chicken", None),
            ("2", "Tomato", "Vegetable"),
        ]

    @pytest.mark.asyncio
    async def test_null_listing_is_empty(self):
        client = make_catalog_client(lambda request: httpx.Response(200, json={"meals": None}))

        assert await client.fetch_all() == []

    @pytest.mark.asyncio
    async def test_http_error(self):
        client = make_catalog_client(lambda request: httpx.Response(500))

        with pytest.raises(CatalogUnavailable) as exc_info:
            await client.fetch_all()

        assert exc_info.value.details["status_code"] == 500

    @pytest.mark.asyncio
    async def test_malformed_body(self):
        client = make_catalog_client(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(CatalogUnavailable):
            await client.fetch_all()


# =============================================================================
# Cache
# =============================================================================


class TestCatalogCache:
    """Tests for CatalogCache freshness and refresh behavior."""

    @pytest.mark.asyncio
    async def test_first_access_populates(self, catalog_entries):
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, clock=FakeClock())

        entries = await cache.ensure_fresh()

        assert fetcher.calls == 1
        assert len(cache) == len(catalog_entries)
        assert entries["olive oil"].id == "3"

    @pytest.mark.asyncio
    async def test_entries_are_read_only(self, catalog_entries):
        cache = CatalogCache(CountingFetcher(catalog_entries), clock=FakeClock())
        entries = await cache.ensure_fresh()

        with pytest.raises(TypeError):
            entries["new"] = catalog_entries[0]

    @pytest.mark.asyncio
    async def test_reuses_fresh_cache(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, ttl_seconds=60, clock=clock)

        await cache.ensure_fresh()
        clock.now += 59
        await cache.ensure_fresh()

        assert fetcher.calls == 1

    @pytest.mark.asyncio
    async def test_refreshes_after_ttl(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, ttl_seconds=60, clock=clock)

        await cache.ensure_fresh()
        clock.now += 61
        await cache.ensure_fresh()

        assert fetcher.calls == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self, catalog_entries):
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, clock=FakeClock())

        results = await asyncio.gather(*(cache.ensure_fresh() for _ in range(5)))

        assert fetcher.calls == 1
        assert all(len(r) == len(catalog_entries) for r in results)

    @pytest.mark.asyncio
    async def test_failure_without_cache(self):
        cache = CatalogCache(
            CountingFetcher([], error=CatalogUnavailable("down")), clock=FakeClock()
        )

        with pytest.raises(CatalogUnavailable):
            await cache.ensure_fresh()

    @pytest.mark.asyncio
    async def test_unexpected_error_is_wrapped(self):
        cache = CatalogCache(CountingFetcher([], error=RuntimeError("boom")), clock=FakeClock())

        with pytest.raises(CatalogUnavailable):
            await cache.ensure_fresh()

    @pytest.mark.asyncio
    async def test_empty_fetch_is_an_error(self):
        cache = CatalogCache(CountingFetcher([]), clock=FakeClock())

        with pytest.raises(CatalogUnavailable):
            await cache.ensure_fresh()

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_failure_after_expiry_raises_by_default(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, ttl_seconds=60, clock=clock)
        await cache.ensure_fresh()

        clock.now += 61
        fetcher.error = CatalogUnavailable("down")

        with pytest.raises(CatalogUnavailable):
            await cache.ensure_fresh()

    @pytest.mark.asyncio
    async def test_serve_stale_keeps_old_entries(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, ttl_seconds=60, serve_stale=True, clock=clock)
        await cache.ensure_fresh()

        clock.now += 61
        fetcher.error = CatalogUnavailable("down")
        entries = await cache.ensure_fresh()

        assert "chicken" in entries
        assert fetcher.calls == 2

    @pytest.mark.asyncio
    async def test_serve_stale_waits_before_refetching(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(
            fetcher, ttl_seconds=60, serve_stale=True, stale_retry_seconds=30, clock=clock
        )
        await cache.ensure_fresh()

        clock.now += 61
        fetcher.error = CatalogUnavailable("down")
        await cache.ensure_fresh()
        clock.now += 10
        entries = await cache.ensure_fresh()

        assert "chicken" in entries
        assert fetcher.calls == 2

        clock.now += 25
        await cache.ensure_fresh()

        assert fetcher.calls == 3

    @pytest.mark.asyncio
    async def test_recovery_after_stale_period(self, catalog_entries):
        clock = FakeClock()
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(
            fetcher, ttl_seconds=60, serve_stale=True, stale_retry_seconds=30, clock=clock
        )
        await cache.ensure_fresh()
        clock.now += 61
        fetcher.error = CatalogUnavailable("down")
        await cache.ensure_fresh()

        clock.now += 31
        fetcher.error = None
        await cache.ensure_fresh()

        assert cache.is_fresh()
        assert cache.last_failed is None
        assert fetcher.calls == 3

    @pytest.mark.asyncio
    async def test_clear_forces_refetch(self, catalog_entries):
        fetcher = CountingFetcher(catalog_entries)
        cache = CatalogCache(fetcher, clock=FakeClock())
        await cache.ensure_fresh()

        cache.clear()
        await cache.ensure_fresh()

        assert fetcher.calls == 2


# =============================================================================
# Matcher
# =============================================================================


@pytest.fixture
def matcher(catalog_entries) -> CatalogMatcher:
    return CatalogMatcher(CatalogCache(CountingFetcher(catalog_entries), clock=FakeClock()))


def candidates(*names: str) -> list[RawCandidate]:
    return [RawCandidate(name=name) for name in names]


class TestMatchingHelpers:
    """Tests for the matcher's text helpers."""

    def test_latin_text(self):
        assert is_latin_text("basil")
        assert is_latin_text("jalapeño")

    def test_non_latin_text(self):
        assert not is_latin_text("番茄")
        assert not is_latin_text("помидор")
        assert not is_latin_text("طماطم")
        assert not is_latin_text("トマト")
        assert not is_latin_text("   ")

    def test_plural_variants(self):
        assert "tomato" in morphological_variants("tomatoes")
        assert "berry" in morphological_variants("berries")
        assert "egg" in morphological_variants("eggs")

    def test_singular_variants(self):
        assert "potatoes" in morphological_variants("potato")
        assert "berries" in morphological_variants("berry")

    def test_similarity(self):
        assert similarity("tomato", "tomato") == 1.0
        assert similarity("tomatoe", "tomato") > 0.8
        assert similarity("basil", "chicken") < 0.5


class TestCatalogMatcher:
    """Tests for CatalogMatcher.match."""

    @pytest.mark.asyncio
    async def test_exact_match(self, matcher):
        result = await matcher.match(candidates("Tomato"))

        assert len(result) == 1
        assert result[0].name == "tomato"
        assert result[0].source == IngredientSource.CATALOG_EXACT
        assert result[0].confidence == pytest.approx(0.9)
        assert result[0].category == Category.VEGETABLES
        assert result[0].catalog_id == "2"

    @pytest.mark.asyncio
    async def test_plural_tag_matches_singular_entry(self, matcher):
        result = await matcher.match(candidates("tomatoes"))

        assert result[0].name == "tomato"
        assert result[0].source == IngredientSource.CATALOG_EXACT

    @pytest.mark.asyncio
    async def test_singular_tag_matches_plural_entry(self, matcher):
        result = await matcher.match(candidates("egg", "potato"))

        assert {i.name for i in result} == {"eggs", "potatoes"}

    @pytest.mark.asyncio
    async def test_substring_match(self, matcher):
        result = await matcher.match(candidates("chick"))

        assert result[0].name == "chicken"
        assert result[0].source == IngredientSource.CATALOG_PARTIAL
        assert result[0].confidence == pytest.approx(0.7)

    @pytest.mark.asyncio
    async def test_fuzzy_match(self, matcher):
        result = await matcher.match(candidates("tomatoe"))

        assert result[0].name == "tomato"
        assert result[0].source == IngredientSource.CATALOG_FUZZY
        assert result[0].confidence == pytest.approx(similarity("tomatoe", "tomato") * 0.7)

    @pytest.mark.asyncio
    async def test_generic_term_does_not_match_longer_entry(self, matcher):
        assert await matcher.match(candidates("vegetable")) == []

    @pytest.mark.asyncio
    async def test_unmatched_tags_are_dropped(self, matcher):
        result = await matcher.match(candidates("spoon", "basil", "plate"))

        assert [i.name for i in result] == ["basil"]

    @pytest.mark.asyncio
    async def test_catalog_type_sets_category(self, matcher):
        result = await matcher.match(candidates("olive oil"))

        assert result[0].category == Category.CONDIMENTS

    @pytest.mark.asyncio
    async def test_duplicate_matches_are_corroborated(self, matcher):
        result = await matcher.match(candidates("tomato", "tomatoes"))

        assert len(result) == 1
        assert result[0].confidence == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_non_latin_only_skips_catalog(self, catalog_entries):
        fetcher = CountingFetcher(catalog_entries)
        matcher = CatalogMatcher(CatalogCache(fetcher, clock=FakeClock()))

        assert await matcher.match(candidates("番茄", "помидор")) == []
        assert fetcher.calls == 0

    @pytest.mark.asyncio
    async def test_non_latin_tags_are_filtered(self, matcher):
        result = await matcher.match(candidates("番茄", "basil"))

        assert [i.name for i in result] == ["basil"]

    @pytest.mark.asyncio
    async def test_catalog_unavailable_propagates(self):
        fetcher = CountingFetcher([], error=CatalogUnavailable("down"))
        matcher = CatalogMatcher(CatalogCache(fetcher, clock=FakeClock()))

        with pytest.raises(CatalogUnavailable):
            await matcher.match(candidates("basil"))
