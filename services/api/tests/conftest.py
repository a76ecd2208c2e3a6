"""Shared fixtures: in-memory stores and fake external sources."""

import pytest

from app.schemas import ResultSet
from app.services.search import SearchService


class InMemorySearchCache:
    """Dict-backed stand-in for RedisSearchCache (no TTLs)."""

    def __init__(self) -> None:
        self.result_sets: dict[str, ResultSet] = {}
        self.aliases: dict[str, str] = {}
        self.fail_reads = False
        self.fail_writes = False

    async def get_result_set(self, canonical_query: str) -> ResultSet | None:
        if self.fail_reads:
            raise ConnectionError("redis down")
        return self.result_sets.get(canonical_query)

    async def set_result_set(self, result_set: ResultSet) -> None:
        if self.fail_writes:
            raise ConnectionError("redis down")
        self.result_sets[result_set.canonical_query] = result_set

    async def get_alias(self, original_query: str) -> str | None:
        if self.fail_reads:
            raise ConnectionError("redis down")
        return self.aliases.get(original_query)

    async def set_alias(self, original_query: str, canonical_query: str) -> None:
        if self.fail_writes:
            raise ConnectionError("redis down")
        self.aliases[original_query] = canonical_query


class InMemorySearchStore:
    """Dict-backed stand-in for PostgresSearchStore."""

    def __init__(self) -> None:
        self.rows: dict[str, ResultSet] = {}
        self.fail_reads = False
        self.fail_writes = False

    async def get_result_set(self, canonical_query: str) -> ResultSet | None:
        if self.fail_reads:
            raise ConnectionError("postgres down")
        return self.rows.get(canonical_query)

    async def save_result_set(self, result_set: ResultSet) -> None:
        if self.fail_writes:
            raise ConnectionError("postgres down")
        self.rows[result_set.canonical_query] = result_set


class FakeSource:
    """Async fetcher returning canned results per query and recording calls."""

    def __init__(self) -> None:
        self.results: dict[str, list] = {}
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def __call__(self, query: str) -> list:
        self.calls.append(query)
        if self.error is not None:
            raise self.error
        return list(self.results.get(query, []))


@pytest.fixture
def cache() -> InMemorySearchCache:
    return InMemorySearchCache()


@pytest.fixture
def store() -> InMemorySearchStore:
    return InMemorySearchStore()


@pytest.fixture
def characters_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def media_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def corpus() -> list[str]:
    return ["Batman", "Superman"]


@pytest.fixture
def service(cache, store, characters_source, media_source, corpus) -> SearchService:
    return SearchService(
        cache=cache,
        store=store,
        fetch_characters=characters_source,
        fetch_media=media_source,
        corpus_loader=lambda: corpus,
    )
