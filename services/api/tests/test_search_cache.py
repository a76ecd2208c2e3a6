"""Tests for the Redis search cache and the Postgres row mapping (no servers)."""

import json

import pytest

from app.models import SearchResult
from app.schemas import CharacterRecord, MediaRecord, ResultSet
from app.stores import redis as redis_store
from app.stores.search_cache import RedisSearchCache
from app.stores.search_repository import _result_set_to_json, _row_to_result_set

RESULT_SET = ResultSet(
    canonical_query="Batman",
    characters=[CharacterRecord(name="Batman", image="https://img.example/b.jpg", power="47", alignment="good")],
    media=[MediaRecord(title="Batman Begins", poster="", year="2005")],
)


class FakeRedis:
    """Records SETEX calls; values never expire."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> str | None:
        return self.values.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.values[key] = value
        self.ttls[key] = ttl


@pytest.fixture
def fake_redis(monkeypatch: pytest.MonkeyPatch) -> FakeRedis:
    fake = FakeRedis()
    monkeypatch.setattr(redis_store, "_redis", fake)
    return fake


@pytest.mark.asyncio
async def test_result_set_key_and_ttl(fake_redis: FakeRedis):
    await RedisSearchCache().set_result_set(RESULT_SET)

    assert fake_redis.ttls == {"search:Batman": 600}
    payload = json.loads(fake_redis.values["search:Batman"])
    assert payload["canonicalQuery"] == "Batman"


@pytest.mark.asyncio
async def test_alias_key_and_ttl(fake_redis: FakeRedis):
    cache = RedisSearchCache()
    await cache.set_alias("Batmon", "Batman")

    assert fake_redis.ttls == {"closest_match:Batmon": 86400}
    assert fake_redis.values["closest_match:Batmon"] == "Batman"
    assert await cache.get_alias("Batmon") == "Batman"


@pytest.mark.asyncio
async def test_result_set_reads_back_unchanged(fake_redis: FakeRedis):
    cache = RedisSearchCache()
    await cache.set_result_set(RESULT_SET)

    assert await cache.get_result_set("Batman") == RESULT_SET


@pytest.mark.asyncio
async def test_misses_return_none(fake_redis: FakeRedis):
    cache = RedisSearchCache()
    assert await cache.get_result_set("Robin") is None
    assert await cache.get_alias("Robin") is None


@pytest.mark.asyncio
async def test_uninitialized_redis_raises(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(redis_store, "_redis", None)
    with pytest.raises(RuntimeError):
        await RedisSearchCache().get_result_set("Batman")


def test_row_to_result_set():
    row = SearchResult(
        query="Batman",
        characters_json='[{"name": "Batman", "image": "https://img.example/b.jpg", "power": "47", "alignment": "good"}]',
        media_json='[{"title": "Batman Begins", "poster": "", "year": "2005"}]',
    )
    assert _row_to_result_set(row) == RESULT_SET


def test_row_with_empty_columns():
    row = SearchResult(query="Nobody", characters_json="", media_json=None)
    result = _row_to_result_set(row)
    assert result.canonical_query == "Nobody"
    assert result.characters == []
    assert result.media == []


def test_result_set_json_round_trips_through_row():
    characters_json, media_json = _result_set_to_json(RESULT_SET)
    row = SearchResult(query="Batman", characters_json=characters_json, media_json=media_json)
    assert _row_to_result_set(row) == RESULT_SET
