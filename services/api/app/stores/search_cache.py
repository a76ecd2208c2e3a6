"""Redis-backed result-set and alias cache used by the search service."""

from app.schemas import ResultSet
from app.stores.redis import (
    get_closest_match,
    get_search_cache,
    set_closest_match,
    set_search_cache,
)


class RedisSearchCache:
    """Search cache over the module-level Redis client.

    Errors (including "Redis not initialized") propagate; the search service
    decides how to degrade.
    """

    async def get_result_set(self, canonical_query: str) -> ResultSet | None:
        payload = await get_search_cache(canonical_query)
        if not payload:
            return None
        return ResultSet.model_validate(payload)

    async def set_result_set(self, result_set: ResultSet) -> None:
        await set_search_cache(
            result_set.canonical_query,
            result_set.model_dump(mode="json", by_alias=True),
        )

    async def get_alias(self, original_query: str) -> str | None:
        return await get_closest_match(original_query)

    async def set_alias(self, original_query: str, canonical_query: str) -> None:
        await set_closest_match(original_query, canonical_query)
