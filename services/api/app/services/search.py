"""Search orchestration: cache -> durable store -> external fetch.

Flow (first hit wins):
1. Resolve closest-match alias for the query (Redis, 24h)
2. Result-set cache for the canonical query (Redis, 10 min)
3. Durable store (PostgreSQL); on hit, repopulate the cache
4. SuperHero API for characters; if none, replace the query with the
   nearest known character name (Levenshtein) and record an alias
5. OMDb for media; filter characters; persist cache + store (best-effort)
6. Paginate characters-then-media

Failure policy:
- Cache/store read errors are logged and treated as misses
- Cache/store write errors are logged and dropped
- Fetch errors degrade to empty collections
- Only an empty query (InvalidQueryError) or an unloadable name corpus
  (CorpusLoadError) reach the caller
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
import logging
from typing import Protocol

from app.schemas import CharacterRecord, MediaRecord, ResultSet
from app.services.errors import InvalidQueryError
from app.services.filters import CharacterFilter, filter_characters
from app.services.fuzzy import load_corpus, nearest
from app.services.pagination import SearchPage, paginate

logger = logging.getLogger("uvicorn.error")

CharacterFetcher = Callable[[str], Awaitable[list[CharacterRecord]]]
MediaFetcher = Callable[[str], Awaitable[list[MediaRecord]]]
CorpusLoader = Callable[[], Sequence[str]]


class SearchCache(Protocol):
    async def get_result_set(self, canonical_query: str) -> ResultSet | None: ...

    async def set_result_set(self, result_set: ResultSet) -> None: ...

    async def get_alias(self, original_query: str) -> str | None: ...

    async def set_alias(self, original_query: str, canonical_query: str) -> None: ...


class SearchStore(Protocol):
    async def get_result_set(self, canonical_query: str) -> ResultSet | None: ...

    async def save_result_set(self, result_set: ResultSet) -> None: ...


class SearchService:
    """Request-scoped search pipeline over injected stores and fetchers."""

    def __init__(
        self,
        *,
        cache: SearchCache,
        store: SearchStore,
        fetch_characters: CharacterFetcher,
        fetch_media: MediaFetcher,
        corpus_loader: CorpusLoader = load_corpus,
    ):
        self.cache = cache
        self.store = store
        self.fetch_characters = fetch_characters
        self.fetch_media = fetch_media
        self.corpus_loader = corpus_loader

    async def search(
        self,
        query: str,
        page: int = 1,
        limit: int = 12,
        filters: CharacterFilter | None = None,
    ) -> SearchPage:
        """Run the full search pipeline and return one page.

        Args:
            query: User query (echoed back unchanged by the route).
            page: 1-based page number.
            limit: Items per page.
            filters: Optional character filter.

        Raises:
            InvalidQueryError: If the query is empty or whitespace.
            CorpusLoadError: If fuzzy fallback is needed and the corpus cannot be loaded.
        """
        original = query.strip()
        if not original:
            raise InvalidQueryError("query must not be empty")

        canonical = await self._resolve_alias(original)

        cached = await self._read_cache(canonical)
        if cached is not None:
            logger.info(f"Search cache HIT for query={canonical}")
            return self._page(cached, page, limit, filters)

        stored = await self._read_store(canonical)
        if stored is not None:
            logger.info(f"Search store HIT for query={canonical}")
            await self._write_cache(stored)
            return self._page(stored, page, limit, filters)

        logger.info(f"Search cache MISS, fetching from external sources for query={canonical}")
        effective, characters, media = await self._fetch(canonical)

        characters = filter_characters(characters, filters)
        result_set = ResultSet(canonical_query=effective, characters=characters, media=media)

        if result_set.is_empty:
            logger.info(f"No results for query={original} (effective={effective})")
        else:
            await self._write_cache(result_set)
            await self._write_store(result_set)
            if effective != original:
                await self._write_alias(original, effective)

        return paginate(result_set.characters, result_set.media, page, limit)

    def _page(
        self,
        result_set: ResultSet,
        page: int,
        limit: int,
        filters: CharacterFilter | None,
    ) -> SearchPage:
        characters = filter_characters(result_set.characters, filters)
        return paginate(characters, result_set.media, page, limit)

    async def _fetch(self, query: str) -> tuple[str, list[CharacterRecord], list[MediaRecord]]:
        """Fetch characters + media, falling back to the nearest known name."""
        characters = await self._safe_fetch_characters(query)
        if characters:
            media = await self._safe_fetch_media(query)
            return query, characters, media

        # CorpusLoadError propagates: the fallback cannot run without it.
        corpus = self.corpus_loader()
        closest = nearest(query, corpus)

        if closest == query:
            # Already a known name; the character lookup above was authoritative.
            media = await self._safe_fetch_media(query)
            return query, characters, media

        characters, media = await asyncio.gather(
            self._safe_fetch_characters(closest),
            self._safe_fetch_media(closest),
        )
        return closest, characters, media

    async def _safe_fetch_characters(self, query: str) -> list[CharacterRecord]:
        try:
            return list(await self.fetch_characters(query))
        except Exception as e:
            logger.warning(f"Character fetch failed for query={query}: {e}")
            return []

    async def _safe_fetch_media(self, query: str) -> list[MediaRecord]:
        try:
            return list(await self.fetch_media(query))
        except Exception as e:
            logger.warning(f"Media fetch failed for query={query}: {e}")
            return []

    async def _resolve_alias(self, query: str) -> str:
        try:
            alias = await self.cache.get_alias(query)
        except Exception as e:
            logger.warning(f"Alias cache read failed: {e}")
            return query
        if alias:
            logger.info(f"Alias HIT: '{query}' -> '{alias}'")
            return alias
        return query

    async def _read_cache(self, canonical_query: str) -> ResultSet | None:
        try:
            return await self.cache.get_result_set(canonical_query)
        except Exception as e:
            logger.warning(f"Search cache read failed: {e}")
            return None

    async def _read_store(self, canonical_query: str) -> ResultSet | None:
        try:
            return await self.store.get_result_set(canonical_query)
        except Exception as e:
            logger.warning(f"Search store read failed: {e}")
            return None

    async def _write_cache(self, result_set: ResultSet) -> None:
        try:
            await self.cache.set_result_set(result_set)
        except Exception as e:
            logger.warning(f"Search cache write failed: {e}")

    async def _write_store(self, result_set: ResultSet) -> None:
        try:
            await self.store.save_result_set(result_set)
        except Exception as e:
            logger.warning(f"Search store write failed: {e}")

    async def _write_alias(self, original_query: str, canonical_query: str) -> None:
        try:
            await self.cache.set_alias(original_query, canonical_query)
        except Exception as e:
            logger.warning(f"Alias cache write failed: {e}")
