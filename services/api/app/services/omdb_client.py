"""OMDb client (media records: movies and series).

Each search issues two OMDb calls, `type=movie` and `type=series`, run
concurrently. Movies come first, then series.

Like the SuperHero client, `search_media` never raises.
"""

import asyncio
import logging
from typing import Any

import httpx

from app.schemas import MediaRecord
from app.settings import get_settings

logger = logging.getLogger("uvicorn.error")

MEDIA_TYPES = ("movie", "series")


class OMDbClient:
    """Client for the OMDb title search."""

    BASE_URL = "https://www.omdbapi.com/"

    def __init__(
        self,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize client with API key (defaults to settings)."""
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.omdb_api_key
        self._timeout = settings.http_timeout_seconds
        self._http_client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client (only if we created it)."""
        if self._http_client and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def search_media(self, query: str) -> list[MediaRecord]:
        """Search movies and series by title.

        Returns:
            Movies followed by series, or [] on any failure.
        """
        if not self.api_key:
            logger.warning("OMDB_API_KEY is not set, returning empty media results")
            return []

        movies, series = await asyncio.gather(
            *(self._search_type(query, media_type) for media_type in MEDIA_TYPES)
        )
        return movies + series

    async def _search_type(self, query: str, media_type: str) -> list[MediaRecord]:
        params = {"apikey": self.api_key, "s": query, "type": media_type}

        try:
            client = await self._get_client()
            response = await client.get(self.BASE_URL, params=params)
            if response.status_code != 200:
                logger.warning(f"OMDb returned {response.status_code} for query={query}, type={media_type}")
                return []
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching {media_type} results for query={query}: {e}")
            return []

        results = _parse_search_response(data)
        if not results:
            logger.info(f"No {media_type} found for query: {query}")
        return results


def _parse_search_response(data: Any) -> list[MediaRecord]:
    """Map an OMDb search payload to MediaRecords.

    OMDb signals success with the string "True" in `Response`.
    """
    if not isinstance(data, dict) or data.get("Response") != "True":
        return []

    items = data.get("Search")
    if not isinstance(items, list):
        return []

    media: list[MediaRecord] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        media.append(
            MediaRecord(
                title=str(item.get("Title") or ""),
                poster=str(item.get("Poster") or ""),
                year=str(item.get("Year") or ""),
            )
        )
    return media
