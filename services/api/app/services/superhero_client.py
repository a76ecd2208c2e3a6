"""SuperHero API client (character records).

Endpoint:
- GET https://superheroapi.com/api/{access_token}/search/{name}

Contract used by the search service: `search_characters` never raises.
Network errors, non-200 responses, unexpected payloads and a missing access
token all degrade to an empty list (logged).
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from app.schemas import CharacterRecord
from app.settings import get_settings

logger = logging.getLogger("uvicorn.error")


class SuperheroAPIClient:
    """Client for superheroapi.com name search."""

    BASE_URL = "https://superheroapi.com/api"

    def __init__(
        self,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize client with access token (defaults to settings)."""
        settings = get_settings()
        self.access_token = access_token if access_token is not None else settings.superhero_api_access_token
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

    async def search_characters(self, query: str) -> list[CharacterRecord]:
        """Search characters by name.

        Args:
            query: Character name (or part of it).

        Returns:
            Characters in API order, or [] on any failure.
        """
        if not self.access_token:
            logger.warning("SUPERHERO_API_ACCESS_TOKEN is not set, returning empty character results")
            return []

        url = f"{self.BASE_URL}/{self.access_token}/search/{quote(query, safe='')}"

        try:
            client = await self._get_client()
            response = await client.get(url)
            if response.status_code != 200:
                logger.warning(f"SuperHero API returned {response.status_code} for query={query}")
                return []
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Error fetching superheroes for query={query}: {e}")
            return []

        characters = _parse_search_response(data)
        logger.info(f"Fetched {len(characters)} superheroes for query={query}")
        return characters


def _parse_search_response(data: Any) -> list[CharacterRecord]:
    """Map a SuperHero API search payload to CharacterRecords.

    Only `response == "success"` payloads carry results; items without a
    name are skipped.
    """
    if not isinstance(data, dict) or data.get("response") != "success":
        return []

    results = data.get("results")
    if not isinstance(results, list):
        return []

    characters: list[CharacterRecord] = []
    for item in results:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "").strip()
        if not name:
            continue
        image = item.get("image") or {}
        powerstats = item.get("powerstats") or {}
        biography = item.get("biography") or {}
        characters.append(
            CharacterRecord(
                name=name,
                image=str(image.get("url") or ""),
                power=str(powerstats.get("power") or ""),
                alignment=str(biography.get("alignment") or ""),
            )
        )

    return characters
