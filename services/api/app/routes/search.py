"""Search endpoint.

GET /search?query=&page=&limit=&powerMin=&powerMax=&category=

Routers are thin: the search service owns caching and fallback logic.
- Invalid or non-positive page/limit fall back to defaults
- Non-integer powerMin/powerMax are rejected by validation (422) before any I/O
- Empty query -> 400
- Character name corpus unavailable -> 500
"""

from collections.abc import AsyncGenerator
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from app.schemas import SearchResponse
from app.services.errors import CorpusLoadError, InvalidQueryError
from app.services.filters import CharacterFilter
from app.services.omdb_client import OMDbClient
from app.services.search import SearchService
from app.services.superhero_client import SuperheroAPIClient
from app.settings import get_settings
from app.stores.search_cache import RedisSearchCache
from app.stores.search_repository import PostgresSearchStore

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


async def get_search_service() -> AsyncGenerator[SearchService, None]:
    """Build a request-scoped SearchService over Redis, Postgres and the APIs."""
    superheroes = SuperheroAPIClient()
    omdb = OMDbClient()
    try:
        yield SearchService(
            cache=RedisSearchCache(),
            store=PostgresSearchStore(),
            fetch_characters=superheroes.search_characters,
            fetch_media=omdb.search_media,
        )
    finally:
        await superheroes.close()
        await omdb.close()


def _positive_int_or_default(raw: str | None, default: int) -> int:
    """Parse a positive int, falling back to `default` on anything else."""
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 1 else default


@router.get("/search", response_model=SearchResponse)
async def search(
    query: str = Query(
        default="",
        description="Character or title to search for",
        examples=["Batman"],
    ),
    page: str | None = Query(default=None, description="1-based page number (default 1)"),
    limit: str | None = Query(default=None, description="Items per page (default 12)"),
    power_min: int | None = Query(
        default=None,
        alias="powerMin",
        description="Minimum character power (0 or unset disables the bound)",
    ),
    power_max: int | None = Query(
        default=None,
        alias="powerMax",
        description="Maximum character power (0 or unset disables the bound)",
    ),
    category: str = Query(
        default="",
        description="Exact character alignment, e.g. 'good' or 'bad'",
    ),
    service: SearchService = Depends(get_search_service),
) -> SearchResponse:
    """Search characters and media.

    Returns:
        SearchResponse with one page of characters (first) and media (after),
        plus the total page count (0 when nothing was found).
    """
    settings = get_settings()
    page_num = _positive_int_or_default(page, settings.search_default_page)
    limit_num = _positive_int_or_default(limit, settings.search_default_limit)

    filters = CharacterFilter(
        power_min=power_min or 0,
        power_max=power_max or 0,
        alignment=category,
    )

    try:
        result = await service.search(query, page=page_num, limit=limit_num, filters=filters)
    except InvalidQueryError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CorpusLoadError as e:
        logger.error(f"Fuzzy fallback unavailable for query={query}: {e}")
        raise HTTPException(status_code=500, detail="Error loading superhero names.")

    return SearchResponse(
        query=query,
        characters=result.characters,
        media=result.media,
        total_pages=result.total_pages,
    )
