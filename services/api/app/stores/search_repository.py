"""PostgreSQL-backed durable store for search result sets."""

import json

from sqlalchemy import select

from app.models import SearchResult
from app.schemas import CharacterRecord, MediaRecord, ResultSet
from app.stores.postgres import get_session


class PostgresSearchStore:
    """Read/write result sets in the `search_results` table."""

    async def get_result_set(self, canonical_query: str) -> ResultSet | None:
        """Load the result set stored under `canonical_query`, if any."""
        async with get_session() as session:
            result = await session.execute(
                select(SearchResult).where(SearchResult.query == canonical_query)
            )
            row = result.scalar_one_or_none()

            if not row:
                return None

            return _row_to_result_set(row)

    async def save_result_set(self, result_set: ResultSet) -> None:
        """Insert or overwrite the row for the result set's canonical query."""
        characters_json, media_json = _result_set_to_json(result_set)

        async with get_session() as session:
            result = await session.execute(
                select(SearchResult).where(SearchResult.query == result_set.canonical_query)
            )
            row = result.scalar_one_or_none()

            if row:
                row.characters_json = characters_json
                row.media_json = media_json
            else:
                session.add(
                    SearchResult(
                        query=result_set.canonical_query,
                        characters_json=characters_json,
                        media_json=media_json,
                    )
                )


def _result_set_to_json(result_set: ResultSet) -> tuple[str, str]:
    """Serialize characters and media to the JSON text columns."""
    characters_json = json.dumps([c.model_dump() for c in result_set.characters])
    media_json = json.dumps([m.model_dump() for m in result_set.media])
    return characters_json, media_json


def _row_to_result_set(row: SearchResult) -> ResultSet:
    """Rebuild a ResultSet from a `search_results` row."""
    return ResultSet(
        canonical_query=row.query,
        characters=[CharacterRecord(**c) for c in json.loads(row.characters_json or "[]")],
        media=[MediaRecord(**m) for m in json.loads(row.media_json or "[]")],
    )
