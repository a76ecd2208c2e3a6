"""Schemas for the search endpoint (/search).

CharacterRecord / MediaRecord are also the cached and persisted shapes, so
their JSON field names must stay stable.
"""

from pydantic import BaseModel, Field


class CharacterRecord(BaseModel):
    """A single character (superhero) result."""

    name: str = Field(min_length=1)
    image: str = ""
    # String-encoded integer; upstream sends "null" for unknown values.
    power: str = ""
    alignment: str = ""

    model_config = {"frozen": True}


class MediaRecord(BaseModel):
    """A single movie or series result."""

    title: str
    poster: str = ""
    year: str = ""

    model_config = {"frozen": True}


class ResultSet(BaseModel):
    """Cached/persisted characters + media for one canonical query."""

    canonical_query: str = Field(alias="canonicalQuery")
    characters: list[CharacterRecord] = Field(default_factory=list)
    media: list[MediaRecord] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.characters and not self.media


class SearchResponse(BaseModel):
    """Response payload for GET /search."""

    query: str
    characters: list[CharacterRecord]
    media: list[MediaRecord]
    total_pages: int = Field(alias="totalPages", ge=0)

    model_config = {"populate_by_name": True}
