"""Pagination over characters followed by media.

The two collections behave like one combined sequence (all characters, then
all media). A page is the slice [start, end) of that sequence, split back
into its character and media parts by index range.
"""

from dataclasses import dataclass, field

from app.schemas import CharacterRecord, MediaRecord


@dataclass(frozen=True)
class SearchPage:
    characters: list[CharacterRecord] = field(default_factory=list)
    media: list[MediaRecord] = field(default_factory=list)
    total_pages: int = 0


def calculate_total_pages(total_items: int, limit: int) -> int:
    """ceil(total_items / limit)."""
    return (total_items + limit - 1) // limit


def paginate(
    characters: list[CharacterRecord],
    media: list[MediaRecord],
    page: int,
    limit: int,
) -> SearchPage:
    """Return page `page` (1-based) of `limit` items.

    Args:
        characters: Ordered character results (come first).
        media: Ordered media results (come after all characters).
        page: 1-based page number.
        limit: Items per page.

    Returns:
        SearchPage; empty collections if the page is past the end.

    Raises:
        ValueError: If page or limit is < 1.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    n_characters = len(characters)
    total = n_characters + len(media)
    total_pages = calculate_total_pages(total, limit)

    start = (page - 1) * limit
    if start >= total:
        return SearchPage(total_pages=total_pages)
    end = min(start + limit, total)

    # Characters occupy [0, n_characters), media [n_characters, total).
    page_characters = characters[start:min(end, n_characters)]
    page_media = media[max(start - n_characters, 0):max(end - n_characters, 0)]

    return SearchPage(
        characters=list(page_characters),
        media=list(page_media),
        total_pages=total_pages,
    )
