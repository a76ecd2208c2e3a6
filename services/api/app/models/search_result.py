"""SearchResult model.

Durable copy of a result set, keyed by canonical query. Characters and media
are stored as JSON-serialized text to keep migrations simple.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.stores.postgres import Base


class SearchResult(Base):
    """Persisted search result set."""

    __tablename__ = "search_results"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Canonical query (original query or its fuzzy-matched substitute)
    query: Mapped[str] = mapped_column(String(200), unique=True, index=True)

    characters_json: Mapped[str] = mapped_column(Text, default="[]")
    media_json: Mapped[str] = mapped_column(Text, default="[]")

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<SearchResult {self.query!r}>"
