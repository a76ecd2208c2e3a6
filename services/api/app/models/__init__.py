"""SQLAlchemy ORM models.

Models represent database tables:
- search_results: durable result sets keyed by canonical query
"""

from app.models.search_result import SearchResult

__all__ = ["SearchResult"]
