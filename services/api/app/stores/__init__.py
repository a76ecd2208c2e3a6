"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: DB session, durable search results
- Redis: result-set cache, closest-match aliases, TTL policies

No business/search logic in stores - that belongs in services.
"""
