"""Business logic services.

Services contain all search logic and are called by routes.
Pure pieces (fuzzy matching, filtering, pagination) are deterministic;
the search service accepts its stores and fetchers explicitly.
"""
