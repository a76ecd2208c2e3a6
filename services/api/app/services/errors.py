"""Search service errors.

Only these reach the HTTP layer; store and fetch failures are absorbed inside
the search service.
"""


class SearchError(RuntimeError):
    pass


class InvalidQueryError(SearchError):
    """The query cannot be searched (e.g. empty)."""


class CorpusLoadError(SearchError):
    """The fuzzy-match name corpus could not be loaded."""
