"""Nearest-name fuzzy matching over the known character corpus.

Used when a query returns no characters from the SuperHero API: the query is
replaced by the closest known name (Levenshtein distance) and the search is
retried with it.

Tie-break rule: the FIRST corpus entry with the minimum distance wins, so the
corpus must be iterated in a stable order (load order of the JSON file).
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache
import json
import logging
from pathlib import Path

from app.services.errors import CorpusLoadError
from app.settings import get_settings

logger = logging.getLogger("uvicorn.error")


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance between `a` and `b`.

    Full (len(a)+1) x (len(b)+1) DP matrix; substitution, insertion and
    deletion all cost 1.
    """
    n, m = len(a), len(b)
    dp = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(n + 1):
        dp[i][0] = i
    for j in range(m + 1):
        dp[0][j] = j

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            dp[i][j] = min(
                dp[i - 1][j - 1] + cost,
                dp[i - 1][j] + 1,
                dp[i][j - 1] + 1,
            )

    return dp[n][m]


def nearest(query: str, corpus: Sequence[str]) -> str:
    """Return the corpus entry closest to `query`.

    Raises:
        CorpusLoadError: If the corpus is empty.
    """
    if not corpus:
        raise CorpusLoadError("Character name corpus is empty")

    best = corpus[0]
    best_distance = edit_distance(query, best)
    for name in corpus[1:]:
        if best_distance == 0:
            break
        distance = edit_distance(query, name)
        if distance < best_distance:
            best, best_distance = name, distance

    logger.info(f"Closest match for query '{query}': {best} (distance={best_distance})")
    return best


@lru_cache(maxsize=4)
def _load_corpus_file(path: str) -> tuple[str, ...]:
    try:
        raw = Path(path).read_text(encoding="utf-8")
        data = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusLoadError(f"Error loading character names from {path}: {e}") from e

    if not isinstance(data, list):
        raise CorpusLoadError(f"Character names file {path} must contain a JSON array")

    names = tuple(str(x).strip() for x in data if isinstance(x, str) and x.strip())
    if not names:
        raise CorpusLoadError(f"Character names file {path} is empty")

    logger.info(f"Loaded {len(names)} character names from {path}")
    return names


def load_corpus(path: str | Path | None = None) -> list[str]:
    """Load the fuzzy-match corpus (cached per path, load order preserved).

    Args:
        path: JSON file with an array of names. Defaults to HERO_NAMES_PATH.

    Raises:
        CorpusLoadError: If the file is missing, malformed or empty.
    """
    resolved = str(path if path is not None else get_settings().hero_names_path)
    return list(_load_corpus_file(resolved))
