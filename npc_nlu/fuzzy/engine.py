"""Fuzzy search over a fixed list of strings.

Example:
    engine = FuzzySearchEngine(["Microsoft", "Minecraft", "Microwave"])
    best = next(engine.search("Microsft"))
    best.text, best.score   # ("Microsoft", 0.74...)

A query that is a plain integer within range is treated as an index into
the item list and returns that item with score 1.0, so menu-style "2"
answers resolve directly.
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from npc_nlu.fuzzy.options import SearchOptions
from npc_nlu.fuzzy.vector import NgramVector, normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchResult:
    """A scored candidate.

    Attributes:
        text: The candidate as given to the engine.
        score: Similarity in [0, 1].
        index: Position of the candidate in the engine's item list.
    """

    text: str
    score: float
    index: int


class FuzzySearchEngine:
    """Character n-gram fuzzy matcher.

    Candidate vectors are cached per engine. The cache is the only mutable
    state and is guarded by a lock, so one engine can serve concurrent
    searches.

    Args:
        items: Candidate strings, in priority order for ties.
        options: Vectorization and filtering options.
    """

    def __init__(self, items: Iterable[str], options: SearchOptions | None = None):
        self.items: list[str] = list(items)
        self.options = options or SearchOptions()
        self._vectors: dict[str, NgramVector] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.items)

    def search(self, query: str | None) -> Iterator[SearchResult]:
        """Search the items for a query.

        Args:
            query: Free text, or an integer index into the items.

        Returns:
            Iterator of results, best first. Ties keep insertion order.
            Empty or whitespace queries yield nothing.
        """
        if query is None or not query.strip():
            return iter(())

        stripped = query.strip()
        if stripped.isdecimal():
            index = int(stripped)
            if 0 <= index < len(self.items):
                logger.debug(f"Index shortcut: {index} -> '{self.items[index]}'")
                return iter((SearchResult(self.items[index], 1.0, index),))

        return iter(self._search_text(stripped))

    def best(self, query: str | None) -> SearchResult | None:
        """Return the top result, or None when nothing matches."""
        return next(self.search(query), None)

    def _search_text(self, query: str) -> list[SearchResult]:
        query_vector = self._vector(query)

        def score(index: int) -> SearchResult:
            text = self.items[index]
            similarity = query_vector.similarity(self._vector(text))
            return SearchResult(text, min(1.0, max(0.0, similarity)), index)

        indices = range(len(self.items))
        if len(self.items) > self.options.parallel_threshold:
            with ThreadPoolExecutor() as executor:
                scored = list(executor.map(score, indices))
        else:
            scored = [score(i) for i in indices]

        results = [r for r in scored if r.score >= self.options.minimum_similarity]
        # Stable sort: equal scores stay in insertion order
        results.sort(key=lambda r: -r.score)

        logger.debug(
            f"Query '{query}': {len(results)}/{len(self.items)} candidates "
            f"above {self.options.minimum_similarity}"
        )
        return results

    def _vector(self, text: str) -> NgramVector:
        key = normalize(text)
        with self._lock:
            vector = self._vectors.get(key)
        if vector is None:
            vector = NgramVector.from_text(key, self.options)
            with self._lock:
                self._vectors.setdefault(key, vector)
        return vector


def fuzzy_search(
    items: Iterable[str],
    query: str,
    max_results: int = 10,
    options: SearchOptions | None = None,
) -> list[SearchResult]:
    """One-shot search without keeping an engine around.

    Args:
        items: Candidate strings.
        query: Search text.
        max_results: Maximum results to return.
        options: Optional search options.

    Returns:
        Up to ``max_results`` results, best first.
    """
    engine = FuzzySearchEngine(items, options)
    results = []
    for result in engine.search(query):
        if len(results) >= max_results:
            break
        results.append(result)
    return results
