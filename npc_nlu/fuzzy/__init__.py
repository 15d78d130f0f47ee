"""Character n-gram fuzzy search."""

from npc_nlu.fuzzy.engine import FuzzySearchEngine, SearchResult, fuzzy_search
from npc_nlu.fuzzy.options import SearchOptions
from npc_nlu.fuzzy.vector import NgramVector, normalize

__all__ = [
    "FuzzySearchEngine",
    "NgramVector",
    "SearchOptions",
    "SearchResult",
    "fuzzy_search",
    "normalize",
]
