"""Fuzzy search configuration."""

from dataclasses import dataclass

from npc_nlu.exceptions import SearchOptionsError


@dataclass(frozen=True)
class SearchOptions:
    """Options controlling n-gram vectorization and result filtering.

    Validated on construction; invalid combinations raise
    ``SearchOptionsError`` instead of failing later during scoring.

    Attributes:
        min_ngram_size: Shortest character n-gram.
        max_ngram_size: Longest character n-gram.
        include_word_ngrams: Add word n-grams for multi-word text.
        max_word_ngram_size: Longest word n-gram.
        minimum_similarity: Results scoring below this are dropped.
        parallel_threshold: Candidate count above which scoring uses threads.
    """

    min_ngram_size: int = 1
    max_ngram_size: int = 3
    include_word_ngrams: bool = True
    max_word_ngram_size: int = 2
    minimum_similarity: float = 0.1
    parallel_threshold: int = 256

    def __post_init__(self) -> None:
        if self.min_ngram_size < 1:
            raise SearchOptionsError(
                "min_ngram_size must be at least 1", field_name="min_ngram_size"
            )
        if self.max_ngram_size < self.min_ngram_size:
            raise SearchOptionsError(
                "max_ngram_size must be greater than or equal to min_ngram_size",
                field_name="max_ngram_size",
            )
        if self.max_word_ngram_size < 1:
            raise SearchOptionsError(
                "max_word_ngram_size must be at least 1",
                field_name="max_word_ngram_size",
            )
        if not 0.0 <= self.minimum_similarity <= 1.0:
            raise SearchOptionsError(
                "minimum_similarity must be between 0 and 1",
                field_name="minimum_similarity",
            )
        if self.parallel_threshold < 1:
            raise SearchOptionsError(
                "parallel_threshold must be at least 1",
                field_name="parallel_threshold",
            )
