"""N-gram feature sets and Jaccard similarity.

Text is normalized (lowercased, trimmed) and padded with one space on each
side before character n-grams are taken, so word boundaries count as
features: " mi" and "ft " anchor the start and end of "microsoft". For
multi-word text, word n-grams are added as tuples so they never collide
with character n-grams.
"""

from dataclasses import dataclass
from typing import Hashable

from npc_nlu.fuzzy.options import SearchOptions


def normalize(text: str) -> str:
    """Lowercase and trim text for matching."""
    return text.strip().lower()


@dataclass(frozen=True)
class NgramVector:
    """Set of n-gram features for one normalized string.

    Attributes:
        text: The normalized text.
        features: Character n-grams (str) and word n-grams (tuple).
    """

    text: str
    features: frozenset[Hashable]

    @classmethod
    def from_text(cls, text: str, options: SearchOptions) -> "NgramVector":
        """Vectorize text according to the search options."""
        normalized = normalize(text)
        padded = f" {normalized} "
        features: set[Hashable] = set()

        for size in range(options.min_ngram_size, options.max_ngram_size + 1):
            for start in range(len(padded) - size + 1):
                features.add(padded[start : start + size])

        words = normalized.split()
        if options.include_word_ngrams and len(words) > 1:
            for size in range(1, options.max_word_ngram_size + 1):
                for start in range(len(words) - size + 1):
                    features.add(tuple(words[start : start + size]))

        return cls(text=normalized, features=frozenset(features))

    def similarity(self, other: "NgramVector") -> float:
        """Jaccard similarity |A & B| / |A | B|, in [0, 1]."""
        if not self.features or not other.features:
            return 0.0
        union = len(self.features | other.features)
        return len(self.features & other.features) / union

    def __len__(self) -> int:
        return len(self.features)
