"""Fact types and the per-call fact store.

Facts are immutable values. Evidence providers and rules insert them into a
``FactStore``; rules query the store by fact type. Nothing is ever retracted,
so a classification is a monotonic build-up of facts followed by
aggregation.
"""

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar

from npc_nlu.parser.intent_seed import IntentSeed

logger = logging.getLogger(__name__)

F = TypeVar("F")


# =============================================================================
# Session facts
# =============================================================================


@dataclass(frozen=True)
class UserUtterance:
    """The player's utterance, lowercased."""

    text: str


@dataclass(frozen=True)
class ActorRole:
    """Role of the actor being addressed."""

    role: str


@dataclass(frozen=True)
class RecentIntent:
    """The strongest intent from an earlier turn.

    Owned by the caller and passed back in each turn. When a turn produces
    no intent, the previous one decays until it drops below the floor.

    Attributes:
        name: Intent name.
        confidence: Confidence in [0, 1].
    """

    name: str
    confidence: float

    def decay(self, factor: float = 0.85, floor: float = 0.2) -> "RecentIntent | None":
        """Return a weaker copy, or None once it falls below ``floor``.

        Args:
            factor: Multiplier in (0, 1).
            floor: Confidence below which the intent is forgotten.
        """
        confidence = self.confidence * factor
        if confidence < floor:
            return None
        return RecentIntent(self.name, confidence)


@dataclass(frozen=True)
class IntentSeedFact:
    """Syntactic frame of the utterance, when a tagger is available."""

    seed: IntentSeed


# =============================================================================
# Evidence facts
# =============================================================================


@dataclass(frozen=True)
class FuzzyIntentHint:
    """Positive lexicon evidence for an intent.

    Attributes:
        intent: Intent name.
        confidence: Best fuzzy score against the intent's phrases.
        is_biased: Whether a rule boosted this hint from context.
    """

    intent: str
    confidence: float
    is_biased: bool = False


@dataclass(frozen=True)
class NegativeIntentHint:
    """Evidence that the player does NOT want an intent."""

    intent: str
    strength: float


@dataclass(frozen=True)
class FuzzyItemMatch:
    """An inventory item the utterance seems to mention.

    Attributes:
        item_name: Canonical item name.
        score: Best fuzzy score for the item.
        original_phrase: Phrase that matched, when extracted from a seed.
        role: Grammatical role of that phrase ("direct_object", "prep:about").
    """

    item_name: str
    score: float
    original_phrase: str | None = None
    role: str | None = None


# =============================================================================
# Rule output facts
# =============================================================================


@dataclass(frozen=True, eq=False)
class Intent:
    """A classified intent.

    Identity is ``(name, sorted slots)``; confidence is deliberately not part
    of equality or hashing so duplicates collapse during aggregation.

    Attributes:
        name: Intent name, e.g. "item.describe".
        confidence: Confidence in [0, 1].
        slots: Named arguments, e.g. {"item_name": "Bread Loaf"}.
    """

    name: str
    confidence: float
    slots: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> tuple[str, tuple[tuple[str, str], ...]]:
        return (self.name, tuple(sorted(self.slots.items())))

    def has_slot(self, slot: str) -> bool:
        return slot in self.slots

    def with_slot(self, slot: str, value: str) -> "Intent":
        """Return a copy with an extra slot."""
        return Intent(self.name, self.confidence, {**self.slots, slot: value})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intent):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True)
class SuppressedIntent:
    """Marks an intent name that must not be surfaced."""

    name: str


@dataclass(frozen=True)
class RuleFired:
    """Records that a rule fired at least once."""

    rule_name: str


# =============================================================================
# Fact store
# =============================================================================


def _values(fact: Any) -> tuple[Any, ...]:
    return tuple(getattr(fact, f.name) for f in fields(fact))


class FactStore:
    """Append-only working memory for one classification.

    A fact whose type and field values equal an existing fact is ignored,
    which keeps rule evaluation from looping on repeated insertions.
    """

    def __init__(self) -> None:
        self._facts: list[Any] = []

    def insert(self, fact: Any) -> bool:
        """Insert a fact.

        Returns:
            True if the fact was new, False if an identical fact existed.
        """
        values = _values(fact)
        for existing in self._facts:
            if type(existing) is type(fact) and _values(existing) == values:
                return False
        self._facts.append(fact)
        return True

    def insert_all(self, facts: Iterable[Any]) -> int:
        """Insert several facts. Returns how many were new."""
        return sum(1 for fact in facts if self.insert(fact))

    def query(
        self, fact_type: type[F], predicate: Callable[[F], bool] | None = None
    ) -> list[F]:
        """Return facts of a type, in insertion order, optionally filtered."""
        return [
            f
            for f in self._facts
            if isinstance(f, fact_type) and (predicate is None or predicate(f))
        ]

    def first(self, fact_type: type[F]) -> F | None:
        """Return the first fact of a type, or None."""
        for f in self._facts:
            if isinstance(f, fact_type):
                return f
        return None

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._facts))

    def __len__(self) -> int:
        return len(self._facts)
