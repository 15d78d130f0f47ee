"""Evidence providers: fuzzy signals inserted as facts before rules fire.

Providers run once per classification, in a fixed order:

1. Negative lexicon -> NegativeIntentHint
2. Positive lexicon -> FuzzyIntentHint
3. Inventory items  -> FuzzyItemMatch

Each provider keeps only its best score per intent (or per item).
"""

import logging
from typing import Protocol

from npc_nlu.fuzzy import FuzzySearchEngine, SearchOptions
from npc_nlu.intent.facts import (
    FactStore,
    FuzzyIntentHint,
    FuzzyItemMatch,
    IntentSeedFact,
    NegativeIntentHint,
)
from npc_nlu.intent.lexicon import IntentLexicon
from npc_nlu.inventory.entities import Actor
from npc_nlu.inventory.resolver import strip_articles

logger = logging.getLogger(__name__)


class EvidenceProvider(Protocol):
    """Inserts hint facts for one source of signal."""

    def provide(self, store: FactStore, utterance: str, actor: Actor) -> None:
        ...


def _best_per_intent(
    lexicon: IntentLexicon, utterance: str, options: SearchOptions
) -> dict[str, float]:
    """Search the lexicon phrases and keep the best score per intent."""
    # Numeric input is an item menu pick, never a lexicon phrase index
    if utterance.strip().isdecimal():
        return {}

    pairs = list(lexicon.phrases())
    engine = FuzzySearchEngine([phrase for _, phrase in pairs], options)

    best: dict[str, float] = {}
    for result in engine.search(utterance):
        intent = pairs[result.index][0]
        if result.score > best.get(intent, 0.0):
            best[intent] = result.score
    return best


class NegativeIntentEvidenceProvider:
    """Fuzzy matching against phrases that reject an intent ("just looking")."""

    def __init__(
        self, lexicon: IntentLexicon, min_similarity: float = 0.3, parallel_threshold: int = 256
    ):
        self.lexicon = lexicon
        self.options = SearchOptions(
            minimum_similarity=min_similarity, parallel_threshold=parallel_threshold
        )

    def provide(self, store: FactStore, utterance: str, actor: Actor) -> None:
        for intent, score in _best_per_intent(self.lexicon, utterance, self.options).items():
            logger.debug(f"Negative evidence: {intent}={score:.3f}")
            store.insert(NegativeIntentHint(intent, score))


class PositiveIntentEvidenceProvider:
    """Fuzzy matching against per-intent example phrases."""

    def __init__(
        self, lexicon: IntentLexicon, min_similarity: float = 0.25, parallel_threshold: int = 256
    ):
        self.lexicon = lexicon
        self.options = SearchOptions(
            minimum_similarity=min_similarity, parallel_threshold=parallel_threshold
        )

    def provide(self, store: FactStore, utterance: str, actor: Actor) -> None:
        for intent, score in _best_per_intent(self.lexicon, utterance, self.options).items():
            logger.debug(f"Positive evidence: {intent}={score:.3f}")
            store.insert(FuzzyIntentHint(intent, score))


class ItemEvidenceProvider:
    """Fuzzy matching against the actor's item names and aliases.

    With an IntentSeedFact in the store, each noun phrase of the seed is
    searched on its own (articles stripped) and the match remembers the
    phrase and its grammatical role. Without one, the whole utterance is
    the query.
    """

    def __init__(self, min_similarity: float = 0.2, parallel_threshold: int = 256):
        self.options = SearchOptions(
            minimum_similarity=min_similarity, parallel_threshold=parallel_threshold
        )

    def provide(self, store: FactStore, utterance: str, actor: Actor) -> None:
        items = list(actor.inventory)
        if not items:
            return

        owners = []
        terms = []
        for item in items:
            for term in item.search_terms:
                owners.append(item)
                terms.append(term)
        engine = FuzzySearchEngine(terms, self.options)

        queries: list[tuple[str, str | None, str | None]] = []
        seed_fact = store.first(IntentSeedFact)
        if seed_fact is not None:
            for role, phrase in seed_fact.seed.noun_phrases():
                for part in phrase.walk():
                    query = strip_articles(part.text)
                    if query:
                        queries.append((query, part.text, role))
        if not queries:
            queries.append((utterance, None, None))

        best: dict[str, FuzzyItemMatch] = {}
        for query, phrase, role in queries:
            for result in engine.search(query):
                item = owners[result.index]
                current = best.get(item.name)
                if current is None or result.score > current.score:
                    best[item.name] = FuzzyItemMatch(
                        item_name=item.name,
                        score=result.score,
                        original_phrase=phrase,
                        role=role,
                    )

        for match in best.values():
            logger.debug(
                f"Item evidence: {match.item_name}={match.score:.3f} "
                f"(phrase={match.original_phrase!r}, role={match.role})"
            )
            store.insert(match)
