"""Synonym normalization for intent seeds.

Maps verbs, phrase heads and preposition keys onto canonical forms so
"grab the key" and "take the key" produce the same seed.

JSON format::

    {"take": ["grab", "pick", "get"], "using": ["with"]}
"""

import logging
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from npc_nlu.exceptions import LexiconError
from npc_nlu.parser.intent_seed import IntentSeed
from npc_nlu.parser.noun_phrase import NounPhrase

logger = logging.getLogger(__name__)

_SYNONYM_GROUPS = TypeAdapter(dict[str, list[str]])


class SynonymNormalizer:
    """Rewrite an IntentSeed using a synonym -> canonical map."""

    def __init__(self, synonyms: dict[str, str]):
        self.synonyms = dict(synonyms)

    @classmethod
    def from_json(cls, text: str) -> "SynonymNormalizer":
        """Build a normalizer from a JSON string of synonym groups.

        Raises:
            LexiconError: If the JSON is malformed or has the wrong shape.
        """
        try:
            groups = _SYNONYM_GROUPS.validate_json(text)
        except ValidationError as e:
            raise LexiconError(f"Invalid synonym data: {e}")

        synonym_map: dict[str, str] = {}
        for canonical, synonyms in groups.items():
            canonical = canonical.lower()
            synonym_map[canonical] = canonical
            for synonym in synonyms:
                synonym_map[synonym.lower()] = canonical

        return cls(synonym_map)

    @classmethod
    def from_json_file(cls, path: Path | str) -> "SynonymNormalizer":
        """Load synonym groups from a JSON file.

        Raises:
            LexiconError: If the file is missing or cannot be parsed.
        """
        path = Path(path)
        if not path.exists():
            raise LexiconError(f"Synonym file not found: {path}", path=str(path))

        try:
            with open(path, encoding="utf-8") as f:
                text = f.read()
            normalizer = cls.from_json(text)
        except LexiconError as e:
            raise LexiconError(f"Failed to parse {path}: {e}", path=str(path))

        logger.info(f"Loaded {len(normalizer.synonyms)} synonyms from {path}")
        return normalizer

    def normalize(self, word: str | None) -> str | None:
        """Return the canonical form of a word, or the word unchanged."""
        if word is None:
            return None
        return self.synonyms.get(word, word)

    def process(self, seed: IntentSeed) -> IntentSeed:
        """Return a new seed with canonical verb, heads and prepositions."""
        return IntentSeed(
            verb=self.normalize(seed.verb),
            subject=self._phrase(seed.subject),
            direct_object=self._phrase(seed.direct_object),
            indirect_object=self._phrase(seed.indirect_object),
            prepositions=self._prepositions(seed.prepositions),
        )

    def _phrase(self, phrase: NounPhrase | None) -> NounPhrase | None:
        if phrase is None:
            return None
        # Modifiers stay as spoken; text is rebuilt from the canonical parts
        return replace(
            phrase,
            head=self.normalize(phrase.head),
            complements=self._prepositions(phrase.complements),
            coordinated_heads=tuple(self.normalize(h) for h in phrase.coordinated_heads),
            coordination=tuple(self.normalize(w) for w in phrase.coordination),
        )

    def _prepositions(
        self, phrases: Mapping[str, NounPhrase]
    ) -> dict[str, NounPhrase]:
        return {self.normalize(prep): self._phrase(np) for prep, np in phrases.items()}
