"""Intent lexicons: phrase lists per intent, loaded from JSON.

JSON format::

    {"intents": [{"name": "shop.inventory.list", "patterns": ["wares", ...]}]}

Lexicons are immutable once loaded and cached per path, so every
classification after the first reuses the parsed file.
"""

import json
import logging
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from npc_nlu.config import Settings, get_settings
from npc_nlu.exceptions import LexiconError

logger = logging.getLogger(__name__)


class IntentDefinition(BaseModel):
    """Phrases that signal one intent."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Intent name, e.g. 'item.describe'")
    patterns: tuple[str, ...] = Field(
        default=(), description="Example phrases matched fuzzily against input"
    )


class IntentLexicon(BaseModel):
    """A set of intent definitions."""

    model_config = ConfigDict(frozen=True)

    intents: tuple[IntentDefinition, ...] = ()

    def phrases(self) -> Iterator[tuple[str, str]]:
        """Yield ``(intent_name, phrase)`` for every pattern."""
        for intent in self.intents:
            for pattern in intent.patterns:
                yield intent.name, pattern

    def intent_names(self) -> list[str]:
        return [i.name for i in self.intents]

    @classmethod
    def from_mapping(cls, mapping: dict[str, list[str]]) -> "IntentLexicon":
        """Build a lexicon from ``{intent_name: [phrases]}``."""
        return cls(
            intents=tuple(
                IntentDefinition(name=name, patterns=tuple(patterns))
                for name, patterns in mapping.items()
            )
        )


@lru_cache(maxsize=32)
def load_lexicon(path: Path) -> IntentLexicon:
    """Load and validate a lexicon file.

    Args:
        path: Path to the JSON lexicon.

    Returns:
        Parsed IntentLexicon (cached per path).

    Raises:
        LexiconError: If the file is missing or invalid.
    """
    if not path.exists():
        raise LexiconError(f"Lexicon file not found: {path}", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise LexiconError(f"Failed to parse {path}: {e}", path=str(path))

    try:
        lexicon = IntentLexicon.model_validate(data)
    except ValidationError as e:
        raise LexiconError(f"Invalid lexicon {path}: {e}", path=str(path))

    logger.info(
        f"Loaded lexicon {path.name}: {len(lexicon.intents)} intents, "
        f"{sum(1 for _ in lexicon.phrases())} phrases"
    )
    return lexicon


class IntentLexiconFactory:
    """Resolves lexicon file names against the configured lexicon directory."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def get_lexicon(self, filename: str) -> IntentLexicon:
        return load_lexicon(self.settings.lexicon_path(filename).resolve())

    def positive(self) -> IntentLexicon:
        return self.get_lexicon(self.settings.positive_lexicon)

    def negative(self) -> IntentLexicon:
        return self.get_lexicon(self.settings.negative_lexicon)
