"""Tagger adapters producing ParsedInput.

The core never tags text itself. Anything that turns a string into
``(text, lemma, pos)`` triples can sit behind the ``Tagger`` protocol:

- ``SlashTagger`` reads hand-tagged text ("open/VERB the/DET door/NOUN"),
  which keeps tests and the CLI independent of any NLP model.
- ``SpacyTagger`` wraps spaCy when the optional ``tagger`` extra is installed.
"""

import logging
from typing import Any, Protocol

from npc_nlu.exceptions import TaggingError
from npc_nlu.parser.tokens import ParsedInput, parse_tagged

logger = logging.getLogger(__name__)


class Tagger(Protocol):
    """Anything that can turn raw text into tagged tokens."""

    def tag(self, text: str) -> ParsedInput:
        """Tag an utterance."""
        ...


class SlashTagger:
    """Parse pre-tagged text in ``word/POS`` or ``word/lemma/POS`` form.

    Tags may be Universal Dependencies names (VERB, ADP, PROPN) or
    PartOfSpeech names (ADPOSITION, proper_noun).

    Example:
        SlashTagger().tag("opened/open/VERB the/DET door/NOUN")
    """

    def tag(self, text: str) -> ParsedInput:
        """Tag slash-annotated text.

        Raises:
            TaggingError: If a word carries no tag.
        """
        triples: list[tuple[str, str | None, str]] = []
        surface: list[str] = []

        for chunk in text.split():
            parts = chunk.rsplit("/", 2)
            if len(parts) == 2:
                word, pos = parts
                lemma = None
            elif len(parts) == 3:
                word, lemma, pos = parts
            else:
                raise TaggingError(f"Untagged token '{chunk}' (expected word/POS)")

            if not word or not pos:
                raise TaggingError(f"Malformed token '{chunk}'")

            triples.append((word, lemma or None, pos))
            surface.append(word)

        return parse_tagged(" ".join(surface), triples)


class SpacyTagger:
    """Tag text with a spaCy pipeline.

    The model is loaded lazily on first use so importing this module never
    requires spaCy.

    Args:
        model: spaCy model name to load.
    """

    def __init__(self, model: str = "en_core_web_sm"):
        self.model = model
        self._nlp: Any = None

    def _load(self) -> Any:
        if self._nlp is not None:
            return self._nlp

        try:
            import spacy
        except ImportError as e:
            logger.warning("spaCy is not installed; install the 'tagger' extra")
            raise TaggingError("spaCy is not installed") from e

        try:
            self._nlp = spacy.load(self.model)
        except OSError as e:
            logger.warning(
                f"spaCy model '{self.model}' not found. "
                f"Run: python -m spacy download {self.model}"
            )
            raise TaggingError(f"spaCy model '{self.model}' is not available") from e

        logger.info(f"Loaded spaCy model '{self.model}'")
        return self._nlp

    def tag(self, text: str) -> ParsedInput:
        """Tag text with spaCy's Universal POS tags and lemmas."""
        nlp = self._load()
        doc = nlp(text)
        return parse_tagged(
            text, ((token.text, token.lemma_, token.pos_) for token in doc)
        )
