"""Token model consumed from an external part-of-speech tagger.

The tagger itself lives outside this package. Whatever produces the
tokens, the core only ever sees lowercased ``(text, lemma, pos)`` triples
with punctuation already removed.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class PartOfSpeech(str, Enum):
    """Closed set of part-of-speech tags understood by the extractors."""

    NOUN = "noun"
    PROPER_NOUN = "proper_noun"
    PRONOUN = "pronoun"
    VERB = "verb"
    AUXILIARY_VERB = "auxiliary_verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    DETERMINER = "determiner"
    ADPOSITION = "adposition"
    COORDINATING_CONJUNCTION = "coordinating_conjunction"
    NUMERAL = "numeral"
    PUNCTUATION = "punctuation"
    OTHER = "other"

    @property
    def is_nominal(self) -> bool:
        """Whether the tag can head a noun phrase."""
        return self in NOMINAL_POS


NOMINAL_POS = frozenset(
    {PartOfSpeech.NOUN, PartOfSpeech.PROPER_NOUN, PartOfSpeech.PRONOUN}
)

# Universal Dependencies tag -> PartOfSpeech. Tags without a dedicated
# member (PART, INTJ, SCONJ, SYM, X) collapse to OTHER.
UPOS_TAGS: dict[str, PartOfSpeech] = {
    "NOUN": PartOfSpeech.NOUN,
    "PROPN": PartOfSpeech.PROPER_NOUN,
    "PRON": PartOfSpeech.PRONOUN,
    "VERB": PartOfSpeech.VERB,
    "AUX": PartOfSpeech.AUXILIARY_VERB,
    "ADJ": PartOfSpeech.ADJECTIVE,
    "ADV": PartOfSpeech.ADVERB,
    "DET": PartOfSpeech.DETERMINER,
    "ADP": PartOfSpeech.ADPOSITION,
    "CCONJ": PartOfSpeech.COORDINATING_CONJUNCTION,
    "NUM": PartOfSpeech.NUMERAL,
    "PUNCT": PartOfSpeech.PUNCTUATION,
}


def pos_from_tag(tag: str) -> PartOfSpeech:
    """Map a tag name onto a PartOfSpeech.

    Accepts Universal Dependencies tags ("NOUN", "ADP") as well as the
    enum's own names and values ("proper_noun", "PROPER_NOUN").

    Args:
        tag: Tag string from a tagger or a hand-written token.

    Returns:
        The matching PartOfSpeech, or OTHER when the tag is unknown.
    """
    normalized = tag.strip().upper()
    if normalized in UPOS_TAGS:
        return UPOS_TAGS[normalized]
    try:
        return PartOfSpeech[normalized]
    except KeyError:
        pass
    try:
        return PartOfSpeech(tag.strip().lower())
    except ValueError:
        return PartOfSpeech.OTHER


@dataclass(frozen=True)
class ParsedToken:
    """A normalized token with linguistic metadata.

    Attributes:
        text: Lowercased surface form.
        lemma: Lowercased lemma (falls back to the surface form).
        pos: Part-of-speech tag.
    """

    text: str
    lemma: str
    pos: PartOfSpeech

    def __str__(self) -> str:
        return f"{self.text}/{self.pos.name}"


@dataclass(frozen=True)
class ParsedInput:
    """Normalized input for one utterance.

    Attributes:
        raw_text: The original text handed to the tagger.
        tokens: Tagged tokens with punctuation removed.
    """

    raw_text: str
    tokens: tuple[ParsedToken, ...] = field(default_factory=tuple)

    @property
    def normalized_text(self) -> str:
        """Space-joined lowercased surface forms."""
        return " ".join(t.text for t in self.tokens)

    @property
    def lemmas(self) -> list[str]:
        """Lemmas in token order."""
        return [t.lemma for t in self.tokens]

    @property
    def is_empty(self) -> bool:
        """Whether no tokens survived normalization."""
        return len(self.tokens) == 0

    def __len__(self) -> int:
        return len(self.tokens)


def parse_tagged(
    raw_text: str,
    triples: Iterable[tuple[str, str | None, PartOfSpeech | str]],
) -> ParsedInput:
    """Build a ParsedInput from raw tagger output.

    Lowercases surface forms and lemmas, substitutes the surface form for a
    missing lemma, and drops punctuation tokens.

    Args:
        raw_text: Original utterance.
        triples: ``(text, lemma, pos)`` tuples; ``pos`` may be a tag string.

    Returns:
        ParsedInput ready for the extractors.
    """
    tokens: list[ParsedToken] = []
    for text, lemma, pos in triples:
        tag = pos if isinstance(pos, PartOfSpeech) else pos_from_tag(pos)
        if tag == PartOfSpeech.PUNCTUATION:
            continue
        value = text.lower()
        tokens.append(ParsedToken(text=value, lemma=(lemma or value).lower(), pos=tag))
    return ParsedInput(raw_text=raw_text, tokens=tuple(tokens))
