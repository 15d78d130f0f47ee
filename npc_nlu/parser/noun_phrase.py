"""Deterministic noun phrase extraction from POS-tagged tokens.

A noun phrase is built by recursive descent over the token list:

    [determiners] [adjectives] nominal+ (CCONJ nominal)* (ADP noun-phrase)*

Prepositional complements recurse, so "key from chest in room" yields a
small tree: key -> from -> chest -> in -> room. Every complement is owned by
exactly one parent phrase.

Cursor discipline: ``try_extract`` takes a start index and returns the
phrase together with the index just past the consumed tokens. When no phrase
starts at the index it returns ``(None, index)`` unchanged.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from npc_nlu.parser.tokens import PartOfSpeech, ParsedToken

logger = logging.getLogger(__name__)


RELATIVE_PRONOUNS = frozenset({"what", "which", "that", "who", "whom", "whose"})

QUESTION_WORDS = frozenset(
    {"who", "whom", "whose", "what", "which", "where", "when", "why", "how"}
)


def is_question_word(word: str) -> bool:
    """Check whether a word is an interrogative (WH) word."""
    return word.lower() in QUESTION_WORDS


@dataclass(frozen=True)
class NounPhrase:
    """A noun phrase tree.

    Sequences are stored as tuples and complements as a read-only mapping,
    so a phrase is immutable and hashable all the way down. ``text`` is
    derived from the other fields and always matches them.

    Attributes:
        head: The nominal the phrase is about ("door" in "the red door").
        modifiers: Determiners, adjectives and compound-noun modifiers in
            surface order.
        complements: Prepositional complements keyed by preposition.
        coordinated_heads: Every coordinated nominal, in order.
        coordination: The coordinated run as spoken, conjunctions included
            ("bread", "and", "cheese").
        clause: Words of a relative clause after the pronoun head.
        text: Text of the whole phrase including complements.
    """

    head: str
    modifiers: tuple[str, ...] = ()
    complements: Mapping[str, "NounPhrase"] = field(default_factory=dict)
    coordinated_heads: tuple[str, ...] = ()
    coordination: tuple[str, ...] = ()
    clause: tuple[str, ...] = ()
    text: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "modifiers", tuple(self.modifiers))
        complements = MappingProxyType(dict(self.complements))
        object.__setattr__(self, "complements", complements)
        object.__setattr__(self, "coordinated_heads", tuple(self.coordinated_heads))
        object.__setattr__(self, "coordination", tuple(self.coordination))
        object.__setattr__(self, "clause", tuple(self.clause))

        core = self.coordination if self.coordination else (self.head,)
        parts = [*self.modifiers, *core, *self.clause]
        for prep, complement in self.complements.items():
            parts.append(prep)
            parts.append(complement.text)
        object.__setattr__(self, "text", " ".join(parts))

    def __hash__(self) -> int:
        return hash(
            (
                self.head,
                self.modifiers,
                tuple(self.complements.items()),
                self.coordinated_heads,
                self.coordination,
                self.clause,
            )
        )

    @classmethod
    def single(cls, word: str) -> "NounPhrase":
        """Build a one-word phrase (pronouns, bare nouns)."""
        return cls(head=word)

    @property
    def is_coordinated(self) -> bool:
        """Whether nominals were joined by a conjunction."""
        return bool(self.coordination)

    @property
    def is_question_word(self) -> bool:
        """Whether the head is a WH word."""
        return is_question_word(self.head)

    def walk(self) -> Iterator["NounPhrase"]:
        """Yield this phrase and every nested complement, depth first."""
        yield self
        for complement in self.complements.values():
            yield from complement.walk()

    def __str__(self) -> str:
        return self.text


class NounPhraseExtractor:
    """Recursive-descent noun phrase extractor based on POS patterns.

    Example:
        extractor = NounPhraseExtractor()
        phrase, end = extractor.try_extract(tokens, 0)
        if phrase is not None:
            print(phrase.head, phrase.complements)
    """

    def try_extract(
        self, tokens: Sequence[ParsedToken], index: int
    ) -> tuple[NounPhrase | None, int]:
        """Try to extract a noun phrase starting at ``index``.

        Args:
            tokens: Tagged tokens for the utterance.
            index: Position to start from.

        Returns:
            Tuple of (phrase, next_index). On failure the phrase is None and
            next_index equals ``index``.
        """
        start = index

        if index < len(tokens) and tokens[index].pos == PartOfSpeech.PRONOUN:
            pronoun = tokens[index]
            index += 1

            # "what you have" is a relative clause, "what do you have" is not
            if pronoun.lemma in RELATIVE_PRONOUNS and index < len(tokens):
                return self._extract_relative_clause(tokens, index, pronoun.text)

            return NounPhrase.single(pronoun.text), index

        determiners: list[str] = []
        adjectives: list[str] = []

        while index < len(tokens) and tokens[index].pos == PartOfSpeech.DETERMINER:
            determiners.append(tokens[index].text)
            index += 1

        while index < len(tokens) and tokens[index].pos == PartOfSpeech.ADJECTIVE:
            adjectives.append(tokens[index].text)
            index += 1

        if index >= len(tokens) or not tokens[index].pos.is_nominal:
            return None, start

        nominals, coordinated_heads, is_coordinated, index = self._collect_nominals(
            tokens, index
        )
        complements, index = self._extract_complements(tokens, index)

        if is_coordinated:
            phrase = NounPhrase(
                head=coordinated_heads[-1],
                modifiers=determiners + adjectives,
                complements=complements,
                coordinated_heads=coordinated_heads,
                coordination=nominals,
            )
        else:
            phrase = NounPhrase(
                head=nominals[-1],
                modifiers=determiners + adjectives + nominals[:-1],
                complements=complements,
            )
        return phrase, index

    def extract_all(self, tokens: Sequence[ParsedToken]) -> list[NounPhrase]:
        """Extract every top-level noun phrase, skipping unusable tokens."""
        phrases: list[NounPhrase] = []
        index = 0
        while index < len(tokens):
            phrase, end = self.try_extract(tokens, index)
            if phrase is not None:
                phrases.append(phrase)
                index = end
            else:
                index += 1
        return phrases

    def _collect_nominals(
        self, tokens: Sequence[ParsedToken], index: int
    ) -> tuple[list[str], list[str], bool, int]:
        """Collect a run of nominals, joining coordinated ones.

        Returns:
            Tuple of (surface tokens including conjunctions, coordinated
            heads, is_coordinated, next_index).
        """
        nominals: list[str] = []
        heads: list[str] = []
        is_coordinated = False

        while index < len(tokens) and tokens[index].pos.is_nominal:
            nominals.append(tokens[index].text)
            heads.append(tokens[index].text)
            index += 1

            # A conjunction only coordinates when another nominal follows it
            if (
                index + 1 < len(tokens)
                and tokens[index].pos == PartOfSpeech.COORDINATING_CONJUNCTION
                and tokens[index + 1].pos.is_nominal
            ):
                is_coordinated = True
                nominals.append(tokens[index].text)
                index += 1
                continue

            if is_coordinated:
                break

        return nominals, heads, is_coordinated, index

    def _extract_complements(
        self, tokens: Sequence[ParsedToken], index: int
    ) -> tuple[dict[str, NounPhrase], int]:
        """Consume prepositional complements following a nominal head."""
        complements: dict[str, NounPhrase] = {}

        while index < len(tokens):
            prep_start = index
            token = tokens[index]

            if (
                index + 1 < len(tokens)
                and token.text == "out"
                and token.pos in (PartOfSpeech.ADJECTIVE, PartOfSpeech.ADPOSITION)
                and tokens[index + 1].pos == PartOfSpeech.ADPOSITION
                and tokens[index + 1].text == "of"
            ):
                prep = "out of"
                index += 2
            elif token.pos == PartOfSpeech.ADPOSITION:
                prep = token.lemma
                index += 1
            else:
                break

            complement, index = self.try_extract(tokens, index)
            if complement is None:
                # Leave the dangling preposition for the caller
                index = prep_start
                break

            complements[prep] = complement

        return complements, index

    def _extract_relative_clause(
        self, tokens: Sequence[ParsedToken], index: int, pronoun: str
    ) -> tuple[NounPhrase, int]:
        """Extract a relative clause headed by ``pronoun``.

        ``index`` points just past the pronoun. An AUX + PRON + VERB run
        means the pronoun is interrogative ("what do you have"), so it is
        returned on its own.
        """
        if (
            index + 2 < len(tokens)
            and tokens[index].pos == PartOfSpeech.AUXILIARY_VERB
            and tokens[index + 1].pos == PartOfSpeech.PRONOUN
            and tokens[index + 2].pos == PartOfSpeech.VERB
        ):
            return NounPhrase.single(pronoun), index

        clause: list[str] = []
        while index < len(tokens):
            token = tokens[index]

            if token.pos == PartOfSpeech.PUNCTUATION or (
                token.pos == PartOfSpeech.COORDINATING_CONJUNCTION and clause
            ):
                break

            clause.append(token.text)
            index += 1

            # A verb followed by ADP + nominal hands the prepositional phrase
            # back to the sentence level ("what you have for sale")
            if (
                token.pos == PartOfSpeech.VERB
                and index + 1 < len(tokens)
                and tokens[index].pos == PartOfSpeech.ADPOSITION
                and tokens[index + 1].pos.is_nominal
            ):
                break

        if not clause:
            return NounPhrase.single(pronoun), index

        logger.debug(f"Relative clause: '{pronoun} {' '.join(clause)}'")
        return NounPhrase(head=pronoun, clause=clause), index
