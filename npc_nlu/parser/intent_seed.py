"""Intent seed extraction: verb, subject, objects and prepositions.

Turns a tagged token sequence into a shallow syntactic frame. The frame is
heuristic rather than a full dependency parse; the role-assignment order
below is what the rule engine and the tests rely on.

Pass 1 resolves the main verb. Pass 2 walks the tokens again, pulls noun
phrases with ``NounPhraseExtractor`` and assigns each one a role by its
position relative to the verb. Two repairs run afterwards for WH questions.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from npc_nlu.parser.noun_phrase import NounPhrase, NounPhraseExtractor
from npc_nlu.parser.tokens import ParsedInput, ParsedToken, PartOfSpeech

logger = logging.getLogger(__name__)


INDIRECT_OBJECT_PRONOUNS = frozenset({"me", "you", "him", "her", "us", "them"})


@dataclass(frozen=True)
class IntentSeed:
    """Syntactic frame for one utterance.

    Attributes:
        verb: Lemma of the main verb (or copula), None when there is none.
        subject: Phrase acting as the subject.
        direct_object: Phrase acting as the direct object.
        indirect_object: Dative phrase ("me" in "show me the door").
        prepositions: Top-level prepositional phrases keyed by preposition,
            as a read-only mapping. Complements nested inside a phrase are
            not repeated here.
    """

    verb: str | None = None
    subject: NounPhrase | None = None
    direct_object: NounPhrase | None = None
    indirect_object: NounPhrase | None = None
    prepositions: Mapping[str, NounPhrase] = field(default_factory=dict)

    def __post_init__(self):
        prepositions = MappingProxyType(dict(self.prepositions))
        object.__setattr__(self, "prepositions", prepositions)

    def __hash__(self) -> int:
        return hash(
            (
                self.verb,
                self.subject,
                self.direct_object,
                self.indirect_object,
                tuple(self.prepositions.items()),
            )
        )

    def noun_phrases(self) -> Iterator[tuple[str, NounPhrase]]:
        """Yield ``(role, phrase)`` for every filled role.

        Prepositional phrases use the role ``"prep:<preposition>"``.
        """
        if self.subject is not None:
            yield "subject", self.subject
        if self.direct_object is not None:
            yield "direct_object", self.direct_object
        if self.indirect_object is not None:
            yield "indirect_object", self.indirect_object
        for prep, phrase in self.prepositions.items():
            yield f"prep:{prep}", phrase

    @property
    def is_empty(self) -> bool:
        """Whether nothing at all was extracted."""
        return self.verb is None and next(self.noun_phrases(), None) is None


@dataclass
class _VerbScan:
    verb: str | None = None
    main_verb_index: int = -1
    last_aux: int = -1
    is_inverted: bool = False


class IntentSeedExtractor:
    """Extract an IntentSeed from tagged tokens.

    Example:
        extractor = IntentSeedExtractor()
        seed = extractor.extract(parse_tagged(text, triples))
        seed.verb, seed.direct_object.head
    """

    def __init__(self, phrase_extractor: NounPhraseExtractor | None = None):
        self.phrases = phrase_extractor or NounPhraseExtractor()

    def extract(self, parsed: ParsedInput | Sequence[ParsedToken]) -> IntentSeed:
        """Extract the intent seed for an utterance.

        Args:
            parsed: ParsedInput or a plain token sequence.

        Returns:
            IntentSeed. An empty input yields an empty seed.
        """
        tokens = parsed.tokens if isinstance(parsed, ParsedInput) else tuple(parsed)
        if not tokens:
            return IntentSeed()

        scan = self._resolve_verb(tokens)

        subject: NounPhrase | None = None
        direct_object: NounPhrase | None = None
        indirect_object: NounPhrase | None = None
        prepositions: dict[str, NounPhrase] = {}
        pending_prep: str | None = None
        has_wh_subject = False

        i = 0
        while i < len(tokens):
            if i == scan.main_verb_index or tokens[i].pos == PartOfSpeech.AUXILIARY_VERB:
                i += 1
                continue

            start = i
            phrase, end = self.phrases.try_extract(tokens, i)

            if phrase is None:
                if tokens[i].pos == PartOfSpeech.ADPOSITION:
                    pending_prep = tokens[i].lemma
                i += 1
                continue

            if pending_prep is not None:
                prepositions[pending_prep] = phrase
                pending_prep = None
            elif scan.verb is None:
                if direct_object is None:
                    direct_object = phrase
            elif start < scan.main_verb_index:
                if (
                    start == 0
                    and phrase.is_question_word
                    and subject is None
                    and scan.last_aux == -1
                ):
                    subject = phrase
                    has_wh_subject = True
                elif subject is None and not phrase.is_question_word:
                    subject = phrase
                elif direct_object is None:
                    direct_object = phrase
            else:
                if scan.is_inverted and subject is None and scan.main_verb_index < 2:
                    subject = phrase
                elif indirect_object is None and self._is_likely_indirect_object(
                    phrase, tokens, end
                ):
                    indirect_object = phrase
                elif direct_object is None:
                    direct_object = phrase

            i = end

        # "Who opened the door": the object sits inside the WH clause
        if has_wh_subject and direct_object is None and scan.main_verb_index >= 0:
            direct_object, _ = self.phrases.try_extract(
                tokens, scan.main_verb_index + 1
            )

        if (
            subject is not None
            and direct_object is None
            and subject.is_question_word
            and scan.main_verb_index > 0
            and scan.last_aux >= 0
        ):
            for j in range(scan.last_aux + 1, scan.main_verb_index):
                candidate, _ = self.phrases.try_extract(tokens, j)
                if candidate is not None and not candidate.is_question_word:
                    direct_object = subject
                    subject = candidate
                    break

        seed = IntentSeed(
            verb=scan.verb,
            subject=subject,
            direct_object=direct_object,
            indirect_object=indirect_object,
            prepositions=prepositions,
        )
        logger.debug(
            f"Seed: verb={seed.verb} subject={subject} "
            f"direct_object={direct_object} indirect_object={indirect_object} "
            f"prepositions={list(prepositions)}"
        )
        return seed

    def _resolve_verb(self, tokens: Sequence[ParsedToken]) -> _VerbScan:
        """Find the main verb, falling back to a lone auxiliary (copula)."""
        scan = _VerbScan()

        for i, token in enumerate(tokens):
            if token.pos == PartOfSpeech.AUXILIARY_VERB:
                scan.last_aux = i
                if i == 0 or (i == 1 and tokens[0].pos == PartOfSpeech.PRONOUN):
                    scan.is_inverted = True

                has_main_verb = any(
                    t.pos == PartOfSpeech.VERB for t in tokens[i + 1 :]
                )
                if not has_main_verb and scan.verb is None:
                    scan.verb = token.lemma
                    scan.main_verb_index = i
                    break
            elif token.pos == PartOfSpeech.VERB:
                scan.verb = token.lemma
                scan.main_verb_index = i
                break

        return scan

    def _is_likely_indirect_object(
        self, phrase: NounPhrase, tokens: Sequence[ParsedToken], index: int
    ) -> bool:
        """Check for a dative pronoun followed by another nominal.

        ``index`` points just past the phrase. A nominal met before any
        preposition or verb means the pronoun is the indirect object.
        """
        if phrase.head not in INDIRECT_OBJECT_PRONOUNS:
            return False

        for token in tokens[index:]:
            if token.pos.is_nominal:
                return True
            if token.pos in (PartOfSpeech.ADPOSITION, PartOfSpeech.VERB):
                return False
        return False
