"""Tests for intent seed extraction."""

import pytest

from npc_nlu.parser.intent_seed import IntentSeed
from npc_nlu.parser.noun_phrase import NounPhrase


class TestVerbAndObjects:
    """Tests for imperative commands."""

    def test_verb_with_direct_object(self, tokens, seed_extractor):
        """'open the door' -> open + door."""
        seed = seed_extractor.extract(tokens("open/VERB the/DET door/NOUN"))

        assert seed.verb == "open"
        assert seed.direct_object.head == "door"
        assert seed.subject is None
        assert seed.indirect_object is None
        assert seed.prepositions == {}

    def test_verb_uses_lemma(self, tokens, seed_extractor):
        """The verb is reported as its lemma."""
        seed = seed_extractor.extract(tokens("opened/open/VERB the/DET gate/NOUN"))
        assert seed.verb == "open"

    def test_indirect_object_pronoun(self, tokens, seed_extractor):
        """'show me the cloak' -> me is the indirect object."""
        seed = seed_extractor.extract(
            tokens("show/VERB me/PRON the/DET cloak/NOUN")
        )

        assert seed.verb == "show"
        assert seed.indirect_object.head == "me"
        assert seed.direct_object.head == "cloak"
        assert seed.direct_object.text == "the cloak"

    def test_give_him_the_sword(self, tokens, seed_extractor):
        """'give him the sword' splits dative and accusative."""
        seed = seed_extractor.extract(
            tokens("give/VERB him/PRON the/DET sword/NOUN")
        )

        assert seed.indirect_object.head == "him"
        assert seed.direct_object.head == "sword"

    def test_pronoun_before_preposition_is_direct_object(self, tokens, seed_extractor):
        """'tell me about the cloak' keeps 'me' as the direct object."""
        seed = seed_extractor.extract(
            tokens("tell/VERB me/PRON about/ADP the/DET cloak/NOUN")
        )

        assert seed.verb == "tell"
        assert seed.indirect_object is None
        assert seed.direct_object.head == "me"
        assert seed.prepositions["about"].head == "cloak"

    def test_complement_stays_inside_object(self, tokens, seed_extractor):
        """Nested complements are not repeated as top-level prepositions."""
        seed = seed_extractor.extract(
            tokens("take/VERB the/DET key/NOUN from/ADP the/DET chest/NOUN")
        )

        assert seed.direct_object.head == "key"
        assert seed.direct_object.complements["from"].head == "chest"
        assert seed.prepositions == {}

    def test_preposition_without_object(self, tokens, seed_extractor):
        """'put on the cloak' records a prepositional phrase only."""
        seed = seed_extractor.extract(tokens("put/VERB on/ADP the/DET cloak/NOUN"))

        assert seed.verb == "put"
        assert seed.direct_object is None
        assert seed.prepositions["on"].head == "cloak"


class TestSubjects:
    """Tests for subject assignment."""

    def test_declarative_subject(self, tokens, seed_extractor):
        """A phrase before the verb is the subject."""
        seed = seed_extractor.extract(
            tokens("the/DET guard/NOUN opened/open/VERB the/DET gate/NOUN")
        )

        assert seed.subject.head == "guard"
        assert seed.verb == "open"
        assert seed.direct_object.head == "gate"

    def test_aux_question(self, tokens, seed_extractor):
        """'did you see the key' -> subject you, object key."""
        seed = seed_extractor.extract(
            tokens("did/do/AUX you/PRON see/VERB the/DET key/NOUN")
        )

        assert seed.verb == "see"
        assert seed.subject.head == "you"
        assert seed.direct_object.head == "key"

    def test_wh_object_question(self, tokens, seed_extractor):
        """'what do you have' -> subject you, object what."""
        seed = seed_extractor.extract(
            tokens("what/PRON do/AUX you/PRON have/VERB")
        )

        assert seed.verb == "have"
        assert seed.subject.head == "you"
        assert seed.direct_object.head == "what"
        assert seed.direct_object.text == "what"

    def test_wh_subject_recovers_object(self, tokens, seed_extractor):
        """'who opened the door' pulls the object out of the WH clause."""
        seed = seed_extractor.extract(
            tokens("who/PRON opened/open/VERB the/DET door/NOUN")
        )

        assert seed.verb == "open"
        assert seed.subject.head == "who"
        assert seed.direct_object.head == "door"
        assert seed.direct_object.text == "the door"


class TestCopula:
    """Tests for clauses without a main verb."""

    def test_lone_auxiliary_is_the_verb(self, tokens, seed_extractor):
        """'where is the key' -> verb be."""
        seed = seed_extractor.extract(
            tokens("where/ADV is/be/AUX the/DET key/NOUN")
        )

        assert seed.verb == "be"
        assert seed.direct_object.head == "key"
        assert seed.subject is None


class TestNoVerb:
    """Tests for fragments."""

    def test_fragment_uses_first_phrase(self, tokens, seed_extractor):
        """Without a verb the first phrase becomes the direct object."""
        seed = seed_extractor.extract(
            tokens("the/DET red/ADJ door/NOUN and/CCONJ the/DET key/NOUN")
        )

        assert seed.verb is None
        assert seed.direct_object.text == "the red door"

    def test_empty_input(self, seed_extractor):
        """No tokens -> empty seed."""
        seed = seed_extractor.extract(())

        assert seed == IntentSeed()
        assert seed.is_empty

    def test_accepts_parsed_input(self, tagger, seed_extractor):
        """A ParsedInput works as well as a token tuple."""
        seed = seed_extractor.extract(tagger.tag("open/VERB the/DET door/NOUN"))
        assert seed.direct_object.head == "door"


class TestNounPhraseRoles:
    """Tests for IntentSeed.noun_phrases."""

    def test_roles_in_order(self, tokens, seed_extractor):
        """Roles come out subject, objects, then prepositions."""
        seed = seed_extractor.extract(
            tokens("show/VERB me/PRON the/DET rope/NOUN in/ADP the/DET back/NOUN")
        )

        roles = [role for role, _ in seed.noun_phrases()]
        assert roles == ["direct_object", "indirect_object"]
        assert seed.direct_object.complements["in"].head == "back"

    def test_preposition_role_name(self, tokens, seed_extractor):
        """Prepositional phrases use a prep: role."""
        seed = seed_extractor.extract(
            tokens("tell/VERB me/PRON about/ADP the/DET rope/NOUN")
        )

        assert dict(seed.noun_phrases())["prep:about"].head == "rope"

    def test_not_empty_with_only_verb(self, tokens, seed_extractor):
        """A bare verb is still a seed."""
        seed = seed_extractor.extract(tokens("look/VERB"))

        assert seed.verb == "look"
        assert not seed.is_empty


class TestNestedComplements:
    """Tests for complements several levels deep."""

    def test_key_from_chest_in_room(self, tokens, seed_extractor):
        seed = seed_extractor.extract(
            tokens("take/VERB key/NOUN from/ADP chest/NOUN in/ADP room/NOUN")
        )

        assert seed.verb == "take"
        key = seed.direct_object
        assert key.head == "key"
        assert key.complements["from"].head == "chest"
        assert key.complements["from"].complements["in"].head == "room"
        assert seed.prepositions == {}


class TestRepeatedExtraction:
    """Tests for extracting the same tokens more than once."""

    @pytest.mark.parametrize(
        "tagged",
        [
            "what/PRON do/AUX you/PRON have/VERB",
            "give/VERB him/PRON the/DET sword/NOUN",
            "take/VERB key/NOUN from/ADP chest/NOUN in/ADP room/NOUN",
            "who/PRON opened/open/VERB the/DET door/NOUN",
            "put/VERB the/DET book/NOUN on/ADP the/DET shelf/NOUN",
        ],
    )
    def test_same_tokens_same_seed(self, tokens, seed_extractor, tagged):
        """Two extractions over the same tokens yield equal seeds."""
        toks = tokens(tagged)

        first = seed_extractor.extract(toks)
        second = seed_extractor.extract(toks)

        assert first == second
        assert hash(first) == hash(second)


class TestFrozenSeed:
    """Tests for seed immutability."""

    def test_prepositions_are_read_only(self, tokens, seed_extractor):
        seed = seed_extractor.extract(tokens("cut/VERB with/ADP knife/NOUN"))

        with pytest.raises(TypeError):
            seed.prepositions["on"] = NounPhrase.single("table")
        assert list(seed.prepositions) == ["with"]

    def test_caller_dict_is_copied(self):
        """Mutating the dict passed in does not reach the seed."""
        prepositions = {"with": NounPhrase.single("knife")}
        seed = IntentSeed(verb="cut", prepositions=prepositions)

        prepositions.clear()

        assert list(seed.prepositions) == ["with"]
