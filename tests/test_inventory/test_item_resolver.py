"""Tests for resolving free-text item references."""

import pytest

from npc_nlu.inventory.entities import Item
from npc_nlu.inventory.resolver import (
    ItemResolutionStatus,
    ItemResolver,
    levenshtein,
    strip_articles,
    token_overlap,
)


@pytest.fixture
def resolver() -> ItemResolver:
    return ItemResolver()


class TestExactAndAlias:
    """Tests for the first two resolution stages."""

    def test_exact_name(self, resolver, shopkeeper):
        result = resolver.resolve("Bread Loaf", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.EXACT_MATCH
        assert result.item.name == "Bread Loaf"
        assert result.resolved

    def test_exact_name_ignores_case_and_articles(self, resolver, shopkeeper):
        result = resolver.resolve("  the BREAD loaf ", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.EXACT_MATCH
        assert result.item.name == "Bread Loaf"

    def test_name_with_punctuation(self, resolver, shopkeeper):
        result = resolver.resolve("rope (20 ft)", shopkeeper.inventory)
        assert result.item.name == "Rope (20 ft)"

    def test_alias(self, resolver, shopkeeper):
        result = resolver.resolve("the rope", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.SINGLE_ALIAS_MATCH
        assert result.item.name == "Rope (20 ft)"

    def test_unicode_forms_match(self, resolver):
        """Composed and decomposed accents resolve to the same item."""
        items = [Item("Café Bread", "Flaky.", 4)]
        result = resolver.resolve("café bread", items)

        assert result.status == ItemResolutionStatus.EXACT_MATCH

    def test_shared_alias_is_ambiguous(self, resolver, armory):
        result = resolver.resolve("blade", armory.inventory)

        assert result.ambiguous
        assert not result.resolved
        assert [i.name for i in result.candidates] == ["Iron Sword", "Steel Dagger"]


class TestFuzzyStages:
    """Tests for token overlap and edit distance."""

    def test_partial_name(self, resolver, shopkeeper):
        result = resolver.resolve("wool", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.SINGLE_FUZZY_MATCH
        assert result.item.name == "Wool Cloak"

    def test_shared_word_is_ambiguous(self, resolver, armory):
        result = resolver.resolve("iron", armory.inventory)

        assert result.status == ItemResolutionStatus.AMBIGUOUS
        assert {i.name for i in result.candidates} == {"Iron Sword", "Iron Shield"}

    def test_typo(self, resolver, shopkeeper):
        result = resolver.resolve("small knfe", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.SINGLE_FUZZY_MATCH
        assert result.item.name == "Small Knife"


class TestNotFound:
    """Tests for references that match nothing."""

    @pytest.mark.parametrize("text", [None, "", "   ", "the"])
    def test_empty_reference(self, resolver, shopkeeper, text):
        result = resolver.resolve(text, shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.NOT_FOUND
        assert result.item is None

    def test_unknown_item(self, resolver, shopkeeper):
        result = resolver.resolve("dragon egg", shopkeeper.inventory)

        assert result.status == ItemResolutionStatus.NOT_FOUND
        assert result.candidates == ()

    def test_empty_inventory(self, resolver):
        assert resolver.resolve("bread", []).status == ItemResolutionStatus.NOT_FOUND


class TestHelpers:
    """Tests for the string helpers."""

    def test_strip_articles(self):
        assert strip_articles("the bread") == "bread"
        assert strip_articles("some the cheese") == "cheese"
        assert strip_articles("bread the") == "bread the"

    def test_token_overlap(self):
        assert token_overlap("wool", "wool cloak") == 1.0
        assert token_overlap("small knfe", "small knife") == 0.5
        assert token_overlap("", "anything") == 0.0

    def test_levenshtein(self):
        assert levenshtein("kitten", "sitting") == 3
        assert levenshtein("", "abc") == 3
        assert levenshtein("rope", "rope") == 0
