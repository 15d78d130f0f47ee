"""Tests for fact types and the fact store."""

import pytest

from npc_nlu.intent.facts import (
    FactStore,
    FuzzyIntentHint,
    Intent,
    RecentIntent,
    UserUtterance,
)


class TestRecentIntentDecay:
    """Tests for cross-turn decay."""

    def test_decay_multiplies_confidence(self):
        decayed = RecentIntent("shop.inventory.list", 0.9).decay()

        assert decayed.name == "shop.inventory.list"
        assert decayed.confidence == pytest.approx(0.765)

    def test_decay_below_floor_forgets(self):
        assert RecentIntent("shop.inventory.list", 0.22).decay() is None

    def test_custom_factor_and_floor(self):
        decayed = RecentIntent("x", 1.0).decay(factor=0.5, floor=0.5)
        assert decayed.confidence == pytest.approx(0.5)

    def test_repeated_decay_eventually_forgets(self):
        recent = RecentIntent("x", 0.9)
        turns = 0
        while recent is not None:
            recent = recent.decay()
            turns += 1
        assert turns == 10


class TestIntentIdentity:
    """Tests for Intent equality."""

    def test_confidence_not_part_of_equality(self):
        a = Intent("item.describe", 0.5, {"item_name": "Rope (20 ft)"})
        b = Intent("item.describe", 0.9, {"item_name": "Rope (20 ft)"})

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_slots_are_part_of_equality(self):
        a = Intent("item.describe", 0.5, {"item_name": "Rope (20 ft)"})
        b = Intent("item.describe", 0.5, {"item_name": "Bread Loaf"})

        assert a != b

    def test_slot_order_does_not_matter(self):
        a = Intent("x", 0.5, {"a": "1", "b": "2"})
        b = Intent("x", 0.5, {"b": "2", "a": "1"})

        assert a == b

    def test_with_slot(self):
        intent = Intent("item.describe", 0.7).with_slot("item_name", "Small Knife")

        assert intent.has_slot("item_name")
        assert intent.slots == {"item_name": "Small Knife"}
        assert intent.confidence == 0.7


class TestFactStore:
    """Tests for the append-only store."""

    def test_insert_and_query(self):
        store = FactStore()

        assert store.insert(UserUtterance("hello"))
        assert store.query(UserUtterance) == [UserUtterance("hello")]
        assert len(store) == 1

    def test_identical_fact_ignored(self):
        store = FactStore()
        store.insert(FuzzyIntentHint("item.describe", 0.5))

        assert not store.insert(FuzzyIntentHint("item.describe", 0.5))
        assert len(store) == 1

    def test_intents_with_different_confidence_both_kept(self):
        """Store dedup compares every field, not Intent identity."""
        store = FactStore()
        store.insert(Intent("item.describe", 0.5))

        assert store.insert(Intent("item.describe", 0.9))
        assert len(store.query(Intent)) == 2

    def test_insert_all_counts_new_facts(self):
        store = FactStore()
        count = store.insert_all(
            [UserUtterance("a"), UserUtterance("a"), UserUtterance("b")]
        )
        assert count == 2

    def test_query_with_predicate(self):
        store = FactStore()
        store.insert_all(
            [
                FuzzyIntentHint("item.describe", 0.3),
                FuzzyIntentHint("item.describe", 0.8),
                FuzzyIntentHint("shop.inventory.list", 0.9),
            ]
        )

        strong = store.query(FuzzyIntentHint, lambda h: h.confidence > 0.5)
        assert [h.intent for h in strong] == ["item.describe", "shop.inventory.list"]

    def test_first(self):
        store = FactStore()
        assert store.first(UserUtterance) is None

        store.insert(UserUtterance("a"))
        store.insert(UserUtterance("b"))
        assert store.first(UserUtterance).text == "a"

    def test_iteration_is_a_snapshot(self):
        store = FactStore()
        store.insert(UserUtterance("a"))

        for _ in store:
            store.insert(UserUtterance("b"))

        assert len(store) == 2
