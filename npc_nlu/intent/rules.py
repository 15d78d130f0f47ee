"""Declarative rules and a forward-chaining fixpoint engine.

A rule is a pair of plain functions:

- ``when(store)`` yields bindings (tuples of facts) that satisfy the
  condition.
- ``then(*binding)`` returns the facts to insert for one binding.

``RuleEngine.fire`` evaluates every rule against the store, inserts the
results, and repeats until no rule produces a new activation. Each
``(rule, binding)`` activation fires once; bindings are compared by fact
identity, which is stable because the store never removes facts.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from npc_nlu.exceptions import RuleIterationLimitError
from npc_nlu.intent.facts import (
    ActorRole,
    FactStore,
    FuzzyIntentHint,
    FuzzyItemMatch,
    Intent,
    NegativeIntentHint,
    RecentIntent,
    RuleFired,
    SuppressedIntent,
)
from npc_nlu.inventory.entities import ROLE_SHOPKEEPER

logger = logging.getLogger(__name__)

Binding = tuple[Any, ...]

ITEM_DESCRIBE = "item.describe"
SHOP_INVENTORY_LIST = "shop.inventory.list"

INVENTORY_BIAS = 0.15


@dataclass(frozen=True)
class Rule:
    """A named condition/action pair.

    Attributes:
        name: Rule name reported in RuleFired facts.
        when: Yields bindings from the store.
        then: Maps one binding to the facts it produces.
    """

    name: str
    when: Callable[[FactStore], Iterable[Binding]]
    then: Callable[..., Iterable[Any]]


class RuleEngine:
    """Runs rules over a fact store to a fixpoint.

    Args:
        rules: Rules to evaluate, in order.
        max_iterations: Passes allowed before giving up.
    """

    def __init__(self, rules: Iterable[Rule], max_iterations: int = 100):
        self.rules = list(rules)
        self.max_iterations = max_iterations

    def fire(self, store: FactStore) -> int:
        """Evaluate rules until no new activation fires.

        Args:
            store: Working memory to read from and insert into.

        Returns:
            Number of activations fired.

        Raises:
            RuleIterationLimitError: If no fixpoint is reached in time.
        """
        seen: set[tuple[str, tuple[int, ...]]] = set()
        fired = 0

        for iteration in range(1, self.max_iterations + 1):
            progressed = False

            for rule in self.rules:
                for binding in list(rule.when(store)):
                    activation = (rule.name, tuple(id(f) for f in binding))
                    if activation in seen:
                        continue
                    seen.add(activation)

                    store.insert_all(rule.then(*binding))
                    store.insert(RuleFired(rule.name))
                    fired += 1
                    progressed = True
                    logger.debug(f"Rule fired: {rule.name}")

            if not progressed:
                logger.debug(f"Fixpoint after {iteration} passes, {fired} activations")
                return fired

        logger.warning(f"Rules did not converge after {self.max_iterations} passes")
        raise RuleIterationLimitError(self.max_iterations)


# =============================================================================
# Shopkeeper rules
# =============================================================================


def _is_shopkeeper(store: FactStore) -> bool:
    return bool(store.query(ActorRole, lambda r: r.role == ROLE_SHOPKEEPER))


def bias_item_describe_after_inventory_rule(bias: float = INVENTORY_BIAS) -> Rule:
    """Right after an inventory listing, "tell me about X" is more likely."""

    def when(store: FactStore) -> Iterable[Binding]:
        for recent in store.query(RecentIntent, lambda r: r.name == SHOP_INVENTORY_LIST):
            for hint in store.query(
                FuzzyIntentHint,
                lambda h: h.intent == ITEM_DESCRIBE and not h.is_biased,
            ):
                yield hint, recent

    def then(hint: FuzzyIntentHint, recent: RecentIntent) -> list[Any]:
        return [
            FuzzyIntentHint(
                ITEM_DESCRIBE, min(1.0, hint.confidence + bias), is_biased=True
            )
        ]

    return Rule("BiasItemDescribeAfterInventoryRule", when, then)


def item_describe_rule() -> Rule:
    """Describe an item when describe evidence meets a matched item."""

    def when(store: FactStore) -> Iterable[Binding]:
        if not _is_shopkeeper(store):
            return
        for hint in store.query(
            FuzzyIntentHint, lambda h: h.intent == ITEM_DESCRIBE and h.confidence > 0.5
        ):
            for match in store.query(FuzzyItemMatch, lambda m: m.score >= 0.4):
                yield hint, match

    def then(hint: FuzzyIntentHint, match: FuzzyItemMatch) -> list[Any]:
        return [
            Intent(
                ITEM_DESCRIBE,
                min(1.0, hint.confidence + match.score),
                {"item_name": match.item_name},
            )
        ]

    return Rule("ItemDescribeRule", when, then)


def shop_inventory_list_rule() -> Rule:
    """List the stock when inventory evidence is strong."""

    def when(store: FactStore) -> Iterable[Binding]:
        if not _is_shopkeeper(store):
            return
        for hint in store.query(
            FuzzyIntentHint,
            lambda h: h.intent == SHOP_INVENTORY_LIST and h.confidence > 0.6,
        ):
            yield (hint,)

    def then(hint: FuzzyIntentHint) -> list[Any]:
        return [Intent(SHOP_INVENTORY_LIST, hint.confidence)]

    return Rule("ShopInventoryListRule", when, then)


def prefer_item_describe_over_inventory_rule() -> Rule:
    """A confident item description beats a generic stock listing."""

    def when(store: FactStore) -> Iterable[Binding]:
        for describe in store.query(Intent, lambda i: i.name == ITEM_DESCRIBE):
            for inventory in store.query(Intent, lambda i: i.name == SHOP_INVENTORY_LIST):
                if describe.confidence > inventory.confidence:
                    yield describe, inventory

    def then(describe: Intent, inventory: Intent) -> list[Any]:
        return [SuppressedIntent(SHOP_INVENTORY_LIST)]

    return Rule("PreferItemDescribeOverInventoryRule", when, then)


def suppress_intent_on_negative_evidence_rule(threshold: float = 0.6) -> Rule:
    """Negative evidence wins over positive evidence for the same intent.

    A hint at or above ``threshold`` suppresses its intent outright; a
    weaker hint still suppresses any fired intent it outweighs.
    """

    def when(store: FactStore) -> Iterable[Binding]:
        for hint in store.query(NegativeIntentHint):
            if hint.strength >= threshold:
                yield (hint,)
                continue
            for intent in store.query(
                Intent, lambda i: i.name == hint.intent and hint.strength > i.confidence
            ):
                yield hint, intent

    def then(hint: NegativeIntentHint, *_: Any) -> list[Any]:
        return [SuppressedIntent(hint.intent)]

    return Rule("SuppressIntentOnNegativeEvidenceRule", when, then)


def shopkeeper_rules(negative_threshold: float = 0.6) -> list[Rule]:
    """Rule set for shopkeeper actors."""
    return [
        bias_item_describe_after_inventory_rule(),
        item_describe_rule(),
        shop_inventory_list_rule(),
        prefer_item_describe_over_inventory_rule(),
        suppress_intent_on_negative_evidence_rule(negative_threshold),
    ]
