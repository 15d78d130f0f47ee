"""Intent aggregation: dedup, suppression and ranking."""

from collections.abc import Iterable

from npc_nlu.intent.facts import FactStore, Intent, SuppressedIntent


def aggregate_intents(intents: Iterable[Intent], suppressed: Iterable[str] = ()) -> list[Intent]:
    """Collapse intents into a ranked list.

    Intents whose name is suppressed are dropped regardless of confidence.
    The rest are grouped by ``Intent.key`` keeping the most confident member
    of each group, then sorted by descending confidence (ties keep first
    appearance).

    Args:
        intents: Intent facts in insertion order.
        suppressed: Intent names that must not be surfaced.

    Returns:
        At most one Intent per (name, slots), best first.
    """
    blocked = set(suppressed)
    best: dict[tuple, Intent] = {}

    for intent in intents:
        if intent.name in blocked:
            continue
        current = best.get(intent.key)
        if current is None or intent.confidence > current.confidence:
            # Reinsert under the same key without moving its position
            best[intent.key] = intent

    return sorted(best.values(), key=lambda i: -i.confidence)


class HighestConfidenceIntentAggregator:
    """Reads Intent and SuppressedIntent facts from a store."""

    def aggregate(self, store: FactStore) -> list[Intent]:
        suppressed = [s.name for s in store.query(SuppressedIntent)]
        return aggregate_intents(store.query(Intent), suppressed)
