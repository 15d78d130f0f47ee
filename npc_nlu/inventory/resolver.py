"""Item resolution from free-text references.

Resolves what the player said ("the bread", "wool", "small knfe") to an
item in an inventory.

Resolution strategies (in order):
1. Exact name match
2. Alias match
3. Token overlap (share of input tokens found in the item name)
4. Edit distance against the item name

Each stage that matches more than one item returns AMBIGUOUS with all
candidates so the caller can ask for clarification.
"""

import logging
import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from npc_nlu.inventory.entities import Item

logger = logging.getLogger(__name__)

# Articles to strip from references
ARTICLES = {"the", "a", "an", "some"}

TOKEN_OVERLAP_THRESHOLD = 0.6
MAX_EDIT_DISTANCE = 2


class ItemResolutionStatus(str, Enum):
    """Outcome of an item lookup."""

    EXACT_MATCH = "exact_match"
    SINGLE_ALIAS_MATCH = "single_alias_match"
    SINGLE_FUZZY_MATCH = "single_fuzzy_match"
    AMBIGUOUS = "ambiguous"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ItemResolutionResult:
    """Result of resolving a reference to an item.

    Attributes:
        status: How (or whether) the reference resolved.
        item: The resolved item for single-match statuses.
        candidates: Competing items when the status is AMBIGUOUS.
    """

    status: ItemResolutionStatus
    item: Item | None = None
    candidates: tuple[Item, ...] = ()

    @property
    def resolved(self) -> bool:
        return self.item is not None

    @property
    def ambiguous(self) -> bool:
        return self.status == ItemResolutionStatus.AMBIGUOUS


def normalize_reference(text: str) -> str:
    """Lowercase, NFC-normalize and trim a reference."""
    return unicodedata.normalize("NFC", text.lower()).strip()


def strip_articles(text: str) -> str:
    """Drop leading articles ("the bread" -> "bread")."""
    words = text.split()
    while words and words[0].lower() in ARTICLES:
        words = words[1:]
    return " ".join(words)


def token_overlap(reference: str, target: str) -> float:
    """Share of the reference's tokens that also appear in the target."""
    reference_tokens = set(reference.split())
    if not reference_tokens:
        return 0.0
    return len(reference_tokens & set(target.split())) / len(reference_tokens)


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings."""
    costs = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        costs[0] = i
        diagonal = i - 1
        for j in range(1, len(b) + 1):
            current = min(
                1 + min(costs[j], costs[j - 1]),
                diagonal if a[i - 1] == b[j - 1] else diagonal + 1,
            )
            diagonal = costs[j]
            costs[j] = current
    return costs[len(b)]


class ItemResolver:
    """Resolves player references to inventory items.

    Usage:
        result = ItemResolver().resolve("the bread", actor.inventory)
        if result.resolved:
            item = result.item
        elif result.ambiguous:
            candidates = result.candidates
    """

    def resolve(self, text: str | None, inventory: Iterable[Item]) -> ItemResolutionResult:
        """Resolve a reference against an inventory.

        Args:
            text: What the player called the item.
            inventory: Items to search.

        Returns:
            ItemResolutionResult. Never raises for a failed lookup.
        """
        if text is None or not text.strip():
            return ItemResolutionResult(ItemResolutionStatus.NOT_FOUND)

        items = list(inventory)
        reference = strip_articles(normalize_reference(text))
        if not reference:
            return ItemResolutionResult(ItemResolutionStatus.NOT_FOUND)

        exact = [i for i in items if normalize_reference(i.name) == reference]
        if exact:
            return self._single_or_ambiguous(exact, ItemResolutionStatus.EXACT_MATCH)

        alias = [
            i
            for i in items
            if any(normalize_reference(a) == reference for a in i.aliases)
        ]
        if alias:
            return self._single_or_ambiguous(
                alias, ItemResolutionStatus.SINGLE_ALIAS_MATCH
            )

        overlaps = [
            (token_overlap(reference, normalize_reference(i.name)), i) for i in items
        ]
        overlapping = [
            i
            for score, i in sorted(overlaps, key=lambda pair: -pair[0])
            if score >= TOKEN_OVERLAP_THRESHOLD
        ]
        if overlapping:
            return self._single_or_ambiguous(
                overlapping, ItemResolutionStatus.SINGLE_FUZZY_MATCH
            )

        distances = [
            (levenshtein(reference, normalize_reference(i.name)), i) for i in items
        ]
        close = [
            i
            for distance, i in sorted(distances, key=lambda pair: pair[0])
            if distance <= MAX_EDIT_DISTANCE
        ]
        if close:
            return self._single_or_ambiguous(
                close, ItemResolutionStatus.SINGLE_FUZZY_MATCH
            )

        logger.debug(f"No item matches '{text}'")
        return ItemResolutionResult(ItemResolutionStatus.NOT_FOUND)

    def _single_or_ambiguous(
        self, matches: list[Item], status: ItemResolutionStatus
    ) -> ItemResolutionResult:
        if len(matches) == 1:
            return ItemResolutionResult(status, item=matches[0])
        logger.debug(f"Ambiguous reference: {[i.name for i in matches]}")
        return ItemResolutionResult(
            ItemResolutionStatus.AMBIGUOUS, candidates=tuple(matches)
        )
