"""Rule-based intent classifier.

One classification builds a fresh FactStore, seeds it with session facts,
runs the evidence providers in order, fires the role's rule set to a
fixpoint and aggregates the resulting Intent facts.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from npc_nlu.config import Settings, get_settings
from npc_nlu.exceptions import UnknownRoleError
from npc_nlu.intent.aggregator import HighestConfidenceIntentAggregator
from npc_nlu.intent.evidence import (
    EvidenceProvider,
    ItemEvidenceProvider,
    NegativeIntentEvidenceProvider,
    PositiveIntentEvidenceProvider,
)
from npc_nlu.intent.facts import (
    ActorRole,
    FactStore,
    Intent,
    IntentSeedFact,
    RecentIntent,
    RuleFired,
    UserUtterance,
)
from npc_nlu.intent.lexicon import IntentLexicon, IntentLexiconFactory
from npc_nlu.intent.rules import Rule, RuleEngine, shopkeeper_rules
from npc_nlu.inventory.entities import ROLE_SHOPKEEPER, Actor
from npc_nlu.parser.intent_seed import IntentSeed, IntentSeedExtractor
from npc_nlu.parser.synonyms import SynonymNormalizer
from npc_nlu.parser.tagger import Tagger

logger = logging.getLogger(__name__)


@dataclass
class IntentClassificationResult:
    """Ranked intents plus the rules that produced them."""

    intents: list[Intent] = field(default_factory=list)
    fired_rules: list[str] = field(default_factory=list)
    seed: IntentSeed | None = None


class RuleSetFactory:
    """Looks up the rule set for an actor role."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self._factories: dict[str, Callable[[], list[Rule]]] = {
            ROLE_SHOPKEEPER: lambda: shopkeeper_rules(
                settings.negative_suppression_threshold
            ),
        }

    def register(self, role: str, factory: Callable[[], list[Rule]]) -> None:
        self._factories[role] = factory

    def roles(self) -> list[str]:
        return list(self._factories)

    def create(self, role: str) -> list[Rule]:
        """Create the rules for a role.

        Raises:
            UnknownRoleError: If no rule set is registered for the role.
        """
        try:
            factory = self._factories[role]
        except KeyError:
            raise UnknownRoleError(role)
        return factory()


class IntentClassifier:
    """Classifies an utterance for an actor.

    Args:
        settings: Thresholds and lexicon locations.
        positive_lexicon: Overrides the configured positive lexicon.
        negative_lexicon: Overrides the configured negative lexicon.
        tagger: Optional tagger; when given, the utterance's intent seed is
            extracted and the item provider matches per noun phrase.
        normalizer: Optional synonym normalizer applied to the seed.
        rule_sets: Role -> rules lookup.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        positive_lexicon: IntentLexicon | None = None,
        negative_lexicon: IntentLexicon | None = None,
        tagger: Tagger | None = None,
        normalizer: SynonymNormalizer | None = None,
        rule_sets: RuleSetFactory | None = None,
    ):
        self.settings = settings or get_settings()

        lexicons = IntentLexiconFactory(self.settings)
        positive = positive_lexicon if positive_lexicon is not None else lexicons.positive()
        negative = negative_lexicon if negative_lexicon is not None else lexicons.negative()

        self.tagger = tagger
        self.normalizer = normalizer
        self.seed_extractor = IntentSeedExtractor()
        self.rule_sets = rule_sets or RuleSetFactory(self.settings)
        self.aggregator = HighestConfidenceIntentAggregator()

        parallel = self.settings.parallel_threshold
        self.providers: list[EvidenceProvider] = [
            NegativeIntentEvidenceProvider(
                negative, self.settings.negative_min_similarity, parallel
            ),
            PositiveIntentEvidenceProvider(
                positive, self.settings.positive_min_similarity, parallel
            ),
            ItemEvidenceProvider(self.settings.item_min_similarity, parallel),
        ]

    def classify(
        self,
        utterance: str,
        actor: Actor,
        recent_intent: RecentIntent | None = None,
    ) -> IntentClassificationResult:
        """Classify one utterance.

        Args:
            utterance: Raw player text.
            actor: The actor being addressed.
            recent_intent: Strongest intent from an earlier turn.

        Returns:
            IntentClassificationResult. Empty input yields an empty result.

        Raises:
            UnknownRoleError: If the actor's role has no rule set.
            RuleIterationLimitError: If the rules fail to converge.
        """
        if not utterance or not utterance.strip():
            return IntentClassificationResult()

        rules = self.rule_sets.create(actor.role)

        text = utterance.strip().lower()
        seed = None
        if self.tagger is not None:
            parsed = self.tagger.tag(utterance)
            text = parsed.normalized_text or text
            seed = self.seed_extractor.extract(parsed)
            if self.normalizer is not None:
                seed = self.normalizer.process(seed)

        store = FactStore()
        store.insert(UserUtterance(text))
        store.insert(ActorRole(actor.role))
        if recent_intent is not None:
            store.insert(recent_intent)
        if seed is not None:
            store.insert(IntentSeedFact(seed))

        for provider in self.providers:
            provider.provide(store, text, actor)

        RuleEngine(rules, self.settings.max_rule_iterations).fire(store)

        intents = self.aggregator.aggregate(store)
        fired_rules = list(dict.fromkeys(r.rule_name for r in store.query(RuleFired)))

        logger.debug(
            f"Classified '{text}' for {actor.role}: "
            f"{[(i.name, round(i.confidence, 3)) for i in intents]}"
        )
        return IntentClassificationResult(intents=intents, fired_rules=fired_rules, seed=seed)
