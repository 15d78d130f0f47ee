"""Fact-driven intent classification.

Main Components:
    - FactStore and fact types: Working memory for one classification
    - Evidence providers: Negative, positive and item fuzzy evidence
    - RuleEngine / shopkeeper_rules: Forward-chaining rules to a fixpoint
    - aggregate_intents: Dedup, suppression and ranking
    - IntentClassifier: Single-utterance classification
    - IntentEngine: Per-turn processing with recent-intent decay
"""

from npc_nlu.intent.aggregator import HighestConfidenceIntentAggregator, aggregate_intents
from npc_nlu.intent.classifier import (
    IntentClassificationResult,
    IntentClassifier,
    RuleSetFactory,
)
from npc_nlu.intent.engine import IntentEngine, IntentEngineContext, IntentEngineResult
from npc_nlu.intent.evidence import (
    EvidenceProvider,
    ItemEvidenceProvider,
    NegativeIntentEvidenceProvider,
    PositiveIntentEvidenceProvider,
)
from npc_nlu.intent.facts import (
    ActorRole,
    FactStore,
    FuzzyIntentHint,
    FuzzyItemMatch,
    Intent,
    IntentSeedFact,
    NegativeIntentHint,
    RecentIntent,
    RuleFired,
    SuppressedIntent,
    UserUtterance,
)
from npc_nlu.intent.lexicon import (
    IntentDefinition,
    IntentLexicon,
    IntentLexiconFactory,
    load_lexicon,
)
from npc_nlu.intent.rules import (
    ITEM_DESCRIBE,
    SHOP_INVENTORY_LIST,
    Rule,
    RuleEngine,
    shopkeeper_rules,
)

__all__ = [
    # Facts
    "ActorRole",
    "FactStore",
    "FuzzyIntentHint",
    "FuzzyItemMatch",
    "Intent",
    "IntentSeedFact",
    "NegativeIntentHint",
    "RecentIntent",
    "RuleFired",
    "SuppressedIntent",
    "UserUtterance",
    # Lexicons
    "IntentDefinition",
    "IntentLexicon",
    "IntentLexiconFactory",
    "load_lexicon",
    # Evidence
    "EvidenceProvider",
    "ItemEvidenceProvider",
    "NegativeIntentEvidenceProvider",
    "PositiveIntentEvidenceProvider",
    # Rules
    "ITEM_DESCRIBE",
    "SHOP_INVENTORY_LIST",
    "Rule",
    "RuleEngine",
    "shopkeeper_rules",
    # Classification
    "HighestConfidenceIntentAggregator",
    "IntentClassificationResult",
    "IntentClassifier",
    "IntentEngine",
    "IntentEngineContext",
    "IntentEngineResult",
    "RuleSetFactory",
    "aggregate_intents",
]
