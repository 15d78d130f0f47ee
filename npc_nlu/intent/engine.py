"""Per-turn intent processing with cross-turn recency.

The engine is stateless: the caller keeps the RecentIntent returned by
``process`` and hands it back on the next turn.

Example:
    engine = IntentEngine()
    context = IntentEngineContext()
    for line in turns:
        result = engine.process(line, shopkeeper, context)
        context = IntentEngineContext(result.updated_recent_intent)
"""

import logging
from dataclasses import dataclass, field

from npc_nlu.config import Settings, get_settings
from npc_nlu.intent.classifier import IntentClassifier
from npc_nlu.intent.facts import Intent, RecentIntent
from npc_nlu.inventory.entities import Actor
from npc_nlu.parser.intent_seed import IntentSeed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntentEngineContext:
    """Caller-owned state carried between turns."""

    recent_intent: RecentIntent | None = None


@dataclass
class IntentEngineResult:
    """Outcome of one turn.

    Attributes:
        intents: Ranked intents, best first.
        fired_rules: Distinct rule names that fired.
        updated_recent_intent: RecentIntent to pass into the next turn.
        seed: Intent seed, when the classifier has a tagger.
    """

    intents: list[Intent] = field(default_factory=list)
    fired_rules: list[str] = field(default_factory=list)
    updated_recent_intent: RecentIntent | None = None
    seed: IntentSeed | None = None

    @property
    def top_intent(self) -> Intent | None:
        return self.intents[0] if self.intents else None

    def intent_names(self) -> set[str]:
        return {i.name for i in self.intents}


class IntentEngine:
    """Runs the classifier and threads the recent intent through turns.

    Args:
        classifier: Classifier to use; built from settings when omitted.
        settings: Decay factor and floor for the recent intent.
    """

    def __init__(
        self,
        classifier: IntentClassifier | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.classifier = classifier or IntentClassifier(self.settings)

    def process(
        self,
        utterance: str,
        actor: Actor,
        context: IntentEngineContext | None = None,
    ) -> IntentEngineResult:
        """Process one player utterance.

        The updated recent intent is the strongest fresh intent when any
        fired, otherwise the previous recent intent decayed, otherwise None.
        """
        context = context or IntentEngineContext()
        result = self.classifier.classify(utterance, actor, context.recent_intent)

        if result.intents:
            strongest = max(result.intents, key=lambda i: i.confidence)
            updated = RecentIntent(strongest.name, strongest.confidence)
        elif context.recent_intent is not None:
            updated = context.recent_intent.decay(
                self.settings.recent_intent_decay, self.settings.recent_intent_floor
            )
            logger.debug(f"No fresh intent; recent intent decayed to {updated}")
        else:
            updated = None

        return IntentEngineResult(
            intents=result.intents,
            fired_rules=result.fired_rules,
            updated_recent_intent=updated,
            seed=result.seed,
        )
