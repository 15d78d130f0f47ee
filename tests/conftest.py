"""Core test fixtures for NPC NLU tests."""

import pytest

from npc_nlu.config import Settings
from npc_nlu.intent.classifier import IntentClassifier
from npc_nlu.inventory.entities import Actor, Inventory, Item, create_shopkeeper
from npc_nlu.parser.intent_seed import IntentSeedExtractor
from npc_nlu.parser.noun_phrase import NounPhraseExtractor
from npc_nlu.parser.tagger import SlashTagger
from npc_nlu.parser.tokens import ParsedToken


class TokenBuilder:
    """Builds token tuples from slash-tagged text.

    Usage:
        tokens("take/VERB the/DET key/NOUN")
        tokens("opened/open/VERB the/DET door/NOUN")
    """

    def __init__(self) -> None:
        self.tagger = SlashTagger()

    def __call__(self, tagged: str) -> tuple[ParsedToken, ...]:
        return self.tagger.tag(tagged).tokens


@pytest.fixture
def tokens() -> TokenBuilder:
    """Slash-tagged text -> token tuple."""
    return TokenBuilder()


@pytest.fixture
def tagger() -> SlashTagger:
    return SlashTagger()


@pytest.fixture
def phrase_extractor() -> NounPhraseExtractor:
    return NounPhraseExtractor()


@pytest.fixture
def seed_extractor() -> IntentSeedExtractor:
    return IntentSeedExtractor()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture
def shopkeeper() -> Actor:
    """Shopkeeper stocked with the general store items."""
    return create_shopkeeper("Mara")


@pytest.fixture
def armory() -> Actor:
    """Shopkeeper whose items share words, for ambiguity tests."""
    return Actor(
        name="Brom",
        role="shopkeeper",
        inventory=Inventory(
            [
                Item("Iron Sword", "A plain blade.", 25, ("blade",)),
                Item("Iron Shield", "Dented but sound.", 20),
                Item("Steel Dagger", "Short and sharp.", 12, ("blade",)),
            ]
        ),
    )


@pytest.fixture
def classifier(settings: Settings) -> IntentClassifier:
    """Classifier on the bundled lexicons, matching the whole utterance."""
    return IntentClassifier(settings)


@pytest.fixture
def tagged_classifier(settings: Settings, tagger: SlashTagger) -> IntentClassifier:
    """Classifier that reads slash-tagged input and matches per noun phrase."""
    return IntentClassifier(settings, tagger=tagger)
