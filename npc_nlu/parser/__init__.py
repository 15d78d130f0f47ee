"""Syntactic parsing of tagged player input.

Turns tagged tokens into noun phrase trees and a shallow verb/role frame
(the intent seed) that the rule engine reasons over.

Main Components:
    - ParsedToken / ParsedInput: Normalized tagger output
    - NounPhraseExtractor: Recursive-descent noun phrase builder
    - IntentSeedExtractor: Verb, subject, objects and prepositions
    - SynonymNormalizer: Canonicalizes seeds from a synonym map
    - SlashTagger / SpacyTagger: Tagger adapters
"""

from npc_nlu.parser.tokens import (
    NOMINAL_POS,
    ParsedInput,
    ParsedToken,
    PartOfSpeech,
    parse_tagged,
    pos_from_tag,
)
from npc_nlu.parser.noun_phrase import (
    NounPhrase,
    NounPhraseExtractor,
    is_question_word,
)
from npc_nlu.parser.intent_seed import IntentSeed, IntentSeedExtractor
from npc_nlu.parser.synonyms import SynonymNormalizer
from npc_nlu.parser.tagger import SlashTagger, SpacyTagger, Tagger

__all__ = [
    # Tokens
    "NOMINAL_POS",
    "ParsedInput",
    "ParsedToken",
    "PartOfSpeech",
    "parse_tagged",
    "pos_from_tag",
    # Phrases
    "NounPhrase",
    "NounPhraseExtractor",
    "is_question_word",
    # Seeds
    "IntentSeed",
    "IntentSeedExtractor",
    "SynonymNormalizer",
    # Taggers
    "SlashTagger",
    "SpacyTagger",
    "Tagger",
]
