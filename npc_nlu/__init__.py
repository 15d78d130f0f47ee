"""Deterministic intent extraction for conversational NPCs.

Fuzzy n-gram matching, noun phrase and intent seed extraction, and a small
forward-chaining rule engine that turns player utterances into ranked,
confidence-scored intents without asking a language model to decide.
"""

__version__ = "0.1.0"
