"""Command-line interface for the NPC intent pipeline."""
