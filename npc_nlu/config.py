"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]

DEFAULT_LEXICON_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """NLU settings loaded from environment variables (prefix ``NPC_NLU_``)."""

    model_config = SettingsConfigDict(
        env_prefix="NPC_NLU_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Lexicons
    # ==========================================================================
    lexicon_dir: Path = DEFAULT_LEXICON_DIR
    positive_lexicon: str = "positive_intent_lexicon.json"
    negative_lexicon: str = "negative_intent_lexicon.json"
    synonyms_file: str = "synonyms.json"

    # ==========================================================================
    # Evidence thresholds (minimum fuzzy similarity per provider)
    # ==========================================================================
    negative_min_similarity: float = 0.3
    positive_min_similarity: float = 0.25
    item_min_similarity: float = 0.2

    # Negative evidence at or above this strength suppresses the intent outright
    negative_suppression_threshold: float = 0.6

    # ==========================================================================
    # Cross-turn memory
    # ==========================================================================
    recent_intent_decay: float = 0.85
    recent_intent_floor: float = 0.2

    # ==========================================================================
    # Engine limits
    # ==========================================================================
    max_rule_iterations: int = 100
    parallel_threshold: int = 256  # Candidates before fuzzy scoring uses threads

    # Tagger
    spacy_model: str = "en_core_web_sm"

    # Debug
    debug: bool = False
    log_level: LogLevel = "WARNING"

    def lexicon_path(self, filename: str) -> Path:
        """Resolve a lexicon filename against the lexicon directory."""
        return self.lexicon_dir / filename


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
