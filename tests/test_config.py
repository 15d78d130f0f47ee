"""Tests for application configuration."""

import os
from unittest.mock import patch

from npc_nlu.config import DEFAULT_LEXICON_DIR, Settings, get_settings


class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_default_lexicons(self):
        """Bundled lexicons are used by default."""
        settings = Settings(_env_file=None)

        assert settings.lexicon_dir == DEFAULT_LEXICON_DIR
        assert settings.lexicon_path(settings.positive_lexicon).exists()
        assert settings.lexicon_path(settings.negative_lexicon).exists()
        assert settings.lexicon_path(settings.synonyms_file).exists()

    def test_default_thresholds(self):
        """Evidence thresholds default to 0.3 / 0.25 / 0.2."""
        settings = Settings(_env_file=None)

        assert settings.negative_min_similarity == 0.3
        assert settings.positive_min_similarity == 0.25
        assert settings.item_min_similarity == 0.2
        assert settings.negative_suppression_threshold == 0.6

    def test_default_recent_intent_decay(self):
        """Recent intent decays by 0.85 per idle turn down to 0.2."""
        settings = Settings(_env_file=None)

        assert settings.recent_intent_decay == 0.85
        assert settings.recent_intent_floor == 0.2

    def test_default_engine_limits(self):
        settings = Settings(_env_file=None)

        assert settings.max_rule_iterations == 100
        assert settings.parallel_threshold == 256

    def test_default_debug_is_false(self):
        """Debug mode should be off by default."""
        settings = Settings(_env_file=None)
        assert settings.debug is False


class TestSettingsFromEnvironment:
    """Tests for environment variable overrides."""

    def test_threshold_from_env(self):
        with patch.dict(os.environ, {"NPC_NLU_POSITIVE_MIN_SIMILARITY": "0.4"}):
            settings = Settings(_env_file=None)
        assert settings.positive_min_similarity == 0.4

    def test_lexicon_dir_from_env(self, tmp_path):
        with patch.dict(os.environ, {"NPC_NLU_LEXICON_DIR": str(tmp_path)}):
            settings = Settings(_env_file=None)
        assert settings.lexicon_path("x.json") == tmp_path / "x.json"

    def test_debug_from_env(self):
        with patch.dict(os.environ, {"NPC_NLU_DEBUG": "true"}):
            settings = Settings(_env_file=None)
        assert settings.debug is True


class TestGetSettings:
    """Tests for the cached settings accessor."""

    def test_returns_same_instance(self):
        assert get_settings() is get_settings()
