"""
Unit tests for configuration management.
"""

import os
import logging
from logging.handlers import RotatingFileHandler

import pytest

from persona_reviewer.config import (
    AppConfig,
    ConfigManager,
    LoggingConfig,
    ReviewConfig,
    ScoringConfig,
    load_config,
)
from persona_reviewer.review.weights import WeightTable


CONFIG_ENV_VARS = [
    "REVIEW_MODE", "REVIEW_LANGUAGE", "MAX_FILE_LIST", "LLM_SYSTEM_PROMPT",
    "SELECTION_THRESHOLD", "MENTION_THRESHOLD", "PERSONA_WEIGHTS_FILE",
    "LOG_LEVEL", "LOG_FORMAT", "LOG_FILE", "LOG_MAX_SIZE", "LOG_BACKUP_COUNT", "DEBUG",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestAppConfig:
    """Unit tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.review.mode == "persona"
        assert config.review.language == "korean"
        assert config.review.max_file_list == 20
        assert config.review.system_prompt is None
        assert config.scoring.selection_threshold is None
        assert config.scoring.mention_threshold is None
        assert config.review.is_persona_mode
        assert not config.review.is_integrated_mode

        config.validate()

    def test_from_env_defaults(self, clean_env):
        config = AppConfig.from_env()

        assert config.to_dict() == AppConfig().to_dict()

    def test_from_env(self, clean_env):
        clean_env.setenv("REVIEW_MODE", "integrated")
        clean_env.setenv("REVIEW_LANGUAGE", "english")
        clean_env.setenv("MAX_FILE_LIST", "5")
        clean_env.setenv("LLM_SYSTEM_PROMPT", "Be brief.")
        clean_env.setenv("SELECTION_THRESHOLD", "30")
        clean_env.setenv("MENTION_THRESHOLD", "70")
        clean_env.setenv("LOG_LEVEL", "WARNING")
        clean_env.setenv("DEBUG", "true")

        config = AppConfig.from_env()

        assert config.review.is_integrated_mode
        assert config.review.language == "english"
        assert config.review.max_file_list == 5
        assert config.review.system_prompt == "Be brief."
        assert config.scoring.selection_threshold == 30
        assert config.scoring.mention_threshold == 70
        assert config.logging.level == "WARNING"
        assert config.debug is True

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "review:\n"
            "  mode: integrated\n"
            "  language: english\n"
            "scoring:\n"
            "  selection_threshold: 35\n"
            "debug: true\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(str(config_file))

        assert config.review.mode == "integrated"
        assert config.review.language == "english"
        assert config.review.max_file_list == 20
        assert config.scoring.selection_threshold == 35
        assert config.scoring.mention_threshold is None
        assert config.debug is True

        assert load_config(str(config_file)).to_dict() == config.to_dict()

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    @pytest.mark.parametrize("config,message", [
        (AppConfig(review=ReviewConfig(mode="batch")), "Invalid review mode"),
        (AppConfig(review=ReviewConfig(language="french")), "Invalid review language"),
        (AppConfig(review=ReviewConfig(max_file_list=0)), "max_file_list"),
        (AppConfig(scoring=ScoringConfig(selection_threshold=-1)), "selection_threshold"),
        (AppConfig(scoring=ScoringConfig(mention_threshold=40)), "greater than"),
        (AppConfig(scoring=ScoringConfig(weights_file="/nonexistent/weights.yaml")), "Weights file"),
        (AppConfig(scoring=ScoringConfig(selection_threshold="40")), "must be an integer"),
        (AppConfig(scoring=ScoringConfig(selection_threshold=-1, mention_threshold="high")), "must be an integer"),
        (AppConfig(logging=LoggingConfig(level="LOUD")), "Invalid log level"),
    ])
    def test_validate(self, config, message):
        with pytest.raises(ValueError, match=message):
            config.validate()

    def test_mode_is_case_insensitive(self):
        config = AppConfig(review=ReviewConfig(mode="INTEGRATED"))

        config.validate()
        assert config.review.is_integrated_mode


class TestScoringConfig:
    """Weight table construction from configuration."""

    def test_default_table_with_thresholds(self):
        table = ScoringConfig(selection_threshold=30, mention_threshold=70).build_weight_table()

        assert table.selection_threshold == 30
        assert table.mention_threshold == 70
        assert table.path_rules == WeightTable.default().path_rules

    def test_unset_thresholds_keep_table_defaults(self):
        table = ScoringConfig().build_weight_table()

        assert table is WeightTable.default()
        assert (table.selection_threshold, table.mention_threshold) == (40, 60)

    def test_weights_file(self, tmp_path):
        weights_file = tmp_path / "weights.yaml"
        weights_file.write_text(
            "path_rules:\n"
            "  gateway:\n"
            "    backend_specialist: 40\n",
            encoding="utf-8",
        )

        table = ScoringConfig(weights_file=str(weights_file)).build_weight_table()

        assert [rule.trigger for rule in table.path_rules] == ["gateway"]
        assert table.selection_threshold == 40

    def test_weights_file_thresholds_are_applied(self, tmp_path):
        weights_file = tmp_path / "weights.yaml"
        weights_file.write_text(
            "path_rules:\n"
            "  gateway:\n"
            "    backend_specialist: 40\n"
            "thresholds:\n"
            "  selection: 35\n"
            "  mention: 65\n",
            encoding="utf-8",
        )

        table = ScoringConfig(weights_file=str(weights_file)).build_weight_table()
        assert (table.selection_threshold, table.mention_threshold) == (35, 65)

        # an explicit setting still wins over the file
        table = ScoringConfig(weights_file=str(weights_file), mention_threshold=80).build_weight_table()
        assert (table.selection_threshold, table.mention_threshold) == (35, 80)

    def test_weights_file_errors_are_collected(self, tmp_path):
        weights_file = tmp_path / "weights.yaml"
        weights_file.write_text(
            "path_rules:\n"
            "thresholds:\n"
            "  selection: 35\n"
            "  mention: 65\n",
            encoding="utf-8",
        )
        config = AppConfig(scoring=ScoringConfig(weights_file=str(weights_file)))

        with pytest.raises(ValueError, match="Configuration validation failed: Section 'path_rules'"):
            config.validate()

    def test_explicit_threshold_checked_against_file(self, tmp_path):
        weights_file = tmp_path / "weights.yaml"
        weights_file.write_text("thresholds:\n  selection: 35\n  mention: 65\n", encoding="utf-8")
        config = AppConfig(scoring=ScoringConfig(weights_file=str(weights_file), selection_threshold=70))

        with pytest.raises(ValueError, match="greater than"):
            config.validate()

    def test_env_thresholds_unset(self, clean_env):
        config = AppConfig.from_env()

        assert config.scoring.selection_threshold is None
        assert config.scoring.mention_threshold is None


class TestConfigManager:
    """Unit tests for ConfigManager."""

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            ConfigManager(AppConfig(review=ReviewConfig(mode="batch")))

    def test_update_config(self):
        manager = ConfigManager(AppConfig())

        manager.update_config(**{"review.mode": "integrated", "scoring.selection_threshold": 45})

        assert manager.config.review.is_integrated_mode
        assert manager.config.scoring.selection_threshold == 45

    def test_update_config_keeps_old_config_on_failure(self):
        manager = ConfigManager(AppConfig())

        with pytest.raises(ValueError):
            manager.update_config(**{"scoring.selection_threshold": 80})

        assert manager.config.scoring.selection_threshold is None

    @pytest.mark.parametrize("key", ["review.colour", "storage.path", "verbose"])
    def test_update_config_unknown_key(self, key):
        manager = ConfigManager(AppConfig())

        with pytest.raises(ValueError):
            manager.update_config(**{key: 1})

    def test_file_handler_attached_once(self, tmp_path):
        log_file = tmp_path / "review.log"
        config = AppConfig(logging=LoggingConfig(file_path=str(log_file)))
        root_logger = logging.getLogger()

        try:
            ConfigManager(config)
            ConfigManager(config)

            handlers = [
                h for h in root_logger.handlers
                if isinstance(h, RotatingFileHandler) and h.baseFilename == os.path.abspath(str(log_file))
            ]
            assert len(handlers) == 1
        finally:
            for handler in list(root_logger.handlers):
                if isinstance(handler, RotatingFileHandler):
                    root_logger.removeHandler(handler)
                    handler.close()
