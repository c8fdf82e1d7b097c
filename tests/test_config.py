"""Tests for smart_todo/config.py and smart_todo/log.py."""

import logging
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smart_todo.config import DEFAULT_CONFIG, Config, get_config
from smart_todo.events import EventContext
from smart_todo.log import LOGGER_NAME, setup_logging


class TestConfig:
    """Tests for loading and merging configuration."""

    def test_defaults_when_file_missing(self, tmp_path):
        config = Config(tmp_path / "missing.yaml")

        assert config.github_api_url == "https://api.github.com"
        assert config.rubygems_url == "https://rubygems.org"
        assert config.pypi_url == "https://pypi.org"
        assert config.http_settings["max_retries"] == 3
        assert config.secrets == {}

    def test_user_config_deep_merged(self, temp_config_file):
        temp_config_file.write_text(
            "http:\n"
            "  max_retries: 5\n"
            "registries:\n"
            "  rubygems: https://gems.internal\n"
            "secrets:\n"
            "  github:\n"
            "    token: abc\n"
        )

        config = Config(temp_config_file)

        assert config.http_settings["max_retries"] == 5
        assert config.http_settings["timeout"] == 10.0
        assert config.rubygems_url == "https://gems.internal"
        assert config.pypi_url == "https://pypi.org"
        assert config.get("secrets.github.token") == "abc"

    def test_empty_file(self, temp_config_file):
        config = Config(temp_config_file)

        assert config.get("http.timeout") == 10.0

    def test_defaults_not_mutated(self, temp_config_file):
        temp_config_file.write_text("http:\n  timeout: 1.5\n")

        Config(temp_config_file)

        assert DEFAULT_CONFIG["http"]["timeout"] == 10.0

    def test_config_path_from_env(self, temp_config_file, monkeypatch):
        temp_config_file.write_text("github:\n  api_url: https://github.example.com/api/v3\n")
        monkeypatch.setenv("SMART_TODO_CONFIG", str(temp_config_file))

        assert get_config().github_api_url == "https://github.example.com/api/v3"

    def test_get_and_set(self, tmp_path):
        config = Config(tmp_path / "missing.yaml")

        config.set("secrets.github.tokens.my-org", "xyz")

        assert config.get("secrets.github.tokens.my-org") == "xyz"
        assert config.get("nope.nothing", default="fallback") == "fallback"

    def test_log_file_expanded(self, temp_config_file):
        temp_config_file.write_text("logging:\n  file: ~/smart_todo.log\n")

        config = Config(temp_config_file)

        assert not config.logging_settings["file"].startswith("~")


class TestEventContextFromConfig:
    """Tests for building an EventContext from configuration."""

    def test_from_config(self, temp_config_file):
        temp_config_file.write_text(
            "http:\n  max_retries: 7\nsecrets:\n  github:\n    token: abc\n"
        )

        context = EventContext.from_config(Config(temp_config_file))

        assert context.http["max_retries"] == 7
        assert context.get_secret("github.token") == "abc"
        assert context.lookup_client().max_retries == 7

    def test_overrides(self, tmp_path):
        context = EventContext.from_config(
            Config(tmp_path / "missing.yaml"), pypi_url="https://pypi.internal"
        )

        assert context.pypi_url == "https://pypi.internal"

    def test_get_secret_nested_path(self):
        context = EventContext(secrets={"github": {"token": "abc"}})

        assert context.get_secret("github.token") == "abc"
        assert context.get_secret("github.missing", default="default") == "default"
        assert context.get_secret("missing.path") is None


class TestSetupLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def reset_logger(self):
        yield
        logger = logging.getLogger(LOGGER_NAME)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_stream_only_by_default(self, tmp_path):
        logger = setup_logging(Config(tmp_path / "missing.yaml"))

        assert len(logger.handlers) == 1
        assert logger.level == logging.INFO

    def test_file_handler(self, tmp_path, temp_config_file):
        log_path = tmp_path / "logs" / "smart_todo.log"
        temp_config_file.write_text(f"logging:\n  file: {log_path}\n  level: DEBUG\n")

        logger = setup_logging(Config(temp_config_file))
        logging.getLogger("smart_todo.events.registry").debug("hello from a child logger")
        for handler in logger.handlers:
            handler.flush()

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 2
        assert "hello from a child logger" in log_path.read_text()

    def test_idempotent(self, tmp_path):
        config = Config(tmp_path / "missing.yaml")

        setup_logging(config)
        logger = setup_logging(config)

        assert len(logger.handlers) == 1
