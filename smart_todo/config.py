"""Configuration loading and management for smart_todo."""

import copy
import os
import yaml
from pathlib import Path
from typing import Any

# Default configuration location, relative to where the scan runs
DEFAULT_CONFIG_PATH = Path("smart_todo.yaml")
CONFIG_ENV_VAR = "SMART_TODO_CONFIG"

# Default configuration values
DEFAULT_CONFIG = {
    "http": {
        "timeout": 10.0,
        "max_retries": 3,
        "initial_backoff": 1,
        "backoff_multiplier": 2,
    },
    "github": {
        "api_url": "https://api.github.com",
    },
    "registries": {
        "rubygems": "https://rubygems.org",
        "pypi": "https://pypi.org",
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "max_bytes": 1024 * 1024,  # 1 MB
        "backup_count": 2,
    },
    # Tokens, e.g. {"github": {"token": "...", "tokens": {"my-org": "..."}}}
    "secrets": {},
}


class Config:
    """Configuration manager for smart_todo."""

    def __init__(self, config_path: Path | str | None = None):
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        self.config_path = Path(config_path)
        self._config: dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Load configuration from file, merging with defaults."""
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path.exists():
            with open(self.config_path, "r") as f:
                user_config = yaml.safe_load(f) or {}
            self._deep_merge(self._config, user_config)

        # Expand paths
        log_file = self._config["logging"].get("file")
        if log_file:
            self._config["logging"]["file"] = os.path.expanduser(log_file)

    def _deep_merge(self, base: dict, override: dict) -> None:
        """Deep merge override into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-separated key path."""
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key path."""
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    @property
    def http_settings(self) -> dict[str, Any]:
        """Get timeout and retry settings for outbound lookups."""
        return self.get("http", {})

    @property
    def github_api_url(self) -> str:
        """Get the GitHub REST API base URL."""
        return self.get("github.api_url", DEFAULT_CONFIG["github"]["api_url"])

    @property
    def rubygems_url(self) -> str:
        """Get the RubyGems base URL."""
        return self.get("registries.rubygems", DEFAULT_CONFIG["registries"]["rubygems"])

    @property
    def pypi_url(self) -> str:
        """Get the PyPI base URL."""
        return self.get("registries.pypi", DEFAULT_CONFIG["registries"]["pypi"])

    @property
    def logging_settings(self) -> dict[str, Any]:
        """Get logging settings."""
        return self.get("logging", {})

    @property
    def secrets(self) -> dict[str, Any]:
        """Get the secrets section."""
        return self.get("secrets", {}) or {}


def get_config(config_path: Path | str | None = None) -> Config:
    """Get a Config instance."""
    return Config(config_path)
