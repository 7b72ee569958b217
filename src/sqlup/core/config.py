#!/usr/bin/env python3
"""Configuration loader that reads sqlup.json / sqlup.jsonc"""
from __future__ import annotations

import copy
import json
import os
import re
from pathlib import Path
from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "dialect": {"default": "ansi"},
    "keywords": {
        # Words that are never uppercased, whatever the dialect
        "blacklist": [],
        # dialect -> additional keywords
        "extra": {},
    },
    # dialect -> additional eval-string markers
    "eval_keywords": {},
    "logging": {"level": "WARNING", "output": "console"},
}

CONFIG_FILENAMES = ("sqlup.jsonc", "sqlup.json")


class ConfigurationError(Exception):
    """Raised when a configuration file cannot be read or parsed."""
    pass


class ConfigLoader:
    """Load configuration from a JSON or JSONC file layered over the defaults"""

    def __init__(self, config_path: str | Path | None = None) -> None:
        if config_path is None:
            config_path = self._find_config_file()

        self.config_file = str(config_path) if config_path is not None else None
        self._config = copy.deepcopy(DEFAULT_CONFIG)

        if config_path is not None:
            self._merge(self._config, self._read(Path(config_path)))

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {path}: {e}") from e

        # Remove single-line comments (// ...) for JSONC support
        content = re.sub(r"^\s*//.*$", "", content, flags=re.MULTILINE)

        try:
            data = json.loads(content) if content.strip() else {}
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Error decoding JSON from {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")
        return data

    @classmethod
    def _merge(cls, base: dict[str, Any], override: dict[str, Any]) -> None:
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                cls._merge(base[key], value)
            else:
                base[key] = value

    def _find_config_file(self) -> Path | None:
        """Find config file in the usual locations, or None to use the defaults"""
        env_path = os.environ.get("SQLUP_CONFIG")
        if env_path:
            return Path(env_path)

        for filename in CONFIG_FILENAMES:
            config_path = Path.cwd() / filename
            if config_path.exists():
                return config_path

        user_config = Path.home() / ".config" / "sqlup" / "config.json"
        if user_config.exists():
            return user_config

        return None

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a value using dot notation (e.g., 'keywords.blacklist')"""
        value: Any = self._config
        for key in key_path.split("."):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set(self, key_path: str, value: Any) -> None:
        """Set a value using dot notation (e.g., 'dialect.default')"""
        keys = key_path.split(".")
        target = self._config
        for key in keys[:-1]:
            target = target.setdefault(key, {})
        target[keys[-1]] = value

    def __getitem__(self, key: str) -> Any:
        return self._config[key]

    @property
    def default_dialect(self) -> str:
        # Environment variable first, then config file
        env_dialect = os.environ.get("SQLUP_DIALECT")
        if env_dialect:
            return env_dialect.strip().lower()
        return str(self.get("dialect.default", "ansi")).lower()

    @property
    def blacklist(self) -> frozenset[str]:
        return frozenset(word.lower() for word in self.get("keywords.blacklist", []))

    def get_extra_keywords(self, dialect: str) -> list[str]:
        """Get user-configured keywords for a dialect"""
        return list(self.get("keywords.extra", {}).get(dialect, []))

    def get_eval_keywords(self, dialect: str) -> list[str]:
        """Get user-configured eval-string markers for a dialect"""
        return list(self.get("eval_keywords", {}).get(dialect, []))

    @property
    def log_level(self) -> str:
        return str(os.environ.get("LOG_LEVEL") or self.get("logging.level", "WARNING")).upper()

    @property
    def log_output(self) -> str:
        return str(os.environ.get("LOG_OUTPUT") or self.get("logging.output", "console")).lower()


_config_loader: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Get the global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def set_config(config: ConfigLoader | None) -> None:
    """Replace the global config loader (None resets to lazy loading)"""
    global _config_loader
    _config_loader = config


def load_config(config_path: str | Path | None = None) -> ConfigLoader:
    """Load configuration from config file (alias for creating ConfigLoader)."""
    return ConfigLoader(config_path)


def setup_logging(module_name: str, log_level: str | None = None):
    """
    Setup standardized logging for sqlup modules.

    Level and output default to the environment (LOG_LEVEL, LOG_OUTPUT), which
    the structured logging module reads itself.

    Args:
        module_name: Name of the module (usually __name__)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        ContextLogger instance
    """
    from .logging import setup_structured_logging

    return setup_structured_logging(module_name, log_level=log_level)
