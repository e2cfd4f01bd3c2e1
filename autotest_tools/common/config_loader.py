"""
================================================================================
Configuration Loader
================================================================================

Reads ``config/config.yaml`` once per process. Any key can be overridden by an
environment variable named after its dot path (``ui.headless`` ->
``UI_HEADLESS``). Override strings are converted to the type of the caller's
default, or of the YAML value when no default is given.

Usage:
    from autotest_tools.common.config_loader import get_config

    get_config("ui.headless", True)
    get_config("logging.level", "INFO")

================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

_TRUE_STRINGS = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Raised when the configuration file cannot be parsed."""


def env_key_for(key: str) -> str:
    """``ui.viewport.width`` -> ``UI_VIEWPORT_WIDTH``"""
    return key.upper().replace(".", "_")


def coerce_like(raw: str, reference: Any) -> Any:
    """
    Convert an environment string to the type of ``reference``.

    Strings that do not parse as the reference's numeric type are returned
    unchanged.
    """
    if isinstance(reference, bool):
        return raw.strip().lower() in _TRUE_STRINGS
    for numeric in (int, float):
        if isinstance(reference, numeric):
            try:
                return numeric(raw)
            except ValueError:
                logger.warning(f"Cannot read {raw!r} as {numeric.__name__}; keeping the string")
                return raw
    return raw


class ConfigLoader:
    """
    Process-wide YAML configuration with environment overrides.

    Lookup order for ``get(key, default)``:
        1. Environment variable (``env_key_for(key)``)
        2. YAML value at the dot path
        3. ``default``
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
            instance._data = instance._read()
            cls._instance = instance
        return cls._instance

    @property
    def path(self) -> Path:
        return self._config_path

    def _read(self) -> Dict[str, Any]:
        if not self._config_path.exists():
            logger.warning(f"No configuration file at {self._config_path}; using defaults and environment")
            return {}
        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e
        logger.debug(f"Loaded configuration from {self._config_path}")
        return data

    def lookup(self, key: str) -> Any:
        """YAML value at a dot path, ignoring the environment. ``None`` if absent."""
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def get(self, key: str, default: Any = None) -> Any:
        file_value = self.lookup(key)

        raw = os.environ.get(env_key_for(key))
        if raw is not None:
            return coerce_like(raw, default if default is not None else file_value)

        return default if file_value is None else file_value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Top-level mapping, or an empty dict."""
        value = self._data.get(section)
        return value if isinstance(value, dict) else {}

    def reload(self) -> None:
        self._data = self._read()
        logger.info(f"Configuration reloaded from {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded file so the next ``ConfigLoader()`` reads again."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    return ConfigLoader().get(key, default)


def get_ui_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``get_config(f"ui.{key}", default)``."""
    return get_config(f"ui.{key}", default)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "coerce_like",
    "env_key_for",
    "get_config",
    "get_ui_config",
]
