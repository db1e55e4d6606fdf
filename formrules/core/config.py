"""
formrules Configuration
=======================

Layered configuration for the validation engine.

Loading priority (highest to lowest):
1. Runtime overrides (``Config.set``)
2. Environment variables (FORMRULES_*)
3. Sources added with ``add_source``
4. Defaults

Example:
    config = get_config()
    config.get("validation.locale")            # "en"
    config.set("validation.locale", "pt-br")

    # FORMRULES_VALIDATION_LOCALE=pt-br has the same effect
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, TypeVar, Union

T = TypeVar("T")

ENV_PREFIX = "FORMRULES_"

DEFAULTS: Dict[str, Any] = {
    "validation": {
        "locale": "en",
        "fallback_locale": "en",
        "language_directories": [],
    },
    "logging": {
        "level": "WARNING",
        "format": "text",
    },
}


@dataclass
class ConfigSource:
    """Represents a configuration source with priority."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


class Config:
    """
    Configuration container with dot-notation access.

    Example:
        config = Config()
        config.set("validation.locale", "pt-br")
        config.get("validation.locale")            # "pt-br"
        config.get("validation.missing", "x")      # "x"
    """

    def __init__(
        self,
        defaults: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._sources: List[ConfigSource] = []
        self._merged: Dict[str, Any] = {}
        self._dirty = True

        self.add_source("defaults", _copy(defaults if defaults is not None else DEFAULTS))
        self._load_env_overrides(os.environ if environ is None else environ)

    def _load_env_overrides(self, environ: Mapping[str, str]) -> None:
        """Load overrides from FORMRULES_* variables (FORMRULES_LOGGING_LEVEL -> logging.level)."""
        overrides: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(ENV_PREFIX):
                continue
            section, _, option = key[len(ENV_PREFIX):].lower().partition("_")
            if not option:
                continue
            overrides.setdefault(section, {})[option] = self._parse_env_value(value)

        if overrides:
            self.add_source("env_vars", overrides, priority=100)

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value to an appropriate type."""
        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False

        if value.startswith(("{", "[")):
            try:
                return json.loads(value)
            except json.JSONDecodeError:
                pass

        return value

    def add_source(
        self,
        name: str,
        data: Dict[str, Any],
        priority: int = 0,
    ) -> None:
        """Add a configuration source."""
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._dirty = True

    def _merge(self) -> None:
        """Merge all sources, higher priority last so it wins."""
        if not self._dirty:
            return

        self._merged = {}
        for source in sorted(self._sources, key=lambda s: s.priority):
            self._deep_merge(self._merged, source.data)

        self._dirty = False

    def _deep_merge(self, base: Dict, override: Mapping) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, Mapping):
                self._deep_merge(base[key], value)
            else:
                base[key] = _copy(value)

    def get(self, key: str, default: T = None) -> Union[Any, T]:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key (e.g., "validation.locale")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        self._merge()

        current: Any = self._merged
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get configuration value as boolean."""
        value = self.get(key, default)
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def get_list(self, key: str, default: Optional[List] = None) -> List:
        """Get configuration value as list (comma-separated strings are split)."""
        value = self.get(key, default)
        if value is None:
            return list(default or [])
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def set(self, key: str, value: Any) -> None:
        """
        Set a runtime configuration value.

        Runtime values have the highest priority.
        """
        runtime = next((s for s in self._sources if s.name == "runtime"), None)
        if runtime is None:
            runtime = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime)

        parts = key.split(".")
        current = runtime.data
        for part in parts[:-1]:
            current = current.setdefault(part, {})

        current[parts[-1]] = value
        self._dirty = True

    def has(self, key: str) -> bool:
        """Check if configuration key exists."""
        return self.get(key) is not None

    def all(self) -> Dict[str, Any]:
        """Get all configuration as dict."""
        self._merge()
        return _copy(self._merged)

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: str) -> bool:
        return self.has(key)


def _copy(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _copy(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy(v) for v in value]
    return value


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Drop the global instance so the next access re-reads the environment."""
    global _config
    _config = None


def config(key: str, default: Any = None) -> Any:
    """Shortcut function for configuration access."""
    return get_config().get(key, default)
