"""Configuration management for search settings."""

import os
from pathlib import Path
from typing import Annotated, Any

import msgspec
import yaml

from .exceptions import ConfigError
from .models import SearchMode


class SearchSettings(msgspec.Struct, frozen=True, kw_only=True):
    """Settings shared by every search run by an engine."""

    mode: SearchMode = SearchMode.GREEDY
    excluded_keys: list[str] = msgspec.field(default_factory=lambda: ["id", "key"])
    max_workers: Annotated[int, msgspec.Meta(ge=0)] = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SearchSettings":
        """Validate a plain dict into settings."""
        mode = data.get("mode")
        if isinstance(mode, str):
            data = {**data, "mode": mode.strip().lower()}
        try:
            return msgspec.convert(data, cls, str_keys=True)
        except msgspec.ValidationError as e:
            raise ConfigError(f"Invalid search settings: {e}") from e


class Config:
    """Configuration loading for itemsearch."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading config file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "itemsearch" / "config.yaml")

        # Project config
        paths.append(Path(".itemsearch.yaml"))
        paths.append(Path("itemsearch.yaml"))

        return paths

    @staticmethod
    def from_env() -> dict[str, Any]:
        """Read overrides from ITEMSEARCH_* environment variables."""
        overrides: dict[str, Any] = {}
        if mode := os.environ.get("ITEMSEARCH_MODE"):
            overrides["mode"] = mode.lower()
        if workers := os.environ.get("ITEMSEARCH_MAX_WORKERS"):
            try:
                overrides["max_workers"] = int(workers)
            except ValueError:
                raise ConfigError(
                    f"ITEMSEARCH_MAX_WORKERS must be an integer, got {workers!r}"
                ) from None
        return overrides

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result: dict[str, Any] = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Args:
        path: Explicit config file, read after the default locations

    Returns:
        Merged configuration dict (later sources win)
    """
    config: dict[str, Any] = {}

    for candidate in Config.get_config_paths():
        if candidate.exists():
            config = Config.merge_configs(config, Config.from_file(candidate))

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))

    return Config.merge_configs(config, Config.from_env())


def load_settings(path: Path | None = None) -> SearchSettings:
    """Load and validate search settings."""
    return SearchSettings.from_dict(load_config(path))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
