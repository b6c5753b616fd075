"""Configuration loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import logging
import yaml


DEFAULT_CONFIG_PATH = "config.yaml"


class DotDict(dict):
    """Dictionary with dot-access to nested keys."""

    def __getattr__(self, key: str) -> Any:  # noqa: D401
        try:
            value = self[key]
        except KeyError as exc:
            raise AttributeError(key) from exc
        if isinstance(value, dict) and not isinstance(value, DotDict):
            value = DotDict(value)
            self[key] = value
        return value

    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


def get_config_value(config: DotDict, path: str, default: Any | None = None) -> Any:
    """Return the value at dotted ``path`` or ``default`` when a key is missing.

    Lookups go through the mapping, so keys such as ``items`` or ``copy`` are
    never confused with ``dict`` methods.
    """
    current: Any = config
    for part in path.split("."):
        if not isinstance(current, dict) or part not in current:
            logging.warning("Config key '%s' missing, using default %r", path, default)
            return default
        current = current[part]
    return current


def load_config(path: str = DEFAULT_CONFIG_PATH) -> DotDict:
    """Load YAML configuration file.

    Parameters
    ----------
    path:
        Path to the configuration YAML file.

    Returns
    -------
    DotDict
        Configuration data accessible by keys or attributes.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with config_path.open("r", encoding="utf-8") as f:
        data: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")

    if "autoplay" in data and "max_turns" not in (data.get("autoplay") or {}):
        logging.warning("Missing 'max_turns' in autoplay config")

    return DotDict(data)
