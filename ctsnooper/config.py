"""
ctsnooper configuration: optional ctsnooper.yaml merged over built-in defaults.

Search order:
- $CTSNOOPER_CONFIG
- ./ctsnooper.yaml
- ./config/ctsnooper.yaml
- ~/.config/ctsnooper/ctsnooper.yaml
"""

import codecs
import logging
import os
from pathlib import Path

import yaml

from .scanner_types import ConfigError
from .yaml_safety import safe_yaml_load

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CTSNOOPER_CONFIG"
MAX_CONFIG_BYTES = 1_000_000

DEFAULT_CONFIG = {
    "ct_version": 45,
    "console_title": "CT Snooper",
    "fill_char": "-",
    "fallback_width": 80,
    "timestamp_format": "%Y-%m-%d %H:%M:%S",
    "log_suffix": "_log.txt",
    "log_dir": ".",
    "file_encoding": "utf-8",
    "wait_for_exit": True,
    "count_cheat_entries": False,
}

_EXPECTED_TYPES = {
    "ct_version": (int, str),
    "console_title": str,
    "fill_char": str,
    "fallback_width": int,
    "timestamp_format": str,
    "log_suffix": str,
    "log_dir": str,
    "file_encoding": str,
    "wait_for_exit": bool,
    "count_cheat_entries": bool,
}


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Override wins for conflicts."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def find_config() -> Path | None:
    """Find ctsnooper.yaml, or None when running on defaults."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    candidates = [
        Path("ctsnooper.yaml"),
        Path("config/ctsnooper.yaml"),
        Path.home() / ".config" / "ctsnooper" / "ctsnooper.yaml",
    ]
    for path in candidates:
        if path.exists():
            return path
    return None


def load_config(config_path: Path | str | None = None) -> dict:
    """Load configuration merged over DEFAULT_CONFIG.

    Args:
        config_path: Path to config file. If None, searches default locations.

    Raises:
        ConfigError: file missing, too large, malformed or not a mapping.
    """
    if config_path is None:
        config_path = find_config()
    if config_path is None:
        logger.debug("No ctsnooper.yaml found, using defaults")
        return dict(DEFAULT_CONFIG)

    config_path = Path(config_path)
    if not config_path.is_file():
        raise ConfigError(f"Config not found: {config_path}")
    if config_path.stat().st_size > MAX_CONFIG_BYTES:
        raise ConfigError(f"Config file too large (max 1MB): {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            loaded = safe_yaml_load(f)
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        if mark:
            raise ConfigError(
                f"{config_path} is malformed (line {mark.line + 1}, column {mark.column + 1})"
            ) from e
        raise ConfigError(f"{config_path} is malformed: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{config_path} must contain a mapping, got {type(loaded).__name__}")

    logger.debug("Loaded config from %s", config_path)
    return deep_merge(DEFAULT_CONFIG, loaded)


def validate_config(config: dict) -> bool:
    """Validate a merged configuration, logging every problem found."""
    errors = []

    for key in config:
        if key not in DEFAULT_CONFIG:
            logger.warning("Unknown config key ignored: %s", key)

    for key, expected in _EXPECTED_TYPES.items():
        if key not in config:
            errors.append(f"Missing '{key}'")
            continue
        value = config[key]
        # bool is an int subclass; only accept it where a bool is wanted
        if isinstance(value, bool) and expected is not bool:
            errors.append(f"'{key}' must not be a boolean")
        elif not isinstance(value, expected):
            errors.append(f"'{key}' has wrong type {type(value).__name__}")

    fill = config.get("fill_char")
    if isinstance(fill, str) and len(fill) != 1:
        errors.append(f"'fill_char' must be a single character, got {fill!r}")

    width = config.get("fallback_width")
    if isinstance(width, int) and not isinstance(width, bool) and width < 1:
        errors.append(f"'fallback_width' must be positive, got {width}")

    if config.get("log_suffix") == "":
        errors.append("'log_suffix' must not be empty")

    encoding = config.get("file_encoding")
    if isinstance(encoding, str):
        try:
            codecs.lookup(encoding)
        except LookupError:
            errors.append(f"'file_encoding' is not a known codec: {encoding!r}")

    if errors:
        logger.error("Config validation errors:")
        for e in errors:
            logger.error("  - %s", e)
        return False

    logger.debug("Config is valid")
    return True
