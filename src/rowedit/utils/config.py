"""
Configuration loading.

Defaults are embedded here; a user file at ``~/.config/rowedit/config.toml``
overrides any subset of them.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Final, Optional

import toml

from .logging_config import logger

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "editor": {
        "tab_stop": 4,
        "message_timeout": 5,
        "poll_timeout_ms": 1500,
        "line_numbers": True,
    },
    "logging": {
        "log_file": "rowedit.log",
        "file_level": "INFO",
        "log_to_console": False,
        "console_level": "WARNING",
    },
    "colors": {},
}

USER_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "rowedit" / "config.toml"


def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge ``override`` into a copy of ``base``."""

    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load the configuration, falling back to defaults on any problem.

    Args:
        path: Config file to read, defaults to the user config path

    Returns:
        The merged configuration dictionary
    """

    config = copy.deepcopy(DEFAULT_CONFIG)
    path = path or USER_CONFIG_PATH

    if not path.is_file():
        logger.debug("No user config at %s, using defaults.", path)
        return config

    try:
        config = deep_merge(config, toml.load(path))
        logger.info("Loaded user config from %s", path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.error("Could not parse config '%s': %s. Using defaults.", path, e)

    tab_stop = config["editor"].get("tab_stop")
    if not isinstance(tab_stop, int) or tab_stop < 1:
        logger.warning("Invalid tab_stop %r, using %d.", tab_stop, DEFAULT_CONFIG["editor"]["tab_stop"])
        config["editor"]["tab_stop"] = DEFAULT_CONFIG["editor"]["tab_stop"]

    return config
