"""
Configuration loader for gcauto.

The tool reads an optional JSON configuration file named ``config.json``
located in the ``~/.gcauto/`` directory in the user's home directory.
The file may set the default backend and override the executable used
for each backend, for example::

    {
        "model": "gemini",
        "commands": {"claude": "/opt/claude/bin/claude"}
    }

A missing file means defaults are used. If the file is malformed or has
fields of the wrong type, a :class:`ConfigError` is raised.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from gcauto.errors import GcautoError


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


CONFIG_FILENAME = "config.json"

DEFAULT_MODEL = "claude"


class ConfigError(GcautoError):
    """Raised when the configuration is invalid."""

    pass


def _get_config_directory() -> Path:
    """Return the directory holding the gcauto configuration file."""
    return Path.home() / ".gcauto"


def default_config() -> Dict[str, Any]:
    """Return the configuration used when no file is present."""
    return {"model": DEFAULT_MODEL, "commands": {}}


def load_config() -> Dict[str, Any]:
    """Load the gcauto configuration and return it.

    Returns:
        A dictionary with keys:
        - model (str): name of the default backend
        - commands (Dict[str, str]): executable overrides keyed by backend name

    Raises:
        ConfigError: If the configuration file is malformed or invalid.
    """
    config_path = _get_config_directory() / CONFIG_FILENAME
    config = default_config()

    if not config_path.exists():
        logger.debug("No configuration file at %s; using defaults", config_path)
        return config

    try:
        content = config_path.read_text(encoding="utf-8")
        data = json.loads(content)
    except (OSError, json.JSONDecodeError) as exc:
        logger.debug("Failed to read or parse configuration file: %s", exc)
        raise ConfigError(f"Invalid JSON in {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")

    if "model" in data:
        if not isinstance(data["model"], str) or not data["model"].strip():
            raise ConfigError("'model' must be a non-empty string")
        config["model"] = data["model"].strip()

    if "commands" in data:
        commands = data["commands"]
        if not isinstance(commands, dict):
            raise ConfigError("'commands' must be an object mapping backend names to executables")
        for name, executable in commands.items():
            if not isinstance(executable, str) or not executable:
                raise ConfigError(f"'commands.{name}' must be a non-empty string")
        config["commands"] = dict(commands)

    logger.debug("Loaded configuration from: %s", config_path)
    return config
