"""Persistent JSON config helpers.

Stores the default selection mode and key-binding overrides.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .selection.position import SelectionMode

logger = logging.getLogger(__name__)

APP_NAME = "hunkselect"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so an unwritable config never breaks a
    running view.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("could not write config %s: %s", CONFIG_PATH, exc)


def load_default_mode() -> SelectionMode:
    """Return the persisted default selection mode, ``HUNK`` when unset or invalid."""
    value = load_config().get("default_mode")
    if not isinstance(value, str):
        return SelectionMode.HUNK
    try:
        return SelectionMode.coerce(value)
    except ValueError:
        logger.debug("ignoring unknown default_mode %r", value)
        return SelectionMode.HUNK


def save_default_mode(mode: SelectionMode | str) -> None:
    config = load_config()
    config["default_mode"] = SelectionMode.coerce(mode).value
    save_config(config)


def load_key_binding_overrides() -> dict[str, tuple[str, ...]]:
    """Load ``action -> keys`` overrides.

    Non-string action names, non-list values, and non-string or blank keys are
    dropped. An action whose list ends up empty is dropped too.
    """
    value = load_config().get("key_bindings")
    if not isinstance(value, dict):
        return {}

    overrides: dict[str, tuple[str, ...]] = {}
    for action, raw_keys in value.items():
        if not isinstance(action, str) or not isinstance(raw_keys, list):
            continue
        keys = tuple(key for key in raw_keys if isinstance(key, str) and key.strip())
        if keys:
            overrides[action] = keys
    return overrides


def save_key_binding_overrides(overrides: dict[str, tuple[str, ...]]) -> None:
    config = load_config()
    config["key_bindings"] = {action: list(keys) for action, keys in overrides.items()}
    save_config(config)
