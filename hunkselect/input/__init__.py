"""Keyboard dispatch for selection commands."""

from __future__ import annotations

from .keymap import (
    DEFAULT_SELECTION_KEYS,
    KeyComboBinding,
    KeyComboRegistry,
    SelectionKeymap,
    normalize_key_token,
)

__all__ = [
    "DEFAULT_SELECTION_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "SelectionKeymap",
    "normalize_key_token",
]
