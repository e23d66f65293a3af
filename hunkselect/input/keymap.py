"""Key-token dispatch onto selection commands.

Key tokens follow terminal reader names (``UP``, ``SHIFT_DOWN``, ``TAB``) or
single printable characters. Letters stay case-sensitive so ``j`` moves while
``J`` expands.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from ..selection.model import SelectionModel
from ..selection.position import SelectionMode

logger = logging.getLogger(__name__)

KeyHandler = Callable[[], Optional[bool]]

DEFAULT_SELECTION_KEYS: dict[str, tuple[str, ...]] = {
    "move-up": ("UP", "k"),
    "move-down": ("DOWN", "j"),
    "expand-up": ("SHIFT_UP", "K"),
    "expand-down": ("SHIFT_DOWN", "J"),
    "toggle-mode": ("TAB",),
    "hunk-mode": ("h",),
    "line-mode": ("l",),
}


def normalize_key_token(key: str) -> str:
    """Uppercase named keys and keep single characters as typed."""
    stripped = key.strip()
    if len(stripped) <= 1:
        return stripped
    return stripped.upper().replace("-", "_").replace("+", "_")


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens bound to a single action."""

    combos: tuple[str, ...]
    handler: KeyHandler


class KeyComboRegistry:
    """Normalized key -> handler table."""

    def __init__(self, normalize: Callable[[str], str] = normalize_key_token) -> None:
        self._normalize = normalize
        self._handlers: dict[str, KeyHandler] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Bind every combo of ``binding``, replacing earlier handlers for the same key."""
        for combo in binding.combos:
            self._handlers[self._normalize(combo)] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def bound_keys(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def dispatch(self, key: str) -> bool | None:
        """Run the handler bound to ``key``; ``None`` means the key is unbound."""
        handler = self._handlers.get(self._normalize(key))
        if handler is None:
            return None
        return handler()


class SelectionKeymap:
    """Default selection commands for one ``SelectionModel``.

    ``overrides`` maps an action name to the full list of keys that should
    trigger it; those keys replace the action's defaults.
    """

    def __init__(
        self,
        selection: SelectionModel,
        overrides: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self.selection = selection
        self.actions: dict[str, Callable[[], None]] = {
            "move-up": selection.move_up,
            "move-down": selection.move_down,
            "expand-up": selection.expand_up,
            "expand-down": selection.expand_down,
            "toggle-mode": selection.toggle_mode,
            "hunk-mode": lambda: selection.set_mode(SelectionMode.HUNK),
            "line-mode": lambda: selection.set_mode(SelectionMode.LINE),
        }
        self.key_bindings = self._merge_bindings(overrides or {})
        self.registry = KeyComboRegistry().register_bindings(
            *(
                KeyComboBinding(combos=keys, handler=self._handler_for(action))
                for action, keys in self.key_bindings.items()
            )
        )

    def _merge_bindings(self, overrides: Mapping[str, Sequence[str]]) -> dict[str, tuple[str, ...]]:
        merged = dict(DEFAULT_SELECTION_KEYS)
        for action, keys in overrides.items():
            if action not in merged:
                logger.debug("ignoring key binding for unknown action %r", action)
                continue
            merged[action] = tuple(keys)
        return merged

    def _handler_for(self, action: str) -> KeyHandler:
        command = self.actions[action]

        def _run() -> bool:
            command()
            return True

        return _run

    def handle_key(self, key: str) -> bool:
        """Dispatch one key token; return whether it was bound."""
        return bool(self.registry.dispatch(key))

    def handle_keys(self, keys: Sequence[str]) -> list[str]:
        """Dispatch keys in order and return the tokens nothing handled."""
        return [key for key in keys if not self.handle_key(key)]


__all__ = [
    "DEFAULT_SELECTION_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "SelectionKeymap",
    "normalize_key_token",
]
