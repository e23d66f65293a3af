"""Per-instance change observers."""

from __future__ import annotations

from collections.abc import Callable


class Disposable:
    """Handle returned by :meth:`Emitter.subscribe`; call ``dispose`` to unsubscribe."""

    def __init__(self, dispose_action: Callable[[], None] | None = None) -> None:
        self._dispose_action = dispose_action
        self.disposed = False

    def dispose(self) -> None:
        """Run the unsubscribe action once; later calls are no-ops."""
        if self.disposed:
            return
        self.disposed = True
        action = self._dispose_action
        self._dispose_action = None
        if action is not None:
            action()

    def __enter__(self) -> Disposable:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.dispose()


class Emitter:
    """Ordered listener list with synchronous delivery.

    Listeners registered or disposed while an emission is running take
    effect from the next emission. Listener exceptions propagate.
    """

    def __init__(self) -> None:
        self._listeners: list[tuple[object, Callable[[], object]]] = []

    def subscribe(self, callback: Callable[[], object]) -> Disposable:
        """Register ``callback`` and return its unsubscribe handle."""
        token = object()
        self._listeners.append((token, callback))

        def _remove() -> None:
            # Match on token so one callback registered twice is removed once per handle.
            for index, (entry_token, _listener) in enumerate(self._listeners):
                if entry_token is token:
                    del self._listeners[index]
                    return

        return Disposable(_remove)

    def emit(self) -> None:
        for _token, listener in tuple(self._listeners):
            listener()

    def clear(self) -> None:
        self._listeners.clear()

    def listener_count(self) -> int:
        return len(self._listeners)
