"""In-process "data changed" notifications for captures and bonuses."""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

Listener = Callable[[], None]


class ChangeNotifier:
    """Observer registry owned by the persistence layer.

    Listeners are called synchronously in subscription order. A failing
    listener is logged and does not stop delivery to the others.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Subscribe `listener`; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as ex:  # pylint: disable=broad-exception-caught
                logger.error("Change listener {} failed: {}", listener, ex)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
