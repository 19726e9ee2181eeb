from __future__ import annotations

"""Plain observer list keyed by event name.

Listeners are called in subscription order, but nothing should rely on it.
"""

from collections import defaultdict
from typing import Any, Callable

from .logger import GameLogger

GAME_STARTED = "game_started"
GAME_OVER = "game_over"
PHASE_CHANGED = "phase_changed"
ROUND_STARTED = "round_started"
ROUND_COMPLETED = "round_completed"
DEFENSE_REJECTED = "defense_rejected"
SPAWN_POINTS_CHANGED = "spawn_points_changed"


class EventBus:
    """Fan-out of named events to any number of listeners."""

    def __init__(self, logger: GameLogger | None = None) -> None:
        self.logger = logger
        self._listeners: dict[str, list[Callable[..., Any]]] = defaultdict(list)

    def subscribe(self, name: str, callback: Callable[..., Any]) -> None:
        self._listeners[name].append(callback)

    def unsubscribe(self, name: str, callback: Callable[..., Any]) -> None:
        listeners = self._listeners.get(name)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def emit(self, name: str, *args: Any) -> None:
        # A failing listener must not starve the others
        for callback in list(self._listeners.get(name, ())):
            try:
                callback(*args)
            except Exception as e:
                message = f"EventBus: listener for '{name}' failed: {e!r}"
                if self.logger is not None:
                    self.logger.log_warning(0, message)
                else:
                    print(message)
