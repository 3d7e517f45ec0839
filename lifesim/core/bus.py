"""Synchronous publish/subscribe channel between the engine and its observers."""

from __future__ import annotations

from typing import Any, Callable

Listener = Callable[[Any], None]

# Names emitted by the engine and its subsystems
AGE_UP = "age_up"
STAT_CHANGED = "stat_changed"
EVENT_TRIGGERED = "event_triggered"
DEATH = "death"
CHOICE_MADE = "choice_made"
POLITICAL_SCANDAL = "political_scandal"
POLITICAL_IMPEACHED = "political_impeached"
POLITICAL_REVOLUTION_THREAT = "political_revolution_threat"
POLITICAL_YEAR_PROCESSED = "political_year_processed"


class EventBus:
    """Listeners are called in subscription order. Their exceptions propagate."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}

    def on(self, name: str, listener: Listener) -> Callable[[], None]:
        """Subscribe. Returns a callable that unsubscribes."""
        callbacks = self._listeners.setdefault(name, [])
        if listener not in callbacks:
            callbacks.append(listener)
        return lambda: self.off(name, listener)

    def off(self, name: str, listener: Listener) -> None:
        callbacks = self._listeners.get(name)
        if callbacks and listener in callbacks:
            callbacks.remove(listener)

    def emit(self, name: str, payload: Any = None) -> None:
        for listener in list(self._listeners.get(name, ())):
            listener(payload)
