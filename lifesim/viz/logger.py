"""Narrative logging of a life, fed from the engine's history and bus."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, TextIO

from lifesim.core import bus as signals
from lifesim.core.config import HISTORY_AGE_UP, HISTORY_PRIMARY, HISTORY_SECONDARY


@dataclass
class LogEntry:
    """A single log entry."""

    age: int
    category: str
    message: str
    data: dict = field(default_factory=dict)


class LifeLogger:
    """Structured life narrative with categories and verbosity control."""

    # Category constants
    PRIMARY = "PRIMARY"
    SECONDARY = "SECONDARY"
    AGE_UP = "AGE_UP"
    EVENT = "EVENT"
    DEATH = "DEATH"
    POLITICS = "POLITICS"

    _HISTORY_CATEGORIES = {
        HISTORY_PRIMARY: PRIMARY,
        HISTORY_SECONDARY: SECONDARY,
        HISTORY_AGE_UP: AGE_UP,
    }

    def __init__(
        self,
        verbosity: int = 1,
        log_file: Optional[str] = None,
        stdout: bool = True,
    ) -> None:
        """
        verbosity levels:
            0 = only major life moments and death
            1 = + events and politics
            2 = + minor moments
            3 = everything, including birthdays
        """
        self.verbosity = verbosity
        self._buffer: list[LogEntry] = []
        self._all_entries: list[LogEntry] = []
        self._file: Optional[TextIO] = None
        self._stdout = stdout
        self._engine = None
        self._history_cursor = 0
        self._unsubscribe: list[Callable[[], None]] = []

        if log_file:
            os.makedirs(os.path.dirname(log_file) if os.path.dirname(log_file) else ".", exist_ok=True)
            self._file = open(log_file, "w", encoding="utf-8")

    def log(self, category: str, message: str, age: int = 0, **data) -> None:
        """Log an entry."""
        self._buffer.append(LogEntry(age=age, category=category, message=message, data=data))

    # ------------------------------------------------------------------
    # Engine wiring
    # ------------------------------------------------------------------

    def attach(self, engine: "Engine") -> None:  # noqa: F821
        """Subscribe to the engine's bus. History written so far is picked up too."""
        self.detach()
        self._engine = engine
        self._history_cursor = 0
        bus = engine.bus
        self._unsubscribe = [
            bus.on(signals.AGE_UP, lambda age: self.drain_history()),
            bus.on(signals.EVENT_TRIGGERED, self._on_event),
            bus.on(signals.POLITICAL_SCANDAL, self._on_scandal),
            bus.on(signals.POLITICAL_REVOLUTION_THREAT, self._on_revolution_threat),
            bus.on(signals.DEATH, self._on_death),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        self._engine = None

    def drain_history(self) -> None:
        """Move history entries written since the last drain into the buffer."""
        if self._engine is None:
            return
        history = self._engine.state.history
        for entry in history[self._history_cursor:]:
            self.log(self._HISTORY_CATEGORIES.get(entry.category, self.SECONDARY), entry.text, age=entry.age)
        self._history_cursor = len(history)

    def _age(self) -> int:
        return self._engine.state.age if self._engine is not None else 0

    def _on_event(self, event) -> None:
        self.drain_history()
        message = f"{event.title}: {event.description}" if event.description else event.title
        self.log(self.EVENT, message, age=self._age(), event_id=event.id)

    def _on_scandal(self, scandal) -> None:
        self.log(self.POLITICS, f"Scandal! {scandal.title}", age=self._age(), scandal_id=scandal.id)

    def _on_revolution_threat(self, state) -> None:
        self.log(self.POLITICS, "Crowds are gathering in the capital. A revolution may be near.", age=self._age())

    def _on_death(self, cause) -> None:
        self.drain_history()
        self.log(self.DEATH, f"Died at age {self._age()} ({cause})", age=self._age(), cause=cause)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def end_year(self) -> None:
        """Drain outstanding history and write the year out."""
        self.drain_history()
        self.flush_year(self._age())

    def flush_year(self, age: int) -> None:
        """Write buffered logs for the year."""
        # Filter by verbosity
        _VERBOSITY_MAP = {
            self.DEATH: 0,
            self.PRIMARY: 0,
            self.EVENT: 1,
            self.POLITICS: 1,
            self.SECONDARY: 2,
            self.AGE_UP: 3,
        }

        for entry in self._buffer:
            required_verbosity = _VERBOSITY_MAP.get(entry.category, 1)
            if required_verbosity <= self.verbosity:
                line = f"[Age {entry.age:>3}] [{entry.category:<9}] {entry.message}"
                if self._stdout:
                    print(line)
                if self._file:
                    self._file.write(line + "\n")

        self._all_entries.extend(self._buffer)
        self._buffer.clear()

        if self._file:
            self._file.flush()

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._all_entries)

    def get_narrative(self, age: int) -> str:
        """Generate a human-readable summary of one year of life."""
        year_entries = [e for e in self._all_entries if e.age == age]
        if not year_entries:
            return f"Age {age}: Nothing notable happened."

        lines = [f"=== Age {age} ==="]
        for entry in year_entries:
            lines.append(f"  [{entry.category}] {entry.message}")
        return "\n".join(lines)

    def export_json(self, filepath: str) -> None:
        """Export all log entries to JSON."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        data = [
            {
                "age": e.age,
                "category": e.category,
                "message": e.message,
                "data": e.data,
            }
            for e in self._all_entries
        ]
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def close(self) -> None:
        """Close the log file and stop listening."""
        self.detach()
        if self._file:
            self._file.close()
            self._file = None
