"""Append-only log of raw page events."""

from collections.abc import Iterable

from .models import PageEvent


class EventLog:
    """Ordered, append-only sequence of raw events for one session.

    Appends never block and events are never removed or reordered, so a
    snapshot taken at any moment is a prefix of the eventual log.
    """

    def __init__(self, events: Iterable[PageEvent] = ()):
        self._events: list[PageEvent] = list(events)

    def append(self, event: PageEvent) -> None:
        """Add one event in arrival order."""
        self._events.append(event)

    def snapshot(self) -> tuple[PageEvent, ...]:
        """Return the events accumulated so far."""
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"EventLog(events={len(self._events)})"
