"""Sequence compactor - Turn raw page events into semantic actions.

The compactor scans a raw event snapshot left to right. At every position
it tries each detector in priority order; the first one that matches
consumes its whole window and the scan continues after it. Events that no
detector claims are copied through unchanged.

Detectors, in order:
- click sequence: mousedown, mouseup, click on the same target
- fill sequence: consecutive keypresses on the same target, started by a
  single-character key

The whole log is recompacted on every pass, so a pattern that is still
incomplete (a lone mousedown) shows up as-is until its closing events
arrive.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional

from ..utils.logging import get_logger
from .models import EventType, PageEvent, click, fill

logger = get_logger(__name__)


@dataclass(frozen=True)
class CompactionMatch:
    """A detector hit: the synthesized event and how many raw events it consumes."""

    event: PageEvent
    length: int


Detector = Callable[[Sequence[PageEvent], int], Optional[CompactionMatch]]


def detect_click_sequence(
    events: Sequence[PageEvent],
    start: int,
) -> Optional[CompactionMatch]:
    """Match a contiguous down/up/click triple on one target."""
    window = events[start:start + 3]
    if len(window) < 3:
        return None

    first, second, third = window
    if first.type != EventType.MOUSE_DOWN:
        return None
    target = first.target

    if second.type != EventType.MOUSE_UP or second.target != target:
        return None

    if third.type != EventType.CLICK or third.target != target:
        return None

    return CompactionMatch(event=click(target), length=3)


def is_single_character(key) -> bool:
    """Whether ``key`` is one character as the browser counts it.

    Browsers report length in UTF-16 code units, so a key outside the Basic
    Multilingual Plane such as an emoji counts as two.
    """
    if not isinstance(key, str):
        return False
    return len(key.encode("utf-16-le", "surrogatepass")) == 2


def detect_fill_sequence(
    events: Sequence[PageEvent],
    start: int,
) -> Optional[CompactionMatch]:
    """Match a run of keypresses on one target.

    Only a single-character key can open a run, so named keys such as
    ``Enter`` or ``ArrowLeft`` are never folded into a fill on their own.
    Once open, the run takes any keypress on the same target.
    """
    if start >= len(events):
        return None

    first = events[start]
    if first.type != EventType.KEY_PRESS or not is_single_character(first.key):
        return None
    target = first.target

    length = 1
    while start + length < len(events):
        candidate = events[start + length]
        if candidate.type != EventType.KEY_PRESS or candidate.target != target:
            break
        length += 1

    last = events[start + length - 1]
    return CompactionMatch(event=fill(target, last.input_value), length=length)


# Priority order is part of the contract.
DETECTORS: tuple[Detector, ...] = (
    detect_click_sequence,
    detect_fill_sequence,
)


class SequenceCompactor:
    """Compacts raw event snapshots into semantic events.

    Example:
        compactor = SequenceCompactor()
        actions = compactor.compact(event_log.snapshot())
    """

    def __init__(self, detectors: Sequence[Detector] = DETECTORS):
        """Initialize compactor.

        Args:
            detectors: Detectors to try at each position, highest priority first
        """
        self.detectors = tuple(detectors)
        self.log = logger.bind(component="compactor")

    def compact(self, events: Sequence[PageEvent]) -> list[PageEvent]:
        """Compact a raw event snapshot.

        Args:
            events: Raw events in arrival order

        Returns:
            Semantic events in the same order
        """
        compacted: list[PageEvent] = []
        position = 0

        while position < len(events):
            match = self._match_at(events, position)
            if match is not None:
                compacted.append(match.event)
                position += match.length
                continue

            compacted.append(events[position])
            position += 1

        self.log.debug(
            "Compacted events",
            raw_count=len(events),
            compacted_count=len(compacted),
        )
        return compacted

    def _match_at(
        self,
        events: Sequence[PageEvent],
        position: int,
    ) -> Optional[CompactionMatch]:
        for detector in self.detectors:
            match = detector(events, position)
            if match is not None:
                return match
        return None


def compact_events(events: Sequence[PageEvent]) -> list[PageEvent]:
    """Convenience function to compact events with the default detectors."""
    return SequenceCompactor().compact(events)
