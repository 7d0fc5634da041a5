"""Data models for recorded page events."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class EventType(str, Enum):
    """Page event kinds.

    ``FILL`` is only ever produced by the compactor; the injected script
    never reports it.
    """

    MOUSE_DOWN = "mousedown"
    MOUSE_UP = "mouseup"
    CLICK = "click"
    KEY_PRESS = "keypress"
    PAGE_LOAD = "pageload"
    FILL = "fill"


RAW_EVENT_TYPES = frozenset({
    EventType.MOUSE_DOWN,
    EventType.MOUSE_UP,
    EventType.CLICK,
    EventType.KEY_PRESS,
    EventType.PAGE_LOAD,
})


@dataclass(frozen=True)
class PageEvent:
    """A single page event, raw or synthesized.

    ``type`` is an ``EventType`` for every known kind. Payloads with a kind
    outside the fixed set keep the raw string so they can pass through the
    pipeline untouched.
    """

    type: Union[EventType, str]
    target: Optional[str] = None
    key: Optional[str] = None
    input_value: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.type, str) and not isinstance(self.type, EventType):
            try:
                object.__setattr__(self, "type", EventType(self.type))
            except ValueError:
                pass

    @classmethod
    def from_dict(cls, data: dict) -> "PageEvent":
        """Create PageEvent from a binding payload.

        Any page script can call the binding, so non-string fields are
        turned into strings here rather than trusted downstream.
        """
        input_value = data.get("inputValue")
        if input_value is None:
            input_value = data.get("input_value")

        return cls(
            type=_as_text(data.get("type")) or "",
            target=_as_text(data.get("target")),
            key=_as_text(data.get("key")),
            input_value=_as_text(input_value),
        )

    def to_dict(self) -> dict:
        """Convert to the payload format used by the injected script."""
        data = {"type": self.type_name}
        if self.target is not None:
            data["target"] = self.target
        if self.key is not None:
            data["key"] = self.key
        if self.input_value is not None:
            data["inputValue"] = self.input_value
        return data

    @property
    def type_name(self) -> str:
        if isinstance(self.type, EventType):
            return self.type.value
        return self.type

    @property
    def is_raw(self) -> bool:
        """Whether this kind can appear in a raw event log."""
        return isinstance(self.type, EventType) and self.type in RAW_EVENT_TYPES


def _as_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def mouse_down(target: str) -> PageEvent:
    return PageEvent(EventType.MOUSE_DOWN, target=target)


def mouse_up(target: str) -> PageEvent:
    return PageEvent(EventType.MOUSE_UP, target=target)


def click(target: str) -> PageEvent:
    return PageEvent(EventType.CLICK, target=target)


def key_press(target: str, key: str, input_value: str) -> PageEvent:
    return PageEvent(EventType.KEY_PRESS, target=target, key=key, input_value=input_value)


def page_load() -> PageEvent:
    return PageEvent(EventType.PAGE_LOAD)


def fill(target: str, input_value: str) -> PageEvent:
    return PageEvent(EventType.FILL, target=target, input_value=input_value)
