"""Code emitter - One line of Playwright code per semantic event."""

from collections.abc import Iterable

from ..recording.models import EventType, PageEvent


class CodeEmitter:
    """Maps semantic events to JavaScript Playwright statements.

    Values are interpolated verbatim unless ``escape_values`` is set, in
    which case they are escaped for a single-quoted JavaScript string.
    """

    def __init__(self, escape_values: bool = False):
        self.escape_values = escape_values
        self._generators = {
            EventType.CLICK: self.generate_click,
            EventType.MOUSE_DOWN: self.generate_mouse_down,
            EventType.MOUSE_UP: self.generate_mouse_up,
            EventType.KEY_PRESS: self.generate_key_press,
            EventType.FILL: self.generate_fill,
            EventType.PAGE_LOAD: self.generate_page_load,
        }

    def emit(self, events: Iterable[PageEvent]) -> list[str]:
        """Generate one line per event, in order."""
        return [self.emit_line(event) for event in events]

    def emit_line(self, event: PageEvent) -> str:
        """Generate the line for a single event, or '' for an unknown kind."""
        if not isinstance(event.type, EventType):
            return ""
        generator = self._generators.get(event.type)
        if generator is None:
            return ""
        return generator(event)

    def generate_click(self, event: PageEvent) -> str:
        return f"await page.click('{self.quote(event.target)}');"

    def generate_mouse_down(self, event: PageEvent) -> str:
        return f"await page.mouse.down('{self.quote(event.target)}');"

    def generate_mouse_up(self, event: PageEvent) -> str:
        return f"await page.mouse.up('{self.quote(event.target)}');"

    def generate_key_press(self, event: PageEvent) -> str:
        return f"await page.press('{self.quote(event.target)}', '{self.quote(event.key)}');"

    def generate_fill(self, event: PageEvent) -> str:
        return f"await page.fill('{self.quote(event.target)}', '{self.quote(event.input_value)}');"

    def generate_page_load(self, event: PageEvent) -> str:
        return "await page.waitForLoadState();"

    def quote(self, value) -> str:
        """Prepare a value for interpolation into a string literal."""
        if not self.escape_values:
            return f"{value}"
        return escape_string(value)


def escape_string(value) -> str:
    """Escape string for a single-quoted JavaScript literal."""
    if value is None:
        return ""
    return (
        str(value)
        .replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
    )
