"""Template renderer - Place emitted lines into the code skeleton."""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Union

from ..errors import TemplateError
from ..recording.compactor import SequenceCompactor
from ..recording.models import PageEvent
from ..utils.logging import get_logger
from .emitter import CodeEmitter
from .sinks import OutputSink

logger = get_logger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "recording-template.js"
DEFAULT_PLACEHOLDER = "    // <<CONTENT>>"
DEFAULT_INDENT = "    "


def load_template(
    path: Union[str, Path, None] = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    """Read a code skeleton from disk.

    Args:
        path: Template file, the bundled template when omitted
        placeholder: Line that must appear in the template

    Returns:
        Template text

    Raises:
        TemplateError: If the file cannot be read or lacks the placeholder
    """
    template_path = Path(path) if path else DEFAULT_TEMPLATE_PATH
    try:
        template = template_path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read template {template_path}: {e}") from e

    if placeholder not in template:
        raise TemplateError(f"Template {template_path} has no {placeholder.strip()!r} placeholder")

    return template


class TemplateRenderer:
    """Renders emitted lines into a template and publishes changes.

    Example:
        renderer = TemplateRenderer(load_template(), sink=FileSink("out.spec.js"))
        renderer.publish(renderer.render(lines))
    """

    def __init__(
        self,
        template: str,
        sink: Optional[OutputSink] = None,
        placeholder: str = DEFAULT_PLACEHOLDER,
        indent: str = DEFAULT_INDENT,
    ):
        self.template = template
        self.sink = sink
        self.placeholder = placeholder
        self.indent = indent
        self._published: Optional[str] = None
        self.log = logger.bind(component="renderer")

    def render(self, lines: Sequence[str]) -> str:
        """Substitute the lines into the template placeholder."""
        block = "\n\n".join(self.indent + line for line in lines)
        return self.template.replace(self.placeholder, block, 1)

    @property
    def published(self) -> Optional[str]:
        """Last content handed to the sink."""
        return self._published

    def publish(self, content: str) -> bool:
        """Replace the sink document if the content changed.

        Returns:
            True if the sink was updated, False for an identical document
        """
        current = self._published
        if current is None and self.sink is not None:
            current = self.sink.get_text()

        if content == current:
            return False

        if self.sink is not None:
            self.sink.replace(content)
        self._published = content
        self.log.debug("Published document", size=len(content))
        return True


def render_document(
    events: Sequence[PageEvent],
    template: Optional[str] = None,
    escape_values: bool = False,
    placeholder: str = DEFAULT_PLACEHOLDER,
    indent: str = DEFAULT_INDENT,
) -> str:
    """Run the full pipeline over a raw event sequence.

    Args:
        events: Raw events in arrival order
        template: Code skeleton, the bundled template when omitted
        escape_values: Escape quotes in interpolated values
        placeholder: Placeholder line in the template
        indent: Indent unit for each statement

    Returns:
        Rendered document
    """
    if template is None:
        template = load_template(placeholder=placeholder)

    compacted = SequenceCompactor().compact(events)
    lines = CodeEmitter(escape_values=escape_values).emit(compacted)
    renderer = TemplateRenderer(template, placeholder=placeholder, indent=indent)
    return renderer.render(lines)
