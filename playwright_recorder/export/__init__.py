"""Code export module - Render compacted events as Playwright code.

Example:
    from playwright_recorder.export import render_document

    print(render_document(event_log.snapshot()))
"""

from .emitter import CodeEmitter, escape_string
from .renderer import TemplateRenderer, load_template, render_document
from .sinks import FileSink, MemorySink, OutputSink

__all__ = [
    "CodeEmitter",
    "escape_string",
    "TemplateRenderer",
    "load_template",
    "render_document",
    "OutputSink",
    "FileSink",
    "MemorySink",
]
