"""Recording module - Capture raw page events and compact them into actions.

Raw events (mousedown, mouseup, click, keypress, pageload) are reported by
the injected script and appended to an EventLog. The SequenceCompactor
turns down/up/click triples into clicks and keypress runs into fills.
"""

from .compactor import DETECTORS, CompactionMatch, SequenceCompactor, compact_events
from .event_log import EventLog
from .injected_script import InjectedScriptConfig, InjectedScriptGenerator, generate_injected_script
from .models import EventType, PageEvent

__all__ = [
    # Models
    "EventType",
    "PageEvent",
    "EventLog",
    # Compactor
    "SequenceCompactor",
    "CompactionMatch",
    "DETECTORS",
    "compact_events",
    # Injected script
    "InjectedScriptConfig",
    "InjectedScriptGenerator",
    "generate_injected_script",
]
