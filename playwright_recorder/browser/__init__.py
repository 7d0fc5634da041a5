"""Browser automation for recording sessions."""

from .driver import BrowserConfig, RecordingBrowser

__all__ = ["BrowserConfig", "RecordingBrowser"]
