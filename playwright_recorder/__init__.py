"""Record browser interactions as Playwright test code."""

__version__ = "0.1.0"
