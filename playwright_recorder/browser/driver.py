"""Playwright driver for recording sessions."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from ..recording.injected_script import InjectedScriptConfig, generate_injected_script
from ..recording.models import PageEvent
from ..utils.logging import get_logger

logger = get_logger(__name__)

EventCallback = Callable[[PageEvent], None]
PageLoadCallback = Callable[[], None]


@dataclass
class BrowserConfig:
    """Configuration for the recording browser."""
    headless: bool = False
    slow_mo: int = 0  # Milliseconds between actions
    binding_name: str = "playwrightRecorderActionTracker"
    goto_timeout_ms: int = 30000


class RecordingBrowser:
    """
    Launches Chromium and wires page events to the recorder.

    The injected script reports mouse and keyboard events through an exposed
    binding; page loads come from Playwright's ``load`` event.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        injected_script: Optional[str] = None,
    ):
        self.config = config or BrowserConfig()
        self.injected_script = injected_script or generate_injected_script(
            InjectedScriptConfig(binding_name=self.config.binding_name)
        )
        self._playwright = None
        self._browser = None
        self._context = None
        self._page = None
        self._closed: Optional[asyncio.Event] = None
        self._on_event: Optional[EventCallback] = None
        self._on_page_load: Optional[PageLoadCallback] = None
        self.log = logger.bind(component="browser")

    @property
    def page(self):
        """Get the recorded page."""
        return self._page

    async def start(
        self,
        url: str,
        on_event: EventCallback,
        on_page_load: PageLoadCallback,
    ) -> None:
        """Launch the browser and open ``url`` with instrumentation.

        Args:
            url: Page to record
            on_event: Receives events reported by the injected script
            on_page_load: Called after every completed navigation
        """
        from playwright.async_api import async_playwright

        self._on_event = on_event
        self._on_page_load = on_page_load
        self._closed = asyncio.Event()

        self.log.info("Starting browser", headless=self.config.headless, url=url)

        try:
            await self._launch(async_playwright, url)
        except Exception as e:
            self.log.error("Browser launch failed", url=url, error=str(e))
            try:
                await self.stop()
            except Exception as close_error:
                self.log.warning("Cleanup after failed launch failed", error=str(close_error))
            raise

        self.log.info("Browser started")

    async def _launch(self, async_playwright, url: str) -> None:
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.config.headless,
            slow_mo=self.config.slow_mo,
        )
        self._browser.on("disconnected", self._handle_closed)
        self._context = await self._browser.new_context()

        await self._context.expose_binding(self.config.binding_name, self._handle_binding)

        self._page = await self._context.new_page()
        self._page.on("close", self._handle_closed)
        await self._page.goto(url, timeout=self.config.goto_timeout_ms)

        await self._page.add_script_tag(content=self.injected_script)
        await self._page.add_init_script(script=self.injected_script)

        self._page.on("load", self._handle_load)

    def _handle_binding(self, source: dict, payload: Any) -> None:
        if not isinstance(payload, dict) or self._on_event is None:
            self.log.debug("Ignoring binding payload", payload=payload)
            return
        self._on_event(PageEvent.from_dict(payload))

    def _handle_load(self, *_args) -> None:
        if self._on_page_load is not None:
            self._on_page_load()

    def _handle_closed(self, *_args) -> None:
        if self._closed is not None:
            self._closed.set()

    async def wait_closed(self) -> None:
        """Block until the user closes the page or the browser."""
        if self._closed is None:
            return
        await self._closed.wait()

    async def stop(self) -> None:
        """Close the browser."""
        if self._context:
            await self._context.close()
            self._context = None
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        self._page = None
        self._on_event = None
        self._on_page_load = None
        self.log.info("Browser stopped")
