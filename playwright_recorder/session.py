"""Recording coordinator - Owns a session and its render passes.

A session holds the event log, the code template, the output renderer and
the refresh task. Events are appended as they arrive; the refresh task
re-renders the whole log at a fixed interval. Passes run one at a time
under a lock, so a slow pass delays the next tick instead of overlapping
with it.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Union

from .config import RecorderSettings, get_settings
from .errors import MissingUrlError, NoActiveSessionError, SessionAlreadyActiveError
from .export.emitter import CodeEmitter
from .export.renderer import TemplateRenderer, load_template
from .export.sinks import FileSink, OutputSink
from .recording.compactor import SequenceCompactor
from .recording.event_log import EventLog
from .recording.models import PageEvent, page_load
from .utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class RecordingSession:
    """State of one active recording."""

    url: str
    event_log: EventLog = field(default_factory=EventLog)
    renderer: Optional[TemplateRenderer] = None
    refresh_task: Optional[asyncio.Task] = None
    pass_count: int = 0


class RecordingCoordinator:
    """Starts and stops recordings and renders their code.

    Example:
        coordinator = RecordingCoordinator(browser=RecordingBrowser())
        await coordinator.start("https://example.com")
        ...
        await coordinator.stop()
    """

    def __init__(
        self,
        settings: Optional[RecorderSettings] = None,
        browser=None,
        compactor: Optional[SequenceCompactor] = None,
        emitter: Optional[CodeEmitter] = None,
    ):
        """Initialize coordinator.

        Args:
            settings: Recorder settings, loaded from the environment if omitted
            browser: Optional RecordingBrowser that feeds events into the session
            compactor: Sequence compactor to use
            emitter: Code emitter to use
        """
        self.settings = settings or get_settings()
        self.browser = browser
        self.compactor = compactor or SequenceCompactor()
        self.emitter = emitter or CodeEmitter(escape_values=self.settings.escape_values)
        self._session: Optional[RecordingSession] = None
        self._pass_lock = asyncio.Lock()
        self.log = logger.bind(component="coordinator")

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[RecordingSession]:
        return self._session

    async def start(
        self,
        url: Optional[str],
        sink: Optional[OutputSink] = None,
    ) -> RecordingSession:
        """Start a recording session.

        Args:
            url: Page to record
            sink: Output document, a FileSink on ``settings.output_path`` if omitted

        Returns:
            The new session

        Raises:
            SessionAlreadyActiveError: If a session is already running
            MissingUrlError: If no URL was given
            TemplateError: If the code template cannot be loaded
        """
        if self._session is not None:
            raise SessionAlreadyActiveError()
        if not url:
            raise MissingUrlError()

        template = load_template(self.settings.template_path, self.settings.placeholder)
        renderer = TemplateRenderer(
            template,
            sink=sink or FileSink(self.settings.output_path),
            placeholder=self.settings.placeholder,
            indent=self.settings.indent,
        )

        session = RecordingSession(url=url, renderer=renderer)
        self._session = session
        self.log.info("Starting to record", url=url)

        await self.render_pass()
        session.refresh_task = asyncio.create_task(self._refresh_loop())

        if self.browser is not None:
            try:
                await self.browser.start(
                    url,
                    on_event=self.record_event,
                    on_page_load=self.record_page_load,
                )
            except Exception as e:
                self.log.error("Browser failed to start", url=url, error=str(e))
                await self._close_browser()
                await self._cancel_refresh(session)
                self._session = None
                raise

        return session

    async def stop(self) -> str:
        """Stop the active session after one final render pass.

        The session is discarded even when the final pass fails, so a new
        recording can be started afterwards.

        Returns:
            The final rendered document

        Raises:
            NoActiveSessionError: If no session is running
        """
        session = self._session
        if session is None:
            raise NoActiveSessionError()

        self.log.info("Stopping to record", url=session.url, event_count=len(session.event_log))

        await self._close_browser()
        await self._cancel_refresh(session)
        try:
            await self.render_pass()
        finally:
            self._session = None

        return session.renderer.published or ""

    def record_event(self, event: Union[PageEvent, dict]) -> None:
        """Append an event to the active session's log.

        Events that arrive without an active session are dropped.
        """
        session = self._session
        if session is None:
            self.log.debug("Dropping event, no active session")
            return

        if isinstance(event, dict):
            event = PageEvent.from_dict(event)
        session.event_log.append(event)

    def record_page_load(self) -> None:
        """Append a page load event to the active session's log."""
        self.record_event(page_load())

    async def render_pass(self) -> bool:
        """Re-render the whole event log and publish it if it changed.

        Returns:
            True if the output document was replaced
        """
        async with self._pass_lock:
            session = self._session
            if session is None or session.renderer is None:
                return False

            events = session.event_log.snapshot()
            lines = self.emitter.emit(self.compactor.compact(events))
            content = session.renderer.render(lines)
            # Sinks may write files; keep that off the event loop.
            changed = await asyncio.to_thread(session.renderer.publish, content)
            session.pass_count += 1

            if changed:
                self.log.debug(
                    "Code regenerated",
                    event_count=len(events),
                    line_count=len(lines),
                )
            return changed

    async def _refresh_loop(self) -> None:
        interval = self.settings.refresh_interval
        while True:
            await asyncio.sleep(interval)
            try:
                await self.render_pass()
            except Exception as e:
                self.log.exception("Render pass failed", error=str(e))

    async def _close_browser(self) -> None:
        if self.browser is None:
            return
        try:
            await self.browser.stop()
        except Exception as e:
            self.log.warning("Browser did not close cleanly", error=str(e))

    async def _cancel_refresh(self, session: RecordingSession) -> None:
        task = session.refresh_task
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        session.refresh_task = None
