"""Main entry point for the Playwright recorder."""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from .browser import BrowserConfig, RecordingBrowser
from .config import RecorderSettings, get_settings
from .errors import EventFileError, RecorderError
from .export import load_template, render_document
from .recording.models import PageEvent
from .session import RecordingCoordinator
from .utils.logging import LogContext, configure_logging, get_logger, log_operation

logger = get_logger(__name__)


async def record(url: Optional[str], settings: RecorderSettings) -> str:
    """Record a browser session until the page or browser is closed.

    Returns:
        The final generated document
    """
    browser = RecordingBrowser(BrowserConfig(
        headless=settings.headless,
        binding_name=settings.binding_name,
    ))
    coordinator = RecordingCoordinator(settings, browser=browser)

    with LogContext(session_url=url):
        await coordinator.start(url)
        print(f"Recording {url} into {settings.output_path}, close the browser or press Ctrl+C to stop.")
        try:
            await browser.wait_closed()
        finally:
            content = await coordinator.stop()

    logger.info("Recording saved", path=settings.output_path)
    return content


def load_events(path: str) -> list[PageEvent]:
    """Read raw events from a JSON file.

    Accepts a list of event payloads or an object with an ``events`` key.

    Raises:
        EventFileError: If the file holds anything else
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict) and "events" in data:
        data = data["events"]
    if not isinstance(data, list):
        raise EventFileError(f"{path}: expected a list of events, got {type(data).__name__}")

    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise EventFileError(f"{path}: event {index} is not an object")
    return [PageEvent.from_dict(item) for item in data]


def render(events_path: str, settings: RecorderSettings) -> str:
    """Render a saved event log to code."""
    with log_operation("render", events_file=events_path) as op:
        events = load_events(events_path)
        template = load_template(settings.template_path, settings.placeholder)
        content = render_document(
            events,
            template=template,
            escape_values=settings.escape_values,
            placeholder=settings.placeholder,
            indent=settings.indent,
        )
        op["event_count"] = len(events)
    return content


def prompt_for_url(default_url: str) -> Optional[str]:
    """Ask for the page URL on an interactive terminal."""
    if not sys.stdin.isatty():
        return None
    answer = input(f"Page URL [{default_url}]: ").strip()
    return answer or default_url


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--template", "-t",
        help="Code template containing the placeholder line (default: bundled template)"
    )
    common.add_argument(
        "--escape",
        action="store_true",
        default=None,
        help="Escape quotes in selectors, keys and field values"
    )
    common.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: INFO)"
    )
    common.add_argument(
        "--json-logs",
        action="store_true",
        default=None,
        help="Output logs as JSON"
    )

    parser = argparse.ArgumentParser(
        prog="playwright-recorder",
        description="Record browser interactions as Playwright test code"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    record_parser = subparsers.add_parser(
        "record",
        parents=[common],
        help="Record a live browser session"
    )
    record_parser.add_argument(
        "url",
        nargs="?",
        help="Page URL to record (prompted for when omitted)"
    )
    record_parser.add_argument(
        "--output", "-o",
        help="File the generated code is written to (default: ./recording.spec.js)"
    )
    record_parser.add_argument(
        "--headless",
        action="store_true",
        default=None,
        help="Run the browser headless"
    )

    render_parser = subparsers.add_parser(
        "render",
        parents=[common],
        help="Render a saved event log"
    )
    render_parser.add_argument(
        "events",
        help="JSON file with the raw events"
    )
    render_parser.add_argument(
        "--output", "-o",
        help="Write the document to this file instead of stdout"
    )

    return parser


def settings_from_args(args: argparse.Namespace) -> RecorderSettings:
    overrides = {
        "template_path": args.template,
        "escape_values": args.escape,
        "log_level": args.log_level,
        "json_logs": args.json_logs,
        "headless": getattr(args, "headless", None),
    }
    if args.command == "record":
        overrides["output_path"] = args.output
    return get_settings(**{k: v for k, v in overrides.items() if v is not None})


def cli(argv: Optional[list[str]] = None) -> int:
    """Command-line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = settings_from_args(args)
    configure_logging(level=settings.log_level.value, json_format=settings.json_logs)

    try:
        if args.command == "record":
            url = args.url or prompt_for_url(settings.default_url)
            try:
                asyncio.run(record(url, settings))
            except KeyboardInterrupt:
                print("\nRecording stopped.")
        else:
            content = render(args.events, settings)
            if args.output:
                Path(args.output).write_text(content, encoding="utf-8")
            else:
                sys.stdout.write(content)
    except RecorderError as e:
        logger.error(str(e))
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read input", error=str(e))
        return 1

    return 0


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
