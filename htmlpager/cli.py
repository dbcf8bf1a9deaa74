"""Command-line front door for htmlpager.

Parses CLI options and either prints a converted page (``--dump``) or
starts the interactive viewer. Fatal fetch errors are reported here, after
the terminal has been restored.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .app import run_viewer
from .config import DEFAULT_TICK_SECONDS, ViewerConfig, ViewportGeometry
from .errors import FetchError
from .fetch import build_session, load_document
from .url_field import normalize_url

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def configure_logging(log_file: Path | None) -> None:
    if log_file is None:
        return
    logging.basicConfig(filename=str(log_file), level=logging.DEBUG, format=LOG_FORMAT)


def dump_page(url: str, width: int, config: ViewerConfig) -> str:
    """Fetch ``url`` once and return its title and text lines."""
    with build_session(config) as session:
        document = load_document(url, width, session=session, config=config)
    return "\n".join([document.title, "", *document.lines]) + "\n"


def main() -> None:
    """Parse CLI arguments and run htmlpager.

    Exits with status 0 on a normal quit and 1 when a page cannot be
    fetched or converted.
    """
    parser = argparse.ArgumentParser(
        description="View a web page as plain text in a scrollable terminal pane."
    )
    parser.add_argument("url", nargs="?", default=None, help="URL to open at startup. Press s in the viewer to enter one.")
    parser.add_argument("--dump", action="store_true", help="Print the converted page to stdout and exit.")
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Wrap width for --dump output (default: terminal width minus 3).",
    )
    parser.add_argument(
        "--tick-ms",
        type=_positive_int,
        default=int(DEFAULT_TICK_SECONDS * 1000),
        help="Redraw interval in milliseconds.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    args = parser.parse_args()

    configure_logging(args.log_file)
    config = ViewerConfig(tick_seconds=args.tick_ms / 1000.0)

    url = None
    if args.url is not None:
        url = normalize_url(args.url)
        if url is None:
            raise SystemExit("URL must not be empty.")

    try:
        if args.dump:
            if url is None:
                parser.error("--dump requires a URL")
            width = args.width if args.width is not None else ViewportGeometry.current().wrap_width
            sys.stdout.write(dump_page(url, width, config))
            return

        if not (sys.stdin.isatty() and sys.stdout.isatty()):
            raise SystemExit("htmlpager needs an interactive terminal; use --dump to print a page instead.")
        run_viewer(url, config)
    except FetchError as exc:
        logger.error("giving up: %s", exc)
        raise SystemExit(f"htmlpager: {exc}") from exc


if __name__ == "__main__":
    main()
