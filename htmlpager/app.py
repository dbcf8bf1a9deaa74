"""Viewer session wiring: terminal, HTTP session, state and loop."""

from __future__ import annotations

import sys

from .config import ViewerConfig, ViewportGeometry
from .document import Document
from .fetch import build_session, load_document
from .loop import run_main_loop
from .state import AppState
from .terminal import TerminalController


def run_viewer(url: str | None, config: ViewerConfig) -> None:
    """Run the interactive viewer, optionally opening ``url`` first.

    The terminal is restored before any exception leaves this function.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    state = AppState(viewport=ViewportGeometry.current())

    with build_session(config) as session:

        def load(target: str, width: int) -> Document:
            return load_document(target, width, session=session, config=config)

        with terminal.raw_mode():
            if url is not None:
                state.show_document(load(url, state.viewport.wrap_width))
            run_main_loop(
                state=state,
                terminal=terminal,
                stdin_fd=stdin_fd,
                tick_seconds=config.tick_seconds,
                load_document=load,
            )
