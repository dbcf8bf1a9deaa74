"""Fixed-tick render loop.

One loop serves both modes: each pass redraws for the current mode, waits
for a key no longer than the rest of the tick, and dispatches it.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .config import ViewportGeometry
from .document import Document
from .input import read_key
from .key_handlers import handle_normal_key, handle_url_key
from .render import render_empty, render_page, render_url_prompt
from .state import AppState, Mode
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def draw(state: AppState, terminal: TerminalController) -> None:
    if state.mode is Mode.EDITING_URL:
        terminal.write(render_url_prompt(state.url_field, state.viewport))
    elif state.document is not None:
        terminal.write(render_page(state.document, state.vertical, state.horizontal, state.viewport))
    else:
        terminal.write(render_empty(state.viewport))


def run_main_loop(
    *,
    state: AppState,
    terminal: TerminalController,
    stdin_fd: int,
    tick_seconds: float,
    load_document: Callable[[str, int], Document],
    viewport: Callable[[], ViewportGeometry] = ViewportGeometry.current,
) -> None:
    """Run until the user quits. Fetch errors propagate to the caller."""
    last_tick = time.monotonic()
    while True:
        state.viewport = viewport()
        state.sync_content_lengths()
        draw(state, terminal)

        remaining = max(0.0, tick_seconds - (time.monotonic() - last_tick))
        key = read_key(stdin_fd, timeout_ms=int(remaining * 1000))
        if time.monotonic() - last_tick >= tick_seconds:
            last_tick = time.monotonic()
        if key == "":
            continue

        if state.mode is Mode.EDITING_URL:
            url = handle_url_key(key=key, state=state)
            if url is not None:
                state.show_document(load_document(url, state.viewport.wrap_width))
            continue

        if handle_normal_key(key=key, state=state):
            logger.debug("quit requested")
            return
