"""Key-event handlers for browsing and URL-entry modes.

Both handlers turn one normalized key token into a state transition.
Fetching is left to the caller so these stay free of I/O.
"""

from __future__ import annotations

import logging

from .scroll import MAX_OFFSET
from .state import AppState, Mode
from .url_field import normalize_url

logger = logging.getLogger(__name__)

QUIT_KEYS = frozenset({"q", "ESC", "CTRL_C"})


def resolve_count(buffer: str) -> int:
    """Fold prefix digits into a repeat count.

    An empty buffer, or one whose digits fold to zero, counts as 1.
    """
    count = 0
    for digit in buffer:
        count = min(MAX_OFFSET, count * 10 + int(digit))
    return count or 1


def handle_normal_key(*, key: str, state: AppState) -> bool:
    """Apply a browsing-mode key. Returns ``True`` when the viewer should quit."""
    if key in QUIT_KEYS:
        return True

    if len(key) == 1 and key in "0123456789":
        state.count_buffer += key
        return False

    if key in {"j", "k", "h", "l"}:
        count = resolve_count(state.count_buffer)
        state.count_buffer = ""
        if key == "j":
            state.vertical.scroll_by(count)
        elif key == "k":
            state.vertical.scroll_by(-count)
        elif key == "l":
            state.horizontal.scroll_by(count)
        else:
            state.horizontal.scroll_by(-count)
        return False

    if key == "g":
        state.vertical.jump_to(0)
    elif key == "G":
        if state.document is not None:
            state.vertical.jump_to(state.document.line_count)
    elif key == "s":
        state.url_field.clear()
        state.mode = Mode.EDITING_URL
        logger.debug("entering URL edit mode")
    return False


def handle_url_key(*, key: str, state: AppState) -> str | None:
    """Apply a URL-entry key. Returns the URL to fetch once the user confirms."""
    if key in {"ESC", "CTRL_C"}:
        state.mode = Mode.BROWSING
        state.url_field.clear()
        logger.debug("URL entry cancelled")
        return None

    if key == "ENTER":
        state.mode = Mode.BROWSING
        url = normalize_url(state.url_field.text)
        state.url_field.clear()
        if url is None:
            logger.debug("blank URL submitted; nothing to fetch")
        return url

    state.url_field.handle_key(key)
    return None
