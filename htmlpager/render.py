"""Frame builders for the page view, the empty view and the URL prompt.

Each function returns one complete escape-sequence string; the caller
writes it to the terminal in a single call.
"""

from __future__ import annotations

from .config import ViewportGeometry
from .document import Document
from .scroll import ScrollState
from .text import display_width, slice_columns
from .url_field import LineEditor

SCROLL_HINT = "Use h j k l to scroll ◄ ▲ ▼ ►"
EMPTY_HINT = "Press s to open a URL, q to quit"
URL_LABEL = " URL: "
URL_HELP = " Enter open · Esc cancel"

BORDER_STYLE = "\033[2m"
TITLE_STYLE = "\033[1m"
LABEL_STYLE = "\033[1;38;5;81m"
HELP_STYLE = "\033[2;38;5;250m"
RESET = "\033[0m"

SCROLL_BEGIN = "↑"
SCROLL_END = "↓"
SCROLL_TRACK = "║"
SCROLL_THUMB = "█"


def _row(row: int, content: str) -> str:
    return f"\033[{row};1H\033[2K{content}"


def centered(text: str, width: int) -> str:
    clipped = slice_columns(text, 0, width).rstrip()
    pad = max(0, (width - display_width(clipped)) // 2)
    return " " * pad + clipped


def text_rows(height: int) -> int:
    """Number of document lines visible for a terminal ``height`` rows tall."""
    # Hint row plus the top and bottom border of the page block.
    return max(0, height - 3)


def visible_start(vertical: ScrollState, line_count: int, rows: int) -> int:
    """Clamp a raw vertical offset so the last page stays filled."""
    return max(0, min(vertical.position, line_count - max(1, rows)))


def render_page(
    document: Document,
    vertical: ScrollState,
    horizontal: ScrollState,
    viewport: ViewportGeometry,
) -> str:
    width = viewport.width
    height = viewport.height
    inner_width = max(0, width - 2)
    rows = text_rows(height)

    out: list[str] = ["\033[?25l", _row(1, centered(SCROLL_HINT, width))]
    if height < 3:
        return "".join(out)

    start = visible_start(vertical, document.line_count, rows)
    text_x = min(horizontal.position, horizontal.content_length)
    thumb = vertical.thumb_offset(rows)

    title = slice_columns(document.title, 0, inner_width).rstrip()
    fill = "─" * max(0, inner_width - display_width(title))
    out.append(
        _row(2, f"{BORDER_STYLE}┌{RESET}{TITLE_STYLE}{title}{RESET}{BORDER_STYLE}{fill}{RESET}{SCROLL_BEGIN}")
    )

    for offset in range(rows):
        line_idx = start + offset
        line = document.lines[line_idx] if line_idx < document.line_count else ""
        bar = SCROLL_THUMB if offset == thumb else SCROLL_TRACK
        body = slice_columns(line, text_x, inner_width)
        out.append(_row(3 + offset, f"{BORDER_STYLE}│{RESET}{body}{BORDER_STYLE}{bar}{RESET}"))

    out.append(_row(height, f"{BORDER_STYLE}└{'─' * inner_width}{RESET}{SCROLL_END}"))
    return "".join(out)


def render_empty(viewport: ViewportGeometry) -> str:
    out = ["\033[?25l", _row(1, centered(SCROLL_HINT, viewport.width))]
    message_row = max(2, viewport.height // 2)
    for row in range(2, viewport.height + 1):
        content = centered(EMPTY_HINT, viewport.width) if row == message_row else ""
        out.append(_row(row, f"{HELP_STYLE}{content}{RESET}" if content else ""))
    return "".join(out)


def render_url_prompt(field: LineEditor, viewport: ViewportGeometry) -> str:
    """Draw the URL overlay on the top rows and park the cursor in the field."""
    width = viewport.width
    label = URL_LABEL if width > len(URL_LABEL) else ""
    available = max(1, width - len(label) - 1)
    scroll = max(0, field.cursor - available + 1)
    visible = field.text[scroll : scroll + available]
    cursor_col = min(width, len(label) + (field.cursor - scroll) + 1)

    out = [
        _row(1, f"{LABEL_STYLE}{label}{RESET}{visible}"),
        _row(2, f"{HELP_STYLE}{slice_columns(URL_HELP, 0, width).rstrip()}{RESET}") if viewport.height > 1 else "",
        f"\033[1;{cursor_col}H\033[?25h",
    ]
    return "".join(out)
