"""Display-column measurement and slicing for plain text.

Converted pages carry no escape sequences, so widths come straight from
Unicode properties: wide/fullwidth characters take two cells.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def slice_columns(text: str, start_cols: int, max_cols: int) -> str:
    """Return the part of ``text`` visible in a window of display columns.

    The window starts ``start_cols`` columns in and is ``max_cols`` wide.
    A wide character cut by either edge is replaced with spaces, and the
    result is padded to exactly ``max_cols`` columns.
    """
    if max_cols <= 0:
        return ""
    start_cols = max(0, start_cols)
    end_cols = start_cols + max_cols

    out: list[str] = []
    shown = 0
    col = 0
    for ch in text:
        if col >= end_cols:
            break
        w = char_display_width(ch, col)
        next_col = col + w
        if next_col <= start_cols:
            col = next_col
            continue
        if col < start_cols or next_col > end_cols or ch == "\t":
            visible = min(next_col, end_cols) - max(col, start_cols)
            out.append(" " * visible)
            shown += visible
        else:
            out.append(ch)
            shown += w
        col = next_col
    if shown < max_cols:
        out.append(" " * (max_cols - shown))
    return "".join(out)
