from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """Plain-text page produced by one successful fetch."""

    lines: tuple[str, ...]
    title: str

    @property
    def line_count(self) -> int:
        return len(self.lines)
