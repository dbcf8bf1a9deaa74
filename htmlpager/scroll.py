"""Per-axis scroll offsets and the scrollbar indicator derived from them."""

from __future__ import annotations

import sys
from dataclasses import dataclass

# Largest offset an axis may hold; additions saturate here.
MAX_OFFSET = sys.maxsize


def saturate(value: int) -> int:
    """Clamp ``value`` into ``[0, MAX_OFFSET]``."""
    return max(0, min(MAX_OFFSET, value))


@dataclass
class ScrollState:
    """Raw offset for one axis plus the content length it scrolls over.

    Only the low end is clamped when the offset changes. The indicator and
    the renderer clamp against ``content_length`` themselves.
    """

    position: int = 0
    content_length: int = 0

    def scroll_by(self, delta: int) -> None:
        self.position = saturate(self.position + delta)

    def jump_to(self, position: int) -> None:
        self.position = saturate(position)

    def reset(self) -> None:
        self.position = 0

    @property
    def fraction(self) -> float:
        """Indicator position normalized to ``[0.0, 1.0]``."""
        if self.content_length <= 1:
            return 0.0
        last = self.content_length - 1
        return min(self.position, last) / last

    def thumb_offset(self, track_length: int) -> int:
        """Row of the scrollbar thumb inside a track of ``track_length`` cells."""
        if track_length <= 1:
            return 0
        return round(self.fraction * (track_length - 1))
