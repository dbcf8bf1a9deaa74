"""Runtime settings and viewport geometry.

Nothing here is persisted: settings come from CLI flags and geometry is
re-read from the terminal on every frame.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass

DEFAULT_TICK_SECONDS = 0.25
DEFAULT_TITLE = "Unknown Title"
USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0"
ACCEPT = "text/html"

# Left border plus right border/scrollbar, with one column of slack.
RESERVED_COLUMNS = 3


@dataclass(frozen=True)
class ViewerConfig:
    tick_seconds: float = DEFAULT_TICK_SECONDS
    user_agent: str = USER_AGENT
    accept: str = ACCEPT
    default_title: str = DEFAULT_TITLE
    timeout_seconds: float | None = None

    def request_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": self.accept}


@dataclass(frozen=True)
class ViewportGeometry:
    width: int
    height: int

    @classmethod
    def current(cls) -> "ViewportGeometry":
        term = shutil.get_terminal_size((80, 24))
        return cls(width=max(1, term.columns), height=max(1, term.lines))

    @property
    def wrap_width(self) -> int:
        return max(1, self.width - RESERVED_COLUMNS)
