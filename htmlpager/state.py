from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .config import ViewportGeometry
from .document import Document
from .scroll import ScrollState
from .url_field import LineEditor


class Mode(Enum):
    BROWSING = "browsing"
    EDITING_URL = "editing_url"


@dataclass
class AppState:
    document: Document | None = None
    vertical: ScrollState = field(default_factory=ScrollState)
    horizontal: ScrollState = field(default_factory=ScrollState)
    count_buffer: str = ""
    mode: Mode = Mode.BROWSING
    url_field: LineEditor = field(default_factory=LineEditor)
    viewport: ViewportGeometry = field(default_factory=lambda: ViewportGeometry(80, 24))

    def sync_content_lengths(self) -> None:
        """Refresh per-frame scroll bounds from the document and viewport."""
        self.vertical.content_length = self.document.line_count if self.document is not None else 0
        # The horizontal bound follows the viewport height, not its width.
        self.horizontal.content_length = self.viewport.height

    def show_document(self, document: Document) -> None:
        self.document = document
        self.vertical.reset()
        self.horizontal.reset()
        self.count_buffer = ""
        self.sync_content_lengths()
