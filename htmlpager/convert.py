"""HTML to wrapped plain text.

Walks a BeautifulSoup tree, collapsing whitespace inside block elements and
wrapping each block to a fixed width. Output depends only on its inputs.
"""

from __future__ import annotations

import textwrap

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

SKIPPED_TAGS = frozenset(
    {"head", "title", "script", "style", "noscript", "template", "iframe", "svg", "object"}
)
BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "body", "caption", "center", "dd",
        "details", "div", "dl", "dt", "fieldset", "figcaption", "figure",
        "footer", "form", "header", "html", "li", "main", "nav", "p",
        "section", "summary", "table",
    }
)
HEADING_LEVELS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}


class TextBuilder:
    """Accumulates inline text and emits wrapped lines one block at a time.

    ``gap`` records whether the next emitted block is preceded by a blank
    line. List items and table rows clear it so they stay tight.
    """

    def __init__(self, width: int) -> None:
        self.width = max(1, width)
        self.lines: list[str] = []
        self.indent = 0
        self.list_depth = 0
        self.gap = False
        self._inline: list[str] = []
        self._prefix = ""

    def write(self, text: str) -> None:
        self._inline.append(text)

    def start_block(self, prefix: str = "") -> None:
        self.flush()
        self._prefix = prefix

    def flush(self, *, gap: bool = True) -> None:
        text = " ".join("".join(self._inline).split())
        self._inline.clear()
        if not text:
            return
        self._separate()
        lead = " " * self.indent
        self.lines.extend(
            textwrap.wrap(
                text,
                self.width,
                initial_indent=lead + self._prefix,
                subsequent_indent=lead + " " * len(self._prefix),
                break_on_hyphens=False,
            )
        )
        self._prefix = ""
        self.gap = gap

    def verbatim(self, text: str) -> None:
        self.flush()
        rows = text.expandtabs().split("\n")
        while rows and not rows[0].strip():
            rows.pop(0)
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            return
        self._separate()
        lead = " " * self.indent
        self.lines.extend(lead + row.rstrip() for row in rows)
        self.gap = True

    def rule(self) -> None:
        self.flush()
        self._separate(force=True)
        self.lines.append("─" * self.width)
        self.gap = True

    def _separate(self, *, force: bool = False) -> None:
        if self.lines and (self.gap or force):
            self.lines.append("")


def _walk(node: Tag, out: TextBuilder) -> None:
    for child in node.children:
        if isinstance(child, PreformattedString):
            # Comments, doctype, CDATA and processing instructions.
            continue
        if isinstance(child, NavigableString):
            out.write(str(child))
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name in SKIPPED_TAGS:
            continue
        if name == "br":
            out.flush(gap=False)
        elif name == "hr":
            out.rule()
        elif name == "img":
            alt = (child.get("alt") or "").strip()
            if alt:
                out.write(f" [{alt}] ")
        elif name == "pre":
            out.verbatim(child.get_text())
        elif name in HEADING_LEVELS:
            out.start_block("#" * HEADING_LEVELS[name] + " ")
            _walk(child, out)
            out.flush()
        elif name in {"ul", "ol"}:
            out.flush(gap=out.list_depth == 0)
            _walk_list(child, out, ordered=name == "ol")
        elif name == "blockquote":
            out.flush()
            out.indent += 2
            _walk(child, out)
            out.flush()
            out.indent -= 2
        elif name == "tr":
            _walk(child, out)
            out.flush(gap=False)
        elif name in {"td", "th"}:
            out.write(" ")
            _walk(child, out)
            out.write(" ")
        elif name in BLOCK_TAGS:
            out.flush()
            _walk(child, out)
            out.flush()
        else:
            _walk(child, out)


def _walk_list(node: Tag, out: TextBuilder, *, ordered: bool) -> None:
    nested = out.list_depth > 0
    if nested:
        out.indent += 2
    out.list_depth += 1
    for number, item in enumerate(node.find_all("li", recursive=False), start=1):
        out.start_block(f"{number}. " if ordered else "* ")
        _walk(item, out)
        out.flush(gap=False)
    out.list_depth -= 1
    if nested:
        out.indent -= 2
    else:
        out.gap = True


def html_to_text(html: str, width: int) -> str:
    """Convert ``html`` into plain text wrapped to ``width`` columns."""
    soup = BeautifulSoup(html, "html.parser")
    out = TextBuilder(width)
    _walk(soup, out)
    out.flush()
    return "\n".join(out.lines)
