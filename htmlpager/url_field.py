"""Single-line editable text field used for URL entry."""

from __future__ import annotations

from dataclasses import dataclass


def normalize_url(text: str) -> str | None:
    """Trim user input and default to https when no scheme was typed.

    Returns ``None`` for blank input.
    """
    url = text.strip()
    if not url:
        return None
    if "://" not in url:
        url = "https://" + url
    return url


@dataclass
class LineEditor:
    text: str = ""
    cursor: int = 0

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def insert(self, chars: str) -> None:
        self.text = self.text[: self.cursor] + chars + self.text[self.cursor :]
        self.cursor += len(chars)

    def backspace(self) -> None:
        if self.cursor <= 0:
            return
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1

    def delete(self) -> None:
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]

    def delete_word_before(self) -> None:
        start = self.cursor
        while start > 0 and self.text[start - 1] == " ":
            start -= 1
        while start > 0 and self.text[start - 1] != " ":
            start -= 1
        self.text = self.text[:start] + self.text[self.cursor :]
        self.cursor = start

    def handle_key(self, key: str) -> bool:
        """Apply one editing key. Returns ``False`` for keys the field ignores."""
        if key == "BACKSPACE":
            self.backspace()
        elif key == "DELETE":
            self.delete()
        elif key == "LEFT":
            self.cursor = max(0, self.cursor - 1)
        elif key == "RIGHT":
            self.cursor = min(len(self.text), self.cursor + 1)
        elif key in {"HOME", "CTRL_A"}:
            self.cursor = 0
        elif key in {"END", "CTRL_E"}:
            self.cursor = len(self.text)
        elif key == "CTRL_U":
            self.text = self.text[self.cursor :]
            self.cursor = 0
        elif key == "CTRL_K":
            self.text = self.text[: self.cursor]
        elif key == "CTRL_W":
            self.delete_word_before()
        elif len(key) == 1 and key.isprintable():
            self.insert(key)
        else:
            return False
        return True
