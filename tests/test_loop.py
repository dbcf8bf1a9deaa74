"""Render-loop behavior tests.

Keys are scripted through a patched ``read_key``; fetching and the terminal
are fakes. Covers mode dispatch, fetch-once semantics and error exit.
"""

from __future__ import annotations

from contextlib import contextmanager
import unittest
from unittest import mock

from htmlpager.config import ViewportGeometry
from htmlpager.document import Document
from htmlpager.errors import NetworkError
from htmlpager.loop import run_main_loop
from htmlpager.state import AppState, Mode

VIEWPORT = ViewportGeometry(width=40, height=10)


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[str] = []

    @contextmanager
    def raw_mode(self):
        yield self

    def write(self, frame: str) -> None:
        self.frames.append(frame)


class _FakeLoader:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, int]] = []
        self.error = error

    def __call__(self, url: str, width: int) -> Document:
        self.calls.append((url, width))
        if self.error is not None:
            raise self.error
        return Document(lines=tuple(f"row {idx}" for idx in range(30)), title=url)


class RuntimeLoopBehaviorTests(unittest.TestCase):
    def _run(self, keys: list[str], state: AppState | None = None, loader: _FakeLoader | None = None):
        state = state if state is not None else AppState()
        loader = loader if loader is not None else _FakeLoader()
        terminal = _FakeTerminal()
        key_iter = iter(keys)
        with mock.patch(
            "htmlpager.loop.read_key",
            side_effect=lambda *_args, **_kwargs: next(key_iter),
        ) as read_key_mock:
            run_main_loop(
                state=state,
                terminal=terminal,
                stdin_fd=0,
                tick_seconds=0.25,
                load_document=loader,
                viewport=lambda: VIEWPORT,
            )
        return state, loader, terminal, read_key_mock

    def test_quit_returns_after_drawing_empty_view(self) -> None:
        _state, loader, terminal, _read_key = self._run(["q"])
        self.assertEqual(loader.calls, [])
        self.assertEqual(len(terminal.frames), 1)
        self.assertIn("Press s to open a URL", terminal.frames[0])

    def test_entered_url_is_fetched_once_and_cached_across_ticks(self) -> None:
        keys = ["s", *"ex.co", "ENTER", "", "", "", "3", "j", "", "q"]
        state, loader, terminal, _read_key = self._run(keys)

        self.assertEqual(loader.calls, [("https://ex.co", VIEWPORT.wrap_width)])
        self.assertIs(state.mode, Mode.BROWSING)
        self.assertEqual(state.document.title, "https://ex.co")
        self.assertEqual(state.vertical.position, 3)
        self.assertIn("https://ex.co", terminal.frames[-1])

    def test_url_mode_draws_prompt_instead_of_page(self) -> None:
        _state, _loader, terminal, _read_key = self._run(["s", "a", "ESC", "q"])
        self.assertIn("URL:", terminal.frames[1])
        self.assertIn("URL:", terminal.frames[2])
        self.assertNotIn("URL:", terminal.frames[3])

    def test_escape_cancels_url_entry_without_fetch(self) -> None:
        state, loader, _terminal, _read_key = self._run(["s", *"example.com", "ESC", "q"])
        self.assertEqual(loader.calls, [])
        self.assertIsNone(state.document)

    def test_quit_keys_are_text_while_editing(self) -> None:
        state, loader, _terminal, _read_key = self._run(["s", "q", "ENTER", "q"])
        self.assertEqual(loader.calls, [("https://q", VIEWPORT.wrap_width)])
        self.assertIsNotNone(state.document)

    def test_fetch_error_propagates_and_keeps_previous_document(self) -> None:
        previous = Document(lines=("old",), title="Old")
        state = AppState()
        state.show_document(previous)
        loader = _FakeLoader(error=NetworkError("https://down", "request failed"))
        with self.assertRaises(NetworkError):
            self._run(["s", "d", "o", "w", "n", "ENTER", "q"], state=state, loader=loader)
        self.assertIs(state.document, previous)

    def test_poll_timeout_never_exceeds_tick(self) -> None:
        _state, _loader, _terminal, read_key_mock = self._run(["", "", "q"])
        for call in read_key_mock.call_args_list:
            self.assertLessEqual(call.kwargs["timeout_ms"], 250)
            self.assertGreaterEqual(call.kwargs["timeout_ms"], 0)

    def test_content_lengths_follow_document_and_viewport(self) -> None:
        state = AppState()
        state.show_document(Document(lines=("a", "b"), title="t"))
        self._run(["G", "q"], state=state)
        self.assertEqual(state.vertical.content_length, 2)
        self.assertEqual(state.horizontal.content_length, VIEWPORT.height)
        self.assertEqual(state.vertical.position, 2)


if __name__ == "__main__":
    unittest.main()
