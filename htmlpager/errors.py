"""Fatal error taxonomy for the fetch pipeline.

Each error keeps the URL that was being loaded so the CLI can report it.
Library exceptions are chained as ``__cause__``.
"""

from __future__ import annotations


class FetchError(Exception):
    """Base class for failures that abort loading a page."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} ({self.url})"


class NetworkError(FetchError):
    """Connection, URL, or HTTP status failure."""


class DecodeError(FetchError):
    """Response body could not be decoded as text."""


class ConversionError(FetchError):
    """HTML could not be converted to plain text."""
