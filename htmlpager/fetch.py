"""Fetch pipeline: HTTP GET, body normalization, conversion to a Document.

Runs synchronously and at most once per user request. Failures surface as
``FetchError`` subclasses; nothing partial is ever returned.
"""

from __future__ import annotations

import logging

import requests
from bs4 import BeautifulSoup

from .config import ViewerConfig
from .convert import html_to_text
from .document import Document
from .errors import ConversionError, DecodeError, NetworkError

logger = logging.getLogger(__name__)


def build_session(config: ViewerConfig) -> requests.Session:
    session = requests.Session()
    session.headers.update(config.request_headers())
    return session


def normalize_html(body: str) -> str:
    """Drop blank lines and trim the rest, joining with newlines."""
    return "\n".join(line.strip() for line in body.strip().splitlines() if line.strip())


def extract_title(source: str, default: str) -> str:
    """Return the text of the first ``<title>`` element, else ``default``.

    Missing or blank titles fall back to ``default``.
    """
    tag = BeautifulSoup(source, "html.parser").title
    if tag is None:
        return default
    title = " ".join(tag.get_text().split())
    return title or default


def decode_body(response: requests.Response, url: str) -> str:
    """Decode the body in its declared charset, or UTF-8 when none is declared.

    Undecodable bytes become U+FFFD; an unknown charset name is an error.
    """
    content_type = response.headers.get("Content-Type", "")
    encoding = response.encoding if "charset" in content_type.lower() else None
    encoding = encoding or "utf-8"
    try:
        return response.content.decode(encoding, errors="replace")
    except LookupError as exc:
        raise DecodeError(url, f"cannot decode response body as {encoding}") from exc


def build_document(body: str, width: int, *, url: str, default_title: str) -> Document:
    source = normalize_html(body)
    try:
        text = html_to_text(source, width)
    except Exception as exc:
        raise ConversionError(url, f"cannot convert page to text: {exc}") from exc
    return Document(lines=tuple(text.splitlines()), title=extract_title(source, default_title))


def load_document(
    url: str,
    width: int,
    *,
    session: requests.Session,
    config: ViewerConfig,
) -> Document:
    """Fetch ``url`` and convert it to a Document wrapped at ``width`` columns."""
    logger.info("GET %s", url)
    try:
        response = session.get(url, timeout=config.timeout_seconds)
        response.raise_for_status()
    except requests.RequestException as exc:
        logger.error("request for %s failed: %s", url, exc)
        raise NetworkError(url, f"request failed: {exc}") from exc

    body = decode_body(response, url)
    document = build_document(body, width, url=url, default_title=config.default_title)
    logger.info(
        "loaded %s: status=%s bytes=%d lines=%d",
        url,
        response.status_code,
        len(response.content),
        document.line_count,
    )
    return document
