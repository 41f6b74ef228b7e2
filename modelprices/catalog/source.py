"""Read pricing documents from disk or over HTTP."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Tuple

import httpx
from loguru import logger

from modelprices.catalog.errors import SourceError

DEFAULT_URL = (
    "https://raw.githubusercontent.com/BerriAI/litellm/main/"
    "model_prices_and_context_window.json"
)


class _Pairs(list):
    """Marker for a decoded JSON object kept as its raw key/value pairs."""


def _to_plain(value: Any) -> Any:
    if isinstance(value, _Pairs):
        return {key: _to_plain(item) for key, item in value}
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


def parse_document(text: str) -> List[Tuple[str, Any]]:
    """
    Decode a pricing document into a list of (id, entry) pairs.

    Top-level keys are kept as pairs so that a repeated id is still visible to
    the loader. Nested objects become plain dicts.
    """
    try:
        decoded = json.loads(text, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as e:
        raise SourceError(f"Invalid JSON: {e}") from e
    if not isinstance(decoded, _Pairs):
        raise SourceError(f"Document must be a JSON object, got {type(decoded).__name__}")
    return [(key, _to_plain(value)) for key, value in decoded]


def read_document(path: Path | str) -> List[Tuple[str, Any]]:
    path = Path(path).expanduser()
    try:
        # utf-8-sig tolerates BOM-prefixed files
        with open(path, encoding="utf-8-sig") as f:
            text = f.read()
    except OSError as e:
        raise SourceError(f"Cannot read {path}: {e}") from e
    logger.debug(f"Read pricing document from {path}")
    return parse_document(text)


def fetch_document(url: str, timeout: float = 30.0, transport: httpx.BaseTransport | None = None) -> List[Tuple[str, Any]]:
    try:
        with httpx.Client(timeout=timeout, transport=transport, follow_redirects=True) as client:
            resp = client.get(url, headers={"Accept": "application/json"})
            resp.raise_for_status()
            text = resp.text
    except httpx.HTTPError as e:
        raise SourceError(f"Cannot fetch {url}: {e}") from e
    logger.debug(f"Fetched pricing document from {url} ({len(text)} bytes)")
    return parse_document(text)


def is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def load_document(location: str, timeout: float = 30.0) -> List[Tuple[str, Any]]:
    """Read a document from a URL or a file path."""
    if is_url(location):
        return fetch_document(location, timeout=timeout)
    return read_document(location)
