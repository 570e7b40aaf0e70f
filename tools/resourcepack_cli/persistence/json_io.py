"""Text and JSON document access over a Store.

This module layers typed helpers on top of raw byte payloads:
- Text is always UTF-8
- JSON is parsed strictly first, then leniently with json5 (pack authors
  often leave comments and trailing commas, which the game tolerates)
- Writes use a fixed layout so unchanged content round-trips byte-identically
"""

from __future__ import annotations

import json
import logging
from typing import Any

import json5

from resourcepack_cli.errors import DocumentDecodeError
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)


def read_text(store: Store, path: str) -> str | None:
    """Read a UTF-8 text payload.

    Args:
        store: Store to read from
        path: Document path (normalized before lookup)

    Returns:
        Decoded text, or None if the path is absent
    """
    data = store.get(path)
    if data is None:
        return None
    return data.decode("utf-8", errors="replace")


def write_text(store: Store, path: str, text: str) -> None:
    """Write text as UTF-8."""
    store.set(path, text.encode("utf-8"))


def parse_document(raw: str, path: str = "<document>") -> Any:
    """Parse JSON content, falling back to json5 for lenient documents.

    Args:
        raw: Document text
        path: Path used in error messages

    Returns:
        Parsed Python object

    Raises:
        DocumentDecodeError: If neither parser accepts the content
    """
    text = raw.lstrip("\ufeff")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        strict_error = exc
    try:
        return json5.loads(text)
    except ValueError:
        raise DocumentDecodeError(path, str(strict_error)) from strict_error


def read_structured(store: Store, path: str) -> Any | None:
    """Read and parse a JSON document, failing silently.

    Returns:
        Parsed object, or None when the document is absent, empty or unparseable

    Note:
        Callers decide whether a missing/undecodable document is fatal.
        Use read_structured_strict() when overwriting would lose user content.
    """
    text = read_text(store, path)
    if not text:
        return None
    try:
        return parse_document(text, path)
    except DocumentDecodeError as exc:
        logger.debug("Ignoring undecodable document %s: %s", path, exc.detail)
        return None


def read_structured_strict(store: Store, path: str) -> Any | None:
    """Read and parse a JSON document.

    Returns:
        Parsed object, or None when the document is absent or empty

    Raises:
        DocumentDecodeError: If the document exists but cannot be parsed
    """
    text = read_text(store, path)
    if text is None or not text.strip():
        return None
    return parse_document(text, path)


def dumps_document(value: Any) -> str:
    """Serialize a document in the canonical pack layout.

    Layout: 2-space indent, keys in insertion order, non-ASCII kept as-is,
    trailing newline.
    """
    return json.dumps(value, indent=2, ensure_ascii=False) + "\n"


def write_structured(store: Store, path: str, value: Any) -> None:
    """Serialize value and write it at path.

    Invariants:
        - Writing the parsed result of a document produced by this function
          yields identical bytes
    """
    write_text(store, path, dumps_document(value))
    logger.debug("Wrote %s", path)
