"""Persistence layer for resource packs.

This module exports the in-memory store and document access helpers:
- Path-addressed Store and path normalization
- Text/JSON reads and canonical JSON writes

Container I/O lives in persistence.container and path conventions in
persistence.pack_paths; import those modules directly.
"""

from resourcepack_cli.persistence.json_io import (
    dumps_document,
    parse_document,
    read_structured,
    read_structured_strict,
    read_text,
    write_structured,
    write_text,
)
from resourcepack_cli.persistence.store import Store, normalize_path

__all__ = [
    # Store
    "Store",
    "normalize_path",
    # JSON I/O
    "dumps_document",
    "parse_document",
    "read_structured",
    "read_structured_strict",
    "read_text",
    "write_structured",
    "write_text",
]
