"""Path-based editing of any structured document in a pack."""

from __future__ import annotations

import logging
from typing import Any

from resourcepack_cli.errors import NotFoundError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured_strict, write_structured
from resourcepack_cli.persistence.json_path import delete_by_path, get_by_path, set_by_path
from resourcepack_cli.persistence.store import normalize_path

logger = logging.getLogger(__name__)


def _load(package: Package, path: str) -> Any:
    document = read_structured_strict(package.store, path)
    if document is None:
        raise NotFoundError("Document", path)
    return document


def show_document(package: Package, path: str, json_path: str | None = None) -> Any:
    """Return a parsed document, or the value at json_path inside it.

    Raises:
        NotFoundError: If the document is absent or empty
        DocumentDecodeError: If the document cannot be parsed
        PathAccessError: If json_path does not exist
    """
    document = _load(package, normalize_path(path))
    return get_by_path(document, json_path) if json_path else document


def set_document_value(package: Package, path: str, json_path: str, value: Any, *, create: bool = False) -> Package:
    """Set a value inside a document, creating intermediate containers.

    Args:
        package: Source package (not modified)
        path: Document store path
        json_path: Location inside the document, e.g. "pack.description"
        value: New value
        create: Start from {} when the document does not exist

    Raises:
        NotFoundError: If the document is absent and create is False
        DocumentDecodeError: If the document cannot be parsed
    """
    path = normalize_path(path)
    if create and read_structured_strict(package.store, path) is None:
        document: Any = {}
    else:
        document = _load(package, path)
    set_by_path(document, json_path, value)

    store = package.store.clone()
    write_structured(store, path, document)
    logger.info("Set %s in %s", json_path, path)
    return package.with_store(store)


def delete_document_value(package: Package, path: str, json_path: str) -> Package:
    """Delete the value at json_path inside a document.

    Raises:
        NotFoundError: If the document is absent
        PathAccessError: If json_path does not exist
    """
    path = normalize_path(path)
    document = _load(package, path)
    delete_by_path(document, json_path)

    store = package.store.clone()
    write_structured(store, path, document)
    logger.info("Deleted %s from %s", json_path, path)
    return package.with_store(store)
