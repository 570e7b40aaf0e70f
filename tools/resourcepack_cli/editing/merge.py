"""Layering several packs into one.

Merging is path-level last-writer-wins: structured documents are replaced
whole, never merged field by field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from resourcepack_cli.errors import InvalidInputError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Conflict:
    """A path provided by more than one input pack."""
    path: str
    sources: tuple[str, ...]


def merge_packs(packages: Sequence[Package], output_name: str) -> Package:
    """Layer packages into a new one.

    Args:
        packages: Inputs in priority order, lowest priority first
        output_name: Name of the merged package

    Returns:
        Package holding the union of all paths; at shared paths the payload
        of the last package wins

    Raises:
        InvalidInputError: If output_name is blank
    """
    name = (output_name or "").strip()
    if not name:
        raise InvalidInputError("Output pack name is required")

    store = Store()
    for package in packages:
        store.update(package.store)
    logger.info("Merged %d packs into %s (%d files)", len(packages), name, len(store))
    return Package(name=name, store=store)


def detect_conflicts(packages: Sequence[Package]) -> list[Conflict]:
    """Report every path present in more than one package, sorted by path.

    `sources` holds the distinct contributing package names in input order.
    Two inputs sharing a name still conflict; the name is listed once.
    """
    providers: dict[str, int] = {}
    sources: dict[str, dict[str, None]] = {}
    for package in packages:
        for path in package.store.keys():
            providers[path] = providers.get(path, 0) + 1
            sources.setdefault(path, {})[package.name] = None
    return [
        Conflict(path=path, sources=tuple(sources[path]))
        for path in sorted(providers)
        if providers[path] > 1
    ]
