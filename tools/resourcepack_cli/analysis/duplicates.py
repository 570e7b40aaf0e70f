"""Byte-identical image detection."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass

from resourcepack_cli.config import IMAGE_EXTENSIONS
from resourcepack_cli.models.pack import Package


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Paths sharing identical content; size is the byte length of each copy."""
    paths: tuple[str, ...]
    size: int

    @property
    def wasted_bytes(self) -> int:
        return self.size * (len(self.paths) - 1)


def _is_image(path: str) -> bool:
    name = path.rsplit("/", 1)[-1].lower()
    return "." in name and f".{name.rsplit('.', 1)[-1]}" in IMAGE_EXTENSIONS


def find_duplicate_textures(package: Package) -> list[DuplicateGroup]:
    """Group image files by SHA-1 of their content.

    Returns:
        Groups with more than one path, largest size first; paths keep store
        order within a group
    """
    groups: dict[str, list[str]] = {}
    sizes: dict[str, int] = {}
    for path, data in package.store.items():
        if not _is_image(path):
            continue
        digest = hashlib.sha1(data).hexdigest()
        groups.setdefault(digest, []).append(path)
        sizes[digest] = len(data)

    duplicates = [
        DuplicateGroup(paths=tuple(paths), size=sizes[digest])
        for digest, paths in groups.items()
        if len(paths) > 1
    ]
    duplicates.sort(key=lambda group: group.size, reverse=True)
    return duplicates
