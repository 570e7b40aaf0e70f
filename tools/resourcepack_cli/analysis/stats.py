"""Aggregate pack statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.pack_paths import extension_of, namespace_of

LARGEST_FILES_LIMIT = 10
_SIZE_UNITS = ("B", "KB", "MB", "GB")


@dataclass
class TypeStats:
    """File count and byte total for one extension."""
    count: int = 0
    size: int = 0


@dataclass
class PackStats:
    """Single-pass summary of a package.

    Attributes:
        total_files: Number of stored files
        total_size: Sum of payload sizes in bytes
        by_extension: Lowercase extension (or "no-extension") to TypeStats
        by_namespace: File count per assets/<ns>/ namespace
        largest_files: Up to ten (path, size) pairs, largest first
    """
    total_files: int = 0
    total_size: int = 0
    by_extension: dict[str, TypeStats] = field(default_factory=dict)
    by_namespace: dict[str, int] = field(default_factory=dict)
    largest_files: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalSize": self.total_size,
            "byExtension": {
                ext: {"count": stats.count, "size": stats.size}
                for ext, stats in self.by_extension.items()
            },
            "byNamespace": dict(self.by_namespace),
            "largestFiles": [{"path": path, "size": size} for path, size in self.largest_files],
        }


def analyze_pack(package: Package) -> PackStats:
    """Compute file counts and sizes by extension and namespace."""
    stats = PackStats()
    sizes: list[tuple[str, int]] = []

    for path, data in package.store.items():
        size = len(data)
        stats.total_files += 1
        stats.total_size += size
        sizes.append((path, size))

        type_stats = stats.by_extension.setdefault(extension_of(path), TypeStats())
        type_stats.count += 1
        type_stats.size += size

        namespace = namespace_of(path)
        if namespace:
            stats.by_namespace[namespace] = stats.by_namespace.get(namespace, 0) + 1

    # Stable sort keeps store order among equal sizes.
    sizes.sort(key=lambda pair: pair[1], reverse=True)
    stats.largest_files = sizes[:LARGEST_FILES_LIMIT]
    return stats


def format_size(size: int) -> str:
    """Human-readable byte count, e.g. 1536 -> "1.50 KB"."""
    if size <= 0:
        return "0 B"
    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{value:.2f} {_SIZE_UNITS[unit]}"
