"""Path-addressed in-memory store for pack contents.

A Store maps normalized, slash-separated paths to immutable byte payloads.
It is the substrate every editor reads and writes. Editors never mutate a
store they were handed; they clone it, write to the clone and return a new
Package, so the caller's previous value stays usable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Mapping, Union

from resourcepack_cli.errors import InvalidPathError

Payload = Union[bytes, bytearray, memoryview]


def normalize_path(path: str) -> str:
    """Normalize a path into store form.

    Args:
        path: Raw path, possibly with backslashes, leading slashes or `.` segments

    Returns:
        Forward-slash path with no leading slash and no `.` segments

    Raises:
        InvalidPathError: If the path is not a string, normalizes to empty or
            contains a `..` segment

    Examples:
        >>> normalize_path("/assets/./minecraft/x.png")
        'assets/minecraft/x.png'
        >>> normalize_path("./pack.mcmeta")
        'pack.mcmeta'
    """
    if not isinstance(path, str):
        raise InvalidPathError(repr(path), "Path must be a string")
    segments = [segment for segment in path.replace("\\", "/").split("/") if segment != "."]
    # Leading slashes produce empty first segments.
    while segments and segments[0] == "":
        segments.pop(0)
    normalized = "/".join(segments)
    if not normalized.strip("/"):
        raise InvalidPathError(path, "Path cannot be empty")
    if ".." in segments:
        raise InvalidPathError(path, "Path cannot leave the pack root")
    return normalized


@dataclass
class Store:
    """Ordered mapping of normalized path to byte payload.

    Invariants:
        - every key is non-empty and contains no backslash
        - payloads are immutable bytes and may be shared between clones
        - insertion order is preserved; overwriting keeps a key's position
    """
    _files: dict[str, bytes] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, files: Mapping[str, Payload]) -> "Store":
        """Build a store from raw path/payload pairs, normalizing every path."""
        store = cls()
        for path, data in files.items():
            store.set(path, data)
        return store

    def get(self, path: str) -> bytes | None:
        """Return the payload at path, or None if absent."""
        return self._files.get(normalize_path(path))

    def set(self, path: str, data: Payload) -> None:
        """Store a payload at path, replacing any existing value."""
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Store payload must be bytes, got {type(data).__name__}")
        normalized = normalize_path(path)
        if normalized.endswith("/"):
            raise InvalidPathError(path, "Directory entries cannot hold a payload")
        self._files[normalized] = bytes(data)

    def delete(self, path: str) -> None:
        """Remove path if present. Deleting a missing path is a no-op."""
        self._files.pop(normalize_path(path), None)

    def contains(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def keys(self) -> list[str]:
        """Paths in insertion order (a snapshot, safe to mutate the store while iterating)."""
        return list(self._files)

    def items(self) -> Iterator[tuple[str, bytes]]:
        return iter(list(self._files.items()))

    def clone(self) -> "Store":
        """Independent copy; payload bytes are shared."""
        return Store(dict(self._files))

    def update(self, other: "Store") -> None:
        """Copy every entry of other into this store, other winning on conflicts."""
        self._files.update(other._files)

    def size_of(self, path: str) -> int:
        data = self.get(path)
        return len(data) if data is not None else 0

    def to_dict(self) -> dict[str, bytes]:
        return dict(self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.contains(path)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Store):
            return NotImplemented
        return self._files == other._files


def iter_paths(store: Store, *, prefix: str = "", suffixes: Iterable[str] = ()) -> list[str]:
    """List store paths filtered by prefix and (any of) suffixes, in sorted order."""
    wanted = tuple(suffixes)
    return sorted(
        path
        for path in store.keys()
        if path.startswith(prefix) and (not wanted or path.endswith(wanted))
    )
