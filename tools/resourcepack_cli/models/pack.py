"""Domain models for a resource pack and its metadata."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from resourcepack_cli.config import DEFAULT_PACK_NAME
from resourcepack_cli.persistence.store import Store


@dataclass(frozen=True)
class Package:
    """An editable resource pack: a display name plus its file store.

    Packages are values. Editors return a new Package with a cloned store and
    never mutate the one they were given.
    """
    name: str = DEFAULT_PACK_NAME
    store: Store = field(default_factory=Store)

    def with_store(self, store: Store) -> "Package":
        """Return a copy of this package holding store."""
        return replace(self, store=store)

    def with_name(self, name: str) -> "Package":
        return replace(self, name=name)


@dataclass(frozen=True, slots=True)
class PackMetadata:
    """Contents of pack.mcmeta that the tool understands.

    Invariants:
        - pack_format is the declared numeric format
        - description is "" when the document has no string description
    """
    pack_format: int
    description: str = ""


@dataclass(frozen=True, slots=True)
class PackSettings:
    """User-editable pack settings.

    Attributes:
        name: Package display name (blank keeps the current name)
        version_id: Registry id of the game release, or "custom"
        pack_format: Declared format number
        description: pack.mcmeta description
    """
    name: str
    version_id: str
    pack_format: int
    description: str
