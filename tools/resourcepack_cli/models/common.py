"""Resource identifiers shared across pack models.

A resource identifier is rendered `namespace:path`, e.g. `minecraft:item/stick`.
"""

from __future__ import annotations

from dataclasses import dataclass

from resourcepack_cli.config import DEFAULT_NAMESPACE, NAMESPACE_REGEX, RESOURCE_PATH_REGEX
from resourcepack_cli.errors import InvalidIdentifierError


@dataclass(frozen=True, slots=True, order=True)
class ResourceId:
    """Namespaced reference to a document or asset.

    Invariants:
        - namespace matches ^[a-z0-9_.-]+$
        - path is non-empty
    """
    namespace: str
    path: str

    @classmethod
    def parse(cls, value: str, default_namespace: str = DEFAULT_NAMESPACE) -> "ResourceId":
        """Parse `namespace:path` or a bare path.

        Args:
            value: Raw identifier; surrounding whitespace is ignored and the
                value is lowercased
            default_namespace: Namespace used when none is given

        Returns:
            ResourceId

        Raises:
            InvalidIdentifierError: If the identifier is blank or malformed

        Example:
            >>> ResourceId.parse("diamond_sword")
            ResourceId(namespace='minecraft', path='diamond_sword')
        """
        trimmed = value.strip().lower() if isinstance(value, str) else ""
        if not trimmed:
            raise InvalidIdentifierError(str(value), "identifier is required")

        namespace, sep, path = trimmed.partition(":")
        if not sep:
            namespace, path = default_namespace, trimmed
        if not is_valid_namespace(namespace):
            raise InvalidIdentifierError(value, "namespace may only contain a-z, 0-9, '_', '.', '-'")
        if not is_valid_resource_path(path):
            raise InvalidIdentifierError(value, "path may only contain a-z, 0-9, '_', '.', '-', '/'")
        return cls(namespace=namespace, path=path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"


def is_valid_namespace(value: str) -> bool:
    """Check if a string is a valid resource namespace."""
    return isinstance(value, str) and bool(NAMESPACE_REGEX.fullmatch(value))


def is_valid_resource_path(value: str) -> bool:
    """Check if a string is a valid resource path (no leading slash, no `.` or `..` segments)."""
    return (
        isinstance(value, str)
        and bool(RESOURCE_PATH_REGEX.fullmatch(value))
        and not value.startswith("/")
        and not any(segment in (".", "..") for segment in value.split("/"))
    )


def normalize_namespace(value: str | None, default: str) -> str:
    """Trim and lowercase a namespace, substituting default when blank.

    Raises:
        InvalidIdentifierError: If the namespace contains invalid characters
    """
    namespace = (value or "").strip().lower() or default
    if not is_valid_namespace(namespace):
        raise InvalidIdentifierError(namespace, "namespace may only contain a-z, 0-9, '_', '.', '-'")
    return namespace
