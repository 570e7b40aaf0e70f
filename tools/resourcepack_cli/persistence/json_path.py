"""JSON path utilities for editing nested pack documents.

Paths use dotted keys and bracketed indices, e.g. "model.entries[0].threshold".
"""

from __future__ import annotations

import re
from typing import Any, Final

from resourcepack_cli.errors import InvalidPathError, PathAccessError

TOKEN_REGEX: Final[re.Pattern[str]] = re.compile(r"\[(?P<index>[^\]]*)\]|(?P<key>[^.\[\]]+)|\.")


def parse_path_tokens(path: str) -> list[str | int]:
    """Parse a JSON path expression into tokens.

    Args:
        path: Path expression like "textures.layer0" or "overrides[1].model"

    Returns:
        List of string keys and integer indices

    Raises:
        InvalidPathError: If path syntax is invalid

    Examples:
        >>> parse_path_tokens("overrides[0].predicate.custom_model_data")
        ['overrides', 0, 'predicate', 'custom_model_data']
        >>> parse_path_tokens("pack.pack_format")
        ['pack', 'pack_format']
    """
    if not path.strip():
        raise InvalidPathError(path, "Path cannot be empty")

    tokens: list[str | int] = []
    position = 0
    while position < len(path):
        match = TOKEN_REGEX.match(path, position)
        if match is None:
            raise InvalidPathError(path, f"Unexpected {path[position]!r} at position {position}")
        index, key = match.group("index"), match.group("key")
        if index is not None:
            if not index.isdigit():
                raise InvalidPathError(path, f"Index '{index}' is not numeric")
            tokens.append(int(index))
        elif key is not None:
            tokens.append(key)
        position = match.end()

    if not tokens:
        raise InvalidPathError(path, "Path cannot be empty")
    return tokens


def _walk_to_parent(target: Any, tokens: list[str | int], path: str, *, create: bool) -> Any:
    """Follow every token but the last and return the container holding the leaf.

    With create, missing or null keys become {} or [] depending on the next token.
    """
    cursor = target
    for token, next_token in zip(tokens, tokens[1:]):
        if isinstance(token, str):
            if not isinstance(cursor, dict):
                raise PathAccessError(path, f"Cannot access key '{token}' on non-object")
            if create and cursor.get(token) is None:
                cursor[token] = [] if isinstance(next_token, int) else {}
            if token not in cursor:
                raise PathAccessError(path, f"Key '{token}' does not exist")
        elif not isinstance(cursor, list) or token >= len(cursor):
            raise PathAccessError(path, f"Index [{token}] does not exist")
        cursor = cursor[token]
    return cursor


def _require_leaf(parent: Any, leaf: str | int, path: str) -> None:
    if isinstance(leaf, str):
        if not isinstance(parent, dict) or leaf not in parent:
            raise PathAccessError(path, f"Key '{leaf}' does not exist")
    elif not isinstance(parent, list) or leaf >= len(parent):
        raise PathAccessError(path, f"Index [{leaf}] does not exist")


def get_by_path(target: Any, path: str) -> Any:
    """Read the value at the given JSON path.

    Raises:
        InvalidPathError: If path syntax is invalid
        PathAccessError: If the path does not exist
    """
    tokens = parse_path_tokens(path)
    parent = _walk_to_parent(target, tokens, path, create=False)
    _require_leaf(parent, tokens[-1], path)
    return parent[tokens[-1]]


def set_by_path(target: Any, path: str, value: Any) -> None:
    """Set a value at the given JSON path, creating intermediate containers.

    An index equal to the array length appends.

    Raises:
        InvalidPathError: If path syntax is invalid
        PathAccessError: If path cannot be traversed
    """
    tokens = parse_path_tokens(path)
    parent = _walk_to_parent(target, tokens, path, create=True)
    leaf = tokens[-1]
    if isinstance(leaf, str):
        if not isinstance(parent, dict):
            raise PathAccessError(path, f"Cannot set key '{leaf}' on non-object")
        parent[leaf] = value
    elif not isinstance(parent, list):
        raise PathAccessError(path, f"Cannot set index [{leaf}] on non-array")
    elif leaf == len(parent):
        parent.append(value)
    elif leaf < len(parent):
        parent[leaf] = value
    else:
        raise PathAccessError(path, f"Index [{leaf}] out of bounds (size={len(parent)})")


def delete_by_path(target: Any, path: str) -> None:
    """Delete the value at the given JSON path. Never creates containers.

    Raises:
        InvalidPathError: If path syntax is invalid
        PathAccessError: If path cannot be traversed or value doesn't exist
    """
    tokens = parse_path_tokens(path)
    parent = _walk_to_parent(target, tokens, path, create=False)
    _require_leaf(parent, tokens[-1], path)
    del parent[tokens[-1]]
