"""Vanilla texture replacement."""

from __future__ import annotations

import logging
import re

from resourcepack_cli.config import DEFAULT_NAMESPACE
from resourcepack_cli.errors import InvalidPathError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.pack_paths import path_with_extension
from resourcepack_cli.persistence.store import normalize_path

logger = logging.getLogger(__name__)

_RESOURCE_TARGET_REGEX = re.compile(r"^([a-z0-9_.-]+):(.+)$")


def normalize_texture_target(target: str) -> str:
    """Resolve a texture target to its store path.

    Accepted forms:
        - Full path: assets/minecraft/textures/item/stick.png
        - Resource id: minecraft:item/stick
        - Shorthand under minecraft textures: item/stick.png

    Raises:
        InvalidPathError: If target is blank
    """
    trimmed = (target or "").strip()
    if not trimmed:
        raise InvalidPathError(str(target), "Texture target is required")

    if trimmed.startswith("assets/"):
        return normalize_path(path_with_extension(trimmed, ".png"))

    match = _RESOURCE_TARGET_REGEX.match(trimmed)
    if match:
        namespace, subpath = match.group(1), match.group(2).lstrip("/")
        return normalize_path(path_with_extension(f"assets/{namespace}/textures/{subpath}", ".png"))

    return normalize_path(
        path_with_extension(f"assets/{DEFAULT_NAMESPACE}/textures/{trimmed.lstrip('/')}", ".png")
    )


def replace_vanilla_texture(package: Package, target: str, data: bytes) -> Package:
    """Write data at the resolved texture path, replacing any existing file."""
    path = normalize_texture_target(target)
    store = package.store.clone()
    store.set(path, bytes(data))
    logger.info("Replaced texture %s (%d bytes)", path, len(data))
    return package.with_store(store)
