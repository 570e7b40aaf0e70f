"""Configuration constants for resource pack editing.

This module centralizes the well-known paths, identifiers and numeric tables
used across the tool. Values that callers may want to vary per invocation
(namespaces, the format boundary) are also bundled into ToolConfig, which is
passed explicitly to the editors instead of being read from globals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, FrozenSet


# -----------------------------------------------------------------------------
# Identifier Validation
# -----------------------------------------------------------------------------

NAMESPACE_REGEX: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9_.-]+$")
"""Valid resource namespace: lowercase letters, digits, underscore, dot, dash."""

RESOURCE_PATH_REGEX: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9_./-]+$")
"""Valid resource path: namespace characters plus forward slashes."""

DEFAULT_NAMESPACE: Final[str] = "minecraft"
"""Namespace assumed when an identifier omits one."""

GENERATED_NAMESPACE: Final[str] = "mrwm"
"""Namespace that receives generated custom-model-data models and textures."""


# -----------------------------------------------------------------------------
# Well-known Paths
# -----------------------------------------------------------------------------

METADATA_PATH: Final[str] = "pack.mcmeta"
ICON_PATH: Final[str] = "pack.png"
METADATA_PATHS: Final[FrozenSet[str]] = frozenset({METADATA_PATH, ICON_PATH})
"""Root files that are never reported as unused assets."""

STRUCTURED_EXTENSIONS: Final[tuple[str, ...]] = (".json", ".mcmeta")
"""Extensions parsed as structured documents."""

IMAGE_EXTENSIONS: Final[FrozenSet[str]] = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tga"})
"""Extensions considered binary image assets for duplicate detection."""

GENERATED_SUFFIX: Final[str] = "_cmd_"
"""Infix of generated model/texture names: <item>_cmd_<tag>."""


# -----------------------------------------------------------------------------
# Item Model Schema Identifiers
# -----------------------------------------------------------------------------

CUSTOM_MODEL_DATA_FIELD: Final[str] = "custom_model_data"
"""Legacy predicate key carrying the variant tag."""

CUSTOM_MODEL_DATA_PROPERTY: Final[str] = "minecraft:custom_model_data"
"""Modern range dispatch property carrying the variant tag."""

MODEL_TYPE: Final[str] = "minecraft:model"
MODEL_TYPES: Final[FrozenSet[str]] = frozenset({"minecraft:model", "model"})
RANGE_DISPATCH_TYPE: Final[str] = "minecraft:range_dispatch"
RANGE_DISPATCH_TYPES: Final[FrozenSet[str]] = frozenset({"minecraft:range_dispatch", "range_dispatch"})

HANDHELD_PARENT: Final[str] = "minecraft:item/handheld"
GENERATED_PARENT: Final[str] = "minecraft:item/generated"

HANDHELD_SUFFIXES: Final[tuple[str, ...]] = ("_sword", "_axe", "_pickaxe", "_shovel", "_hoe")
"""Item name suffixes rendered with the handheld parent. Best-effort heuristic."""


# -----------------------------------------------------------------------------
# Pack Formats
# -----------------------------------------------------------------------------

MODERN_FORMAT_BOUNDARY: Final[int] = 46
"""First pack_format using assets/*/items/*.json item definitions (1.21.4)."""

DEFAULT_PACK_FORMAT: Final[int] = 34
LATEST_PACK_FORMAT: Final[int] = 64

DEFAULT_PACK_NAME: Final[str] = "resourcepack"
DEFAULT_DESCRIPTION: Final[str] = "Generated with resourcepack-cli"


@dataclass(frozen=True, slots=True)
class PackFormatOption:
    """Known game release range for a resource pack format number."""
    id: str
    label: str
    pack_format: int


PACK_FORMATS: Final[tuple[PackFormatOption, ...]] = (
    PackFormatOption("1.20-1.20.1", "Java 1.20 - 1.20.1", 15),
    PackFormatOption("1.20.2", "Java 1.20.2", 18),
    PackFormatOption("1.20.3-1.20.4", "Java 1.20.3 - 1.20.4", 22),
    PackFormatOption("1.20.5-1.20.6", "Java 1.20.5 - 1.20.6", 32),
    PackFormatOption("1.21-1.21.3", "Java 1.21 - 1.21.3", 34),
    PackFormatOption("1.21.4", "Java 1.21.4", 46),
    PackFormatOption("1.21.5", "Java 1.21.5", 55),
    PackFormatOption("1.21.6", "Java 1.21.6", 63),
    PackFormatOption("1.21.7-1.21.8", "Java 1.21.7 - 1.21.8", 64),
)
"""Ordered registry of modern releases. Keep ascending by pack_format."""


# -----------------------------------------------------------------------------
# Glyphs
# -----------------------------------------------------------------------------

PUA_START: Final[int] = 0xE000
PUA_END: Final[int] = 0xF8FF
"""Basic Multilingual Plane private use area (6,400 code points)."""

PUA_PREFERRED_START: Final[int] = 0xE200
"""Allocation starts here to stay clear of hand-authored glyphs at U+E000."""

GLYPH_FONT_NAMESPACE: Final[str] = "minecraft"
DEFAULT_FONT_KEY: Final[str] = "default"
DEFAULT_GLYPH_HEIGHT: Final[int] = 8
DEFAULT_GLYPH_ASCENT: Final[int] = 7


# -----------------------------------------------------------------------------
# Runtime Configuration
# -----------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolConfig:
    """Per-invocation settings passed to editors and the migrator.

    Attributes:
        default_namespace: Namespace for identifiers that omit one
        generated_namespace: Namespace receiving generated models/textures
        modern_format_boundary: pack_format at which item definitions switch
            from legacy overrides to range dispatch documents
        latest_pack_format: Target of auto-upgrade
    """
    default_namespace: str = DEFAULT_NAMESPACE
    generated_namespace: str = GENERATED_NAMESPACE
    modern_format_boundary: int = MODERN_FORMAT_BOUNDARY
    latest_pack_format: int = LATEST_PACK_FORMAT


DEFAULT_CONFIG: Final[ToolConfig] = ToolConfig()
