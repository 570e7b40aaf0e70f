"""Storage path conventions inside a resource pack.

The legacy and modern override documents for one item are paired only by
naming convention (models/item/<x>.json vs items/<x>.json), and other tooling
finds generated assets by their <item>_cmd_<tag> names. Every component
computes and recognises those paths through this module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from resourcepack_cli.config import GENERATED_SUFFIX, GLYPH_FONT_NAMESPACE

LEGACY_ITEM_MODEL_REGEX: Final[re.Pattern[str]] = re.compile(r"^assets/([^/]+)/models/item/(.+)\.json$")
ITEM_DEFINITION_REGEX: Final[re.Pattern[str]] = re.compile(r"^assets/([^/]+)/items/(.+)\.json$")
FONT_REGEX: Final[re.Pattern[str]] = re.compile(r"^assets/([^/]+)/font/(.+)\.json$")
NAMESPACE_PREFIX_REGEX: Final[re.Pattern[str]] = re.compile(r"^assets/([^/]+)/")


@dataclass(frozen=True, slots=True)
class ItemLocation:
    """Namespace and item name recovered from a document path."""
    namespace: str
    item: str


def item_model_path(namespace: str, item: str) -> str:
    """Legacy per-item model document: assets/<ns>/models/item/<item>.json."""
    return f"assets/{namespace}/models/item/{item}.json"


def item_definition_path(namespace: str, item: str) -> str:
    """Modern per-item definition: assets/<ns>/items/<item>.json."""
    return f"assets/{namespace}/items/{item}.json"


def item_model_id(namespace: str, item: str) -> str:
    """Resource id of an item's own model/texture: <ns>:item/<item>."""
    return f"{namespace}:item/{item}"


def generated_name(item: str, tag: int) -> str:
    return f"{item}{GENERATED_SUFFIX}{tag}"


def generated_model_id(namespace: str, item: str, tag: int) -> str:
    """Resource id of a generated variant: <ns>:item/<item>_cmd_<tag>."""
    return f"{namespace}:item/{generated_name(item, tag)}"


def generated_model_path(namespace: str, item: str, tag: int) -> str:
    return f"assets/{namespace}/models/item/{generated_name(item, tag)}.json"


def generated_texture_path(namespace: str, item: str, tag: int) -> str:
    return f"assets/{namespace}/textures/item/{generated_name(item, tag)}.png"


def generated_asset_regex(item: str, tag: int) -> re.Pattern[str]:
    """Match generated model/texture paths for (item, tag) in any namespace."""
    name = re.escape(generated_name(item, tag))
    return re.compile(rf"^assets/[^/]+/(?:models/item/{name}\.json|textures/item/{name}\.png)$")


def parse_item_model_path(path: str) -> ItemLocation | None:
    match = LEGACY_ITEM_MODEL_REGEX.match(path)
    return ItemLocation(match.group(1), match.group(2)) if match else None


def parse_item_definition_path(path: str) -> ItemLocation | None:
    match = ITEM_DEFINITION_REGEX.match(path)
    return ItemLocation(match.group(1), match.group(2)) if match else None


def font_path(font_key: str, namespace: str = GLYPH_FONT_NAMESPACE) -> str:
    """Font document: assets/<ns>/font/<key>.json."""
    return f"assets/{namespace}/font/{font_key}.json"


def font_texture_prefix(namespace: str = GLYPH_FONT_NAMESPACE) -> str:
    return f"assets/{namespace}/textures/font/"


def glyph_texture_name(codepoint: int) -> str:
    return f"glyph_{codepoint:04X}"


def glyph_texture_path(codepoint: int, namespace: str = GLYPH_FONT_NAMESPACE) -> str:
    return f"{font_texture_prefix(namespace)}{glyph_texture_name(codepoint)}.png"


def glyph_texture_id(codepoint: int, namespace: str = GLYPH_FONT_NAMESPACE) -> str:
    """Resource id (no extension) the font loader resolves to the glyph PNG."""
    return f"{namespace}:font/{glyph_texture_name(codepoint)}"


def texture_path_from_id(resource_id: str, default_namespace: str = GLYPH_FONT_NAMESPACE) -> str:
    """Storage path of a texture resource id, e.g. minecraft:font/x -> assets/minecraft/textures/font/x.png."""
    namespace, sep, path = resource_id.partition(":")
    if not sep:
        namespace, path = default_namespace, resource_id
    return path_with_extension(f"assets/{namespace}/textures/{path}", ".png")


def texture_id_from_path(path: str) -> str | None:
    """Inverse of texture_path_from_id for assets/<ns>/textures/<p>.png paths."""
    match = re.match(r"^assets/([^/]+)/textures/(.+)\.png$", path)
    return f"{match.group(1)}:{match.group(2)}" if match else None


def sounds_json_path(namespace: str) -> str:
    return f"assets/{namespace}/sounds.json"


def sound_file_path(namespace: str, sound_path: str) -> str:
    return f"assets/{namespace}/sounds/{sound_path}"


def namespace_of(path: str) -> str | None:
    """Namespace of an assets/<ns>/... path, or None for other paths."""
    match = NAMESPACE_PREFIX_REGEX.match(path)
    return match.group(1) if match else None


def extension_of(path: str) -> str:
    """Lowercase extension without the dot, or "no-extension"."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return "no-extension"
    return name.rsplit(".", 1)[-1].lower()


def path_with_extension(path: str, extension: str) -> str:
    """Append extension unless path already ends with it (case-insensitive)."""
    return path if path.lower().endswith(extension) else f"{path}{extension}"
