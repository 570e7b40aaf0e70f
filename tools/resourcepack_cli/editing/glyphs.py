"""Private-use codepoint allocation and bitmap glyph registration.

Each glyph is a single-character bitmap provider in a font document under
assets/minecraft/font/<key>.json. Codepoints come from the Basic Multilingual
Plane private use area (U+E000-U+F8FF).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from resourcepack_cli.config import (
    DEFAULT_FONT_KEY,
    DEFAULT_GLYPH_ASCENT,
    DEFAULT_GLYPH_HEIGHT,
    GLYPH_FONT_NAMESPACE,
    PUA_END,
    PUA_PREFERRED_START,
    PUA_START,
)
from resourcepack_cli.errors import (
    CodepointSpaceExhaustedError,
    DocumentDecodeError,
    GlyphConflictError,
    InvalidInputError,
    NotFoundError,
)
from resourcepack_cli.models.font import BitmapProvider, FontDefinition
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured, read_structured_strict, write_structured
from resourcepack_cli.persistence.pack_paths import (
    FONT_REGEX,
    font_path,
    glyph_texture_id,
    glyph_texture_path,
    texture_id_from_path,
    texture_path_from_id,
)
from resourcepack_cli.persistence.store import Store, normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlyphResult:
    """Outcome of add_unicode_glyph.

    Attributes:
        package: Package with the texture and provider written
        codepoint: Allocated code point
        codepoint_hex: Upper-case hex, at least four digits (e.g. "E200")
        char: The allocated character
        font_path: Font document that received the provider
        texture_path: Where the texture was stored
    """
    package: Package
    codepoint: int
    codepoint_hex: str
    char: str
    font_path: str
    texture_path: str


@dataclass(frozen=True, slots=True)
class GlyphEntry:
    """One character mapped by a bitmap provider, as listed by list_glyphs."""
    font_key: str
    codepoint: int
    char: str
    file: str
    height: Any
    ascent: Any


# -----------------------------------------------------------------------------
# Codepoint Helpers
# -----------------------------------------------------------------------------

def format_codepoint(codepoint: int) -> str:
    """Escape notation: \\uXXXX inside the BMP, \\UXXXXXXXX beyond it."""
    if codepoint <= 0xFFFF:
        return f"\\u{codepoint:04X}"
    return f"\\U{codepoint:08X}"


def is_private_use(codepoint: int) -> bool:
    return PUA_START <= codepoint <= PUA_END


def allocate_codepoint(used: Iterable[int]) -> int:
    """Return the first private-use code point not in used.

    Scan order: U+E200-U+F8FF, then U+E000-U+E1FF, then a full re-scan of
    U+E000-U+F8FF.

    Raises:
        CodepointSpaceExhaustedError: If all 6,400 code points are taken
    """
    taken = used if isinstance(used, (set, frozenset)) else set(used)
    scan = (
        range(PUA_PREFERRED_START, PUA_END + 1),
        range(PUA_START, PUA_PREFERRED_START),
        range(PUA_START, PUA_END + 1),
    )
    for candidates in scan:
        for codepoint in candidates:
            if codepoint not in taken:
                return codepoint
    raise CodepointSpaceExhaustedError(PUA_START, PUA_END)


def used_codepoints(font_document: Any) -> set[int]:
    """Every character declared in any provider's chars rows.

    Counts code points, not UTF-16 code units. Rows that are not strings and
    providers that are not objects are ignored.
    """
    used: set[int] = set()
    if not isinstance(font_document, dict) or not isinstance(font_document.get("providers"), list):
        return used
    for provider in font_document["providers"]:
        if not isinstance(provider, dict) or not isinstance(provider.get("chars"), list):
            continue
        for row in provider["chars"]:
            if isinstance(row, str):
                used.update(ord(char) for char in row)
    return used


# -----------------------------------------------------------------------------
# Font Documents
# -----------------------------------------------------------------------------

def _font_key(font_key: str | None) -> str:
    key = (font_key or "").strip().lower() or DEFAULT_FONT_KEY
    if key.startswith("/") or "\\" in key:
        raise InvalidInputError(f"Invalid font key '{font_key}'")
    return key


def _load_font(store: Store, path: str) -> dict[str, Any]:
    document = read_structured_strict(store, path)
    if document is None:
        return {"providers": []}
    if not isinstance(document, dict):
        raise DocumentDecodeError(path, "root must be an object")
    if not isinstance(document.get("providers"), list):
        document["providers"] = []
    return document


def list_fonts(package: Package) -> list[str]:
    """Font keys under assets/minecraft/font/, sorted."""
    keys = []
    for path in package.store.keys():
        match = FONT_REGEX.match(path)
        if match and match.group(1) == GLYPH_FONT_NAMESPACE:
            keys.append(match.group(2))
    return sorted(keys)


def list_glyphs(package: Package, font_key: str | None = None) -> list[GlyphEntry]:
    """List characters mapped by bitmap providers, optionally for one font.

    Undecodable font documents are skipped.
    """
    keys = [_font_key(font_key)] if font_key else list_fonts(package)
    glyphs: list[GlyphEntry] = []
    for key in keys:
        document = read_structured(package.store, font_path(key))
        if not isinstance(document, dict):
            continue
        for provider in FontDefinition.from_dict(document).bitmap_providers:
            for codepoint in provider.codepoints:
                if codepoint == 0:
                    continue
                glyphs.append(GlyphEntry(
                    font_key=key,
                    codepoint=codepoint,
                    char=chr(codepoint),
                    file=provider.file,
                    height=provider.height,
                    ascent=provider.ascent,
                ))
    return glyphs


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------

def _validate_metrics(height: Any, ascent: Any) -> None:
    if isinstance(height, bool) or not isinstance(height, int) or height <= 0:
        raise InvalidInputError(f"Glyph height must be a positive integer, got {height!r}")
    if isinstance(ascent, bool) or not isinstance(ascent, int):
        raise InvalidInputError(f"Glyph ascent must be an integer, got {ascent!r}")
    if ascent > height:
        raise InvalidInputError(f"Glyph ascent ({ascent}) cannot exceed height ({height})")


def _texture_reference(asset_path: str) -> str:
    """Provider `file` for a texture given as a store path or a resource id."""
    if ":" in asset_path:
        return asset_path
    path = normalize_path(asset_path)
    resource_id = texture_id_from_path(path)
    if resource_id is None:
        raise InvalidInputError(f"Glyph texture must live under assets/<ns>/textures/: '{asset_path}'")
    return resource_id


def add_glyph(
    package: Package,
    char: str,
    asset_path: str,
    height: int = DEFAULT_GLYPH_HEIGHT,
    ascent: int = DEFAULT_GLYPH_ASCENT,
    font_key: str = DEFAULT_FONT_KEY,
) -> Package:
    """Register char as a single-character bitmap provider.

    Args:
        package: Source package (not modified)
        char: Exactly one code point
        asset_path: Texture store path (assets/<ns>/textures/...png) or resource id
        height: Glyph height in pixels, positive
        ascent: Baseline offset, at most height
        font_key: Font document key ("default")

    Returns:
        New Package with the font document written

    Raises:
        InvalidInputError: If char is not one code point or metrics are invalid
        GlyphConflictError: If the font already declares char
        DocumentDecodeError: If the existing font document cannot be parsed
    """
    if not isinstance(char, str) or len(char) != 1:
        raise InvalidInputError(f"Glyph must be exactly one character, got {char!r}")
    _validate_metrics(height, ascent)
    key = _font_key(font_key)
    file = _texture_reference(asset_path)

    store = package.store.clone()
    path = font_path(key)
    font = _load_font(store, path)
    if ord(char) in used_codepoints(font):
        raise GlyphConflictError(ord(char), path)

    provider = BitmapProvider(file=file, chars=[char], height=height, ascent=ascent)
    font["providers"].append(provider.to_dict())
    write_structured(store, path, font)
    logger.info("Added glyph U+%04X to %s -> %s", ord(char), path, file)
    return package.with_store(store)


def add_unicode_glyph(
    package: Package,
    texture: bytes,
    font_key: str = DEFAULT_FONT_KEY,
    height: int = DEFAULT_GLYPH_HEIGHT,
    ascent: int = DEFAULT_GLYPH_ASCENT,
) -> GlyphResult:
    """Allocate a free codepoint, store texture for it and register the provider.

    Raises:
        CodepointSpaceExhaustedError: If the font uses every private-use code point
    """
    _validate_metrics(height, ascent)
    key = _font_key(font_key)
    path = font_path(key)

    codepoint = allocate_codepoint(used_codepoints(_load_font(package.store, path)))
    texture_path = glyph_texture_path(codepoint)
    with_texture = package.with_store(package.store.clone())
    with_texture.store.set(texture_path, bytes(texture))

    updated = add_glyph(with_texture, chr(codepoint), glyph_texture_id(codepoint), height, ascent, key)
    return GlyphResult(
        package=updated,
        codepoint=codepoint,
        codepoint_hex=f"{codepoint:04X}",
        char=chr(codepoint),
        font_path=path,
        texture_path=texture_path,
    )


def remove_glyph(package: Package, font_key: str, codepoint: int) -> Package:
    """Remove a character from a font.

    Behavior:
        - A provider whose only character is removed is dropped
        - In a multi-character row the character becomes U+0000 padding so
          the remaining cells keep their texture positions
        - The provider's texture is deleted once no provider references it

    Raises:
        NotFoundError: If the font or the character does not exist
    """
    key = _font_key(font_key)
    path = font_path(key)
    if not package.store.contains(path):
        raise NotFoundError("Font", key)

    store = package.store.clone()
    font = _load_font(store, path)
    char = chr(codepoint)
    kept: list[Any] = []
    removed_files: list[str] = []
    found = False

    for raw in font["providers"]:
        if not isinstance(raw, dict) or raw.get("type") != "bitmap":
            kept.append(raw)
            continue
        provider = BitmapProvider.from_dict(raw)
        if codepoint not in provider.codepoints:
            kept.append(raw)
            continue
        found = True
        if "".join(provider.chars) == char:
            removed_files.append(provider.file)
            continue
        raw["chars"] = [row.replace(char, "\u0000") for row in provider.chars]
        kept.append(raw)

    if not found:
        raise NotFoundError("Glyph", f"U+{codepoint:04X} in {key}")

    font["providers"] = kept
    write_structured(store, path, font)

    still_used = {p.get("file") for p in kept if isinstance(p, dict)}
    for other_key in list_fonts(package):
        if other_key != key:
            other = read_structured(store, font_path(other_key))
            for provider in other.get("providers", []) if isinstance(other, dict) else []:
                if isinstance(provider, dict):
                    still_used.add(provider.get("file"))
    for file in removed_files:
        if file and file not in still_used:
            store.delete(texture_path_from_id(file))
    logger.info("Removed glyph U+%04X from %s", codepoint, path)
    return package.with_store(store)
