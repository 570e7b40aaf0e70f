"""Unicode glyph commands.

This module provides:
- glyph add: Allocate a private-use character for a texture
- glyph list: List mapped characters
- glyph remove: Unmap a character
"""

from __future__ import annotations

import argparse

from resourcepack_cli.commands.common import CommandContext
from resourcepack_cli.editing.glyphs import add_unicode_glyph, format_codepoint, list_glyphs, remove_glyph
from resourcepack_cli.errors import InvalidValueError


def _parse_codepoint(raw: str) -> int:
    """Accept E200, U+E200, 0xE200, \\uE200 or the character itself."""
    value = raw.strip()
    if len(value) == 1:
        return ord(value)
    for prefix in ("U+", "u+", "0x", "0X", "\\u", "\\U"):
        if value.startswith(prefix):
            value = value[len(prefix):]
            break
    try:
        return int(value, 16)
    except ValueError as exc:
        raise InvalidValueError(raw, "expected a character or hex codepoint such as E200") from exc


def cmd_glyph_add(ctx: CommandContext, args: argparse.Namespace) -> int:
    package = ctx.load()
    result = add_unicode_glyph(
        package,
        args.texture.read_bytes(),
        font_key=args.font,
        height=args.height,
        ascent=args.ascent,
    )
    ctx.save(result.package)
    print(f"Added glyph U+{result.codepoint_hex} ({format_codepoint(result.codepoint)}) "
          f"-> {result.texture_path} in {result.font_path}")
    return 0


def cmd_glyph_list(ctx: CommandContext, args: argparse.Namespace) -> int:
    """List glyphs: font, codepoint, escape, metrics and texture."""
    glyphs = list_glyphs(ctx.load(), args.font)
    if not glyphs:
        print("No glyphs found. Use 'glyph add' to add characters.")
        return 0
    for glyph in glyphs:
        print(f"{glyph.font_key:12} | U+{glyph.codepoint:04X} | {format_codepoint(glyph.codepoint):10} "
              f"| h={glyph.height} a={glyph.ascent} | {glyph.file}")
    return 0


def cmd_glyph_remove(ctx: CommandContext, args: argparse.Namespace) -> int:
    codepoint = _parse_codepoint(args.codepoint)
    updated = remove_glyph(ctx.load(), args.font, codepoint)
    ctx.save(updated)
    print(f"Removed glyph U+{codepoint:04X} from font '{args.font}'")
    return 0
