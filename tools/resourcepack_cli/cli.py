#!/usr/bin/env python3
"""CLI entry point for resource pack editing.

This module provides the argument parser and main entry point that
wires together all commands from the commands package.

Usage:
    python -m resourcepack_cli --pack my_pack.zip info
    python -m resourcepack_cli --pack my_pack.zip cmd add diamond_sword 1 ruby_sword.png
    python -m resourcepack_cli --pack my_pack.zip convert --to 46
    python -m resourcepack_cli --output merged.zip mix merged base.zip overrides.zip
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from resourcepack_cli.commands import (
    CommandContext,
    cmd_analyze_duplicates,
    cmd_analyze_stats,
    cmd_analyze_unused,
    cmd_cmd_add,
    cmd_cmd_list,
    cmd_cmd_remove,
    cmd_convert,
    cmd_doc_set,
    cmd_doc_show,
    cmd_doc_unset,
    cmd_glyph_add,
    cmd_glyph_list,
    cmd_glyph_remove,
    cmd_info,
    cmd_mix,
    cmd_new,
    cmd_settings,
    cmd_sound_add,
    cmd_sound_list,
    cmd_sound_remove,
    cmd_texture_replace,
    cmd_upgrade,
    cmd_validate,
)
from resourcepack_cli.config import (
    DEFAULT_CONFIG,
    DEFAULT_FONT_KEY,
    DEFAULT_GLYPH_ASCENT,
    DEFAULT_GLYPH_HEIGHT,
    DEFAULT_NAMESPACE,
    PACK_FORMATS,
)
from resourcepack_cli.editing.templates import PACK_TEMPLATES
from resourcepack_cli.errors import PackError
from resourcepack_cli.logging_config import configure_logging

logger = logging.getLogger(__name__)


def _configure_stdio_utf8() -> None:
    """Ensure glyph characters can be printed on Windows terminals.

    Windows consoles may default to a code page that can't handle Unicode.
    This reconfigures stdout/stderr to use UTF-8 if possible.
    """
    stdout = getattr(sys, "stdout", None)
    stderr = getattr(sys, "stderr", None)
    if hasattr(stdout, "reconfigure"):
        stdout.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]
    if hasattr(stderr, "reconfigure"):
        stderr.reconfigure(encoding="utf-8")  # type: ignore[attr-defined]


def _add_format_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--version",
        choices=[option.id for option in PACK_FORMATS],
        help="Game release whose pack_format to use.",
    )
    group.add_argument("--pack-format", type=int, help="Explicit pack_format number.")


def build_parser() -> argparse.ArgumentParser:
    """Build the complete argument parser with all subcommands.

    Returns:
        Configured ArgumentParser with subcommands for:
        - new, info, settings, convert, upgrade, validate
        - cmd (add, remove, list)
        - glyph (add, list, remove)
        - sound (add, remove, list)
        - texture (replace)
        - doc (show, set, unset)
        - mix
        - analyze (stats, duplicates, unused)
    """
    parser = argparse.ArgumentParser(
        prog="resourcepack-cli",
        description="Edit Minecraft resource packs: custom model data, glyphs, sounds and format conversion.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  resourcepack-cli --pack my_pack.zip new --template custom-items --version 1.21-1.21.3
  resourcepack-cli --pack my_pack.zip cmd add diamond_sword 1 ruby_sword.png
  resourcepack-cli --pack my_pack.zip cmd list
  resourcepack-cli --pack my_pack.zip convert --to 46
  resourcepack-cli --pack my_pack.zip glyph add heart.png --font default
  resourcepack-cli --pack my_pack.zip sound add custom.horn horn.ogg
  resourcepack-cli --pack my_pack.zip doc set pack.mcmeta --path pack.description --value "My pack"
  resourcepack-cli --output merged.zip mix merged base.zip overrides.zip
  resourcepack-cli --pack my_pack.zip analyze unused
""",
    )
    parser.add_argument("--pack", type=Path, help="Pack zip file or unpacked directory.")
    parser.add_argument("--output", type=Path, help="Write edits here instead of back to --pack.")
    parser.add_argument(
        "--namespace",
        default=DEFAULT_CONFIG.generated_namespace,
        help=f"Namespace for generated models and textures (default: {DEFAULT_CONFIG.generated_namespace}).",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (repeatable).")
    parser.add_argument("-q", "--quiet", action="count", default=0, help="Only log errors.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------------------------------------------------
    # pack commands
    # ---------------------------------------------------------------------
    new_parser = subparsers.add_parser("new", help="Create a pack from a template.")
    new_parser.add_argument(
        "--template",
        choices=[template.id for template in PACK_TEMPLATES],
        default="empty",
        help="Starter layout (default: empty).",
    )
    new_parser.add_argument("--name", help="Pack name (defaults to the file name).")
    new_parser.add_argument("--description", help="pack.mcmeta description.")
    _add_format_options(new_parser)
    new_parser.set_defaults(handler=cmd_new)

    info_parser = subparsers.add_parser("info", help="Show pack metadata and a summary.")
    info_parser.set_defaults(handler=cmd_info)

    settings_parser = subparsers.add_parser(
        "settings",
        help="Update pack.mcmeta without migrating override documents.",
    )
    settings_parser.add_argument("--description", help="New description.")
    _add_format_options(settings_parser)
    settings_parser.set_defaults(handler=cmd_settings)

    convert_parser = subparsers.add_parser(
        "convert",
        help="Change pack_format, migrating custom model data across the 1.21.4 boundary.",
    )
    convert_target = convert_parser.add_mutually_exclusive_group(required=True)
    convert_target.add_argument("--to", type=int, help="Target pack_format.")
    convert_target.add_argument(
        "--version",
        choices=[option.id for option in PACK_FORMATS],
        help="Target game release.",
    )
    convert_parser.set_defaults(handler=cmd_convert)

    upgrade_parser = subparsers.add_parser("upgrade", help="Convert to the latest known pack_format.")
    upgrade_parser.set_defaults(handler=cmd_upgrade)

    validate_parser = subparsers.add_parser("validate", help="Check pack structure and documents.")
    validate_parser.add_argument("--all", action="store_true", help="Also show info-level notes.")
    validate_parser.set_defaults(handler=cmd_validate)

    # ---------------------------------------------------------------------
    # cmd command group
    # ---------------------------------------------------------------------
    cmd_parser = subparsers.add_parser("cmd", help="Custom model data operations.")
    cmd_sub = cmd_parser.add_subparsers(dest="cmd_command", required=True)

    cmd_add = cmd_sub.add_parser("add", help="Assign a variant texture to an item.")
    cmd_add.add_argument("item_id", help="Item id, e.g. diamond_sword or minecraft:diamond_sword.")
    cmd_add.add_argument("tag", help="custom_model_data value (positive integer).")
    cmd_add.add_argument("texture", type=Path, help="PNG file for the variant.")
    cmd_add.set_defaults(handler=cmd_cmd_add)

    cmd_remove = cmd_sub.add_parser("remove", help="Remove a variant and its generated files.")
    cmd_remove.add_argument("item_id", help="Item id.")
    cmd_remove.add_argument("tag", help="custom_model_data value.")
    cmd_remove.set_defaults(handler=cmd_cmd_remove)

    cmd_list = cmd_sub.add_parser("list", help="List variants of both generations.")
    cmd_list.set_defaults(handler=cmd_cmd_list)

    # ---------------------------------------------------------------------
    # glyph command group
    # ---------------------------------------------------------------------
    glyph_parser = subparsers.add_parser("glyph", help="Unicode glyph operations.")
    glyph_sub = glyph_parser.add_subparsers(dest="glyph_command", required=True)

    glyph_add = glyph_sub.add_parser("add", help="Map a texture to a free private-use character.")
    glyph_add.add_argument("texture", type=Path, help="PNG file for the glyph.")
    glyph_add.add_argument("--font", default=DEFAULT_FONT_KEY, help="Font key (default: default).")
    glyph_add.add_argument("--height", type=int, default=DEFAULT_GLYPH_HEIGHT, help="Glyph height.")
    glyph_add.add_argument("--ascent", type=int, default=DEFAULT_GLYPH_ASCENT, help="Glyph ascent.")
    glyph_add.set_defaults(handler=cmd_glyph_add)

    glyph_list = glyph_sub.add_parser("list", help="List mapped characters.")
    glyph_list.add_argument("--font", help="Only this font key.")
    glyph_list.set_defaults(handler=cmd_glyph_list)

    glyph_remove = glyph_sub.add_parser("remove", help="Unmap a character.")
    glyph_remove.add_argument("codepoint", help="Character or hex codepoint (E200, U+E200).")
    glyph_remove.add_argument("--font", default=DEFAULT_FONT_KEY, help="Font key (default: default).")
    glyph_remove.set_defaults(handler=cmd_glyph_remove)

    # ---------------------------------------------------------------------
    # sound command group
    # ---------------------------------------------------------------------
    sound_parser = subparsers.add_parser("sound", help="Sound event operations.")
    sound_parser.add_argument(
        "--sound-namespace",
        default=DEFAULT_NAMESPACE,
        help="Namespace of sounds.json (default: minecraft).",
    )
    sound_sub = sound_parser.add_subparsers(dest="sound_command", required=True)

    sound_add = sound_sub.add_parser("add", help="Add an .ogg file to a sound event.")
    sound_add.add_argument("sound_id", help="Event id, e.g. block.stone.break.")
    sound_add.add_argument("file", type=Path, help="Ogg Vorbis file.")
    sound_add.add_argument("--path", help="Location under sounds/ (defaults to the event id with dots as slashes).")
    sound_add.add_argument("--subtitle", help="Subtitle translation key.")
    sound_add.add_argument("--replace", action="store_true", help="Replace the event's sounds.")
    sound_add.set_defaults(handler=cmd_sound_add)

    sound_remove = sound_sub.add_parser("remove", help="Remove a sound event.")
    sound_remove.add_argument("sound_id", help="Event id.")
    sound_remove.set_defaults(handler=cmd_sound_remove)

    sound_list = sound_sub.add_parser("list", help="List events, or show one.")
    sound_list.add_argument("sound_id", nargs="?", help="Show this event as JSON.")
    sound_list.set_defaults(handler=cmd_sound_list)

    # ---------------------------------------------------------------------
    # texture command group
    # ---------------------------------------------------------------------
    texture_parser = subparsers.add_parser("texture", help="Texture operations.")
    texture_sub = texture_parser.add_subparsers(dest="texture_command", required=True)

    texture_replace = texture_sub.add_parser("replace", help="Overwrite a vanilla texture.")
    texture_replace.add_argument("target", help="item/stick, minecraft:item/stick or a full assets/ path.")
    texture_replace.add_argument("file", type=Path, help="Replacement PNG.")
    texture_replace.set_defaults(handler=cmd_texture_replace)

    # ---------------------------------------------------------------------
    # doc command group
    # ---------------------------------------------------------------------
    doc_parser = subparsers.add_parser("doc", help="JSON document operations.")
    doc_sub = doc_parser.add_subparsers(dest="doc_command", required=True)

    doc_show = doc_sub.add_parser("show", help="Show a document as JSON.")
    doc_show.add_argument("document", help="Store path, e.g. assets/minecraft/items/stick.json.")
    doc_show.add_argument("--path", help="Only the value at this JSON path.")
    doc_show.set_defaults(handler=cmd_doc_show)

    doc_set = doc_sub.add_parser("set", help="Set a field using JSON path (e.g. model.fallback.model).")
    doc_set.add_argument("document", help="Store path.")
    doc_set.add_argument("--path", required=True, help="JSON path to the field.")
    doc_set.add_argument("--value", required=True, help="Value to set (auto-typed).")
    doc_set.add_argument("--create", action="store_true", help="Create the document if missing.")
    doc_set.set_defaults(handler=cmd_doc_set)

    doc_unset = doc_sub.add_parser("unset", help="Delete a field using JSON path.")
    doc_unset.add_argument("document", help="Store path.")
    doc_unset.add_argument("--path", required=True, help="JSON path to remove.")
    doc_unset.set_defaults(handler=cmd_doc_unset)

    # ---------------------------------------------------------------------
    # mix / analyze
    # ---------------------------------------------------------------------
    mix_parser = subparsers.add_parser("mix", help="Merge packs; later packs override earlier ones.")
    mix_parser.add_argument("name", help="Name of the merged pack.")
    mix_parser.add_argument("packs", type=Path, nargs="+", help="Packs in priority order, lowest first.")
    mix_parser.set_defaults(handler=cmd_mix)

    analyze_parser = subparsers.add_parser("analyze", help="Pack analysis.")
    analyze_sub = analyze_parser.add_subparsers(dest="analyze_command", required=True)

    analyze_stats = analyze_sub.add_parser("stats", help="File counts and sizes.")
    analyze_stats.add_argument("--json", action="store_true", help="Print as JSON.")
    analyze_stats.set_defaults(handler=cmd_analyze_stats)

    analyze_duplicates = analyze_sub.add_parser("duplicates", help="Byte-identical images.")
    analyze_duplicates.set_defaults(handler=cmd_analyze_duplicates)

    analyze_unused = analyze_sub.add_parser("unused", help="Assets no document references.")
    analyze_unused.set_defaults(handler=cmd_analyze_unused)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for error)

    Handles:
        - PackError: User-facing error messages
        - FileNotFoundError: Missing input files
    """
    _configure_stdio_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose - args.quiet)

    ctx = CommandContext(
        pack_path=args.pack,
        output_path=args.output,
        config=replace(DEFAULT_CONFIG, generated_namespace=args.namespace),
    )
    try:
        handler = getattr(args, "handler", None)
        if handler is None:
            parser.print_help()
            return 1
        return int(handler(ctx, args))
    except PackError as error:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {error}", file=sys.stderr)
        return 1
    except FileNotFoundError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
