"""CLI commands for resource pack editing.

This module exports all command handlers:
- pack: new, info, settings, convert, upgrade, validate
- cmd: Custom model data variants
- glyph: Unicode glyphs
- sound: Sound events
- doc/texture: Document fields and vanilla textures
- analyze/mix: Analysis and merging
"""

from resourcepack_cli.commands.analyze import (
    cmd_analyze_duplicates,
    cmd_analyze_stats,
    cmd_analyze_unused,
    cmd_mix,
)
from resourcepack_cli.commands.common import CommandContext
from resourcepack_cli.commands.documents import cmd_doc_set, cmd_doc_show, cmd_doc_unset, cmd_texture_replace
from resourcepack_cli.commands.glyphs import cmd_glyph_add, cmd_glyph_list, cmd_glyph_remove
from resourcepack_cli.commands.overrides import cmd_cmd_add, cmd_cmd_list, cmd_cmd_remove
from resourcepack_cli.commands.pack import (
    cmd_convert,
    cmd_info,
    cmd_new,
    cmd_settings,
    cmd_upgrade,
    cmd_validate,
)
from resourcepack_cli.commands.sounds import cmd_sound_add, cmd_sound_list, cmd_sound_remove

__all__ = [
    "CommandContext",
    # Pack
    "cmd_new",
    "cmd_info",
    "cmd_settings",
    "cmd_convert",
    "cmd_upgrade",
    "cmd_validate",
    # Custom model data
    "cmd_cmd_add",
    "cmd_cmd_remove",
    "cmd_cmd_list",
    # Glyphs
    "cmd_glyph_add",
    "cmd_glyph_list",
    "cmd_glyph_remove",
    # Sounds
    "cmd_sound_add",
    "cmd_sound_remove",
    "cmd_sound_list",
    # Documents and textures
    "cmd_doc_show",
    "cmd_doc_set",
    "cmd_doc_unset",
    "cmd_texture_replace",
    # Analysis
    "cmd_analyze_stats",
    "cmd_analyze_duplicates",
    "cmd_analyze_unused",
    "cmd_mix",
]
