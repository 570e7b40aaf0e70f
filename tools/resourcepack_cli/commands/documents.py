"""Document and texture commands.

This module provides:
- doc show: Print a document (or one value) as JSON
- doc set: Modify a document field by path
- doc unset: Delete a document field by path
- texture replace: Overwrite a vanilla texture
"""

from __future__ import annotations

import argparse

from resourcepack_cli.commands.common import CommandContext, _parse_cli_value, print_json
from resourcepack_cli.editing.documents import delete_document_value, set_document_value, show_document
from resourcepack_cli.editing.textures import normalize_texture_target, replace_vanilla_texture


def cmd_doc_show(ctx: CommandContext, args: argparse.Namespace) -> int:
    print_json(show_document(ctx.load(), args.document, args.path))
    return 0


def cmd_doc_set(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Set a field using JSON path syntax (e.g. pack.description).

    The value is auto-typed: true/false/null, integers, floats and JSON
    literals are parsed; anything else is kept as a string.
    """
    value = _parse_cli_value(args.value)
    updated = set_document_value(ctx.load(), args.document, args.path, value, create=args.create)
    ctx.save(updated)
    print(f"Updated '{args.document}' at path '{args.path}'")
    return 0


def cmd_doc_unset(ctx: CommandContext, args: argparse.Namespace) -> int:
    ctx.save(delete_document_value(ctx.load(), args.document, args.path))
    print(f"Removed path '{args.path}' from '{args.document}'")
    return 0


def cmd_texture_replace(ctx: CommandContext, args: argparse.Namespace) -> int:
    updated = replace_vanilla_texture(ctx.load(), args.target, args.file.read_bytes())
    ctx.save(updated)
    print(f"Replaced {normalize_texture_target(args.target)}")
    return 0
