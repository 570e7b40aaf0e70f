"""Custom model data commands.

This module provides:
- cmd add: Assign a variant texture to an item
- cmd remove: Remove a variant
- cmd list: List variants of both generations
"""

from __future__ import annotations

import argparse

from resourcepack_cli.commands.common import CommandContext, _parse_cli_value
from resourcepack_cli.editing.overrides import (
    CustomModelDataRequest,
    apply_custom_model_data,
    list_custom_model_data,
    parse_item_id,
    remove_custom_model_data,
    validate_variant_tag,
)
from resourcepack_cli.models.common import normalize_namespace
from resourcepack_cli.persistence.pack_paths import generated_model_id


def cmd_cmd_add(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Assign custom model data to an item.

    Returns:
        0 on success
    """
    package = ctx.load()
    request = CustomModelDataRequest(
        item_id=args.item_id,
        variant_tag=_parse_cli_value(args.tag),
        texture=args.texture.read_bytes(),
        namespace=args.namespace or ctx.config.generated_namespace,
    )
    updated = apply_custom_model_data(package, request, ctx.config)
    ctx.save(updated)

    location = parse_item_id(request.item_id, ctx.config)
    tag = validate_variant_tag(request.variant_tag)
    namespace = normalize_namespace(request.namespace, ctx.config.generated_namespace)
    print(f"Assigned custom_model_data {tag} to {location.namespace}:{location.item} -> "
          f"{generated_model_id(namespace, location.item, tag)}")
    return 0


def cmd_cmd_remove(ctx: CommandContext, args: argparse.Namespace) -> int:
    package = ctx.load()
    updated = remove_custom_model_data(package, args.item_id, _parse_cli_value(args.tag), ctx.config)
    ctx.save(updated)
    print(f"Removed custom_model_data {args.tag} from '{args.item_id}'")
    return 0


def cmd_cmd_list(ctx: CommandContext, _args: argparse.Namespace) -> int:
    """List every custom model data entry.

    Displays: namespace:item, tag, generation, model.
    """
    entries = list_custom_model_data(ctx.load())
    if not entries:
        print("No custom model data found. Use 'cmd add' to add variants.")
        return 0
    for entry in entries:
        print(f"{entry.namespace}:{entry.item:30} | {str(entry.tag):>6} | {entry.generation.value:6} | {entry.model}")
    return 0
