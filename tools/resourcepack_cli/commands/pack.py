"""Pack-level commands.

This module provides:
- new: Create a pack from a template
- info: Show metadata and a summary
- settings: Update pack.mcmeta
- convert: Change pack_format, migrating override documents
- upgrade: Convert to the latest known pack_format
- validate: Run structural checks
"""

from __future__ import annotations

import argparse

from resourcepack_cli.analysis import analyze_pack, format_size
from resourcepack_cli.commands.common import CommandContext
from resourcepack_cli.editing.metadata import (
    apply_settings,
    default_settings,
    describe_pack_format,
    find_by_id,
    find_by_pack_format,
    read_metadata,
)
from resourcepack_cli.editing.migration import ConversionResult, auto_upgrade, convert_pack_format
from resourcepack_cli.editing.templates import create_pack_from_template
from resourcepack_cli.errors import NotFoundError
from resourcepack_cli.models.pack import PackSettings
from resourcepack_cli.validation import validate_pack


def _resolve_format(args: argparse.Namespace, fallback: int) -> tuple[str, int]:
    """Pick (version_id, pack_format) from --version / --pack-format."""
    if getattr(args, "version", None):
        option = find_by_id(args.version)
        if option is None:
            raise NotFoundError("Game version", args.version)
        return option.id, option.pack_format
    pack_format = getattr(args, "pack_format", None) or fallback
    option = find_by_pack_format(pack_format)
    return (option.id if option else "custom"), pack_format


def cmd_new(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Create a new pack at --pack (or --output) from a template.

    Returns:
        0 on success
    """
    defaults = default_settings()
    version_id, pack_format = _resolve_format(args, defaults.pack_format)
    target = ctx.output_path or ctx.require_pack_path()
    settings = PackSettings(
        name=args.name or target.stem,
        version_id=version_id,
        pack_format=pack_format,
        description=args.description if args.description is not None else defaults.description,
    )
    package = create_pack_from_template(args.template, settings)
    path = ctx.save(package)
    print(f"Created pack '{package.name}' from template '{args.template}' at {path}")
    return 0


def cmd_info(ctx: CommandContext, _args: argparse.Namespace) -> int:
    """Print name, declared format and a size summary."""
    package = ctx.load()
    metadata = read_metadata(package)
    stats = analyze_pack(package)

    print(f"Name:        {package.name}")
    print(f"Format:      {describe_pack_format(metadata.pack_format if metadata else None)}")
    print(f"Description: {metadata.description if metadata else ''}")
    print(f"Files:       {stats.total_files} ({format_size(stats.total_size)})")
    if stats.by_namespace:
        namespaces = ", ".join(f"{ns}={count}" for ns, count in sorted(stats.by_namespace.items()))
        print(f"Namespaces:  {namespaces}")
    return 0


def cmd_settings(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Update pack.mcmeta format and/or description.

    Only the declared format changes; override documents are not migrated
    (use `convert` for that).
    """
    package = ctx.load()
    metadata = read_metadata(package)
    current_format = metadata.pack_format if metadata else default_settings().pack_format
    version_id, pack_format = _resolve_format(args, current_format)
    description = args.description
    if description is None:
        description = metadata.description if metadata else ""

    updated = apply_settings(package, PackSettings(
        name=package.name,
        version_id=version_id,
        pack_format=pack_format,
        description=description,
    ))
    path = ctx.save(updated)
    print(f"Updated settings: pack_format={pack_format} ({path})")
    return 0


def _report(result: ConversionResult) -> None:
    for change in result.changes:
        print(f" + {change}")
    for warning in result.warnings:
        print(f" ! {warning}")


def cmd_convert(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Convert to --to pack_format (or the format of --version)."""
    package = ctx.load()
    _, target = _resolve_format(args, args.to or 0)
    result = convert_pack_format(package, target, ctx.config)
    _report(result)
    if result.changes:
        path = ctx.save(result.package)
        print(f"Converted to pack_format {target} ({path})")
    return 0


def cmd_upgrade(ctx: CommandContext, _args: argparse.Namespace) -> int:
    """Convert to the latest known pack_format."""
    package = ctx.load()
    result = auto_upgrade(package, ctx.config)
    _report(result)
    if result.changes:
        path = ctx.save(result.package)
        print(f"Upgraded to pack_format {ctx.config.latest_pack_format} ({path})")
    return 0


def cmd_validate(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Validate the pack.

    Returns:
        0 if no errors were found, 1 otherwise

    Output:
        One line per issue; info issues only with --all
    """
    package = ctx.load()
    result = validate_pack(package, ctx.config)
    shown = result.issues if args.all else [i for i in result.issues if i.severity != "info"]

    if not result.is_valid:
        print("Validation failed:")
        for issue in shown:
            print(f" - {issue}")
        return 1

    for issue in shown:
        print(f" - {issue}")
    print(f"OK: {len(package.store)} files, {len(result.warnings)} warnings")
    return 0
