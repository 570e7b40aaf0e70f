"""Analysis and merge commands.

This module provides:
- analyze stats: File counts and sizes
- analyze duplicates: Byte-identical images
- analyze unused: Assets nothing references
- mix: Layer several packs into one
"""

from __future__ import annotations

import argparse
from pathlib import Path

from resourcepack_cli.analysis import analyze_pack, find_duplicate_textures, find_unused_assets, format_size
from resourcepack_cli.commands.common import CommandContext, print_json
from resourcepack_cli.editing.merge import detect_conflicts, merge_packs
from resourcepack_cli.persistence.container import load_pack, save_pack


def cmd_analyze_stats(ctx: CommandContext, args: argparse.Namespace) -> int:
    stats = analyze_pack(ctx.load())
    if args.json:
        print_json(stats.to_dict())
        return 0

    print(f"Total: {stats.total_files} files, {format_size(stats.total_size)}")
    print("By extension:")
    for ext, type_stats in sorted(stats.by_extension.items(), key=lambda pair: -pair[1].size):
        print(f"  {ext:14} | {type_stats.count:>6} files | {format_size(type_stats.size):>10}")
    if stats.by_namespace:
        print("By namespace:")
        for namespace, count in sorted(stats.by_namespace.items()):
            print(f"  {namespace:14} | {count:>6} files")
    print("Largest files:")
    for path, size in stats.largest_files:
        print(f"  {format_size(size):>10} | {path}")
    return 0


def cmd_analyze_duplicates(ctx: CommandContext, _args: argparse.Namespace) -> int:
    groups = find_duplicate_textures(ctx.load())
    if not groups:
        print("No duplicate textures found.")
        return 0
    for group in groups:
        print(f"{format_size(group.size)} x {len(group.paths)} (wasted {format_size(group.wasted_bytes)}):")
        for path in group.paths:
            print(f"  {path}")
    return 0


def cmd_analyze_unused(ctx: CommandContext, _args: argparse.Namespace) -> int:
    """List assets no document references (heuristic; review before deleting)."""
    unused = find_unused_assets(ctx.load())
    if not unused:
        print("No unused assets found.")
        return 0
    for path in unused:
        print(path)
    print(f"{len(unused)} possibly unused assets")
    return 0


def cmd_mix(ctx: CommandContext, args: argparse.Namespace) -> int:
    """Merge packs, later ones overriding earlier ones.

    Output goes to --output, defaulting to <name>.zip in the current directory.
    """
    packages = [load_pack(path) for path in args.packs]
    for conflict in detect_conflicts(packages):
        print(f" ~ {conflict.path}: {' < '.join(conflict.sources)}")

    merged = merge_packs(packages, args.name)
    target = ctx.output_path or Path(f"{merged.name}.zip")
    save_pack(merged, target)
    print(f"Mixed {len(packages)} packs into {target} ({len(merged.store)} files)")
    return 0
