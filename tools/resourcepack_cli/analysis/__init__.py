"""Read-only pack analysis.

This module exports:
- Aggregate statistics
- Duplicate image detection
- Unused asset detection
"""

from resourcepack_cli.analysis.duplicates import DuplicateGroup, find_duplicate_textures
from resourcepack_cli.analysis.references import asset_resource_id, collect_references, find_unused_assets
from resourcepack_cli.analysis.stats import PackStats, TypeStats, analyze_pack, format_size

__all__ = [
    # Statistics
    "PackStats",
    "TypeStats",
    "analyze_pack",
    "format_size",
    # Duplicates
    "DuplicateGroup",
    "find_duplicate_textures",
    # References
    "asset_resource_id",
    "collect_references",
    "find_unused_assets",
]
