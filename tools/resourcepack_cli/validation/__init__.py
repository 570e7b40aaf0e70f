"""Validation layer for resource packs.

This module exports validation components:
- Whole-pack structural checks
- Font document checks
- Item id normalization
"""

from resourcepack_cli.validation.fonts import validate_font_definition
from resourcepack_cli.validation.pack_checks import validate_item_id, validate_pack

__all__ = [
    "validate_pack",
    "validate_item_id",
    "validate_font_definition",
]
