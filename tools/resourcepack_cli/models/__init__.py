"""Domain models for resource packs.

This module exports all domain model types for use across the tool:
- Package, metadata and settings
- Resource identifiers
- Item override models for both schema generations
- Font definitions
"""

from resourcepack_cli.models.common import ResourceId, is_valid_namespace, is_valid_resource_path
from resourcepack_cli.models.font import BitmapProvider, FontDefinition
from resourcepack_cli.models.item_models import (
    DispatchEntry,
    Generation,
    ItemDefinition,
    ItemModel,
    LegacyOverride,
    ModelLeaf,
    ModelRef,
    OpaqueModel,
    RangeDispatch,
    model_ref_from_dict,
    model_ref_to_dict,
)
from resourcepack_cli.models.pack import Package, PackMetadata, PackSettings

__all__ = [
    # Common
    "ResourceId",
    "is_valid_namespace",
    "is_valid_resource_path",
    # Pack
    "Package",
    "PackMetadata",
    "PackSettings",
    # Item models
    "Generation",
    "ItemModel",
    "LegacyOverride",
    "ItemDefinition",
    "ModelRef",
    "ModelLeaf",
    "RangeDispatch",
    "DispatchEntry",
    "OpaqueModel",
    "model_ref_from_dict",
    "model_ref_to_dict",
    # Fonts
    "BitmapProvider",
    "FontDefinition",
]
