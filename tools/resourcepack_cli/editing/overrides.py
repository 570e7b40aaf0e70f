"""Custom model data editor.

Assigns numbered visual variants to items under whichever schema generation
the pack targets:

- Legacy packs (pack_format < boundary): an override is upserted into
  assets/<ns>/models/item/<item>.json
- Modern packs (pack_format >= boundary): an entry is upserted into the
  range dispatch of assets/<ns>/items/<item>.json

In both cases a generated model and the supplied texture are written under
assets/<generated-ns>/{models,textures}/item/<item>_cmd_<tag>.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from resourcepack_cli.config import (
    DEFAULT_CONFIG,
    GENERATED_PARENT,
    HANDHELD_PARENT,
    HANDHELD_SUFFIXES,
    ToolConfig,
)
from resourcepack_cli.editing.metadata import is_modern_format, read_metadata_from_store
from resourcepack_cli.errors import DocumentDecodeError, InvalidVariantTagError, NotFoundError
from resourcepack_cli.models.common import ResourceId, normalize_namespace
from resourcepack_cli.models.item_models import (
    Generation,
    ItemDefinition,
    ItemModel,
    ModelLeaf,
    RangeDispatch,
    new_custom_model_data_dispatch,
)
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured, read_structured_strict, write_structured
from resourcepack_cli.persistence.pack_paths import (
    ItemLocation,
    generated_asset_regex,
    generated_model_id,
    generated_model_path,
    generated_texture_path,
    item_definition_path,
    item_model_id,
    item_model_path,
    parse_item_definition_path,
    parse_item_model_path,
)
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomModelDataRequest:
    """Input for apply_custom_model_data.

    Attributes:
        item_id: "diamond_sword" or "minecraft:diamond_sword"
        variant_tag: Custom model data value (positive integer)
        texture: PNG bytes for the generated variant, stored verbatim
        namespace: Namespace for generated files; config default when None
    """
    item_id: str
    variant_tag: Any
    texture: bytes
    namespace: str | None = None


@dataclass(frozen=True, slots=True)
class CustomModelEntry:
    """One variant found in a pack, as listed by list_custom_model_data."""
    namespace: str
    item: str
    tag: int | float
    model: str
    generation: Generation
    path: str


# -----------------------------------------------------------------------------
# Input Validation
# -----------------------------------------------------------------------------

def parse_item_id(item_id: str, config: ToolConfig = DEFAULT_CONFIG) -> ItemLocation:
    """Split an item id into namespace and item name.

    Raises:
        InvalidIdentifierError: If the id is blank or malformed
    """
    resource = ResourceId.parse(item_id, config.default_namespace)
    return ItemLocation(namespace=resource.namespace, item=resource.path)


def validate_variant_tag(value: Any) -> int:
    """Coerce a custom model data value to a positive int.

    Integral floats are accepted; booleans, NaN/inf, fractions and values
    <= 0 are rejected.

    Raises:
        InvalidVariantTagError: If value is not a finite positive integer
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidVariantTagError(value)
    if not math.isfinite(value) or int(value) != value or value <= 0:
        raise InvalidVariantTagError(value)
    return int(value)


def pick_default_parent(item: str) -> str:
    """Parent model for an item: handheld for tools/weapons, generated otherwise.

    Best-effort suffix heuristic; edit the document directly to override it.
    """
    return HANDHELD_PARENT if item.endswith(HANDHELD_SUFFIXES) else GENERATED_PARENT


def active_generation(store: Store, config: ToolConfig = DEFAULT_CONFIG) -> Generation:
    """Generation targeted by the pack's declared format. Unknown is legacy."""
    metadata = read_metadata_from_store(store)
    pack_format = metadata.pack_format if metadata else None
    if is_modern_format(pack_format, config.modern_format_boundary):
        return Generation.MODERN
    return Generation.LEGACY


# -----------------------------------------------------------------------------
# Document Loading (shared with the migrator)
# -----------------------------------------------------------------------------

def _load_object(store: Store, path: str) -> dict[str, Any] | None:
    document = read_structured_strict(store, path)
    if document is None:
        return None
    if not isinstance(document, dict):
        raise DocumentDecodeError(path, "root must be an object")
    return document


def load_item_model(store: Store, location: ItemLocation) -> ItemModel:
    """Load the legacy item model, or synthesize one rendering the item's own texture.

    Raises:
        DocumentDecodeError: If the document exists but cannot be parsed
    """
    path = item_model_path(location.namespace, location.item)
    document = _load_object(store, path)
    if document is not None:
        return ItemModel.from_dict(document)
    return ItemModel.create(
        parent=pick_default_parent(location.item),
        layer0=item_model_id(location.namespace, location.item),
    )


def load_item_definition(store: Store, location: ItemLocation) -> ItemDefinition:
    """Load the modern item definition, or synthesize a plain model leaf.

    Raises:
        DocumentDecodeError: If the document exists but cannot be parsed
    """
    path = item_definition_path(location.namespace, location.item)
    document = _load_object(store, path)
    if document is not None:
        return ItemDefinition.from_dict(document)
    return ItemDefinition(model=ModelLeaf(model=item_model_id(location.namespace, location.item)))


def ensure_custom_model_data_dispatch(definition: ItemDefinition, location: ItemLocation) -> RangeDispatch:
    """Return the root dispatch on custom model data, wrapping the root if needed.

    When the root is anything else, it becomes the fallback of a new dispatch.
    A dispatch without a fallback gets the item's own model as fallback.
    """
    dispatch = definition.custom_model_data_dispatch
    if dispatch is None:
        dispatch = new_custom_model_data_dispatch(fallback=definition.model)
        definition.model = dispatch
    if dispatch.fallback is None:
        dispatch.fallback = ModelLeaf(model=item_model_id(location.namespace, location.item))
    return dispatch


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------

def _write_generated_assets(store: Store, namespace: str, item: str, tag: int, texture: bytes) -> None:
    write_structured(store, generated_model_path(namespace, item, tag), {
        "parent": pick_default_parent(item),
        "textures": {
            "layer0": generated_model_id(namespace, item, tag),
        },
    })
    store.set(generated_texture_path(namespace, item, tag), texture)


def apply_custom_model_data(
    package: Package,
    request: CustomModelDataRequest,
    config: ToolConfig = DEFAULT_CONFIG,
) -> Package:
    """Assign a custom model data variant to an item.

    Args:
        package: Source package (not modified)
        request: Item, tag, texture and generated namespace
        config: Namespaces and format boundary

    Returns:
        New Package with the override document, generated model and texture written

    Raises:
        InvalidIdentifierError: If the item id or namespace is malformed
        InvalidVariantTagError: If the tag is not a positive integer
        DocumentDecodeError: If the existing override document cannot be parsed

    Invariants:
        - Applying the same tag twice leaves exactly one record for it
        - Records stay sorted ascending by tag
    """
    location = parse_item_id(request.item_id, config)
    tag = validate_variant_tag(request.variant_tag)
    namespace = normalize_namespace(request.namespace, config.generated_namespace)
    model_id = generated_model_id(namespace, location.item, tag)

    store = package.store.clone()
    generation = active_generation(store, config)

    if generation is Generation.MODERN:
        definition = load_item_definition(store, location)
        dispatch = ensure_custom_model_data_dispatch(definition, location)
        dispatch.upsert_entry(tag, ModelLeaf(model=model_id))
        write_structured(store, item_definition_path(location.namespace, location.item), definition.to_dict())
    else:
        item_model = load_item_model(store, location)
        item_model.upsert_override(tag, model_id)
        write_structured(store, item_model_path(location.namespace, location.item), item_model.to_dict())

    _write_generated_assets(store, namespace, location.item, tag, bytes(request.texture))
    logger.info(
        "Assigned custom model data %d to %s:%s (%s) -> %s",
        tag, location.namespace, location.item, generation.value, model_id,
    )
    return package.with_store(store)


def remove_custom_model_data(
    package: Package,
    item_id: str,
    variant_tag: Any,
    config: ToolConfig = DEFAULT_CONFIG,
) -> Package:
    """Remove a custom model data variant from both generations.

    Args:
        package: Source package (not modified)
        item_id: Item whose variant is removed
        variant_tag: Tag to remove

    Returns:
        New Package without the record and without its generated model/texture

    Raises:
        NotFoundError: If no document and no generated file holds the tag

    Behavior:
        - A legacy document keeps its other content; an emptied overrides
          list is dropped
        - A modern document whose dispatch has no entries left is deleted
    """
    location = parse_item_id(item_id, config)
    tag = validate_variant_tag(variant_tag)
    store = package.store.clone()
    found = False

    legacy_path = item_model_path(location.namespace, location.item)
    if store.contains(legacy_path):
        item_model = load_item_model(store, location)
        if item_model.remove_override(tag):
            write_structured(store, legacy_path, item_model.to_dict())
            found = True

    modern_path = item_definition_path(location.namespace, location.item)
    if store.contains(modern_path):
        definition = load_item_definition(store, location)
        dispatch = definition.custom_model_data_dispatch
        if dispatch is not None and dispatch.remove_entry(tag):
            if dispatch.entries:
                write_structured(store, modern_path, definition.to_dict())
            else:
                store.delete(modern_path)
            found = True

    pattern = generated_asset_regex(location.item, tag)
    for path in store.keys():
        if pattern.match(path):
            store.delete(path)
            found = True

    if not found:
        raise NotFoundError("Custom model data", f"{location.namespace}:{location.item}#{tag}")
    logger.info("Removed custom model data %d from %s:%s", tag, location.namespace, location.item)
    return package.with_store(store)


def list_custom_model_data(package: Package) -> list[CustomModelEntry]:
    """List every custom model data record in the pack, both generations.

    Undecodable documents are skipped. Entries are sorted by
    (namespace, item, tag, generation).
    """
    entries: list[CustomModelEntry] = []
    for path in package.store.keys():
        legacy = parse_item_model_path(path)
        modern = parse_item_definition_path(path)
        if legacy is None and modern is None:
            continue
        document = read_structured(package.store, path)
        if not isinstance(document, dict):
            continue

        if legacy is not None:
            for override in ItemModel.from_dict(document).overrides:
                if override.has_numeric_tag and isinstance(override.model, str):
                    entries.append(CustomModelEntry(
                        legacy.namespace, legacy.item, override.tag, override.model, Generation.LEGACY, path,
                    ))
        elif modern is not None:
            dispatch = ItemDefinition.from_dict(document).custom_model_data_dispatch
            if dispatch is None:
                continue
            for entry in dispatch.entries:
                model = entry.model.model if isinstance(entry.model, ModelLeaf) else "<nested>"
                if isinstance(entry.threshold, (int, float)) and not isinstance(entry.threshold, bool):
                    entries.append(CustomModelEntry(
                        modern.namespace, modern.item, entry.threshold, model, Generation.MODERN, path,
                    ))

    entries.sort(key=lambda e: (e.namespace, e.item, e.tag, e.generation.value))
    return entries
