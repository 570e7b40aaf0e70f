"""Schema migration between legacy overrides and modern item definitions.

Changing pack.pack_format across the modern boundary rewrites every override
document into the other generation. Conversion never raises on ambiguous
content: entries that cannot be expressed are dropped and reported as
warnings on the ConversionResult.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from resourcepack_cli.config import DEFAULT_CONFIG, METADATA_PATH, ToolConfig
from resourcepack_cli.editing.metadata import read_metadata_from_store, validate_pack_format, write_pack_format
from resourcepack_cli.editing.overrides import (
    ensure_custom_model_data_dispatch,
    load_item_definition,
    load_item_model,
)
from resourcepack_cli.errors import DocumentDecodeError
from resourcepack_cli.models.item_models import ItemDefinition, ItemModel, ModelLeaf, is_number
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured_strict, write_structured
from resourcepack_cli.persistence.pack_paths import (
    item_definition_path,
    item_model_id,
    item_model_path,
    parse_item_definition_path,
    parse_item_model_path,
)
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Outcome of a format conversion.

    Attributes:
        package: Converted package (the input itself when nothing changed)
        changes: One line per written or deleted document
        warnings: Dropped entries, lossy conversions and no-op notices
    """
    package: Package
    changes: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def detect_pack_format(package: Package) -> int | None:
    """Declared pack_format, or None when pack.mcmeta is missing or malformed."""
    metadata = read_metadata_from_store(package.store)
    return metadata.pack_format if metadata else None


def _load_document(store: Store, path: str, result: ConversionResult) -> dict | None:
    try:
        document = read_structured_strict(store, path)
    except DocumentDecodeError as exc:
        result.warnings.append(f"{path}: skipped, {exc.detail}")
        return None
    return document if isinstance(document, dict) else None


# -----------------------------------------------------------------------------
# Legacy -> Modern
# -----------------------------------------------------------------------------

def _upgrade_documents(store: Store, result: ConversionResult) -> None:
    converted = 0
    for path in sorted(store.keys()):
        location = parse_item_model_path(path)
        if location is None:
            continue
        document = _load_document(store, path, result)
        if document is None or not isinstance(document.get("overrides"), list) or not document["overrides"]:
            continue

        item_model = ItemModel.from_dict(document)
        entries: list[tuple[float, str]] = []
        for override in item_model.overrides:
            if not override.has_numeric_tag or not isinstance(override.model, str):
                result.warnings.append(
                    f"{path}: dropped override without a numeric custom_model_data or model"
                )
                continue
            if override.other_predicates:
                result.warnings.append(
                    f"{path}: override {override.tag} also matched on "
                    f"{', '.join(override.other_predicates)}; those predicates were not carried over"
                )
            entries.append((override.tag, override.model))

        if not entries:
            result.warnings.append(f"{path}: no convertible overrides, left unchanged")
            continue

        definition = load_item_definition(store, location)
        dispatch = ensure_custom_model_data_dispatch(definition, location)
        for tag, model in sorted(entries, key=lambda pair: pair[0]):
            dispatch.upsert_entry(tag, ModelLeaf(model=model))

        target = item_definition_path(location.namespace, location.item)
        write_structured(store, target, definition.to_dict())
        result.changes.append(f"wrote {target} ({len(entries)} entries)")

        item_model.overrides = []
        write_structured(store, path, item_model.to_dict())
        result.changes.append(f"removed overrides from {path}")
        converted += 1

    if not converted:
        result.warnings.append("No legacy override documents found to convert")
    logger.info("Upgraded %d override documents", converted)


# -----------------------------------------------------------------------------
# Modern -> Legacy
# -----------------------------------------------------------------------------

def _downgrade_documents(store: Store, result: ConversionResult) -> None:
    converted = 0
    for path in sorted(store.keys()):
        location = parse_item_definition_path(path)
        if location is None:
            continue
        document = _load_document(store, path, result)
        if document is None:
            continue
        dispatch = ItemDefinition.from_dict(document).custom_model_data_dispatch
        if dispatch is None:
            continue

        overrides: list[tuple[float, str]] = []
        for entry in dispatch.entries:
            if not is_number(entry.threshold):
                result.warnings.append(f"{path}: dropped entry with non-numeric threshold {entry.threshold!r}")
            elif entry.model is None:
                result.warnings.append(f"{path}: dropped entry {entry.threshold} without a model")
            elif not isinstance(entry.model, ModelLeaf):
                result.warnings.append(
                    f"{path}: conversion ambiguity, entry {entry.threshold} uses a "
                    f"{entry.model.to_dict().get('type', 'nested')} model and was dropped"
                )
            else:
                overrides.append((entry.threshold, entry.model.model))

        if not overrides:
            result.warnings.append(f"{path}: no convertible entries, left unchanged")
            continue

        own_model = item_model_id(location.namespace, location.item)
        fallback = dispatch.fallback
        if not (isinstance(fallback, ModelLeaf) and fallback.model == own_model):
            result.warnings.append(f"{path}: fallback differs from {own_model} and was not preserved")

        item_model = load_item_model(store, location)
        for tag, model in overrides:
            item_model.upsert_override(tag, model)
        target = item_model_path(location.namespace, location.item)
        write_structured(store, target, item_model.to_dict())
        result.changes.append(f"wrote {target} ({len(overrides)} overrides)")

        store.delete(path)
        result.changes.append(f"deleted {path}")
        converted += 1

    if not converted:
        result.warnings.append("No item definitions with custom model data found to convert")
    logger.info("Downgraded %d item definitions", converted)


# -----------------------------------------------------------------------------
# Operations
# -----------------------------------------------------------------------------

def convert_pack_format(
    package: Package,
    target: int,
    config: ToolConfig = DEFAULT_CONFIG,
) -> ConversionResult:
    """Change the declared pack_format, migrating override documents when the boundary is crossed.

    Args:
        package: Source package (not modified)
        target: New pack_format
        config: Format boundary

    Returns:
        ConversionResult with the new package, change log and warnings

    Raises:
        InvalidMetadataError: If target is not a positive integer
        DocumentDecodeError: If pack.mcmeta or an existing destination document
            cannot be parsed

    Behavior:
        - Same format: the input package is returned with a warning
        - Upgrade (current < boundary <= target): overrides become dispatch
          entries; the legacy document is kept without its overrides
        - Downgrade (current >= boundary > target): dispatch entries become
          overrides; the item definition is deleted
        - Generated models and textures are never touched
    """
    target = validate_pack_format(target)
    boundary = config.modern_format_boundary
    current = detect_pack_format(package)
    result = ConversionResult(package=package)

    if current is None:
        result.warnings.append("Could not determine the current pack_format; assuming 0")
        current = 0
    if current == target:
        result.warnings.append(f"Pack is already at pack_format {target}")
        return result

    store = package.store.clone()
    write_pack_format(store, target)
    result.changes.append(f"{METADATA_PATH}: pack_format {current} -> {target}")

    if current < boundary <= target:
        _upgrade_documents(store, result)
    elif target < boundary <= current:
        _downgrade_documents(store, result)

    for warning in result.warnings:
        logger.warning(warning)
    logger.info("Converted %s from pack_format %d to %d", package.name, current, target)
    result.package = package.with_store(store)
    return result


def auto_upgrade(package: Package, config: ToolConfig = DEFAULT_CONFIG) -> ConversionResult:
    """Convert to the latest known pack_format.

    Unknown or already-current formats return the input with a warning.
    """
    current = detect_pack_format(package)
    latest = config.latest_pack_format
    if current is None:
        return ConversionResult(package=package, warnings=["Could not determine the current pack_format"])
    if current >= latest:
        return ConversionResult(package=package, warnings=[f"Pack is already at pack_format {current}"])
    return convert_pack_format(package, latest, config)
