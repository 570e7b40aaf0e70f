"""Whole-pack structural validation."""

from __future__ import annotations

from typing import Any

from resourcepack_cli.config import DEFAULT_CONFIG, ICON_PATH, METADATA_PATH, STRUCTURED_EXTENSIONS, ToolConfig
from resourcepack_cli.editing.metadata import is_modern_format
from resourcepack_cli.errors import DocumentDecodeError, ValidationResult
from resourcepack_cli.models.common import ResourceId
from resourcepack_cli.models.item_models import ItemDefinition, ItemModel, is_number
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import parse_document, read_text
from resourcepack_cli.persistence.pack_paths import FONT_REGEX, parse_item_definition_path, parse_item_model_path
from resourcepack_cli.validation.fonts import validate_font_definition


def validate_item_id(item_id: str, default_namespace: str = DEFAULT_CONFIG.default_namespace) -> str:
    """Normalize an item id to `namespace:item`.

    Raises:
        InvalidIdentifierError: If the id is blank or malformed
    """
    return str(ResourceId.parse(item_id, default_namespace))


def _strictly_ascending(values: list[Any]) -> bool:
    numbers = [value for value in values if is_number(value)]
    return all(a < b for a, b in zip(numbers, numbers[1:]))


def _check_metadata(documents: dict[str, Any], result: ValidationResult) -> int | None:
    if METADATA_PATH not in documents:
        result.add(METADATA_PATH, "Missing pack.mcmeta file", fix="Run 'settings' to generate pack.mcmeta")
        return None
    document = documents[METADATA_PATH]
    pack = document.get("pack") if isinstance(document, dict) else None
    if not isinstance(pack, dict):
        result.add(METADATA_PATH, 'pack.mcmeta is missing "pack" object')
        return None
    pack_format = pack.get("pack_format")
    if not is_number(pack_format) or int(pack_format) != pack_format:
        result.add(METADATA_PATH, 'pack.mcmeta is missing valid "pack_format" number')
        pack_format = None
    if not isinstance(pack.get("description"), (str, dict, list)):
        result.add(METADATA_PATH, 'pack.mcmeta is missing "description" string', severity="warning")
    return int(pack_format) if pack_format is not None else None


def _check_paths(package: Package, result: ValidationResult) -> None:
    for path in package.store.keys():
        if "//" in path:
            result.add(path, "Path contains double slashes", severity="warning")
        if path != path.lower() and path.startswith("assets/"):
            result.add(path, "Path contains upper-case characters; the game only loads lower-case paths",
                       severity="warning")


def _check_overrides(documents: dict[str, Any], modern: bool | None, result: ValidationResult) -> None:
    for path, document in documents.items():
        if not isinstance(document, dict):
            continue
        if parse_item_model_path(path) is not None and isinstance(document.get("overrides"), list):
            tags = [override.tag for override in ItemModel.from_dict(document).overrides]
            if not _strictly_ascending(tags):
                result.add(path, "overrides are not strictly ascending by custom_model_data", severity="warning")
            if modern and any(is_number(tag) for tag in tags):
                result.add(path, "Legacy custom_model_data overrides are ignored by this pack_format",
                           severity="warning", fix="Run 'convert' to migrate them")
        elif parse_item_definition_path(path) is not None:
            dispatch = ItemDefinition.from_dict(document).custom_model_data_dispatch
            if dispatch is None:
                continue
            if not _strictly_ascending([entry.threshold for entry in dispatch.entries]):
                result.add(path, "range_dispatch entries are not strictly ascending by threshold", severity="warning")
            if modern is False:
                result.add(path, "Item definitions are ignored by this pack_format",
                           severity="warning", fix="Run 'convert' to migrate them")


def validate_pack(package: Package, config: ToolConfig = DEFAULT_CONFIG) -> ValidationResult:
    """Run every structural check over a package.

    Checks:
        - pack.mcmeta exists with a pack object and integral pack_format
        - every .json/.mcmeta document parses
        - pack.png exists (info)
        - paths contain no doubled slashes or upper-case asset segments
        - font documents are well-formed with no overlapping characters
        - override lists and dispatch entries are strictly ascending
        - override documents match the generation of the declared format

    Returns:
        ValidationResult (check .is_valid)
    """
    result = ValidationResult()
    documents: dict[str, Any] = {}
    for path in package.store.keys():
        if not path.endswith(STRUCTURED_EXTENSIONS):
            continue
        try:
            documents[path] = parse_document(read_text(package.store, path) or "", path)
        except DocumentDecodeError as exc:
            result.add(path, f"Invalid JSON: {exc.detail}")

    pack_format = _check_metadata(documents, result)
    if not package.store.contains(ICON_PATH):
        result.add(ICON_PATH, "No pack.png icon found (optional but recommended)", severity="info")
    _check_paths(package, result)

    for path, document in documents.items():
        if FONT_REGEX.match(path):
            for issue in validate_font_definition(document, path):
                result.add(path, issue)

    modern = None if pack_format is None else is_modern_format(pack_format, config.modern_format_boundary)
    _check_overrides(documents, modern, result)
    return result
