"""Pack metadata (pack.mcmeta) and the pack format registry."""

from __future__ import annotations

import logging
from typing import Any

from resourcepack_cli.config import (
    DEFAULT_DESCRIPTION,
    DEFAULT_PACK_FORMAT,
    DEFAULT_PACK_NAME,
    METADATA_PATH,
    MODERN_FORMAT_BOUNDARY,
    PACK_FORMATS,
    PackFormatOption,
)
from resourcepack_cli.errors import InvalidMetadataError
from resourcepack_cli.models.item_models import is_number
from resourcepack_cli.models.pack import Package, PackMetadata, PackSettings
from resourcepack_cli.persistence.json_io import read_structured, read_structured_strict, write_structured
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Format Registry
# -----------------------------------------------------------------------------

def find_by_id(version_id: str) -> PackFormatOption | None:
    """Look up a registry entry by release id (e.g. "1.21.4")."""
    return next((option for option in PACK_FORMATS if option.id == version_id), None)


def find_by_pack_format(pack_format: int) -> PackFormatOption | None:
    """Look up a registry entry by format number."""
    return next((option for option in PACK_FORMATS if option.pack_format == pack_format), None)


def describe_pack_format(pack_format: int | None) -> str:
    """Human label for a format number, e.g. "46 (Java 1.21.4)"."""
    if pack_format is None:
        return "unknown"
    option = find_by_pack_format(pack_format)
    return f"{pack_format} ({option.label})" if option else f"{pack_format} (custom)"


def is_modern_format(pack_format: int | None, boundary: int = MODERN_FORMAT_BOUNDARY) -> bool:
    """True when items use range dispatch definitions. Unknown formats are legacy."""
    return pack_format is not None and pack_format >= boundary


def validate_pack_format(value: Any) -> int:
    """Coerce a pack_format to int.

    Raises:
        InvalidMetadataError: If value is not a positive integer
    """
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        value = int(value.strip())
    if not is_number(value) or int(value) != value or value <= 0:
        raise InvalidMetadataError("pack_format", f"must be a positive integer, got {value!r}")
    return int(value)


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------

def default_settings() -> PackSettings:
    """Baseline settings for a new pack."""
    option = find_by_pack_format(DEFAULT_PACK_FORMAT)
    return PackSettings(
        name=DEFAULT_PACK_NAME,
        version_id=option.id if option else "custom",
        pack_format=DEFAULT_PACK_FORMAT,
        description=DEFAULT_DESCRIPTION,
    )


def read_metadata_from_store(store: Store) -> PackMetadata | None:
    document = read_structured(store, METADATA_PATH)
    if not isinstance(document, dict) or not isinstance(document.get("pack"), dict):
        return None
    pack = document["pack"]
    pack_format = pack.get("pack_format")
    if not is_number(pack_format):
        return None
    description = pack.get("description")
    return PackMetadata(
        pack_format=int(pack_format),
        description=description if isinstance(description, str) else "",
    )


def read_metadata(package: Package) -> PackMetadata | None:
    """Read pack.mcmeta.

    Returns:
        PackMetadata, or None when the document is absent, unparseable or has
        no numeric pack_format
    """
    return read_metadata_from_store(package.store)


def write_pack_format(store: Store, pack_format: int, description: str | None = None) -> None:
    """Set pack.pack_format (and optionally description) in place.

    Keys already present in pack.mcmeta (overlays, filter, supported_formats,
    ...) are preserved; a missing document is created.

    Raises:
        DocumentDecodeError: If pack.mcmeta exists but cannot be parsed
    """
    document = read_structured_strict(store, METADATA_PATH)
    if not isinstance(document, dict):
        document = {}
    pack = document.get("pack")
    if not isinstance(pack, dict):
        pack = {}
    pack["pack_format"] = pack_format
    if description is not None:
        pack["description"] = description
    elif "description" not in pack:
        pack["description"] = ""
    document["pack"] = pack
    write_structured(store, METADATA_PATH, document)


def apply_settings(package: Package, settings: PackSettings) -> Package:
    """Write settings into a copy of the package.

    Args:
        package: Source package (not modified)
        settings: Settings to apply

    Returns:
        New Package with pack.mcmeta updated and the name taken from settings
        when it is not blank

    Raises:
        InvalidMetadataError: If pack_format is not a positive integer
        DocumentDecodeError: If the existing pack.mcmeta cannot be parsed
    """
    pack_format = validate_pack_format(settings.pack_format)
    name = settings.name.strip() or package.name or DEFAULT_PACK_NAME

    store = package.store.clone()
    write_pack_format(store, pack_format, settings.description or "")
    logger.info("Applied settings to %s: pack_format=%d", name, pack_format)
    return Package(name=name, store=store)


def create_empty_pack(settings: PackSettings | None = None) -> Package:
    """New package holding only pack.mcmeta."""
    settings = settings or default_settings()
    return apply_settings(Package(name=settings.name.strip() or DEFAULT_PACK_NAME), settings)
