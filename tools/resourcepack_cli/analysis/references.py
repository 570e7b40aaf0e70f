"""Unused asset detection.

Best-effort: every string leaf of every structured document that looks like
a resource reference is recorded, then each texture, model and sound file is
checked against those references. References built at runtime or embedded
in other string shapes are not seen, so results can include false positives.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Final

from resourcepack_cli.config import DEFAULT_NAMESPACE, METADATA_PATHS, STRUCTURED_EXTENSIONS
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured

logger = logging.getLogger(__name__)

ASSET_PATH_REGEX: Final[re.Pattern[str]] = re.compile(
    r"^assets/([^/]+)/(?:textures|models|sounds)/(.+?)\.(?:png|json|ogg)$"
)
RESOURCE_REF_REGEX: Final[re.Pattern[str]] = re.compile(r"^([a-z0-9_.-]+):(.+?)(?:\.(?:png|json|ogg))?$")
BARE_REF_REGEX: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9_.-]+(?:/[a-z0-9_.-]+)+$")


def asset_resource_id(path: str) -> str | None:
    """assets/<ns>/(textures|models|sounds)/<p>.(png|json|ogg) -> <ns>:<p>."""
    match = ASSET_PATH_REGEX.match(path)
    return f"{match.group(1)}:{match.group(2)}" if match else None


def _record(value: str, references: set[str]) -> None:
    text = value.strip()
    match = ASSET_PATH_REGEX.match(text)
    if match:
        references.add(text)
        references.add(f"{match.group(1)}:{match.group(2)}")
        return
    match = RESOURCE_REF_REGEX.match(text)
    if match:
        references.add(text)
        references.add(f"{match.group(1)}:{match.group(2)}")
        return
    if BARE_REF_REGEX.match(text):
        # Unqualified references resolve against the default namespace.
        stem = re.sub(r"\.(?:png|json|ogg)$", "", text)
        references.add(text)
        references.add(f"{DEFAULT_NAMESPACE}:{stem}")
        return
    if "/" in text or ":" in text:
        references.add(text)


def collect_references(value: Any, references: set[str]) -> None:
    """Walk a parsed document and record every reference-like string."""
    if isinstance(value, str):
        _record(value, references)
    elif isinstance(value, list):
        for item in value:
            collect_references(item, references)
    elif isinstance(value, dict):
        for item in value.values():
            collect_references(item, references)


def find_unused_assets(package: Package) -> list[str]:
    """List texture, model and sound files no structured document references.

    pack.mcmeta, pack.png and the structured documents themselves are never
    reported. Undecodable documents are skipped.
    """
    references: set[str] = set()
    for path in package.store.keys():
        if path.endswith(STRUCTURED_EXTENSIONS):
            document = read_structured(package.store, path)
            if document is not None:
                collect_references(document, references)

    unused: list[str] = []
    for path in package.store.keys():
        if path in METADATA_PATHS or path.endswith(STRUCTURED_EXTENSIONS):
            continue
        resource_id = asset_resource_id(path)
        if resource_id is None:
            continue
        candidates = (resource_id, path, f"{resource_id}.png", f"{resource_id}.json")
        if not any(candidate in references for candidate in candidates):
            unused.append(path)

    logger.debug("Found %d unused assets among %d references", len(unused), len(references))
    return unused
