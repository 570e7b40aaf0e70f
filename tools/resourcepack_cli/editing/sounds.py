"""Sound event editing (assets/<ns>/sounds.json and .ogg files)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from resourcepack_cli.config import DEFAULT_NAMESPACE
from resourcepack_cli.errors import DocumentDecodeError, InvalidIdentifierError, NotFoundError
from resourcepack_cli.models.common import is_valid_resource_path, normalize_namespace
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.json_io import read_structured, read_structured_strict, write_structured
from resourcepack_cli.persistence.pack_paths import path_with_extension, sound_file_path, sounds_json_path
from resourcepack_cli.persistence.store import Store

logger = logging.getLogger(__name__)

SOUND_EXTENSION = ".ogg"


@dataclass(frozen=True)
class SoundRequest:
    """Input for add_sound.

    Attributes:
        sound_id: Event key, e.g. "block.stone.break" or "custom.horn"
        data: Ogg Vorbis bytes, stored verbatim
        namespace: Namespace of sounds.json and the audio file
        sound_path: Location under sounds/; derived from sound_id when None
        subtitle: Optional subtitle translation key
        replace: Replace the event's sounds instead of appending
    """
    sound_id: str
    data: bytes
    namespace: str = DEFAULT_NAMESPACE
    sound_path: str | None = None
    subtitle: str | None = None
    replace: bool = False


def suggest_sound_path(sound_id: str) -> str:
    """Dotted event id to a sounds/ sub-path: block.stone.break -> block/stone/break."""
    return sound_id.strip().replace(".", "/")


def _load_sounds(store: Store, path: str) -> dict[str, Any]:
    document = read_structured_strict(store, path)
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DocumentDecodeError(path, "root must be an object")
    return document


def add_sound(package: Package, request: SoundRequest) -> Package:
    """Store an audio file and register it under a sound event.

    Returns:
        New Package with the .ogg file and sounds.json written

    Raises:
        InvalidIdentifierError: If the event id, namespace or path is malformed
        DocumentDecodeError: If the existing sounds.json cannot be parsed
    """
    sound_id = request.sound_id.strip()
    if not sound_id:
        raise InvalidIdentifierError(request.sound_id, "sound id is required")
    namespace = normalize_namespace(request.namespace, DEFAULT_NAMESPACE)

    relative = (request.sound_path or suggest_sound_path(sound_id)).strip().lower().lstrip("/")
    relative = path_with_extension(relative, SOUND_EXTENSION)
    name = relative[: -len(SOUND_EXTENSION)]
    if not is_valid_resource_path(name):
        raise InvalidIdentifierError(relative, "sound path may only contain a-z, 0-9, '_', '.', '-', '/'")

    store = package.store.clone()
    store.set(sound_file_path(namespace, relative), bytes(request.data))

    path = sounds_json_path(namespace)
    sounds = _load_sounds(store, path)
    entry = {"name": f"{namespace}:{name}", "stream": False}
    event = sounds.get(sound_id)
    if not isinstance(event, dict) or request.replace:
        event = {"sounds": [entry]}
    else:
        if not isinstance(event.get("sounds"), list):
            event["sounds"] = []
        event["sounds"].append(entry)
    if request.subtitle:
        event["subtitle"] = request.subtitle
    sounds[sound_id] = event

    write_structured(store, path, sounds)
    logger.info("Added sound %s -> %s:%s", sound_id, namespace, name)
    return package.with_store(store)


def remove_sound(package: Package, sound_id: str, namespace: str = DEFAULT_NAMESPACE) -> Package:
    """Remove a sound event from sounds.json. Audio files are left in place.

    Raises:
        NotFoundError: If the event is not declared
    """
    namespace = normalize_namespace(namespace, DEFAULT_NAMESPACE)
    path = sounds_json_path(namespace)
    store = package.store.clone()
    sounds = _load_sounds(store, path)
    if sound_id not in sounds:
        raise NotFoundError("Sound", f"{namespace}:{sound_id}")
    del sounds[sound_id]
    write_structured(store, path, sounds)
    logger.info("Removed sound %s from %s", sound_id, path)
    return package.with_store(store)


def list_sounds(package: Package, namespace: str = DEFAULT_NAMESPACE) -> list[str]:
    """Sorted event ids of a namespace; empty when sounds.json is absent or unreadable."""
    sounds = read_structured(package.store, sounds_json_path(namespace))
    return sorted(sounds) if isinstance(sounds, dict) else []


def get_sound_event(package: Package, sound_id: str, namespace: str = DEFAULT_NAMESPACE) -> dict[str, Any] | None:
    sounds = read_structured(package.store, sounds_json_path(namespace))
    if not isinstance(sounds, dict):
        return None
    event = sounds.get(sound_id)
    return event if isinstance(event, dict) else None
