"""Starter pack templates."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

from resourcepack_cli.editing.metadata import apply_settings, default_settings
from resourcepack_cli.errors import NotFoundError
from resourcepack_cli.models.pack import Package, PackSettings
from resourcepack_cli.persistence.json_io import write_structured, write_text

logger = logging.getLogger(__name__)

KEEP_FILE: Final[str] = ".keep"
"""Placeholder written into template directories; the store has no empty directories."""


@dataclass(frozen=True)
class PackTemplate:
    """Starter layout written on top of pack.mcmeta.

    Attributes:
        id: Stable key used on the command line
        name: Display name
        description: One-line summary
        directories: Directories seeded with a .keep file
        documents: JSON documents to write, by path
        readme: README.txt contents, or "" for none
    """
    id: str
    name: str
    description: str
    directories: tuple[str, ...] = ()
    documents: dict[str, Any] = field(default_factory=dict)
    readme: str = ""


PACK_TEMPLATES: Final[tuple[PackTemplate, ...]] = (
    PackTemplate(
        id="empty",
        name="Empty Pack",
        description="Start from scratch with just pack.mcmeta",
    ),
    PackTemplate(
        id="basic",
        name="Basic Pack",
        description="Empty pack with standard folder structure",
        directories=(
            "assets/minecraft/textures/block",
            "assets/minecraft/textures/item",
            "assets/minecraft/textures/entity",
            "assets/minecraft/textures/gui",
            "assets/minecraft/models/block",
            "assets/minecraft/models/item",
            "assets/minecraft/blockstates",
            "assets/minecraft/sounds",
            "assets/minecraft/lang",
            "assets/minecraft/font",
        ),
    ),
    PackTemplate(
        id="custom-items",
        name="Custom Items Pack",
        description="Pre-configured for custom item textures and models",
        directories=(
            "assets/custom/textures/item",
            "assets/custom/models/item",
            "assets/minecraft/models/item",
        ),
        readme=(
            "Custom Items Resource Pack\n"
            "==========================\n\n"
            "- assets/custom/textures/item/ - custom textures\n"
            "- assets/custom/models/item/ - custom models\n"
            "- assets/minecraft/models/item/ - vanilla item model overrides\n\n"
            "Add variants with: resourcepack-cli --pack <pack> cmd add <item> <tag> <texture.png>\n"
        ),
    ),
    PackTemplate(
        id="gui-overhaul",
        name="GUI Overhaul Pack",
        description="Optimized for customizing GUI textures",
        directories=(
            "assets/minecraft/textures/gui",
            "assets/minecraft/textures/gui/container",
            "assets/minecraft/textures/gui/title",
            "assets/minecraft/textures/gui/advancements",
            "assets/minecraft/textures/gui/sprites",
        ),
        readme=(
            "GUI Overhaul Resource Pack\n"
            "==========================\n\n"
            "- assets/minecraft/textures/gui/ - main GUI elements\n"
            "- assets/minecraft/textures/gui/container/ - inventory screens\n"
            "- assets/minecraft/textures/gui/title/ - title screen\n"
            "- assets/minecraft/textures/gui/advancements/ - advancement screens\n"
            "- assets/minecraft/textures/gui/sprites/ - UI sprites (1.20+)\n"
        ),
    ),
    PackTemplate(
        id="font-pack",
        name="Font Pack",
        description="Set up for custom fonts and Unicode glyphs",
        directories=(
            "assets/minecraft/textures/font",
            "assets/minecraft/font",
        ),
        documents={"assets/minecraft/font/default.json": {"providers": []}},
        readme=(
            "Font Resource Pack\n"
            "==================\n\n"
            "- assets/minecraft/textures/font/ - glyph textures\n"
            "- assets/minecraft/font/ - font definitions\n\n"
            "Add glyphs with: resourcepack-cli --pack <pack> glyph add <texture.png>\n"
        ),
    ),
    PackTemplate(
        id="sounds",
        name="Sound Pack",
        description="Set up for custom sounds",
        directories=(
            "assets/minecraft/sounds",
            "assets/minecraft/sounds/ambient",
            "assets/minecraft/sounds/block",
            "assets/minecraft/sounds/entity",
            "assets/minecraft/sounds/item",
            "assets/minecraft/sounds/music",
            "assets/minecraft/sounds/ui",
        ),
        documents={
            "assets/minecraft/sounds.json": {
                "example.custom_sound": {
                    "sounds": [{"name": "minecraft:custom/example", "stream": False}],
                },
            },
        },
        readme=(
            "Sound Resource Pack\n"
            "===================\n\n"
            "Sound files must be Ogg Vorbis (.ogg).\n\n"
            "- assets/minecraft/sounds/ - audio files\n"
            "- assets/minecraft/sounds.json - sound event definitions\n"
        ),
    ),
)


def get_template(template_id: str) -> PackTemplate | None:
    return next((template for template in PACK_TEMPLATES if template.id == template_id), None)


def create_pack_from_template(template_id: str, settings: PackSettings | None = None) -> Package:
    """Create a new package from a starter template.

    Raises:
        NotFoundError: If template_id is unknown
        InvalidMetadataError: If settings carry an invalid pack_format
    """
    template = get_template(template_id)
    if template is None:
        raise NotFoundError("Template", template_id)

    settings = settings or default_settings()
    package = apply_settings(Package(), settings)
    store = package.store
    for directory in template.directories:
        write_text(store, f"{directory}/{KEEP_FILE}", "")
    for path, document in template.documents.items():
        write_structured(store, path, document)
    if template.readme:
        write_text(store, "README.txt", template.readme)

    logger.info("Created %s from template %s (%d files)", package.name, template.id, len(store))
    return package
