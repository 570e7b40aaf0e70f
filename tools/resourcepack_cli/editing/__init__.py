"""Pack editors.

Every editor takes a Package and returns a new one; the input is never
mutated.
"""

from resourcepack_cli.editing.documents import delete_document_value, set_document_value, show_document
from resourcepack_cli.editing.glyphs import (
    GlyphEntry,
    GlyphResult,
    add_glyph,
    add_unicode_glyph,
    allocate_codepoint,
    format_codepoint,
    is_private_use,
    list_fonts,
    list_glyphs,
    remove_glyph,
    used_codepoints,
)
from resourcepack_cli.editing.merge import Conflict, detect_conflicts, merge_packs
from resourcepack_cli.editing.metadata import (
    apply_settings,
    create_empty_pack,
    default_settings,
    describe_pack_format,
    find_by_id,
    find_by_pack_format,
    is_modern_format,
    read_metadata,
)
from resourcepack_cli.editing.migration import ConversionResult, auto_upgrade, convert_pack_format, detect_pack_format
from resourcepack_cli.editing.overrides import (
    CustomModelDataRequest,
    CustomModelEntry,
    apply_custom_model_data,
    list_custom_model_data,
    remove_custom_model_data,
)
from resourcepack_cli.editing.sounds import (
    SoundRequest,
    add_sound,
    get_sound_event,
    list_sounds,
    remove_sound,
    suggest_sound_path,
)
from resourcepack_cli.editing.templates import PACK_TEMPLATES, PackTemplate, create_pack_from_template
from resourcepack_cli.editing.textures import normalize_texture_target, replace_vanilla_texture

__all__ = [
    # Metadata
    "apply_settings",
    "create_empty_pack",
    "default_settings",
    "describe_pack_format",
    "find_by_id",
    "find_by_pack_format",
    "is_modern_format",
    "read_metadata",
    # Custom model data
    "CustomModelDataRequest",
    "CustomModelEntry",
    "apply_custom_model_data",
    "remove_custom_model_data",
    "list_custom_model_data",
    # Migration
    "ConversionResult",
    "convert_pack_format",
    "auto_upgrade",
    "detect_pack_format",
    # Glyphs
    "GlyphEntry",
    "GlyphResult",
    "allocate_codepoint",
    "used_codepoints",
    "add_glyph",
    "add_unicode_glyph",
    "list_glyphs",
    "list_fonts",
    "remove_glyph",
    "format_codepoint",
    "is_private_use",
    # Merge
    "Conflict",
    "merge_packs",
    "detect_conflicts",
    # Sounds
    "SoundRequest",
    "add_sound",
    "remove_sound",
    "list_sounds",
    "get_sound_event",
    "suggest_sound_path",
    # Textures
    "normalize_texture_target",
    "replace_vanilla_texture",
    # Templates
    "PACK_TEMPLATES",
    "PackTemplate",
    "create_pack_from_template",
    # Documents
    "show_document",
    "set_document_value",
    "delete_document_value",
]
