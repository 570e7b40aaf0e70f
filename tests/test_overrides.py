"""
Tests for the custom model data editor
"""
import math

import pytest

from resourcepack_cli.config import ToolConfig
from resourcepack_cli.editing.overrides import (
    CustomModelDataRequest,
    apply_custom_model_data,
    list_custom_model_data,
    parse_item_id,
    pick_default_parent,
    remove_custom_model_data,
    validate_variant_tag,
)
from resourcepack_cli.errors import (
    DocumentDecodeError,
    InvalidIdentifierError,
    InvalidVariantTagError,
    NotFoundError,
)
from resourcepack_cli.models.item_models import Generation

LEGACY_SWORD = "assets/minecraft/models/item/diamond_sword.json"
MODERN_SWORD = "assets/minecraft/items/diamond_sword.json"


def _apply(package, tag, item="diamond_sword", texture=b"png", **kwargs):
    return apply_custom_model_data(package, CustomModelDataRequest(item, tag, texture, **kwargs))


def _legacy_tags(document):
    return [override["predicate"]["custom_model_data"] for override in document["overrides"]]


class TestInputValidation:
    """Test item id and tag validation."""

    def test_parse_item_id_defaults_namespace(self):
        location = parse_item_id("Diamond_Sword")
        assert (location.namespace, location.item) == ("minecraft", "diamond_sword")

    def test_parse_item_id_with_namespace(self):
        location = parse_item_id("mymod:ruby")
        assert (location.namespace, location.item) == ("mymod", "ruby")

    @pytest.mark.parametrize("item_id", ["", "   ", "bad item!", "a:b:c", "minecraft:../../../x", "../x", "item/./x"])
    def test_invalid_item_ids(self, item_id):
        with pytest.raises(InvalidIdentifierError):
            parse_item_id(item_id)

    @pytest.mark.parametrize("value", [0, -1, 1.5, True, "3", None, math.nan, math.inf])
    def test_invalid_tags(self, value):
        """Booleans, fractions, non-finite and non-positive values are rejected."""
        with pytest.raises(InvalidVariantTagError):
            validate_variant_tag(value)

    def test_integral_float_tag_accepted(self):
        assert validate_variant_tag(2.0) == 2
        assert isinstance(validate_variant_tag(2.0), int)

    def test_default_parent_heuristic(self):
        assert pick_default_parent("diamond_sword") == "minecraft:item/handheld"
        assert pick_default_parent("iron_pickaxe") == "minecraft:item/handheld"
        assert pick_default_parent("apple") == "minecraft:item/generated"


class TestLegacyApply:
    """Test assignment in packs below the modern boundary."""

    def test_diamond_sword_variant(self, make_package, png, doc):
        """A fresh variant writes the override document, generated model and texture."""
        package = make_package(pack_format=34)
        result = _apply(package, 1, texture=png)

        assert doc(result, LEGACY_SWORD) == {
            "parent": "minecraft:item/handheld",
            "textures": {"layer0": "minecraft:item/diamond_sword"},
            "overrides": [
                {"predicate": {"custom_model_data": 1}, "model": "mrwm:item/diamond_sword_cmd_1"},
            ],
        }
        assert doc(result, "assets/mrwm/models/item/diamond_sword_cmd_1.json") == {
            "parent": "minecraft:item/handheld",
            "textures": {"layer0": "mrwm:item/diamond_sword_cmd_1"},
        }
        assert result.store.get("assets/mrwm/textures/item/diamond_sword_cmd_1.png") == png

    def test_input_package_not_modified(self, make_package):
        package = make_package()
        before = package.store.clone()
        _apply(package, 1)
        assert package.store == before

    def test_same_tag_twice_keeps_one_record(self, make_package, doc):
        package = _apply(_apply(make_package(), 1, texture=b"a"), 1, texture=b"b")
        assert _legacy_tags(doc(package, LEGACY_SWORD)) == [1]
        assert package.store.get("assets/mrwm/textures/item/diamond_sword_cmd_1.png") == b"b"

    def test_records_sorted_ascending(self, make_package, doc):
        package = make_package()
        for tag in (5, 2, 9):
            package = _apply(package, tag)
        assert _legacy_tags(doc(package, LEGACY_SWORD)) == [2, 5, 9]

    def test_existing_document_content_preserved(self, make_package, doc):
        """Unrelated keys and non-custom-model-data overrides survive."""
        package = make_package({
            "assets/minecraft/models/item/bow.json": {
                "parent": "item/generated",
                "textures": {"layer0": "item/bow"},
                "display": {"gui": {"scale": [1, 1, 1]}},
                "overrides": [{"predicate": {"pulling": 1}, "model": "item/bow_pulling_0"}],
            },
        })
        result = _apply(package, 3, item="bow")
        document = doc(result, "assets/minecraft/models/item/bow.json")
        assert document["parent"] == "item/generated"
        assert document["display"] == {"gui": {"scale": [1, 1, 1]}}
        assert document["overrides"] == [
            {"predicate": {"pulling": 1}, "model": "item/bow_pulling_0"},
            {"predicate": {"custom_model_data": 3}, "model": "mrwm:item/bow_cmd_3"},
        ]

    def test_custom_item_namespace_and_generated_parent(self, make_package, doc):
        result = _apply(make_package(), 4, item="mymod:ruby")
        document = doc(result, "assets/mymod/models/item/ruby.json")
        assert document["parent"] == "minecraft:item/generated"
        assert document["textures"] == {"layer0": "mymod:item/ruby"}
        assert result.store.contains("assets/mrwm/models/item/ruby_cmd_4.json")

    def test_request_namespace_overrides_config(self, make_package, doc):
        result = _apply(make_package(), 1, namespace="mypack")
        assert doc(result, LEGACY_SWORD)["overrides"][0]["model"] == "mypack:item/diamond_sword_cmd_1"
        assert result.store.contains("assets/mypack/textures/item/diamond_sword_cmd_1.png")

    def test_config_generated_namespace(self, make_package, doc):
        config = ToolConfig(generated_namespace="studio")
        result = apply_custom_model_data(
            make_package(), CustomModelDataRequest("stick", 1, b"x"), config,
        )
        assert result.store.contains("assets/studio/models/item/stick_cmd_1.json")

    def test_undecodable_document_raises(self, make_package):
        package = make_package({LEGACY_SWORD: b"{not json"})
        with pytest.raises(DocumentDecodeError):
            _apply(package, 1)

    def test_non_object_document_raises(self, make_package):
        package = make_package({LEGACY_SWORD: [1, 2]})
        with pytest.raises(DocumentDecodeError):
            _apply(package, 1)

    def test_invalid_tag_leaves_nothing_written(self, make_package):
        package = make_package()
        with pytest.raises(InvalidVariantTagError):
            _apply(package, 0)
        assert not package.store.contains(LEGACY_SWORD)

    def test_traversal_item_id_rejected(self, make_package):
        """An item id with `..` segments writes nothing."""
        package = make_package()
        with pytest.raises(InvalidIdentifierError):
            _apply(package, 1, item="minecraft:../../../../../x")
        assert package.store.keys() == ["pack.mcmeta"]

    def test_duplicate_tags_collapse_to_one(self, make_package, doc):
        """Pre-existing duplicate records for a tag are merged on the next assignment."""
        package = make_package({
            "assets/minecraft/models/item/stick.json": {"overrides": [
                {"predicate": {"custom_model_data": 1}, "model": "x:item/a", "comment": "first"},
                {"predicate": {"custom_model_data": 2}, "model": "x:item/b"},
                {"predicate": {"custom_model_data": 1}, "model": "x:item/c"},
            ]},
        })
        for _ in range(2):
            package = _apply(package, 1, item="stick")
        overrides = doc(package, "assets/minecraft/models/item/stick.json")["overrides"]
        assert overrides == [
            {"predicate": {"custom_model_data": 1}, "model": "mrwm:item/stick_cmd_1", "comment": "first"},
            {"predicate": {"custom_model_data": 2}, "model": "x:item/b"},
        ]


class TestModernApply:
    """Test assignment in packs at or above the modern boundary."""

    def test_diamond_sword_variant(self, make_package, doc):
        result = _apply(make_package(pack_format=46), 1)
        assert doc(result, MODERN_SWORD) == {
            "model": {
                "type": "minecraft:range_dispatch",
                "property": "minecraft:custom_model_data",
                "index": 0,
                "entries": [
                    {"threshold": 1, "model": {"type": "minecraft:model", "model": "mrwm:item/diamond_sword_cmd_1"}},
                ],
                "fallback": {"type": "minecraft:model", "model": "minecraft:item/diamond_sword"},
            },
        }
        assert not result.store.contains(LEGACY_SWORD)
        assert result.store.contains("assets/mrwm/models/item/diamond_sword_cmd_1.json")

    def test_entries_sorted_and_unique(self, make_package, doc):
        package = make_package(pack_format=46)
        for tag in (3, 1, 3, 2):
            package = _apply(package, tag)
        entries = doc(package, MODERN_SWORD)["model"]["entries"]
        assert [entry["threshold"] for entry in entries] == [1, 2, 3]

    def test_duplicate_thresholds_collapse_to_one(self, make_package, doc):
        """Pre-existing duplicate entries for a threshold are merged on the next assignment."""
        def leaf(model):
            return {"type": "minecraft:model", "model": model}

        package = make_package({MODERN_SWORD: {"model": {
            "type": "minecraft:range_dispatch",
            "property": "minecraft:custom_model_data",
            "entries": [
                {"threshold": 4, "model": leaf("x:item/a")},
                {"threshold": 4, "model": leaf("x:item/b")},
            ],
            "fallback": leaf("minecraft:item/diamond_sword"),
        }}}, pack_format=46)
        result = _apply(package, 4)
        entries = doc(result, MODERN_SWORD)["model"]["entries"]
        assert entries == [{"threshold": 4, "model": leaf("mrwm:item/diamond_sword_cmd_4")}]

    def test_existing_root_becomes_fallback(self, make_package, doc):
        """A root that is not a custom model data dispatch is wrapped, extra keys kept."""
        condition = {
            "type": "minecraft:condition",
            "property": "minecraft:using_item",
            "on_true": {"type": "minecraft:model", "model": "minecraft:item/shield_blocking"},
            "on_false": {"type": "minecraft:model", "model": "minecraft:item/shield"},
        }
        package = make_package(
            {"assets/minecraft/items/shield.json": {"model": condition, "hand_animation_on_swap": False}},
            pack_format=46,
        )
        document = doc(_apply(package, 7, item="shield"), "assets/minecraft/items/shield.json")
        assert document["hand_animation_on_swap"] is False
        assert document["model"]["type"] == "minecraft:range_dispatch"
        assert document["model"]["fallback"] == condition
        assert document["model"]["entries"][0]["threshold"] == 7


class TestRemoveAndList:
    """Test removing and listing variants."""

    def test_remove_legacy_variant(self, make_package, doc):
        package = _apply(_apply(make_package(), 1), 2)
        result = remove_custom_model_data(package, "diamond_sword", 1)
        assert _legacy_tags(doc(result, LEGACY_SWORD)) == [2]
        assert not result.store.contains("assets/mrwm/models/item/diamond_sword_cmd_1.json")
        assert not result.store.contains("assets/mrwm/textures/item/diamond_sword_cmd_1.png")
        assert result.store.contains("assets/mrwm/textures/item/diamond_sword_cmd_2.png")

    def test_remove_last_legacy_variant_drops_overrides_key(self, make_package, doc):
        result = remove_custom_model_data(_apply(make_package(), 1), "diamond_sword", 1)
        assert "overrides" not in doc(result, LEGACY_SWORD)

    def test_remove_last_modern_entry_deletes_document(self, make_package):
        package = _apply(make_package(pack_format=46), 1)
        result = remove_custom_model_data(package, "minecraft:diamond_sword", 1)
        assert not result.store.contains(MODERN_SWORD)

    def test_remove_unknown_tag_raises(self, make_package):
        with pytest.raises(NotFoundError):
            remove_custom_model_data(_apply(make_package(), 1), "diamond_sword", 5)

    def test_list_both_generations(self, make_package):
        package = _apply(_apply(make_package(), 2), 1)
        package = make_package({
            **package.store.to_dict(),
            MODERN_SWORD: {
                "model": {
                    "type": "minecraft:range_dispatch",
                    "property": "minecraft:custom_model_data",
                    "entries": [{"threshold": 1, "model": {"type": "minecraft:model", "model": "x:item/y"}}],
                },
            },
        })
        entries = list_custom_model_data(package)
        assert [(e.tag, e.generation) for e in entries] == [
            (1, Generation.LEGACY),
            (1, Generation.MODERN),
            (2, Generation.LEGACY),
        ]
        assert entries[1].model == "x:item/y"
        assert entries[0].path == LEGACY_SWORD

    def test_list_skips_undecodable_documents(self, make_package):
        package = make_package({LEGACY_SWORD: b"{oops"})
        assert list_custom_model_data(package) == []
