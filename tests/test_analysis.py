"""
Tests for pack statistics, duplicate detection and unused assets
"""
import pytest

from resourcepack_cli.analysis.duplicates import find_duplicate_textures
from resourcepack_cli.analysis.references import asset_resource_id, collect_references, find_unused_assets
from resourcepack_cli.analysis.stats import analyze_pack, format_size


class TestStats:
    """Test analyze_pack."""

    def test_counts_and_sizes(self, make_package):
        package = make_package({
            "assets/minecraft/textures/a.png": b"x" * 10,
            "assets/minecraft/textures/b.PNG": b"x" * 30,
            "assets/mymod/sounds/s.ogg": b"x" * 5,
            "README": b"hello",
        }, pack_format=None)
        stats = analyze_pack(package)

        assert stats.total_files == 4
        assert stats.total_size == 10 + 30 + 5 + 5
        assert stats.by_extension["png"].count == 2
        assert stats.by_extension["png"].size == 40
        assert stats.by_extension["no-extension"].count == 1
        assert stats.by_namespace == {"minecraft": 2, "mymod": 1}
        assert stats.largest_files[0] == ("assets/minecraft/textures/b.PNG", 30)

    def test_largest_files_capped(self, make_package):
        package = make_package({f"f{i}.bin": b"x" * i for i in range(1, 15)}, pack_format=None)
        stats = analyze_pack(package)
        assert len(stats.largest_files) == 10
        assert stats.largest_files[0] == ("f14.bin", 14)

    def test_to_dict(self, make_package):
        data = analyze_pack(make_package(pack_format=None)).to_dict()
        assert data == {
            "totalFiles": 0,
            "totalSize": 0,
            "byExtension": {},
            "byNamespace": {},
            "largestFiles": [],
        }

    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (500, "500.00 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (5 * 1024 * 1024, "5.00 MB"),
        (3 * 1024 ** 3, "3.00 GB"),
    ])
    def test_format_size(self, size, expected):
        assert format_size(size) == expected


class TestDuplicates:
    """Test find_duplicate_textures."""

    def test_identical_images_grouped(self, make_package, png):
        package = make_package({
            "assets/minecraft/textures/a.png": png,
            "assets/mymod/textures/b.png": png,
            "assets/mymod/textures/c.png": png + b"different",
        })
        groups = find_duplicate_textures(package)
        assert len(groups) == 1
        assert groups[0].paths == ("assets/minecraft/textures/a.png", "assets/mymod/textures/b.png")
        assert groups[0].size == len(png)
        assert groups[0].wasted_bytes == len(png)

    def test_non_images_ignored(self, make_package):
        package = make_package({"a.ogg": b"same", "b.ogg": b"same"})
        assert find_duplicate_textures(package) == []

    def test_sorted_by_size(self, make_package):
        package = make_package({
            "s1.png": b"ab", "s2.png": b"ab",
            "l1.png": b"abcdef", "l2.png": b"abcdef",
        })
        assert [group.size for group in find_duplicate_textures(package)] == [6, 2]


class TestUnusedAssets:
    """Test find_unused_assets."""

    def test_reports_unreferenced_textures(self, make_package, png):
        package = make_package({
            "pack.png": png,
            "assets/minecraft/models/item/stick.json": {"textures": {"layer0": "item/stick"}},
            "assets/minecraft/textures/item/stick.png": png,
            "assets/mymod/models/item/ruby.json": {"textures": {"layer0": "mymod:item/ruby"}},
            "assets/mymod/textures/item/ruby.png": png,
            "assets/mymod/textures/item/orphan.png": png,
        })
        assert find_unused_assets(package) == ["assets/mymod/textures/item/orphan.png"]

    def test_sounds_referenced_by_sounds_json(self, make_package):
        package = make_package({
            "assets/minecraft/sounds.json": {"custom.horn": {"sounds": [{"name": "minecraft:custom/horn"}]}},
            "assets/minecraft/sounds/custom/horn.ogg": b"ogg",
            "assets/minecraft/sounds/custom/unused.ogg": b"ogg",
        })
        assert find_unused_assets(package) == ["assets/minecraft/sounds/custom/unused.ogg"]

    def test_glyph_textures_referenced_by_font(self, make_package):
        package = make_package({
            "assets/minecraft/font/default.json": {"providers": [
                {"type": "bitmap", "file": "minecraft:font/glyph_E200", "chars": ["\ue200"]},
            ]},
            "assets/minecraft/textures/font/glyph_E200.png": b"png",
        })
        assert find_unused_assets(package) == []

    def test_asset_resource_id(self):
        assert asset_resource_id("assets/minecraft/textures/item/a.png") == "minecraft:item/a"
        assert asset_resource_id("assets/minecraft/lang/en_us.json") is None

    def test_collect_references_walks_nested_values(self):
        references: set[str] = set()
        collect_references({"a": ["x:item/one", {"b": "item/two"}], "n": 3}, references)
        assert {"x:item/one", "minecraft:item/two"} <= references
