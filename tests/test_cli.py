"""
End-to-end tests for the command line interface
"""
import json

import pytest

from resourcepack_cli.cli import build_parser, main
from resourcepack_cli.commands.common import _parse_cli_value
from resourcepack_cli.commands.glyphs import _parse_codepoint
from resourcepack_cli.errors import InvalidValueError
from resourcepack_cli.persistence.container import load_pack
from resourcepack_cli.persistence.json_io import read_structured


@pytest.fixture
def pack_zip(tmp_path):
    path = tmp_path / "pack.zip"
    assert main(["--pack", str(path), "new", "--template", "basic", "--description", "demo"]) == 0
    return path


@pytest.fixture
def texture(tmp_path):
    path = tmp_path / "ruby.png"
    path.write_bytes(b"\x89PNG ruby")
    return path


class TestParser:
    """Test argument parsing."""

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_global_options(self):
        args = build_parser().parse_args(["--pack", "p.zip", "--namespace", "studio", "-vv", "cmd", "list"])
        assert args.namespace == "studio"
        assert args.verbose == 2
        assert args.cmd_command == "list"

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("null", None),
        ("42", 42),
        ("-1.5", -1.5),
        ('{"a": 1}', {"a": 1}),
        ("text", "text"),
    ])
    def test_parse_cli_value(self, raw, expected):
        assert _parse_cli_value(raw) == expected

    def test_parse_cli_value_bad_json(self):
        with pytest.raises(InvalidValueError):
            _parse_cli_value("{oops")

    @pytest.mark.parametrize("raw", ["E200", "U+E200", "0xE200", "\\uE200", "\ue200"])
    def test_parse_codepoint(self, raw):
        assert _parse_codepoint(raw) == 0xE200


class TestPackCommands:
    """Test pack lifecycle commands."""

    def test_new_creates_template(self, pack_zip):
        package = load_pack(pack_zip)
        metadata = read_structured(package.store, "pack.mcmeta")
        assert metadata["pack"] == {"pack_format": 34, "description": "demo"}
        assert package.store.contains("assets/minecraft/textures/item/.keep")

    def test_new_with_version(self, tmp_path):
        path = tmp_path / "modern.zip"
        assert main(["--pack", str(path), "new", "--version", "1.21.4"]) == 0
        assert read_structured(load_pack(path).store, "pack.mcmeta")["pack"]["pack_format"] == 46

    def test_info(self, pack_zip, capsys):
        assert main(["--pack", str(pack_zip), "info"]) == 0
        out = capsys.readouterr().out
        assert "Name:        pack" in out
        assert "34 (Java 1.21 - 1.21.3)" in out

    def test_validate(self, pack_zip, capsys):
        assert main(["--pack", str(pack_zip), "validate"]) == 0
        assert "OK:" in capsys.readouterr().out

    def test_settings(self, pack_zip):
        assert main(["--pack", str(pack_zip), "settings", "--pack-format", "22", "--description", "x"]) == 0
        pack = read_structured(load_pack(pack_zip).store, "pack.mcmeta")["pack"]
        assert pack == {"pack_format": 22, "description": "x"}

    def test_missing_pack(self, tmp_path, capsys):
        assert main(["--pack", str(tmp_path / "nope.zip"), "info"]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_pack_option_required(self, capsys):
        assert main(["info"]) == 1
        assert "--pack is required" in capsys.readouterr().err


class TestCustomModelDataCommands:
    """Test cmd add/list/remove and conversion."""

    def test_add_list_remove(self, pack_zip, texture, capsys):
        assert main(["--pack", str(pack_zip), "cmd", "add", "diamond_sword", "1", str(texture)]) == 0
        store = load_pack(pack_zip).store
        assert store.get("assets/mrwm/textures/item/diamond_sword_cmd_1.png") == texture.read_bytes()

        capsys.readouterr()
        assert main(["--pack", str(pack_zip), "cmd", "list"]) == 0
        assert "mrwm:item/diamond_sword_cmd_1" in capsys.readouterr().out

        assert main(["--pack", str(pack_zip), "cmd", "remove", "diamond_sword", "1"]) == 0
        assert not load_pack(pack_zip).store.contains("assets/mrwm/textures/item/diamond_sword_cmd_1.png")

    def test_namespace_option(self, pack_zip, texture):
        assert main(["--pack", str(pack_zip), "--namespace", "studio", "cmd", "add", "stick", "3", str(texture)]) == 0
        assert load_pack(pack_zip).store.contains("assets/studio/models/item/stick_cmd_3.json")

    def test_invalid_tag(self, pack_zip, texture, capsys):
        assert main(["--pack", str(pack_zip), "cmd", "add", "stick", "0", str(texture)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_texture_file(self, pack_zip, tmp_path, capsys):
        assert main(["--pack", str(pack_zip), "cmd", "add", "stick", "1", str(tmp_path / "none.png")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_output_option_leaves_source(self, pack_zip, texture, tmp_path):
        output = tmp_path / "edited.zip"
        assert main(["--pack", str(pack_zip), "--output", str(output), "cmd", "add", "stick", "1", str(texture)]) == 0
        assert not load_pack(pack_zip).store.contains("assets/minecraft/models/item/stick.json")
        assert load_pack(output).store.contains("assets/minecraft/models/item/stick.json")

    def test_convert(self, pack_zip, texture, capsys):
        main(["--pack", str(pack_zip), "cmd", "add", "diamond_sword", "1", str(texture)])
        capsys.readouterr()
        assert main(["--pack", str(pack_zip), "convert", "--to", "46"]) == 0
        assert "pack_format 34 -> 46" in capsys.readouterr().out
        definition = read_structured(load_pack(pack_zip).store, "assets/minecraft/items/diamond_sword.json")
        assert definition["model"]["entries"][0]["threshold"] == 1

    def test_upgrade(self, pack_zip):
        assert main(["--pack", str(pack_zip), "upgrade"]) == 0
        assert read_structured(load_pack(pack_zip).store, "pack.mcmeta")["pack"]["pack_format"] == 64


class TestOtherCommands:
    """Test glyph, sound, document, texture, mix and analyze commands."""

    def test_glyph_add_list_remove(self, pack_zip, texture, capsys):
        assert main(["--pack", str(pack_zip), "glyph", "add", str(texture)]) == 0
        assert "U+E200" in capsys.readouterr().out
        assert main(["--pack", str(pack_zip), "glyph", "list"]) == 0
        assert "minecraft:font/glyph_E200" in capsys.readouterr().out
        assert main(["--pack", str(pack_zip), "glyph", "remove", "E200"]) == 0
        assert not load_pack(pack_zip).store.contains("assets/minecraft/textures/font/glyph_E200.png")

    def test_sound_add_and_show(self, pack_zip, tmp_path, capsys):
        ogg = tmp_path / "horn.ogg"
        ogg.write_bytes(b"OggS")
        assert main(["--pack", str(pack_zip), "sound", "add", "custom.horn", str(ogg)]) == 0
        capsys.readouterr()
        assert main(["--pack", str(pack_zip), "sound", "list", "custom.horn"]) == 0
        event = json.loads(capsys.readouterr().out)
        assert event["sounds"][0]["name"] == "minecraft:custom/horn"
        assert main(["--pack", str(pack_zip), "sound", "remove", "custom.horn"]) == 0
        assert main(["--pack", str(pack_zip), "sound", "remove", "custom.horn"]) == 1

    def test_doc_set_show_unset(self, pack_zip, capsys):
        args = ["--pack", str(pack_zip), "doc"]
        assert main(args + ["set", "pack.mcmeta", "--path", "pack.pack_format", "--value", "46"]) == 0
        capsys.readouterr()
        assert main(args + ["show", "pack.mcmeta", "--path", "pack.pack_format"]) == 0
        assert capsys.readouterr().out.strip() == "46"
        assert main(args + ["unset", "pack.mcmeta", "--path", "pack.description"]) == 0
        assert "description" not in read_structured(load_pack(pack_zip).store, "pack.mcmeta")["pack"]

    def test_texture_replace(self, pack_zip, texture):
        assert main(["--pack", str(pack_zip), "texture", "replace", "item/stick", str(texture)]) == 0
        assert load_pack(pack_zip).store.contains("assets/minecraft/textures/item/stick.png")

    def test_directory_pack(self, tmp_path, texture):
        directory = tmp_path / "unpacked"
        directory.mkdir()
        assert main(["--pack", str(directory), "new"]) == 0
        assert (directory / "pack.mcmeta").exists()
        assert main(["--pack", str(directory), "cmd", "add", "apple", "2", str(texture)]) == 0
        assert (directory / "assets" / "mrwm" / "textures" / "item" / "apple_cmd_2.png").exists()

    def test_mix(self, tmp_path, capsys):
        first, second, merged = tmp_path / "a.zip", tmp_path / "b.zip", tmp_path / "m.zip"
        assert main(["--pack", str(first), "new", "--description", "first"]) == 0
        assert main(["--pack", str(second), "new", "--description", "second"]) == 0
        capsys.readouterr()
        assert main(["--output", str(merged), "mix", "merged", str(first), str(second)]) == 0
        assert "pack.mcmeta: a < b" in capsys.readouterr().out
        assert read_structured(load_pack(merged).store, "pack.mcmeta")["pack"]["description"] == "second"

    def test_analyze(self, pack_zip, capsys):
        assert main(["--pack", str(pack_zip), "analyze", "stats", "--json"]) == 0
        stats = json.loads(capsys.readouterr().out)
        assert stats["totalFiles"] == len(load_pack(pack_zip).store)
        assert main(["--pack", str(pack_zip), "analyze", "duplicates"]) == 0
        assert main(["--pack", str(pack_zip), "analyze", "unused"]) == 0
