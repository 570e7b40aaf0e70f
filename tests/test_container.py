"""
Tests for zip and directory pack containers
"""
import io
import zipfile

import pytest

from resourcepack_cli.errors import ContainerError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.container import (
    decode_archive,
    encode_archive,
    load_pack,
    save_directory,
    save_pack,
)
from resourcepack_cli.persistence.store import Store


def _zip(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


class TestArchiveCodec:
    """Test zip encoding and decoding."""

    def test_round_trip(self):
        store = Store.from_mapping({
            "pack.mcmeta": b'{"pack": {}}',
            "assets/minecraft/textures/item/a.png": b"\x89PNG\x00\xff",
        })
        assert decode_archive(encode_archive(store)) == store

    def test_directory_entries_and_paths_normalized(self):
        data = _zip([
            ("assets/", b""),
            ("./assets/minecraft/x.png", b"x"),
            ("/pack.mcmeta", b"{}"),
        ])
        store = decode_archive(data)
        assert sorted(store.keys()) == ["assets/minecraft/x.png", "pack.mcmeta"]

    def test_encoded_archive_is_deflated(self):
        data = encode_archive(Store.from_mapping({"a.txt": b"a" * 1000}))
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.getinfo("a.txt").compress_type == zipfile.ZIP_DEFLATED

    def test_parent_segment_entries_skipped(self):
        """Entries that climb out of the pack root never reach the store."""
        data = _zip([
            ("pack.mcmeta", b"{}"),
            ("../escaped.txt", b"x"),
            ("assets/../../escaped.png", b"x"),
        ])
        assert decode_archive(data).keys() == ["pack.mcmeta"]

    @pytest.mark.parametrize("data", [b"", b"not a zip", b"PK\x03\x04broken"])
    def test_corrupt_archive(self, data):
        with pytest.raises(ContainerError):
            decode_archive(data)


class TestPackFiles:
    """Test loading and saving packs on disk."""

    def test_save_and_load_zip(self, tmp_path):
        package = Package(name="demo", store=Store.from_mapping({"pack.mcmeta": b"{}"}))
        target = tmp_path / "out" / "demo.zip"
        save_pack(package, target)

        assert target.exists()
        assert not target.with_suffix(".zip.tmp").exists()
        loaded = load_pack(target)
        assert loaded.name == "demo"
        assert loaded.store == package.store

    def test_load_directory(self, tmp_path):
        (tmp_path / "assets" / "minecraft").mkdir(parents=True)
        (tmp_path / "assets" / "minecraft" / "a.png").write_bytes(b"a")
        (tmp_path / "pack.mcmeta").write_bytes(b"{}")
        loaded = load_pack(tmp_path)
        assert sorted(loaded.store.keys()) == ["assets/minecraft/a.png", "pack.mcmeta"]
        assert loaded.name == tmp_path.name

    def test_missing_path(self, tmp_path):
        with pytest.raises(ContainerError):
            load_pack(tmp_path / "missing.zip")

    def test_save_directory_mirrors_store(self, tmp_path):
        (tmp_path / "stale.txt").write_bytes(b"old")
        package = Package(name="d", store=Store.from_mapping({"assets/a/b.json": b"{}", "pack.mcmeta": b"{}"}))
        save_directory(package, tmp_path)
        assert not (tmp_path / "stale.txt").exists()
        assert (tmp_path / "assets" / "a" / "b.json").read_bytes() == b"{}"
        assert load_pack(tmp_path).store == package.store

    def test_zip_with_parent_segments_stays_inside(self, tmp_path):
        """Loading and re-saving a crafted archive writes only inside the target."""
        archive = tmp_path / "crafted.zip"
        archive.write_bytes(_zip([("pack.mcmeta", b"{}"), ("../escaped.txt", b"x")]))
        out = tmp_path / "out"
        save_directory(load_pack(archive), out)
        assert not (tmp_path / "escaped.txt").exists()
        assert sorted(p.name for p in out.iterdir()) == ["pack.mcmeta"]

    def test_save_directory_refuses_symlink_escape(self, tmp_path):
        """A store path resolving through a symlink outside the target is refused."""
        outside = tmp_path / "outside"
        outside.mkdir()
        out = tmp_path / "out"
        out.mkdir()
        (out / "assets").symlink_to(outside, target_is_directory=True)
        (out / "keep.txt").write_bytes(b"keep")
        package = Package(name="d", store=Store.from_mapping({"assets/x.png": b"x"}))

        with pytest.raises(ContainerError):
            save_directory(package, out)
        assert list(outside.iterdir()) == []
        assert (out / "keep.txt").exists()
