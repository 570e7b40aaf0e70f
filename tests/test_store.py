"""
Tests for the path-addressed store and document access
"""
import pytest

from resourcepack_cli.errors import DocumentDecodeError, InvalidPathError, PathAccessError
from resourcepack_cli.persistence.json_io import (
    dumps_document,
    parse_document,
    read_structured,
    read_structured_strict,
    read_text,
    write_structured,
)
from resourcepack_cli.persistence.json_path import (
    delete_by_path,
    get_by_path,
    parse_path_tokens,
    set_by_path,
)
from resourcepack_cli.persistence.store import Store, iter_paths, normalize_path


class TestNormalizePath:
    """Test path normalization."""

    def test_backslashes_and_leading_slashes(self):
        """Backslashes become slashes and leading slashes are dropped."""
        assert normalize_path("\\assets\\minecraft\\x.png") == "assets/minecraft/x.png"
        assert normalize_path("//pack.mcmeta") == "pack.mcmeta"

    def test_dot_segments_removed(self):
        """`.` segments are removed."""
        assert normalize_path("./assets/./minecraft/x.png") == "assets/minecraft/x.png"

    @pytest.mark.parametrize("raw", ["", "/", "./", "."])
    def test_empty_rejected(self, raw):
        """Paths that normalize to empty are rejected."""
        with pytest.raises(InvalidPathError):
            normalize_path(raw)

    def test_non_string_rejected(self):
        with pytest.raises(InvalidPathError):
            normalize_path(None)

    @pytest.mark.parametrize("raw", ["../escaped.txt", "assets/../../x.png", "a\\..\\b", "assets/minecraft/.."])
    def test_parent_segments_rejected(self, raw):
        """Paths cannot climb out of the pack root."""
        with pytest.raises(InvalidPathError):
            normalize_path(raw)

    def test_store_refuses_parent_segments(self):
        with pytest.raises(InvalidPathError):
            Store().set("assets/../../x.png", b"x")


class TestStore:
    """Test Store behavior."""

    def test_get_set_delete(self):
        """Basic mapping operations normalize their paths."""
        store = Store()
        store.set("/a/b.txt", b"data")
        assert store.get("a/b.txt") == b"data"
        assert store.contains("a\\b.txt")
        store.delete("a/b.txt")
        assert store.get("a/b.txt") is None
        store.delete("missing")  # no-op

    def test_payloads_are_immutable_bytes(self):
        """bytearray payloads are copied into bytes."""
        store = Store()
        payload = bytearray(b"abc")
        store.set("x", payload)
        payload[0] = ord("z")
        assert store.get("x") == b"abc"
        assert isinstance(store.get("x"), bytes)

    def test_rejects_non_bytes(self):
        with pytest.raises(TypeError):
            Store().set("x", "text")

    def test_insertion_order_kept_on_overwrite(self):
        """Overwriting keeps a key's original position."""
        store = Store()
        store.set("b", b"1")
        store.set("a", b"2")
        store.set("b", b"3")
        assert store.keys() == ["b", "a"]

    def test_clone_is_independent(self):
        """Mutating a clone never affects the original, and vice versa."""
        original = Store.from_mapping({"a": b"1"})
        clone = original.clone()
        clone.set("b", b"2")
        original.delete("a")
        assert clone.keys() == ["a", "b"]
        assert original.keys() == []

    def test_keys_snapshot_allows_mutation(self):
        store = Store.from_mapping({"a": b"1", "b": b"2"})
        for path in store.keys():
            store.delete(path)
        assert len(store) == 0

    def test_iter_paths_filters_and_sorts(self):
        store = Store.from_mapping({"z/b.json": b"", "z/a.json": b"", "z/c.png": b"", "y/a.json": b""})
        assert iter_paths(store, prefix="z/", suffixes=(".json",)) == ["z/a.json", "z/b.json"]


class TestDocumentAccess:
    """Test JSON document reads and writes."""

    def test_round_trip_is_byte_identical(self):
        """Rewriting a parsed document yields the same bytes."""
        store = Store()
        write_structured(store, "doc.json", {"b": 1, "a": ["é", {"c": None}]})
        first = store.get("doc.json")
        write_structured(store, "doc.json", read_structured(store, "doc.json"))
        assert store.get("doc.json") == first
        assert first.endswith(b"\n")
        assert "é".encode("utf-8") in first

    def test_keys_keep_insertion_order(self):
        assert dumps_document({"z": 1, "a": 2}).index('"z"') < dumps_document({"z": 1, "a": 2}).index('"a"')

    def test_lenient_documents_parse(self):
        """Comments and trailing commas are accepted through json5."""
        assert parse_document('{\n  // comment\n  "a": 1,\n}') == {"a": 1}

    def test_bom_is_ignored(self):
        assert parse_document('\ufeff{"a": 1}') == {"a": 1}

    def test_read_structured_fails_silently(self):
        """Absent and undecodable documents both read as None."""
        store = Store.from_mapping({"bad.json": b"{not json"})
        assert read_structured(store, "bad.json") is None
        assert read_structured(store, "missing.json") is None

    def test_read_structured_strict_raises(self):
        """Strict reads raise on undecodable content but not on absence."""
        store = Store.from_mapping({"bad.json": b"{not json", "empty.json": b"  "})
        with pytest.raises(DocumentDecodeError):
            read_structured_strict(store, "bad.json")
        assert read_structured_strict(store, "missing.json") is None
        assert read_structured_strict(store, "empty.json") is None

    def test_read_text_decodes_utf8(self):
        store = Store.from_mapping({"a.txt": "héllo".encode("utf-8")})
        assert read_text(store, "a.txt") == "héllo"


class TestJsonPath:
    """Test JSON path editing helpers."""

    def test_parse_tokens(self):
        assert parse_path_tokens("model.entries[0].threshold") == ["model", "entries", 0, "threshold"]

    def test_invalid_syntax(self):
        with pytest.raises(InvalidPathError):
            parse_path_tokens("a[x]")
        with pytest.raises(InvalidPathError):
            parse_path_tokens("a[0")

    def test_set_creates_containers(self):
        document = {}
        set_by_path(document, "pack.description", "hi")
        set_by_path(document, "overrides[0]", {"model": "x"})
        assert document == {"pack": {"description": "hi"}, "overrides": [{"model": "x"}]}

    def test_get_and_delete(self):
        document = {"a": {"b": [1, 2, 3]}}
        assert get_by_path(document, "a.b[1]") == 2
        delete_by_path(document, "a.b[0]")
        assert document == {"a": {"b": [2, 3]}}

    def test_missing_path_raises(self):
        with pytest.raises(PathAccessError):
            get_by_path({"a": 1}, "b")
        with pytest.raises(PathAccessError):
            delete_by_path({"a": {}}, "a.missing")

    def test_delete_missing_branch_leaves_document_unchanged(self):
        """Deleting through absent keys creates nothing."""
        document = {"a": 1}
        with pytest.raises(PathAccessError):
            delete_by_path(document, "b.c[0]")
        assert document == {"a": 1}

    def test_set_index_past_end_raises(self):
        document = {"items": [1]}
        with pytest.raises(PathAccessError):
            set_by_path(document, "items[3]", 4)
        with pytest.raises(PathAccessError):
            set_by_path(document, "items.name", "x")
        assert document == {"items": [1]}
