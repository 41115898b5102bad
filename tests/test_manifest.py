"""Tests for auto_tag.manifest."""

from __future__ import annotations

from pathlib import Path

import pytest

from auto_tag.errors import ManifestParseError, ManifestReadError
from auto_tag.manifest import Document, ManifestFormat, load_document


class TestDocumentGet:
    def test_nested_toml_path(self) -> None:
        doc = Document.from_toml(
            '[package]\nname = "foo"\n\n[package.metadata.auto-tag]\nenabled = true\n'
        )
        assert doc.get(["package", "name"]) == "foo"
        assert doc.get(["package", "metadata", "auto-tag", "enabled"]) is True

    def test_toml_values_are_plain_python(self) -> None:
        doc = Document.from_toml('[tool.poetry]\nversion = "1.0.0"\n')
        value = doc.get(["tool", "poetry", "version"])
        assert type(value) is str

    def test_json_path(self) -> None:
        doc = Document.from_json('{"autoTag": {"enabled": true}, "name": "x"}')
        assert doc.get(["autoTag", "enabled"]) is True
        assert doc.get(["name"]) == "x"

    def test_missing_key_returns_none(self) -> None:
        doc = Document.from_json('{"autoTag": {}}')
        assert doc.get(["autoTag", "enabled"]) is None
        assert doc.get(["nope", "enabled"]) is None

    def test_non_mapping_intermediate_returns_none(self) -> None:
        doc = Document.from_json('{"autoTag": true}')
        assert doc.get(["autoTag", "enabled"]) is None

    def test_non_object_json_root(self) -> None:
        doc = Document.from_json("[1, 2, 3]")
        assert doc.get(["name"]) is None

    def test_empty_path_returns_root(self) -> None:
        doc = Document.from_json('{"a": 1}')
        assert doc.get([]) == {"a": 1}


class TestParseErrors:
    def test_invalid_toml(self) -> None:
        with pytest.raises(ManifestParseError, match="invalid TOML"):
            Document.from_toml("[package\nname = ")

    def test_invalid_json(self) -> None:
        with pytest.raises(ManifestParseError, match="invalid JSON"):
            Document.from_json("{not json")


class TestLoadDocument:
    def test_loads_toml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "Cargo.toml"
        path.write_text('[package]\nname = "foo"\n')
        doc = load_document(path, ManifestFormat.TOML)
        assert doc.get(["package", "name"]) == "foo"

    def test_loads_json_file(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "foo"}')
        doc = load_document(path, ManifestFormat.JSON)
        assert doc.get(["name"]) == "foo"

    def test_missing_file_raises_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError):
            load_document(tmp_path / "Cargo.toml", ManifestFormat.TOML)

    def test_directory_raises_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestReadError):
            load_document(tmp_path, ManifestFormat.JSON)
