"""Manifest reading utilities.

Loads ``Cargo.toml``, ``pyproject.toml`` (via tomlkit) and ``package.json``
(via json) into a ``Document`` that every ecosystem queries the same way:
by a sequence of keys.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from .errors import ManifestParseError, ManifestReadError


class ManifestFormat(str, Enum):
    TOML = "toml"
    JSON = "json"


class Document:
    """A parsed manifest addressable by key paths.

    ``get(["package", "metadata", "auto-tag", "enabled"])`` returns the
    value at that path, or None if any key along the way is missing or an
    intermediate value is not a table/object.
    """

    def __init__(self, data: Any) -> None:
        self._data = data

    def get(self, path: Sequence[str]) -> Any | None:
        node = self._data
        for key in path:
            if not isinstance(node, Mapping) or key not in node:
                return None
            node = node[key]
        return node

    @classmethod
    def from_toml(cls, text: str) -> Document:
        """Parse TOML text. Items are unwrapped to plain Python values."""
        try:
            return cls(tomlkit.parse(text).unwrap())
        except TOMLKitError as exc:
            raise ManifestParseError(f"invalid TOML: {exc}") from exc

    @classmethod
    def from_json(cls, text: str) -> Document:
        try:
            return cls(json.loads(text))
        except json.JSONDecodeError as exc:
            raise ManifestParseError(f"invalid JSON: {exc}") from exc


def read_manifest(path: Path) -> str:
    """Read the full contents of a manifest file as text."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestReadError(exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise ManifestReadError(f"not valid UTF-8: {exc}") from exc


def load_document(path: Path, fmt: ManifestFormat) -> Document:
    """Read and parse a manifest file.

    Raises:
        ManifestReadError: If the file cannot be read.
        ManifestParseError: If the file is not valid in the given format.
    """
    text = read_manifest(path)
    if fmt is ManifestFormat.JSON:
        return Document.from_json(text)
    return Document.from_toml(text)
