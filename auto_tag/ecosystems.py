"""Ecosystem descriptors and package extraction.

Each supported packaging convention is described as data: the manifest
filename, its format, the key paths of the opt-in flag, name and version,
and whether the name must be normalized before it goes into a tag name.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .errors import FieldNotFoundError
from .manifest import Document, ManifestFormat
from .models import Ecosystem, PackageDescriptor


class EcosystemSpec(BaseModel):
    """How to find the auto-tag settings in one kind of manifest.

    Attributes:
        ecosystem: Which packaging convention this describes.
        filename: Exact manifest filename matched during the walk.
        format: Structured format of the manifest.
        enabled_path: Key path of the boolean opt-in flag.
        name_path: Key path of the package name.
        version_path: Key path of the package version.
        normalize_name: Strip ``@`` and replace ``/`` with ``__`` (npm scopes).
    """

    model_config = ConfigDict(frozen=True)

    ecosystem: Ecosystem
    filename: str
    format: ManifestFormat
    enabled_path: tuple[str, ...]
    name_path: tuple[str, ...]
    version_path: tuple[str, ...]
    normalize_name: bool = False


CARGO = EcosystemSpec(
    ecosystem=Ecosystem.CARGO,
    filename="Cargo.toml",
    format=ManifestFormat.TOML,
    enabled_path=("package", "metadata", "auto-tag", "enabled"),
    name_path=("package", "name"),
    version_path=("package", "version"),
)

NPM = EcosystemSpec(
    ecosystem=Ecosystem.NPM,
    filename="package.json",
    format=ManifestFormat.JSON,
    enabled_path=("autoTag", "enabled"),
    name_path=("name",),
    version_path=("version",),
    normalize_name=True,
)

PEP621_POETRY = EcosystemSpec(
    ecosystem=Ecosystem.PEP621_POETRY,
    filename="pyproject.toml",
    format=ManifestFormat.TOML,
    enabled_path=("tool", "auto-tag", "enabled"),
    name_path=("tool", "poetry", "name"),
    version_path=("tool", "poetry", "version"),
)

ECOSYSTEMS: tuple[EcosystemSpec, ...] = (CARGO, NPM, PEP621_POETRY)
ECOSYSTEMS_BY_FILENAME: dict[str, EcosystemSpec] = {e.filename: e for e in ECOSYSTEMS}


def normalize_npm_name(name: str) -> str:
    """Make a scoped npm name safe for a tag: ``@scope/pkg`` → ``scope__pkg``."""
    return name.replace("@", "").replace("/", "__")


def _required_string(document: Document, path: tuple[str, ...], field: str) -> str:
    value = document.get(path)
    if not isinstance(value, str) or not value:
        raise FieldNotFoundError(field)
    return value


def extract_package(
    document: Document, spec: EcosystemSpec, manifest_path: Path | None = None
) -> PackageDescriptor | None:
    """Extract the package a manifest describes, if it opted in to auto-tagging.

    Returns None when the opt-in flag is absent or anything but ``true``.

    Raises:
        FieldNotFoundError: If auto-tagging is enabled but the name or
            version is missing, empty, or not a string.
    """
    if document.get(spec.enabled_path) is not True:
        return None

    name = _required_string(document, spec.name_path, "name")
    if spec.normalize_name:
        name = normalize_npm_name(name)
    version = _required_string(document, spec.version_path, "version")

    return PackageDescriptor(
        ecosystem=spec.ecosystem,
        name=name,
        version=version,
        auto_tag_enabled=True,
        manifest_path=manifest_path,
    )
