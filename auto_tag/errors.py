"""Exceptions raised while discovering manifests and creating tags.

Everything below ``AutoTagError`` is scoped to a single manifest and is
reported without stopping the run, except ``RepositoryNotFoundError``
which aborts before any manifest is processed.
"""

from __future__ import annotations


class AutoTagError(Exception):
    """Base class for all auto-tag errors."""


class ManifestError(AutoTagError):
    """A manifest could not be turned into a package descriptor."""


class ManifestReadError(ManifestError):
    """The manifest file could not be read."""


class ManifestParseError(ManifestError):
    """The manifest file is not valid TOML or JSON."""


class FieldNotFoundError(ManifestError):
    """Auto-tagging is enabled but a required field is missing."""

    def __init__(self, field: str) -> None:
        super().__init__(f"package {field} not found")
        self.field = field


class RepositoryError(AutoTagError):
    """The git repository rejected or could not answer a request."""


class RepositoryNotFoundError(RepositoryError):
    """No git repository exists at the given location."""


class CommitNotFoundError(RepositoryError):
    """A commit SHA or HEAD could not be resolved to a commit."""


class TagLookupError(RepositoryError):
    """The existing tags could not be listed."""


class TagCreationError(RepositoryError):
    """git refused to create the tag."""
