"""Data models for auto-tag.

These Pydantic models represent the run configuration and the values that
flow from a discovered manifest to the tag written into the repository.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

TAG_PREFIX = "release"


class Ecosystem(str, Enum):
    """Packaging conventions whose manifests can opt in to auto-tagging."""

    CARGO = "cargo"
    NPM = "npm"
    PEP621_POETRY = "pep621-poetry"


class RunConfig(BaseModel):
    """Immutable settings for one run, built once from the command line.

    Attributes:
        dry_run: Report the tags that would be created without writing them.
        commit: SHA of the commit to tag. HEAD is used when None.
        git_user_name: Tagger name recorded in each annotated tag.
        git_user_email: Tagger email recorded in each annotated tag.
        paths: Root directories to scan for manifests.
        strict: Exit non-zero when any manifest or directory entry failed.
    """

    model_config = ConfigDict(frozen=True)

    dry_run: bool = False
    commit: str | None = None
    git_user_name: str = Field(min_length=1)
    git_user_email: str = Field(min_length=1)
    paths: tuple[Path, ...] = (Path("."),)
    strict: bool = False


class PackageDescriptor(BaseModel):
    """A package that a manifest describes.

    ``name`` is already normalized for use in a tag name.
    """

    ecosystem: Ecosystem
    name: str
    version: str
    auto_tag_enabled: bool = True
    manifest_path: Path | None = None


class TagRequest(BaseModel):
    """The annotated tag to create for a package."""

    tag_name: str
    message: str

    @classmethod
    def for_package(cls, package: PackageDescriptor) -> TagRequest:
        return cls(
            tag_name=f"{TAG_PREFIX}-{package.name}-{package.version}",
            message=f"automatic release tag of {package.name} ({package.version})",
        )


class Commit(BaseModel):
    """A resolved commit object."""

    sha: str


class ManifestOutcome(str, Enum):
    """Terminal state reached by a single manifest."""

    SKIPPED_DISABLED = "skipped-disabled"
    LOAD_FAILED = "load-failed"
    EXTRACT_FAILED = "extract-failed"
    TAG_LOOKUP_FAILED = "tag-lookup-failed"
    TAG_EXISTS = "tag-exists"
    COMMIT_RESOLVE_FAILED = "commit-resolve-failed"
    DRY_RUN_REPORTED = "dry-run-reported"
    TAG_CREATED = "tag-created"
    TAG_CREATE_FAILED = "tag-create-failed"

    @property
    def failed(self) -> bool:
        return self in _FAILED_OUTCOMES


_FAILED_OUTCOMES = frozenset(
    {
        ManifestOutcome.LOAD_FAILED,
        ManifestOutcome.EXTRACT_FAILED,
        ManifestOutcome.TAG_LOOKUP_FAILED,
        ManifestOutcome.COMMIT_RESOLVE_FAILED,
        ManifestOutcome.TAG_CREATE_FAILED,
    }
)


class ManifestResult(BaseModel):
    """What happened to one manifest.

    Attributes:
        path: Location of the manifest file.
        outcome: Terminal state of the manifest.
        tag_name: Tag computed for the package, when extraction succeeded.
        error: Human-readable cause for failed outcomes.
    """

    path: Path
    outcome: ManifestOutcome
    tag_name: str | None = None
    error: str | None = None


class RunSummary(BaseModel):
    """Aggregate result of a run, in discovery order."""

    results: list[ManifestResult] = Field(default_factory=list)
    walk_errors: int = 0

    @property
    def failed(self) -> bool:
        return self.walk_errors > 0 or any(r.outcome.failed for r in self.results)

    def count(self, outcome: ManifestOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)
