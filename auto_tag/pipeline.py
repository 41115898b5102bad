"""Tagging pipeline: walk → load → extract → check → resolve → tag.

For every manifest found under the configured roots:
1. Load and parse the manifest
2. Extract the package, stopping silently if it did not opt in
3. Skip packages whose release tag already exists
4. Resolve the commit to tag (``--commit`` or HEAD)
5. Report the tag in dry-run mode, or create it

Manifests are processed one at a time in discovery order. Any failure is
scoped to its manifest: it is reported and the walk moves on.
"""

from __future__ import annotations

from pathlib import Path

from .ecosystems import EcosystemSpec, extract_package
from .errors import (
    CommitNotFoundError,
    ManifestError,
    ManifestParseError,
    ManifestReadError,
    RepositoryError,
    TagLookupError,
)
from .manifest import load_document
from .models import (
    ManifestOutcome,
    ManifestResult,
    PackageDescriptor,
    RunConfig,
    RunSummary,
    TagRequest,
)
from .repository import TagRepository
from .shell import error, step
from .walker import iter_manifests


def process_package(
    package: PackageDescriptor,
    repo: TagRepository,
    config: RunConfig,
    manifest_path: Path,
) -> ManifestResult:
    """Create the release tag for a package unless it already exists.

    Raises:
        TagLookupError: If the existing tags cannot be listed.
        CommitNotFoundError: If the commit to tag cannot be resolved.
        TagCreationError: If the repository rejects the tag.
    """
    request = TagRequest.for_package(package)
    tag = request.tag_name

    if repo.tag_exists(tag):
        step(f'tag "{tag}" already exists, skipping...')
        return ManifestResult(
            path=manifest_path, outcome=ManifestOutcome.TAG_EXISTS, tag_name=tag
        )

    commit = repo.resolve_commit(config.commit)

    if config.dry_run:
        step(
            f'would create tag "{tag}" for "{commit.sha}" with message '
            f'"{request.message}" as {config.git_user_name} ({config.git_user_email})'
        )
        return ManifestResult(
            path=manifest_path, outcome=ManifestOutcome.DRY_RUN_REPORTED, tag_name=tag
        )

    repo.create_annotated_tag(
        tag,
        commit,
        request.message,
        config.git_user_name,
        config.git_user_email,
    )
    step(f'created tag "{tag}"')
    return ManifestResult(
        path=manifest_path, outcome=ManifestOutcome.TAG_CREATED, tag_name=tag
    )


def _failure(
    path: Path, outcome: ManifestOutcome, exc: Exception, tag: str | None = None
) -> ManifestResult:
    error(f"failed to process {path}: {exc}")
    return ManifestResult(path=path, outcome=outcome, tag_name=tag, error=str(exc))


def process_manifest(
    path: Path,
    spec: EcosystemSpec,
    repo: TagRepository,
    config: RunConfig,
) -> ManifestResult:
    """Run one manifest through the pipeline.

    Every manifest-level error is caught here, reported with the manifest
    path, and turned into a failed result so the caller can continue.
    """
    try:
        document = load_document(path, spec.format)
    except (ManifestReadError, ManifestParseError) as exc:
        return _failure(path, ManifestOutcome.LOAD_FAILED, exc)

    try:
        package = extract_package(document, spec, path)
    except ManifestError as exc:
        return _failure(path, ManifestOutcome.EXTRACT_FAILED, exc)

    if package is None:
        return ManifestResult(path=path, outcome=ManifestOutcome.SKIPPED_DISABLED)

    tag = TagRequest.for_package(package).tag_name
    try:
        return process_package(package, repo, config, path)
    except TagLookupError as exc:
        return _failure(path, ManifestOutcome.TAG_LOOKUP_FAILED, exc, tag)
    except CommitNotFoundError as exc:
        return _failure(path, ManifestOutcome.COMMIT_RESOLVE_FAILED, exc, tag)
    except RepositoryError as exc:
        return _failure(path, ManifestOutcome.TAG_CREATE_FAILED, exc, tag)


def run_auto_tag(config: RunConfig, repo: TagRepository) -> RunSummary:
    """Walk every configured root and tag each opted-in package.

    Args:
        config: Settings for this run.
        repo: Opened tag repository, shared by all manifests.

    Returns:
        Per-manifest results in discovery order plus the number of
        directory entries that could not be accessed.
    """
    summary = RunSummary()

    def on_walk_error(exc: OSError) -> None:
        summary.walk_errors += 1
        error(f"cannot access file: {exc}")

    for path, spec in iter_manifests(config.paths, on_walk_error):
        summary.results.append(process_manifest(path, spec, repo, config))

    return summary
