"""CLI entry point for auto-tag."""

from __future__ import annotations

from pathlib import Path

import click
from pydantic import ValidationError

from auto_tag.errors import RepositoryNotFoundError
from auto_tag.models import ManifestOutcome, RunConfig
from auto_tag.pipeline import run_auto_tag
from auto_tag.repository import GitTagRepository


@click.command()
@click.version_option(package_name="auto-tag")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the tags to be created but do not create them.",
)
@click.option(
    "--commit",
    metavar="SHA",
    envvar="AUTO_TAG_COMMIT",
    default=None,
    help="The commit SHA to create the tags for. Uses HEAD by default.",
)
@click.option(
    "--git-user-email",
    metavar="EMAIL",
    envvar="AUTO_TAG_GIT_USER_EMAIL",
    required=True,
    help="Tagger email recorded in each tag.",
)
@click.option(
    "--git-user-name",
    metavar="NAME",
    envvar="AUTO_TAG_GIT_USER_NAME",
    required=True,
    help="Tagger name recorded in each tag.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any manifest could not be processed.",
)
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
def cli(
    dry_run: bool,
    commit: str | None,
    git_user_email: str,
    git_user_name: str,
    strict: bool,
    paths: tuple[Path, ...],
) -> None:
    """Automatically create git tags for Cargo (Cargo.toml), JavaScript
    (package.json), and Python (pyproject.toml) packages.

    PATHS are the directories to search for packages (default: ".").
    """
    try:
        config = RunConfig(
            dry_run=dry_run,
            commit=commit,
            git_user_name=git_user_name,
            git_user_email=git_user_email,
            paths=paths or (Path("."),),
            strict=strict,
        )
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc

    try:
        repo = GitTagRepository.open(Path.cwd())
    except RepositoryNotFoundError as exc:
        raise click.ClickException(str(exc)) from exc

    summary = run_auto_tag(config, repo)

    created = summary.count(ManifestOutcome.TAG_CREATED)
    planned = summary.count(ManifestOutcome.DRY_RUN_REPORTED)
    failed = sum(1 for r in summary.results if r.outcome.failed)
    if dry_run:
        click.echo(f"{planned} tag(s) would be created, {failed} manifest(s) failed")
    else:
        click.echo(f"{created} tag(s) created, {failed} manifest(s) failed")

    if strict and summary.failed:
        raise SystemExit(1)
