"""Shared test fixtures."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

import pytest

from auto_tag.errors import CommitNotFoundError, TagCreationError, TagLookupError
from auto_tag.models import Commit, RunConfig
from auto_tag.repository import TagRepository

HEAD_SHA = "a" * 40

requires_git = pytest.mark.skipif(
    shutil.which("git") is None, reason="git is not installed"
)


class FakeTagRepository(TagRepository):
    """In-memory TagRepository recording every tag it is asked to create."""

    def __init__(
        self,
        tags: dict[str, str] | None = None,
        commits: set[str] | None = None,
        head: str | None = HEAD_SHA,
        reject: set[str] | None = None,
        fail_lookup: bool = False,
    ) -> None:
        self.tags = dict(tags or {})
        self.commits = set(commits or set())
        if head is not None:
            self.commits.add(head)
        self.head = head
        self.reject = set(reject or set())
        self.fail_lookup = fail_lookup
        self.created: list[tuple[str, str, str, str, str]] = []

    def tag_exists(self, name: str) -> bool:
        if self.fail_lookup:
            raise TagLookupError("failed to list tags")
        return name in self.tags

    def resolve_commit(self, sha: str | None = None) -> Commit:
        if sha is None:
            if self.head is None:
                raise CommitNotFoundError("HEAD does not point to a commit")
            return Commit(sha=self.head)
        if sha not in self.commits:
            raise CommitNotFoundError(f"commit {sha} not found")
        return Commit(sha=sha)

    def create_annotated_tag(
        self,
        name: str,
        commit: Commit,
        message: str,
        author_name: str,
        author_email: str,
    ) -> None:
        if name in self.reject or name in self.tags:
            raise TagCreationError(f"failed to create tag {name!r}")
        self.tags[name] = commit.sha
        self.created.append((name, commit.sha, message, author_name, author_email))


@pytest.fixture
def fake_repo() -> FakeTagRepository:
    return FakeTagRepository()


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a RunConfig scanning tmp_path, with overridable fields."""

    def _make(**overrides) -> RunConfig:
        values = {
            "git_user_name": "Release Bot",
            "git_user_email": "bot@example.com",
            "paths": (tmp_path,),
        }
        values.update(overrides)
        return RunConfig(**values)

    return _make


def write_cargo(
    directory: Path,
    name: str = "foo",
    version: str | None = "0.1.0",
    enabled: bool | None = True,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    lines = ["[package]", f'name = "{name}"']
    if version is not None:
        lines.append(f'version = "{version}"')
    if enabled is not None:
        lines += ["", "[package.metadata.auto-tag]", f"enabled = {str(enabled).lower()}"]
    path = directory / "Cargo.toml"
    path.write_text("\n".join(lines) + "\n")
    return path


def write_package_json(directory: Path, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "package.json"
    path.write_text(content)
    return path


def write_pyproject(directory: Path, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / "pyproject.toml"
    path.write_text(content)
    return path


def _git(repo: Path, *args: str) -> str:
    env = {
        **os.environ,
        "GIT_AUTHOR_NAME": "Test",
        "GIT_AUTHOR_EMAIL": "test@example.com",
        "GIT_COMMITTER_NAME": "Test",
        "GIT_COMMITTER_EMAIL": "test@example.com",
    }
    result = subprocess.run(
        ["git", *args], cwd=repo, env=env, capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with a single empty commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "--quiet")
    _git(repo, "-c", "commit.gpgSign=false", "commit", "--quiet", "--allow-empty", "-m", "initial")
    return repo


@pytest.fixture
def empty_git_repo(tmp_path: Path) -> Path:
    """Create a git repository without any commits."""
    repo = tmp_path / "empty"
    repo.mkdir()
    _git(repo, "init", "--quiet")
    return repo


def git_output(repo: Path, *args: str) -> str:
    return _git(repo, *args)
