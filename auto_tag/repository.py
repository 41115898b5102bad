"""Tag storage backed by a local git repository.

``TagRepository`` is the contract the tagging pipeline depends on; the
pipeline never touches git directly, so tests can hand it an in-memory
implementation. ``GitTagRepository`` implements the contract with the git
command line. No operation talks to a remote.
"""

from __future__ import annotations

import re
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from .errors import (
    CommitNotFoundError,
    RepositoryNotFoundError,
    TagCreationError,
    TagLookupError,
)
from .models import Commit
from .shell import git

_SHA_RE = re.compile(r"^(?:[0-9a-fA-F]{40}|[0-9a-fA-F]{64})$")


class TagRepository(ABC):
    """Query and create annotated tags in a version-control store."""

    @abstractmethod
    def tag_exists(self, name: str) -> bool:
        """Return True if a tag with exactly this name exists."""

    @abstractmethod
    def resolve_commit(self, sha: str | None = None) -> Commit:
        """Resolve a SHA, or the current HEAD when None, to a commit.

        Raises:
            CommitNotFoundError: If the SHA or HEAD does not name a commit.
        """

    @abstractmethod
    def create_annotated_tag(
        self,
        name: str,
        commit: Commit,
        message: str,
        author_name: str,
        author_email: str,
    ) -> None:
        """Create an annotated tag pointing at ``commit``.

        Raises:
            TagCreationError: If the store rejects the tag.
        """


def _stderr(exc: subprocess.CalledProcessError) -> str:
    return (exc.stderr or "").strip() or f"git exited with status {exc.returncode}"


class GitTagRepository(TagRepository):
    """TagRepository for the git work tree at ``root``."""

    def __init__(self, root: Path) -> None:
        self.root = root

    @classmethod
    def open(cls, path: Path | str = ".") -> GitTagRepository:
        """Open the repository containing ``path``.

        Raises:
            RepositoryNotFoundError: If ``path`` is not inside a git work tree.
        """
        path = Path(path)
        try:
            toplevel = git("rev-parse", "--show-toplevel", cwd=path)
        except subprocess.CalledProcessError as exc:
            raise RepositoryNotFoundError(
                f"failed to open git repository at {path}: {_stderr(exc)}"
            ) from exc
        except OSError as exc:
            raise RepositoryNotFoundError(
                f"failed to open git repository at {path}: {exc}"
            ) from exc
        return cls(Path(toplevel))

    def tag_exists(self, name: str) -> bool:
        try:
            tags = git("tag", "--list", cwd=self.root)
        except subprocess.CalledProcessError as exc:
            raise TagLookupError(f"failed to list tags: {_stderr(exc)}") from exc
        return name in tags.splitlines()

    def resolve_commit(self, sha: str | None = None) -> Commit:
        if sha is None:
            resolved = git(
                "rev-parse", "--verify", "--quiet", "HEAD^{commit}",
                cwd=self.root,
                check=False,
            )
            if not resolved:
                raise CommitNotFoundError("HEAD does not point to a commit")
            return Commit(sha=resolved)

        # Only full object ids are accepted so that a ref spelled in hex is
        # never resolved in place of the object it looks like.
        if not _SHA_RE.match(sha):
            raise CommitNotFoundError(f"invalid commit sha {sha!r}")

        sha = sha.lower()
        kind = git("cat-file", "-t", sha, cwd=self.root, check=False)
        if not kind:
            raise CommitNotFoundError(f"commit {sha} not found")
        if kind != "commit":
            raise CommitNotFoundError(f"{sha} is a {kind} object, not a commit")
        return Commit(sha=sha)

    def create_annotated_tag(
        self,
        name: str,
        commit: Commit,
        message: str,
        author_name: str,
        author_email: str,
    ) -> None:
        # The tagger identity is taken from the committer environment.
        env = {
            "GIT_COMMITTER_NAME": author_name,
            "GIT_COMMITTER_EMAIL": author_email,
        }
        try:
            git(
                "-c", "tag.gpgSign=false",
                "tag", "--annotate", "--no-sign",
                "--message", message,
                name, commit.sha,
                cwd=self.root,
                env=env,
            )
        except subprocess.CalledProcessError as exc:
            raise TagCreationError(f"failed to create tag {name!r}: {_stderr(exc)}") from exc
