"""Shell and git utilities.

Provides a thin wrapper around subprocess calls to the git command line,
plus the output helpers used to report progress and failures.
"""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path


def git(
    *args: str,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    check: bool = True,
) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "tag", "--list").
        cwd: Directory to run git in. Defaults to the current directory.
        env: Extra environment variables layered over os.environ.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., rev-parse).

    Returns:
        Stripped stdout from the git command.

    Raises:
        subprocess.CalledProcessError: If check is True and git fails.
    """
    full_env = {**os.environ, **env} if env else None
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        env=full_env,
        capture_output=True,
        text=True,
        check=check,
    )
    return result.stdout.strip()


def step(msg: str) -> None:
    """Print a progress line for the current manifest."""
    print(msg)


def error(msg: str) -> None:
    """Print a recoverable error to stderr without stopping the run."""
    print(msg, file=sys.stderr)

