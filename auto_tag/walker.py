"""Directory traversal that finds manifests by exact filename."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from .ecosystems import ECOSYSTEMS_BY_FILENAME, EcosystemSpec

WalkErrorHandler = Callable[[OSError], None]


def iter_manifests(
    paths: Iterable[Path], on_error: WalkErrorHandler
) -> Iterator[tuple[Path, EcosystemSpec]]:
    """Lazily yield every manifest found under the given roots.

    Each root is walked recursively without following directory symlinks.
    Entries within a directory are visited in sorted order. A root that is
    itself a manifest file is yielded directly.

    Args:
        paths: Root directories (or files) to scan, in order.
        on_error: Called with the OSError for every entry that cannot be
            accessed. The walk continues after it returns.
    """
    for root in paths:
        root = Path(root)
        try:
            mode = root.stat().st_mode
        except OSError as exc:
            on_error(exc)
            continue

        if stat.S_ISREG(mode):
            spec = ECOSYSTEMS_BY_FILENAME.get(root.name)
            if spec is not None:
                yield root, spec
            continue

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                spec = ECOSYSTEMS_BY_FILENAME.get(filename)
                if spec is not None:
                    yield Path(dirpath) / filename, spec
