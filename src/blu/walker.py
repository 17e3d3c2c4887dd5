# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Filesystem traversal yielding candidate manifest files."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .constants import HIDDEN_PREFIX, MANIFEST_EXTENSION
from .errors import ManifestIOError

LOGGER = logging.getLogger(__name__)


def is_hidden(path: Path, depth: int) -> bool:
    """Return whether ``path`` is pruned by the dot-prefix visibility rule.

    Args:
        path: Directory or file under consideration.
        depth: Distance from the traversal root; the root itself is depth 0.

    Returns:
        bool: ``True`` if ``path`` should be excluded from traversal.
    """

    return depth > 0 and path.name.startswith(HIDDEN_PREFIX)


def is_manifest_candidate(path: Path) -> bool:
    """Return ``True`` when ``path`` carries the manifest file extension."""

    return path.suffix == MANIFEST_EXTENSION


@dataclass(frozen=True, slots=True)
class ManifestWalker:
    """Traverse a directory tree collecting manifest files.

    Traversal uses an explicit stack of pending directories. Entries within a
    directory are visited in sorted order; files are yielded before the
    directory's children are descended. Symlinked directories are not followed.
    """

    root: Path
    exclude: Path | None = None

    def __iter__(self) -> Iterator[Path]:
        return self.walk()

    def walk(self) -> Iterator[Path]:
        """Yield manifest paths under :attr:`root`.

        Yields:
            Path: Files ending in ``.json`` outside hidden directories, excluding
            the update feed.

        Raises:
            ManifestIOError: If a directory in the tree cannot be listed.
        """

        excluded = self.exclude.resolve() if self.exclude is not None else None
        pending: list[tuple[Path, int]] = [(self.root, 0)]
        while pending:
            directory, depth = pending.pop()
            try:
                with os.scandir(directory) as iterator:
                    entries = sorted(iterator, key=lambda entry: entry.name)
            except OSError as exc:
                raise ManifestIOError(f"unable to list directory ({exc})", path=directory) from exc
            children: list[tuple[Path, int]] = []
            for entry in entries:
                path = Path(entry.path)
                if is_hidden(path, depth + 1):
                    continue
                if entry.is_dir(follow_symlinks=False):
                    children.append((path, depth + 1))
                    continue
                if not entry.is_file() or not is_manifest_candidate(path):
                    continue
                if excluded is not None and path.resolve() == excluded:
                    LOGGER.debug("skipping update feed %s", path)
                    continue
                yield path
            pending.extend(reversed(children))


def enumerate_manifests(root: Path, exclude: Path | None = None) -> Iterator[Path]:
    """Return a lazy iterator over manifest files under ``root``."""

    return ManifestWalker(root=root, exclude=exclude).walk()


__all__ = ["ManifestWalker", "enumerate_manifests", "is_hidden", "is_manifest_candidate"]
