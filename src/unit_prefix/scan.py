"""Measure apparent disk usage of a directory tree.

Sizes are apparent sizes (``st_size``) taken with ``lstat``, so symbolic
links count as themselves and are never followed.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeEntry:
    """Total size of one direct child of a scanned directory."""

    path: Path
    size: int
    is_dir: bool


def disk_size(path: Path) -> int:
    """Return the apparent size of *path* in bytes.

    Directories are summed over their whole subtree, walked with an
    explicit stack so depth is not bounded by the recursion limit.
    Entries that cannot be read are logged and counted as zero.

    Args:
        path: File, directory or symlink to measure.

    Returns:
        Total size in bytes.
    """
    try:
        stat = path.lstat()
    except OSError as exc:
        logger.warning("Cannot stat %s: %s", path, exc)
        return 0

    if not path.is_dir() or path.is_symlink():
        return stat.st_size

    total = 0
    pending = [path]
    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as exc:
            logger.warning("Cannot list %s: %s", directory, exc)
            continue

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    pending.append(Path(entry.path))
                else:
                    total += entry.stat(follow_symlinks=False).st_size
            except OSError as exc:
                logger.warning("Cannot stat %s: %s", entry.path, exc)
    return total


def scan_directory(root: Path) -> list[SizeEntry]:
    """Measure every direct child of *root*.

    Args:
        root: Directory to scan.

    Returns:
        One ``SizeEntry`` per child, largest first; ties are ordered by
        name.

    Raises:
        NotADirectoryError: If *root* is not a directory.
        OSError: If *root* cannot be listed.
    """
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    entries: list[SizeEntry] = []
    for child in root.iterdir():
        size = disk_size(child)
        is_dir = child.is_dir() and not child.is_symlink()
        logger.debug("%s: %d bytes", child, size)
        entries.append(SizeEntry(path=child, size=size, is_dir=is_dir))

    entries.sort(key=lambda entry: (-entry.size, entry.path.name))
    return entries
