"""
Crash-safe file writes.

Everything lands in a sibling ``<name>.tmp`` first and is then renamed
over the destination, so readers see either the old file or the new
one, never a half-written one.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Union

logger = logging.getLogger("sqlite_cloud_backup.fileops")

PathLike = Union[str, Path]


def _tmp_path(path: Path) -> Path:
    return path.with_name(path.name + ".tmp")


def ensure_dir(path: PathLike) -> Path:
    """Create a directory (and its parents) if it does not exist yet."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def atomic_write(path: PathLike, data: bytes) -> None:
    """Write bytes to ``path`` via a temp file and an atomic rename.

    Any existing file at ``path`` is replaced. If the write or the
    rename fails, ``path`` keeps its previous content; the temp file
    may be left behind and is safe to delete.

    Args:
        path: Destination file.
        data: Full file content.

    Raises:
        OSError: If the temp write or the rename fails.
    """
    dest = Path(path)
    tmp_path = _tmp_path(dest)
    tmp_path.write_bytes(data)
    tmp_path.replace(dest)
    logger.debug("Wrote %d bytes to %s", len(data), dest)


def atomic_copy(source: PathLike, destination: PathLike) -> None:
    """Copy ``source`` to ``destination`` with atomic-write semantics.

    Args:
        source: File to copy.
        destination: Target path; replaced in one step.

    Raises:
        OSError: If the source cannot be read or the target written.
    """
    dest = Path(destination)
    tmp_path = _tmp_path(dest)
    shutil.copyfile(source, tmp_path)
    tmp_path.replace(dest)
    logger.debug("Copied %s to %s", source, dest)
