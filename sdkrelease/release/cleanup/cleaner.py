# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Version-targeted cleanup of generator output.

Before an SDK is regenerated for one API version, that version's output
directory is deleted so stale files can't survive into the new build. Only the
named directory is removed; sibling API versions are never touched.

A missing directory is not an error: the generator will create it.
"""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from sdkrelease.logging.logger import get_logger
from sdkrelease.utils.paths import validate_entry_within_project

_logger: logging.Logger = get_logger(__name__)


@dataclass(frozen=True)
class CleanResult:
    """Outcome of a cleanup operation."""

    target: Path
    removed: bool
    freed_bytes: int


def _count_dir_size(path: Path) -> int:
    """Recursively sum the size of all files in a directory."""
    total = 0
    try:
        for f in path.rglob("*"):
            if f.is_file():
                try:
                    total += f.stat().st_size
                except OSError:
                    pass
    except OSError:
        pass
    return total


def clean_version_directory(
    project_root: Path,
    target_dir: str,
    dry_run: bool = False,
) -> CleanResult:
    """
    Delete one version directory under the project root.

    Args:
        project_root: Root of the SDK repository.
        target_dir: Directory to delete, relative to project_root (e.g. "v20250224").
        dry_run: If True, report what would be removed without deleting.

    Returns:
        CleanResult describing what happened.

    Raises:
        ValueError: target_dir is empty, escapes the project root, or is the root itself.
        OSError: The directory exists but could not be removed.
    """
    if not target_dir or not target_dir.strip():
        raise ValueError(
            "Version directory parameter required. Usage: sdkrelease clean <version_dir>"
        )

    target = validate_entry_within_project(project_root / target_dir.strip(), project_root)
    if target == project_root.resolve():
        raise ValueError(f"Refusing to delete the project root: {project_root}")

    if not target.exists() and not target.is_symlink():
        _logger.info(
            "Directory not found (will be created during generation)",
            extra={"path": str(target)},
        )
        return CleanResult(target=target, removed=False, freed_bytes=0)

    if target.is_symlink():
        freed_bytes = 0
    elif target.is_dir():
        freed_bytes = _count_dir_size(target)
    else:
        freed_bytes = target.stat().st_size

    if dry_run:
        _logger.info(
            "Dry run: would delete",
            extra={"path": str(target), "freed_bytes": freed_bytes},
        )
        return CleanResult(target=target, removed=False, freed_bytes=freed_bytes)

    # A symlinked version directory is unlinked; the directory it points at stays.
    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
    else:
        target.unlink()

    _logger.info("Deleted", extra={"path": str(target), "freed_bytes": freed_bytes})
    return CleanResult(target=target, removed=True, freed_bytes=freed_bytes)
