# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path utilities for the release tools.

Commands receive paths from workflow inputs, so anything that deletes or
rewrites files first makes sure the path stays inside the project root.
"""

import os
from pathlib import Path


def resolve_under_root(relative: str | Path, project_root: Path) -> Path:
    """
    Join a possibly-relative path onto the project root.

    Absolute paths are returned unchanged; relative ones are anchored at
    `project_root`.
    """
    candidate = Path(relative)
    if candidate.is_absolute():
        return candidate
    return project_root / candidate


def validate_path_within_project(target: Path, project_root: Path) -> Path:
    """
    Make sure a path doesn't escape the project directory.

    Both paths are resolved to absolute form before comparing, so tricks like
    ../../etc get caught.

    Args:
        target: The path to validate.
        project_root: The project root directory.

    Returns:
        The resolved absolute path if it's safe.

    Raises:
        ValueError: If the path escapes the project root.
    """
    resolved_target = target.resolve()
    resolved_root = project_root.resolve()

    if not resolved_target.is_relative_to(resolved_root):
        raise ValueError(
            f"Path '{target}' resolves to '{resolved_target}' which is outside "
            f"the project root '{resolved_root}'. This is not allowed."
        )

    return resolved_target


def validate_entry_within_project(target: Path, project_root: Path) -> Path:
    """
    Like validate_path_within_project, but a symlink in the last component is
    not followed.

    Use this before deleting: the returned path names the entry itself, so a
    link is removed as a link and its target is left alone. `..` segments are
    collapsed first and the parent directory is resolved as usual.
    """
    normalized = Path(os.path.normpath(target.absolute()))
    resolved_root = project_root.resolve()
    if normalized.resolve() == resolved_root:
        return resolved_root

    parent = validate_path_within_project(normalized.parent, project_root)
    return parent / normalized.name
