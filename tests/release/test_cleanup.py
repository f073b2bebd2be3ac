# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for version-targeted cleanup.
"""

from pathlib import Path

import pytest

from sdkrelease.release.cleanup.cleaner import clean_version_directory


def _make_version_dir(root: Path, name: str) -> Path:
    target = root / name
    (target / "api").mkdir(parents=True)
    (target / "api" / "index.ts").write_text("export {};\n", encoding="utf-8")
    (target / "package.json").write_text('{"version": "3.0.0"}', encoding="utf-8")
    return target


def test_removes_target_directory(tmp_path: Path):
    """Only the named version directory goes away."""
    target = _make_version_dir(tmp_path, "v20250224")
    sibling = _make_version_dir(tmp_path, "v20111101")

    result = clean_version_directory(tmp_path, "v20250224")

    assert result.removed is True
    assert result.freed_bytes > 0
    assert not target.exists()
    assert sibling.exists()


def test_missing_directory_is_not_an_error(tmp_path: Path):
    """A directory that doesn't exist yet will be created by the generator."""
    result = clean_version_directory(tmp_path, "v20250224")

    assert result.removed is False
    assert result.freed_bytes == 0
    assert result.target == (tmp_path / "v20250224").resolve()


def test_dry_run_keeps_directory(tmp_path: Path):
    target = _make_version_dir(tmp_path, "v20250224")

    result = clean_version_directory(tmp_path, "v20250224", dry_run=True)

    assert result.removed is False
    assert result.freed_bytes > 0
    assert target.exists()


@pytest.mark.parametrize("target_dir", ["", "   "])
def test_empty_target_raises(tmp_path: Path, target_dir: str):
    with pytest.raises(ValueError, match="Version directory parameter required"):
        clean_version_directory(tmp_path, target_dir)


def test_refuses_to_escape_project_root(tmp_path: Path):
    project = tmp_path / "project"
    project.mkdir()
    outside = _make_version_dir(tmp_path, "outside")

    with pytest.raises(ValueError, match="outside"):
        clean_version_directory(project, "../outside")
    assert outside.exists()


def test_refuses_to_delete_project_root(tmp_path: Path):
    with pytest.raises(ValueError, match="project root"):
        clean_version_directory(tmp_path, ".")
    assert tmp_path.exists()


def test_symlinked_directory_is_unlinked_not_followed(tmp_path: Path):
    """Cleaning a link like `latest -> v20250224` removes the link only."""
    real = _make_version_dir(tmp_path, "v20250224")
    link = tmp_path / "latest"
    link.symlink_to(real, target_is_directory=True)

    result = clean_version_directory(tmp_path, "latest")

    assert result.removed is True
    assert result.freed_bytes == 0
    assert not link.is_symlink()
    assert (real / "api" / "index.ts").exists()


def test_dangling_symlink_is_removed(tmp_path: Path):
    link = tmp_path / "latest"
    link.symlink_to(tmp_path / "gone", target_is_directory=True)

    result = clean_version_directory(tmp_path, "latest")

    assert result.removed is True
    assert not link.is_symlink()


def test_symlink_pointing_outside_is_unlinked_only(tmp_path: Path):
    project = tmp_path / "project"
    project.mkdir()
    outside = _make_version_dir(tmp_path, "outside")
    (project / "v20250224").symlink_to(outside, target_is_directory=True)

    clean_version_directory(project, "v20250224")

    assert not (project / "v20250224").is_symlink()
    assert (outside / "package.json").exists()
