# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for sdkrelease tests.

Most tests work on a throwaway SDK repository in tmp_path: a CHANGELOG.md
plus one <api_version>/package.json per API version.
"""

import json
import textwrap
from datetime import date
from pathlib import Path

import pytest

from sdkrelease.changelog.updater import ChangelogSettings, ChangelogUpdater
from sdkrelease.config.schema import ReleaseConfig

TODAY = date(2025, 1, 28)

SAMPLE_CHANGELOG = textwrap.dedent("""\
    # Changelog

    All notable changes to this project will be documented in this file.

    ## [2.0.0] - 2025-01-15 (v20111101 API)
    Updated v20111101 API specification to most current version.

    ## [1.0.0] - 2024-12-01 (v20111101 API)
    Initial release.
""")


def write_package_json(project_root: Path, api_version: str, content: object) -> Path:
    """Write <project_root>/<api_version>/package.json and return its path."""
    package_dir = project_root / api_version
    package_dir.mkdir(parents=True, exist_ok=True)
    package_file = package_dir / "package.json"
    if isinstance(content, str):
        package_file.write_text(content, encoding="utf-8")
    else:
        package_file.write_text(json.dumps(content), encoding="utf-8")
    return package_file


@pytest.fixture()
def changelog_file(tmp_path: Path) -> Path:
    """A CHANGELOG.md with a header and two v20111101 entries."""
    path = tmp_path / "CHANGELOG.md"
    path.write_text(SAMPLE_CHANGELOG, encoding="utf-8")
    return path


@pytest.fixture()
def sdk_repo(tmp_path: Path, changelog_file: Path) -> Path:
    """A project root with the sample changelog and package.json for both API versions."""
    write_package_json(tmp_path, "v20250224", {"name": "mx-platform-node", "version": "3.0.0"})
    write_package_json(tmp_path, "v20111101", {"name": "mx-platform-node", "version": "2.1.0"})
    return tmp_path


@pytest.fixture()
def settings(tmp_path: Path) -> ChangelogSettings:
    return ChangelogSettings.from_config(ReleaseConfig.default(), tmp_path)


@pytest.fixture()
def updater(settings: ChangelogSettings) -> ChangelogUpdater:
    return ChangelogUpdater(settings)


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """A release config overriding a few defaults."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "sdk-test"
          log_level: "DEBUG"
        changelog:
          path: "docs/CHANGELOG.md"
        api_versions:
          - name: "v20250224"
            major_version: 3
            sdk_config: "openapi/config-v20250224.yml"
          - name: "v20111101"
            major_version: 2
            sdk_config: "openapi/config-v20111101.yml"
    """)
    config_file = tmp_path / "release.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file


def write_sdk_config(project_root: Path, name: str, npm_version: object) -> Path:
    """Write an SDK generator config with the given npmVersion."""
    config_file = project_root / "openapi" / name
    config_file.parent.mkdir(parents=True, exist_ok=True)
    content = textwrap.dedent(f"""\
        generatorName: typescript-axios
        npmName: mx-platform-node
        npmVersion: {npm_version}
        supportsES6: true
    """)
    config_file.write_text(content, encoding="utf-8")
    return config_file
