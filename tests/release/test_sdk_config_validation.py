# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for SDK generator config validation.

The npm major version is pinned per API version; anything else in the version
string is free to change.
"""

from pathlib import Path

import pytest

from conftest import write_sdk_config
from sdkrelease.config.schema import ReleaseConfig
from sdkrelease.release.exceptions import (
    SdkConfigError,
    SdkConfigFieldError,
    SdkConfigNotFoundError,
    SdkConfigParseError,
    SemanticVersionError,
    UnsupportedApiVersionError,
)
from sdkrelease.release.sdk_config import parse_major
from sdkrelease.release.validation.validator import validate_sdk_config

API_VERSIONS = ReleaseConfig.default().api_versions


class TestValidConfigs:
    def test_v20111101_with_major_2(self, tmp_path: Path) -> None:
        config_file = write_sdk_config(tmp_path, "config-v20111101.yml", "2.0.0")
        assert validate_sdk_config(config_file, "v20111101", API_VERSIONS) is True

    def test_v20250224_with_major_3(self, tmp_path: Path) -> None:
        config_file = write_sdk_config(tmp_path, "config-v20250224.yml", "3.0.0")
        assert validate_sdk_config(config_file, "v20250224", API_VERSIONS) is True

    @pytest.mark.parametrize(
        ("api_version", "major"),
        [(entry.name, entry.major_version) for entry in API_VERSIONS],
    )
    @pytest.mark.parametrize("minor_patch", ["0.0", "1.5", "12.34"])
    def test_any_minor_patch_for_right_major(
        self, tmp_path: Path, api_version: str, major: int, minor_patch: str
    ) -> None:
        config_file = write_sdk_config(tmp_path, "config.yml", f"{major}.{minor_patch}")
        assert validate_sdk_config(config_file, api_version, API_VERSIONS) is True


class TestInvalidConfigs:
    def test_unsupported_api_version(self, tmp_path: Path) -> None:
        config_file = write_sdk_config(tmp_path, "config.yml", "2.0.0")
        with pytest.raises(UnsupportedApiVersionError) as excinfo:
            validate_sdk_config(config_file, "v99999999", API_VERSIONS)

        message = str(excinfo.value)
        assert "Invalid API version: v99999999" in message
        assert "Supported versions: v20111101, v20250224" in message

    def test_missing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "nope.yml"
        with pytest.raises(SdkConfigNotFoundError, match="Config file not found"):
            validate_sdk_config(path, "v20111101", API_VERSIONS)

    def test_wrong_major(self, tmp_path: Path) -> None:
        config_file = write_sdk_config(tmp_path, "config.yml", "3.0.0")
        with pytest.raises(SemanticVersionError) as excinfo:
            validate_sdk_config(config_file, "v20111101", API_VERSIONS)

        message = str(excinfo.value)
        assert "Semantic versioning error" in message
        assert "must use npm major version 2" in message
        assert "found 3" in message
        assert "Current npmVersion: 3.0.0" in message
        assert "Update config with correct major version: 2.x.x" in message

    @pytest.mark.parametrize(
        ("api_version", "wrong"),
        [("v20111101", "3.4.5"), ("v20250224", "2.4.5"), ("v20250224", "latest")],
    )
    def test_rejects_other_majors(self, tmp_path: Path, api_version: str, wrong: str) -> None:
        config_file = write_sdk_config(tmp_path, "config.yml", wrong)
        with pytest.raises(SemanticVersionError):
            validate_sdk_config(config_file, api_version, API_VERSIONS)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yml"
        config_file.write_text("npmVersion: [unclosed\n", encoding="utf-8")
        with pytest.raises(SdkConfigParseError, match="syntax error"):
            validate_sdk_config(config_file, "v20111101", API_VERSIONS)

    def test_yaml_scalar_is_not_a_config(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yml"
        config_file.write_text("just a string\n", encoding="utf-8")
        with pytest.raises(SdkConfigParseError, match="does not contain valid YAML"):
            validate_sdk_config(config_file, "v20111101", API_VERSIONS)

    def test_missing_npm_version(self, tmp_path: Path) -> None:
        config_file = tmp_path / "config.yml"
        config_file.write_text("npmName: mx-platform-node\n", encoding="utf-8")
        with pytest.raises(SdkConfigFieldError, match="missing npmVersion field"):
            validate_sdk_config(config_file, "v20111101", API_VERSIONS)

    def test_all_errors_share_a_base(self, tmp_path: Path) -> None:
        with pytest.raises(SdkConfigError):
            validate_sdk_config(tmp_path / "nope.yml", "v20111101", API_VERSIONS)


class TestParseMajor:
    @pytest.mark.parametrize(
        ("npm_version", "expected"),
        [("3.0.0", 3), ("12.1.0", 12), ("2", 2), ("latest", 0), ("3a.0.0", 3), ("", 0)],
    )
    def test_parse_major(self, npm_version: str, expected: int) -> None:
        assert parse_major(npm_version) == expected
