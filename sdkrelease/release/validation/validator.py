# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Pre-generation validation of SDK generator configs.

Each API version ships as its own npm package line, pinned to one major
version (v20111101 -> 2.x.x, v20250224 -> 3.x.x). Before the generator runs
we check that the config for an API version still carries the right major,
so a stray bump can never publish a v20111101 SDK as 3.0.0.

Checks run in a fixed order and stop at the first failure:
  1. the API version is supported
  2. the config file exists
  3. the config file is a YAML mapping
  4. `npmVersion` is present
  5. its major component matches the pinned major
"""

import logging
from pathlib import Path
from typing import Sequence

from sdkrelease.config.schema import ApiVersionConfig
from sdkrelease.logging.logger import get_logger
from sdkrelease.release.exceptions import SemanticVersionError, UnsupportedApiVersionError
from sdkrelease.release.sdk_config import load_sdk_config, parse_major, read_npm_version

_logger: logging.Logger = get_logger(__name__)


def _lookup_api_version(
    api_version: str, api_versions: Sequence[ApiVersionConfig]
) -> ApiVersionConfig:
    for entry in api_versions:
        if entry.name == api_version:
            return entry
    supported = ", ".join(sorted(entry.name for entry in api_versions))
    raise UnsupportedApiVersionError(
        f"Invalid API version: {api_version}. Supported versions: {supported}"
    )


def validate_sdk_config(
    config_file: Path,
    api_version: str,
    api_versions: Sequence[ApiVersionConfig],
) -> bool:
    """
    Validate an SDK generator config against its API version.

    Args:
        config_file: Path to the generator config YAML.
        api_version: The API version the config is generated for.
        api_versions: Supported API versions and their pinned majors.

    Returns:
        True if every check passed.

    Raises:
        UnsupportedApiVersionError, SdkConfigNotFoundError, SdkConfigParseError,
        SdkConfigFieldError, SemanticVersionError
    """
    expected = _lookup_api_version(api_version, api_versions)
    config = load_sdk_config(config_file)
    npm_version = read_npm_version(config, config_file)
    major_version = parse_major(npm_version)

    if major_version != expected.major_version:
        raise SemanticVersionError(
            f"Semantic versioning error: {api_version} API must use npm major version "
            f"{expected.major_version}, found {major_version} in {config_file}\n"
            f"Current npmVersion: {npm_version}\n"
            f"Update config with correct major version: {expected.major_version}.x.x"
        )

    _logger.info(
        "SDK config is valid",
        extra={
            "config_file": str(config_file),
            "api_version": api_version,
            "npm_version": npm_version,
        },
    )
    return True
