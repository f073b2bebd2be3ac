# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
npm version bumps for SDK generator configs.

Only minor and patch bumps exist here. The major version is locked to the
API version (see release.validation), and "skip" is handled by the workflow
simply not calling the bump.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sdkrelease.logging.logger import get_logger
from sdkrelease.release.exceptions import InvalidBumpTypeError
from sdkrelease.release.sdk_config import (
    NPM_VERSION_KEY,
    NpmVersion,
    load_sdk_config,
    parse_npm_version,
    read_npm_version,
    write_sdk_config,
)

_logger: logging.Logger = get_logger(__name__)

BUMP_TYPES: tuple[str, ...] = ("minor", "patch")

# Used when the workflow does not name a config; the automated OpenAPI dispatch
# only regenerates v20111101.
DEFAULT_SDK_CONFIG: str = "openapi/config-v20111101.yml"


@dataclass(frozen=True)
class BumpResult:
    """Outcome of a version bump."""

    config_file: Path
    bump_type: str
    old_version: str
    new_version: str


def next_version(current: NpmVersion, bump_type: str) -> NpmVersion:
    """
    Compute the bumped version.

    Raises:
        InvalidBumpTypeError: bump_type is not 'minor' or 'patch'.
    """
    if bump_type == "minor":
        return NpmVersion(current.major, current.minor + 1, 0)
    if bump_type == "patch":
        return NpmVersion(current.major, current.minor, current.patch + 1)
    raise InvalidBumpTypeError(
        f"Invalid version bump type: {bump_type}. Supported: 'minor' or 'patch'"
    )


def bump_sdk_version(config_file: Path, bump_type: str, dry_run: bool = False) -> BumpResult:
    """
    Bump `npmVersion` in an SDK generator config and write it back.

    The bump type is checked before the file is read, so a typo in the
    workflow fails even when the config is also missing.

    Raises:
        InvalidBumpTypeError, SdkConfigNotFoundError, SdkConfigParseError,
        SdkConfigFieldError
    """
    if bump_type not in BUMP_TYPES:
        raise InvalidBumpTypeError(
            f"Invalid version bump type: {bump_type}. Supported: 'minor' or 'patch'"
        )

    config = load_sdk_config(config_file)
    old_version = read_npm_version(config, config_file)
    bumped = next_version(parse_npm_version(old_version, config_file), bump_type)

    result = BumpResult(
        config_file=config_file,
        bump_type=bump_type,
        old_version=old_version,
        new_version=str(bumped),
    )

    if dry_run:
        _logger.info(
            "Dry run: would bump npm version",
            extra={"config_file": str(config_file), "old": old_version, "new": result.new_version},
        )
        return result

    config[NPM_VERSION_KEY] = result.new_version
    write_sdk_config(config_file, config)

    _logger.info(
        "Bumped npm version",
        extra={
            "config_file": str(config_file),
            "bump_type": bump_type,
            "old": old_version,
            "new": result.new_version,
        },
    )
    return result
