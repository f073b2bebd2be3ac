# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reading and writing the SDK generator config (openapi/config-<api>.yml).

The generator config is owned by the SDK generator, not by us. We only read
and rewrite its `npmVersion` field and leave every other key alone.
"""

import re
from pathlib import Path
from typing import Any, NamedTuple

import yaml

from sdkrelease.release.exceptions import (
    SdkConfigFieldError,
    SdkConfigNotFoundError,
    SdkConfigParseError,
)
from sdkrelease.utils.filesystem import atomic_write

NPM_VERSION_KEY: str = "npmVersion"

_LEADING_DIGITS: re.Pattern[str] = re.compile(r"\d+")


class NpmVersion(NamedTuple):
    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def load_sdk_config(config_file: Path) -> dict[str, Any]:
    """
    Parse an SDK generator config into a dict.

    Raises:
        SdkConfigNotFoundError: The file does not exist.
        SdkConfigParseError: Unreadable, invalid YAML, or not a mapping.
    """
    if not config_file.is_file():
        raise SdkConfigNotFoundError(f"Config file not found: {config_file}")

    try:
        parsed = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise SdkConfigParseError(f"Config file syntax error in {config_file}: {err}") from err
    except OSError as err:
        raise SdkConfigParseError(f"Could not read config file {config_file}: {err}") from err

    if not isinstance(parsed, dict):
        raise SdkConfigParseError(
            f"Config file does not contain valid YAML structure: {config_file}"
        )
    return parsed


def read_npm_version(config: dict[str, Any], config_file: Path) -> str:
    """Return `npmVersion` as a stripped string."""
    if NPM_VERSION_KEY not in config:
        raise SdkConfigFieldError(f"Config missing {NPM_VERSION_KEY} field: {config_file}")
    return str(config[NPM_VERSION_KEY]).strip()


def parse_major(npm_version: str) -> int:
    """Leading numeric component; anything non-numeric counts as 0."""
    match = _LEADING_DIGITS.match(npm_version.split(".")[0].strip())
    return int(match.group(0)) if match else 0


def parse_npm_version(npm_version: str, config_file: Path) -> NpmVersion:
    """
    Strictly parse MAJOR.MINOR.PATCH.

    Raises:
        SdkConfigFieldError: Not three dot-separated integers.
    """
    parts = npm_version.split(".")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise SdkConfigFieldError(
            f"{NPM_VERSION_KEY} must look like MAJOR.MINOR.PATCH, "
            f"got '{npm_version}' in {config_file}"
        )
    major, minor, patch = (int(part) for part in parts)
    return NpmVersion(major, minor, patch)


def write_sdk_config(config_file: Path, config: dict[str, Any]) -> None:
    """Dump the mapping back to YAML, keeping key order."""
    content = yaml.safe_dump(config, sort_keys=False, default_flow_style=False)
    atomic_write(config_file, content)
