# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for the release tools.

Each config section gets its own frozen pydantic model:
  - frozen=True: immutable after construction
  - extra="forbid": unknown fields cause immediate failure
  - validate_default=True: even defaults get type-checked

Every field has a default, so an empty YAML mapping (or no file at all, via
ReleaseConfig.default()) describes the stock SDK repository layout.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_CHANGELOG_URL: str = "https://docs.mx.com/resources/changelog/platform"

_VALID_LOG_LEVELS: frozenset[str] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class GlobalConfig(BaseModel):
    """Cross-cutting settings: project identity and observability."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        default="1.0.0",
        description="Schema version for compatibility tracking, e.g. '1.0.0'",
    )
    project_name: str = Field(
        default="sdk-release", description="Human-readable project identifier"
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output, relative to project root",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in _VALID_LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(_VALID_LOG_LEVELS))}, got '{value}'"
            )
        return upper


class ChangelogConfig(BaseModel):
    """Where the changelog and the per-version package metadata live."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    path: str = Field(default="CHANGELOG.md", description="Changelog file, relative to project root")
    metadata_root: str = Field(
        default=".",
        description="Directory holding one sub-directory per API version",
    )
    metadata_filename: str = Field(
        default="package.json",
        description="Metadata file inside each API version directory",
    )
    api_changelog_url: str = Field(
        default=DEFAULT_API_CHANGELOG_URL,
        description="External API changelog linked from every generated entry",
    )


class ApiVersionConfig(BaseModel):
    """
    One supported API version.

    The SDK built for an API version is pinned to a single npm major version,
    so `major_version` is what `validate` enforces against the SDK config.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    name: str = Field(min_length=1, description="API version identifier, e.g. 'v20250224'")
    major_version: int = Field(ge=0, description="npm major version the SDK must use")
    sdk_config: str = Field(
        default="",
        description="SDK generator config for this API version, relative to project root",
    )


def _default_api_versions() -> tuple[ApiVersionConfig, ...]:
    # Newest first: list order is the changelog priority order.
    return (
        ApiVersionConfig(
            name="v20250224", major_version=3, sdk_config="openapi/config-v20250224.yml"
        ),
        ApiVersionConfig(
            name="v20111101", major_version=2, sdk_config="openapi/config-v20111101.yml"
        ),
    )


class ReleaseConfig(BaseModel):
    """
    Top-level config container.

    `api_versions` doubles as the allow-list and the priority order: entries
    earlier in the list are written higher up in the changelog.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", validate_default=True, populate_by_name=True
    )

    global_config: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    changelog: ChangelogConfig = Field(default_factory=ChangelogConfig)
    api_versions: tuple[ApiVersionConfig, ...] = Field(default_factory=_default_api_versions)

    @field_validator("api_versions")
    @classmethod
    def _check_api_versions(
        cls, value: tuple[ApiVersionConfig, ...]
    ) -> tuple[ApiVersionConfig, ...]:
        if not value:
            raise ValueError("api_versions must list at least one API version")
        names = [entry.name for entry in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate API versions: {', '.join(duplicates)}")
        return value

    @classmethod
    def default(cls) -> "ReleaseConfig":
        """The built-in configuration used when no --config is given."""
        return cls()

    @property
    def priority_order(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self.api_versions)

    def find_api_version(self, name: str) -> Optional[ApiVersionConfig]:
        for entry in self.api_versions:
            if entry.name == name:
                return entry
        return None
