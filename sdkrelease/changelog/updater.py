# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Changelog updater.

Adds one dated entry per API version to the top of CHANGELOG.md, right after
the header and in front of the first existing release entry:

    ## [3.2.0] - 2025-01-28 (v20250224 API)
    Updated v20250224 API specification to most current version. ...

The version number for each API version comes from the `version` field of its
generated package metadata (`<metadata_root>/<api_version>/package.json`).
When several API versions are released together, entries are ordered by the
configured priority order (newest API first), not by the order they were given.

Existing lines are never touched. Running the same update twice on one day
writes the same heading twice; entries are not deduplicated.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional, Sequence, Union

from sdkrelease.changelog.exceptions import (
    DocumentNotFoundError,
    InvalidArgumentError,
    MetadataNotFoundError,
    MetadataParseError,
    NoExistingEntriesError,
    VersionFieldMissingError,
)
from sdkrelease.config.schema import DEFAULT_API_CHANGELOG_URL, ReleaseConfig
from sdkrelease.logging.logger import get_logger
from sdkrelease.utils.filesystem import atomic_write, safe_read
from sdkrelease.utils.paths import resolve_under_root

_logger: logging.Logger = get_logger(__name__)

DATE_FORMAT: str = "%Y-%m-%d"

# e.g. "## [2.0.0] - 2025-01-15 (v20111101 API)"
ENTRY_MARKER: re.Pattern[str] = re.compile(
    r"^## \[(?P<version>\d+\.\d+\.\d+)\]\s*-\s*"
    r"(?P<date>\d{4}-\d{2}-\d{2})\s*"
    r"\((?P<api_version>\S+)\s+API\)"
)

Versions = Union[str, Sequence[str]]


@dataclass(frozen=True)
class ChangelogSettings:
    """Everything the updater needs to know about where things live."""

    changelog_path: Path
    metadata_root: Path
    priority_order: tuple[str, ...]
    metadata_filename: str = "package.json"
    api_changelog_url: str = DEFAULT_API_CHANGELOG_URL

    @classmethod
    def from_config(cls, config: ReleaseConfig, project_root: Path) -> "ChangelogSettings":
        section = config.changelog
        return cls(
            changelog_path=resolve_under_root(section.path, project_root),
            metadata_root=resolve_under_root(section.metadata_root, project_root),
            priority_order=config.priority_order,
            metadata_filename=section.metadata_filename,
            api_changelog_url=section.api_changelog_url,
        )


@dataclass(frozen=True)
class ChangelogEntry:
    """One generated release entry: a heading line plus a message line."""

    api_version: str
    version_number: str
    entry_date: date
    previous_date: Optional[date]
    api_changelog_url: str

    @property
    def heading(self) -> str:
        return (
            f"## [{self.version_number}] - {self.entry_date.strftime(DATE_FORMAT)} "
            f"({self.api_version} API)"
        )

    @property
    def message(self) -> str:
        prefix = (
            f"Updated {self.api_version} API specification to most current version. "
            f"Please check full [API changelog]({self.api_changelog_url}) for any changes"
        )
        if self.previous_date is None:
            return f"{prefix}."
        return (
            f"{prefix} made between {self.previous_date.strftime(DATE_FORMAT)} "
            f"and {self.entry_date.strftime(DATE_FORMAT)}."
        )

    def render(self) -> str:
        return f"{self.heading}\n{self.message}\n"


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a changelog update (or a dry-run render)."""

    changelog_path: Path
    entries: tuple[ChangelogEntry, ...]
    content: str


def normalize_versions(versions: Versions) -> list[str]:
    """
    Turn "v20250224, v20111101" or ["v20250224", "v20111101"] into a list.

    Raises:
        InvalidArgumentError: Wrong type, or nothing left after stripping blanks.
    """
    if isinstance(versions, str):
        tokens = versions.split(",")
    elif isinstance(versions, (list, tuple)):
        tokens = [str(item) for item in versions]
    else:
        raise InvalidArgumentError(
            f"Versions must be a string or a list, got {type(versions).__name__}"
        )

    normalized = [token.strip() for token in tokens if token.strip()]
    if not normalized:
        raise InvalidArgumentError("At least one API version is required")
    return normalized


def sort_versions(
    version_data: Sequence[tuple[str, str]],
    priority_order: Sequence[str],
) -> list[tuple[str, str]]:
    """
    Order (api_version, version_number) pairs by priority.

    Unknown API versions go last, keeping their relative order (sorted() is stable).
    """
    rank = {name: index for index, name in enumerate(priority_order)}
    unknown = len(priority_order)
    return sorted(version_data, key=lambda pair: rank.get(pair[0], unknown))


def find_last_change_date(lines: Sequence[str], api_version: str) -> Optional[date]:
    """Date of the first entry for `api_version`, scanning top to bottom."""
    for line in lines:
        match = ENTRY_MARKER.match(line)
        if match is None or match.group("api_version") != api_version:
            continue
        try:
            return date.fromisoformat(match.group("date"))
        except ValueError:
            _logger.warning(
                "Ignoring entry with invalid date",
                extra={"api_version": api_version, "line": line},
            )
    return None


def insert_entries(changelog: str, entries: Sequence[ChangelogEntry]) -> str:
    """
    Splice rendered entries in front of the first existing release entry.

    Raises:
        NoExistingEntriesError: The changelog has no release entry at all.
    """
    lines = changelog.split("\n")

    first_entry_index = next(
        (index for index, line in enumerate(lines) if ENTRY_MARKER.match(line)),
        None,
    )
    if first_entry_index is None:
        raise NoExistingEntriesError(
            "Could not find existing changelog entries. "
            "Expected format: ## [X.Y.Z] - YYYY-MM-DD (<api version> API)"
        )

    header = lines[:first_entry_index]
    rest = lines[first_entry_index:]
    new_lines = [entry.render().rstrip() for entry in entries]

    return "\n".join(header + new_lines + [""] + rest)


class ChangelogUpdater:
    """
    Reads package versions and writes new entries into the changelog.

    Not safe for concurrent use against the same changelog: the update is a
    plain read-modify-write.
    """

    def __init__(self, settings: ChangelogSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> ChangelogSettings:
        return self._settings

    def metadata_path(self, api_version: str) -> Path:
        return self._settings.metadata_root / api_version / self._settings.metadata_filename

    def read_package_version(self, api_version: str) -> str:
        """
        Read the `version` field from an API version's package metadata.

        Raises:
            MetadataNotFoundError: No metadata file.
            MetadataParseError: Invalid JSON or UTF-8, or not a JSON object.
            VersionFieldMissingError: `version` missing, not a string, or blank.
        """
        path = self.metadata_path(api_version)
        if not path.is_file():
            raise MetadataNotFoundError(f"Package file not found at {path}")

        try:
            package = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as err:
            raise MetadataParseError(f"Malformed JSON in {path}: {err}") from err

        if not isinstance(package, dict):
            raise MetadataParseError(
                f"Expected a JSON object in {path}, got {type(package).__name__}"
            )

        version = package.get("version")
        if not isinstance(version, str) or not version.strip():
            raise VersionFieldMissingError(
                f"Could not read version from {api_version}/{self._settings.metadata_filename}"
            )
        return version.strip()

    def render(self, versions: Versions, current_date: Optional[date] = None) -> UpdateResult:
        """
        Build the updated changelog text without writing it.

        Raises:
            InvalidArgumentError, DocumentNotFoundError, MetadataNotFoundError,
            MetadataParseError, VersionFieldMissingError, NoExistingEntriesError
        """
        today = current_date or date.today()
        api_versions = normalize_versions(versions)
        changelog_path = self._settings.changelog_path

        # Check the changelog first so nothing else is read for a bad checkout.
        if not changelog_path.is_file():
            raise DocumentNotFoundError(f"Changelog not found at {changelog_path}")

        version_data = [
            (api_version, self.read_package_version(api_version)) for api_version in api_versions
        ]
        sorted_data = sort_versions(version_data, self._settings.priority_order)

        current = safe_read(changelog_path)
        lines = current.split("\n")

        entries = tuple(
            ChangelogEntry(
                api_version=api_version,
                version_number=version_number,
                entry_date=today,
                previous_date=find_last_change_date(lines, api_version),
                api_changelog_url=self._settings.api_changelog_url,
            )
            for api_version, version_number in sorted_data
        )

        for entry in entries:
            _logger.debug(
                "Built changelog entry",
                extra={
                    "api_version": entry.api_version,
                    "version": entry.version_number,
                    "previous_date": entry.previous_date,
                },
            )

        updated = insert_entries(current, entries)
        return UpdateResult(changelog_path=changelog_path, entries=entries, content=updated)

    def update(self, versions: Versions, current_date: Optional[date] = None) -> UpdateResult:
        """
        Add entries for `versions` to the changelog and write it back.

        Nothing is written unless every entry could be built.
        """
        result = self.render(versions, current_date)
        atomic_write(result.changelog_path, result.content)

        _logger.info(
            "Changelog updated",
            extra={
                "changelog": str(result.changelog_path),
                "entries": [entry.heading for entry in result.entries],
            },
        )
        return result
