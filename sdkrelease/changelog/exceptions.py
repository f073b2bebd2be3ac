# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while updating the changelog.

Every failure is fatal to the update and nothing is retried. The not-found
errors also derive from FileNotFoundError and InvalidArgumentError from
ValueError, so generic callers can catch them the usual way.
"""


class ChangelogError(Exception):
    """Base for all changelog update failures."""


class InvalidArgumentError(ChangelogError, ValueError):
    """No API versions were supplied, or they came in an unsupported shape."""


class DocumentNotFoundError(ChangelogError, FileNotFoundError):
    """The changelog file does not exist."""


class MetadataNotFoundError(ChangelogError, FileNotFoundError):
    """An API version has no package metadata file."""


class MetadataParseError(ChangelogError):
    """A package metadata file is not a valid JSON object."""


class VersionFieldMissingError(ChangelogError):
    """A package metadata file has no usable `version` field."""


class NoExistingEntriesError(ChangelogError):
    """The changelog has no release entry to insert new entries in front of."""
