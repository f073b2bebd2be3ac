# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised by the SDK generator config tools (validate and bump).
"""


class SdkConfigError(Exception):
    """Base for all SDK generator config failures."""


class UnsupportedApiVersionError(SdkConfigError):
    """The API version is not in the configured allow-list."""


class SdkConfigNotFoundError(SdkConfigError, FileNotFoundError):
    """The SDK generator config file does not exist."""


class SdkConfigParseError(SdkConfigError):
    """The SDK generator config is not valid YAML, or not a YAML mapping."""


class SdkConfigFieldError(SdkConfigError):
    """The SDK generator config lacks `npmVersion`, or it is not X.Y.Z."""


class SemanticVersionError(SdkConfigError):
    """The npm major version does not match the one pinned for the API version."""


class InvalidBumpTypeError(SdkConfigError, ValueError):
    """Only 'minor' and 'patch' bumps are supported."""
