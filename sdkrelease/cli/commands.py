# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the sdkrelease CLI.

Each function here corresponds to one subcommand and returns an exit code.
Diagnostics go through the structured logger. Usage text goes to stdout, and
`bump` moves the logger to stderr so its stdout is the new version alone.
"""

import argparse
import logging
import sys
from pathlib import Path

from sdkrelease.changelog.exceptions import ChangelogError
from sdkrelease.changelog.updater import ChangelogSettings, ChangelogUpdater
from sdkrelease.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from sdkrelease.config.exceptions import ConfigError
from sdkrelease.config.loader import load_config
from sdkrelease.config.schema import ReleaseConfig
from sdkrelease.logging.logger import get_logger, redirect_log_stream, set_package_log_level
from sdkrelease.release.cleanup.cleaner import clean_version_directory
from sdkrelease.release.exceptions import InvalidBumpTypeError, SdkConfigError
from sdkrelease.release.validation.validator import validate_sdk_config
from sdkrelease.release.versioning.bumper import bump_sdk_version
from sdkrelease.runtime.bootstrap import bootstrap
from sdkrelease.utils.paths import resolve_under_root


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, ReleaseConfig | None, logging.Logger]:
    """
    The shared setup every command needs: load config, run bootstrap.

    Returns (exit_code, config, logger). If exit_code is not SUCCESS the
    caller returns it immediately.
    """
    logger = get_logger(f"sdkrelease.cli.{command_name}", log_level=args.log_level or "INFO")
    project_root = Path(args.project_root)

    config = ReleaseConfig.default()
    if args.config is not None:
        try:
            config = load_config(resolve_under_root(args.config, project_root))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger
    else:
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )

    log_level = args.log_level or config.global_config.log_level
    try:
        bootstrap(config.global_config, project_root, log_level)
    except RuntimeError as err:
        logger.error("Bootstrap failed", extra={"command": command_name, "error": str(err)})
        return RUNTIME_ERROR, None, logger
    set_package_log_level(log_level)

    return SUCCESS, config, logger


def _write_changelog_usage(supported: str) -> None:
    sys.stdout.write("Usage: sdkrelease changelog <versions>\n")
    sys.stdout.write("Example: sdkrelease changelog 'v20250224,v20111101'\n")
    sys.stdout.write(f"Supported versions: {supported}\n")
    sys.stdout.flush()


def handle_changelog(args: argparse.Namespace) -> int:
    """Add entries for the given API versions to the changelog."""
    exit_code, config, logger = _load_and_bootstrap(args, "changelog")
    if exit_code != SUCCESS or config is None:
        return exit_code

    supported = ", ".join(config.priority_order)
    raw_versions = args.versions or ""
    versions = [token.strip() for token in raw_versions.split(",") if token.strip()]

    if not versions:
        _write_changelog_usage(supported)
        return USER_ERROR

    invalid = [version for version in versions if version not in config.priority_order]
    if invalid:
        sys.stdout.write(f"Error: Invalid versions. Supported versions: {supported}\n")
        sys.stdout.flush()
        logger.error("Unsupported API versions", extra={"invalid": invalid})
        return USER_ERROR

    try:
        settings = ChangelogSettings.from_config(config, Path(args.project_root))
        updater = ChangelogUpdater(settings)

        if args.dry_run:
            result = updater.render(versions, args.date)
            logger.info(
                "Dry run: would add changelog entries",
                extra={
                    "changelog": str(result.changelog_path),
                    "entries": [entry.heading for entry in result.entries],
                },
            )
            return SUCCESS

        result = updater.update(versions, args.date)
        logger.info(
            "CHANGELOG updated successfully",
            extra={"entries": [entry.heading for entry in result.entries]},
        )
        return SUCCESS

    except ChangelogError as err:
        logger.error("Changelog update failed", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Changelog update failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_clean(args: argparse.Namespace) -> int:
    """Delete one generated version directory."""
    exit_code, config, logger = _load_and_bootstrap(args, "clean")
    if exit_code != SUCCESS:
        return exit_code

    try:
        result = clean_version_directory(
            Path(args.project_root),
            args.version_dir or "",
            dry_run=args.dry_run,
        )
        logger.info(
            "Clean finished",
            extra={"target": str(result.target), "removed": result.removed},
        )
        return SUCCESS
    except ValueError as err:
        logger.error("Invalid clean target", extra={"error": str(err)})
        return USER_ERROR
    except OSError as err:
        logger.error("Could not remove directory", extra={"error": str(err)})
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Clean failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_validate(args: argparse.Namespace) -> int:
    """Check an SDK generator config's npm major against its API version."""
    exit_code, config, logger = _load_and_bootstrap(args, "validate")
    if exit_code != SUCCESS or config is None:
        return exit_code

    config_file = resolve_under_root(args.config_file, Path(args.project_root))
    try:
        validate_sdk_config(config_file, args.api_version, config.api_versions)
        return SUCCESS
    except SdkConfigError as err:
        logger.error(
            "SDK config validation failed",
            extra={"config_file": str(config_file), "error": str(err)},
        )
        return VALIDATION_ERROR
    except Exception as err:
        logger.error("Validation crashed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR


def handle_bump(args: argparse.Namespace) -> int:
    """Bump npmVersion in an SDK generator config and print the new version."""
    # stdout carries only the new version; workflows capture it with $(...).
    with redirect_log_stream(sys.stderr):
        exit_code, config, logger = _load_and_bootstrap(args, "bump")
        if exit_code != SUCCESS:
            return exit_code

        config_file = resolve_under_root(args.config_file, Path(args.project_root))
        try:
            result = bump_sdk_version(config_file, args.bump_type, dry_run=args.dry_run)
        except InvalidBumpTypeError as err:
            logger.error("Invalid bump type", extra={"error": str(err)})
            return USER_ERROR
        except SdkConfigError as err:
            logger.error(
                "Version bump failed",
                extra={"config_file": str(config_file), "error": str(err)},
            )
            return VALIDATION_ERROR
        except Exception as err:
            logger.error("Version bump failed", extra={"error": str(err)}, exc_info=True)
            return RUNTIME_ERROR

    sys.stdout.write(result.new_version + "\n")
    sys.stdout.flush()
    return SUCCESS
