# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for sdkrelease.

Every release step is a subcommand of the single `sdkrelease` command, so
workflows only need one installed tool.

The global options (--config, --log-level, --dry-run, --project-root) are
inherited by every subcommand through argparse's parent parser mechanism.

Usage:
    sdkrelease <subcommand> [options]
    sdkrelease changelog v20250224,v20111101
    sdkrelease clean v20250224
    sdkrelease validate openapi/config-v20250224.yml v20250224
    sdkrelease bump minor openapi/config-v20250224.yml
"""

import argparse
import sys
from datetime import date

from sdkrelease.cli.commands import handle_bump, handle_changelog, handle_clean, handle_validate
from sdkrelease.cli.exit_codes import USER_ERROR
from sdkrelease.release.versioning.bumper import DEFAULT_SDK_CONFIG


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    add_help=False so help text doesn't collide between the parent and the
    subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the release config YAML (built-in defaults when omitted).",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Simulate the command without writing or deleting anything.",
    )
    parent.add_argument(
        "--project-root",
        type=str,
        default=".",
        dest="project_root",
        help="Repository root that relative paths are resolved against.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """Register every subcommand with its positional arguments and handler."""
    changelog = subparsers.add_parser(
        "changelog",
        parents=[parent],
        help="Add entries for API versions to CHANGELOG.md.",
    )
    changelog.add_argument(
        "versions",
        nargs="?",
        default=None,
        help="Comma-separated API versions, e.g. 'v20250224,v20111101'.",
    )
    changelog.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Entry date as YYYY-MM-DD (defaults to today).",
    )
    changelog.set_defaults(func=handle_changelog)

    clean = subparsers.add_parser(
        "clean",
        parents=[parent],
        help="Delete one generated version directory.",
    )
    clean.add_argument("version_dir", nargs="?", default=None, help="Directory to delete.")
    clean.set_defaults(func=handle_clean)

    validate = subparsers.add_parser(
        "validate",
        parents=[parent],
        help="Check an SDK config's npm major version against its API version.",
    )
    validate.add_argument("config_file", help="SDK generator config YAML.")
    validate.add_argument("api_version", help="API version the config targets.")
    validate.set_defaults(func=handle_validate)

    bump = subparsers.add_parser(
        "bump",
        parents=[parent],
        help="Bump the minor or patch npm version in an SDK config.",
    )
    bump.add_argument("bump_type", help="'minor' or 'patch'.")
    bump.add_argument(
        "config_file",
        nargs="?",
        default=DEFAULT_SDK_CONFIG,
        help=f"SDK generator config YAML (default: {DEFAULT_SDK_CONFIG}).",
    )
    bump.set_defaults(func=handle_bump)


def main() -> None:
    """
    Main CLI entrypoint; pyproject.toml's [project.scripts] points here.

    If no subcommand is given, show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="sdkrelease",
        description="sdkrelease: release automation for the generated SDKs.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
