# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for the release tools.

Runs once before any command does real work:
  1. Validate the environment (Python version)
  2. Initialize the runtime logger from the global config
  3. Route every package logger to `log_file`, when one is configured
  4. Log a startup record
"""

import logging
from pathlib import Path
from typing import Optional

from sdkrelease.config.schema import GlobalConfig
from sdkrelease.logging.logger import attach_package_log_file, get_logger
from sdkrelease.runtime.environment import check_minimum_python, get_system_info
from sdkrelease.utils.paths import resolve_under_root


def bootstrap(
    config: GlobalConfig,
    project_root: Optional[Path] = None,
    log_level: Optional[str] = None,
) -> logging.Logger:
    """
    Run the bootstrap sequence and return the runtime logger.

    Args:
        config: The validated global configuration.
        project_root: Base for a relative `log_file`. Defaults to the working directory.
        log_level: Overrides `config.log_level` (the CLI flag wins over the file).
    """
    check_minimum_python()

    logger = get_logger("sdkrelease.runtime", log_level=log_level or config.log_level)

    if config.log_file is not None:
        attach_package_log_file(resolve_under_root(config.log_file, project_root or Path.cwd()))

    system_info = get_system_info()
    logger.debug(
        "Bootstrap complete",
        extra={
            "project_name": config.project_name,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
        },
    )
    return logger
