# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
sdkrelease: release automation for the generated SDKs.

Changelog updates, generator output cleanup, SDK config validation and npm
version bumps, all behind the single `sdkrelease` command.
"""

__version__ = "1.0.0"
