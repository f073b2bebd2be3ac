# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release steps that operate on generator output and SDK generator configs.

Cleanup of version directories, npm major-version validation and npm version
bumps. Nothing here touches the changelog.
"""
