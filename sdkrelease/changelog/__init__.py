# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Changelog maintenance: dated entries per API version, inserted newest first.
"""
