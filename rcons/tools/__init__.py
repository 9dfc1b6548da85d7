# SPDX-License-Identifier: MIT
"""Toolchain descriptors and tool endpoint resolution."""

from rcons.tools.toolchain import (
    DEFAULT_AR,
    LIBTOOL_MARKER,
    CcToolchain,
    ToolchainDescriptor,
    library_search_flags,
    resolve_linker_and_archiver,
)

__all__ = [
    "DEFAULT_AR",
    "LIBTOOL_MARKER",
    "CcToolchain",
    "ToolchainDescriptor",
    "library_search_flags",
    "resolve_linker_and_archiver",
]
