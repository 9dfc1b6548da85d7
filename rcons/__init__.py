# SPDX-License-Identifier: MIT
"""
Rcons: deterministic rustc and rustdoc command synthesis.

Rcons turns a compile request, a resolved Rust toolchain and a
precomputed dependency summary into the exact shell command (or
script) a build executor runs as an isolated action.
"""

from __future__ import annotations

import os

from rcons.core.action import (
    Action,
    CompileRequest,
    DependencyInfo,
    InvocationKind,
)
from rcons.core.builder import (
    build_command,
    build_rustc_command,
    build_rustdoc_command,
    build_rustdoc_test_script,
)
from rcons.tools.toolchain import CcToolchain, ToolchainDescriptor

__version__ = "0.1.0"

# Internal storage for CLI variables
_cli_vars: dict[str, str] = {}


def set_cli_vars(variables: dict[str, str]) -> None:
    """Set build variables given on the command line.

    These take precedence over the process environment.
    """
    global _cli_vars
    _cli_vars = dict(variables)


def get_var(name: str, default: str | None = None) -> str | None:
    """Get a build variable set on the command line or from environment.

    Variables can be set when invoking rcons:
        rcons compile action.json RCONS_AR_FALLBACK=/opt/bin/ar

    Precedence (highest to lowest):
        1. Command line: rcons ... VAR=value
        2. Environment variable: VAR=value rcons ...

    Args:
        name: Variable name.
        default: Default value if not set.

    Returns:
        The variable value, or default if not set.
    """
    if name in _cli_vars:
        return _cli_vars[name]

    return os.environ.get(name, default)


def _clear_cli_vars() -> None:
    """Forget CLI variables (used by tests)."""
    global _cli_vars
    _cli_vars = {}


# Public API exports
__all__ = [
    "__version__",
    # Variable access
    "get_var",
    "set_cli_vars",
    # Data model
    "Action",
    "CcToolchain",
    "CompileRequest",
    "DependencyInfo",
    "InvocationKind",
    "ToolchainDescriptor",
    # Builders
    "build_command",
    "build_rustc_command",
    "build_rustdoc_command",
    "build_rustdoc_test_script",
]
