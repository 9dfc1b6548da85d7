# SPDX-License-Identifier: MIT
"""Action descriptions for rcons.

An action description is a JSON document holding everything one build
action needs: the invocation kind, the Rust toolchain, the host C/C++
toolchain, the dependency summary and the crate itself.

Example:
    {
        "kind": "compile",
        "toolchain": {
            "rustc": "external/rust/bin/rustc",
            "rust_doc": "external/rust/bin/rustdoc",
            "rustc_lib": ["external/rust/lib/librustc_driver.so"],
            "rust_lib": ["external/rust/lib/rustlib/lib/libstd.rlib"]
        },
        "cc": {
            "compiler_executable": "/usr/bin/gcc",
            "ar_executable": "/usr/bin/ar",
            "link_options": ["-lstdc++"]
        },
        "depinfo": {
            "setup_cmd": [],
            "env_vars": {"CARGO_PKG_NAME": "foo"},
            "search_flags": ["-L dependency=out/deps"],
            "link_flags": ["--extern bar=out/deps/libbar.rlib"],
            "transitive_dylibs": []
        },
        "crate": {
            "name": "foo",
            "type": "lib",
            "src": "src/lib.rs",
            "output_dir": "out",
            "features": ["default"]
        },
        "options": {"ar_fallback": "/usr/bin/ar"}
    }

Options not given in the file fall back to build variables
(RCONS_AR_FALLBACK, RCONS_ZIP, RCONS_ORIGIN; see rcons.get_var) and
then to built-in defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from rcons.core.action import (
    CRATE_TYPES,
    ZIP_PATH,
    Action,
    CompileRequest,
    DependencyInfo,
    InvocationKind,
)
from rcons.core.errors import ConfigureError, MissingFieldError
from rcons.core.rpath import ORIGIN
from rcons.tools.toolchain import DEFAULT_AR, CcToolchain, ToolchainDescriptor

logger = logging.getLogger(__name__)

# option name -> (build variable, default)
OPTION_VARS: dict[str, tuple[str, str]] = {
    "ar_fallback": ("RCONS_AR_FALLBACK", DEFAULT_AR),
    "zip_path": ("RCONS_ZIP", ZIP_PATH),
    "origin": ("RCONS_ORIGIN", ORIGIN),
}


def load_action(
    path: Path | str,
    kind: InvocationKind | str | None = None,
) -> Action:
    """Load an action description from a JSON file.

    Args:
        path: Path to the action file.
        kind: Invocation kind overriding the file's "kind" field.

    Returns:
        The Action.

    Raises:
        FileNotFoundError: If the action file doesn't exist.
        ConfigureError: If the file is not a valid action description.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Action file not found: {path}")

    try:
        with open(path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigureError(f"invalid JSON: {e}", str(path)) from e

    if not isinstance(data, dict):
        raise ConfigureError("action description must be a JSON object", str(path))

    logger.debug("Loaded action description from %s", path)
    return action_from_dict(data, kind=kind, location=str(path))


def action_from_dict(
    data: dict[str, Any],
    *,
    kind: InvocationKind | str | None = None,
    location: str | None = None,
) -> Action:
    """Create an Action from a parsed action description.

    Args:
        data: The parsed description.
        kind: Invocation kind overriding data["kind"].
        location: Where the description came from, for error messages.
    """
    if kind is None:
        kind = _require(data, "kind", location)
    resolved_kind = _parse_kind(kind, location)

    toolchain_data = _section(data, "toolchain", location)
    toolchain = ToolchainDescriptor.from_files(
        rustc=_require(toolchain_data, "toolchain.rustc", location),
        rust_doc=_require(toolchain_data, "toolchain.rust_doc", location),
        rustc_lib=[_list(toolchain_data, "toolchain.rustc_lib", location)],
        rust_lib=[_list(toolchain_data, "toolchain.rust_lib", location)],
    )

    cc_data = _section(data, "cc", location)
    cc = CcToolchain(
        compiler_executable=_require(cc_data, "cc.compiler_executable", location),
        ar_executable=_require(cc_data, "cc.ar_executable", location),
        link_options=tuple(_list(cc_data, "cc.link_options", location)),
    )

    depinfo_data = _optional_section(data, "depinfo", location)
    env_vars = depinfo_data.get("env_vars", {})
    if not isinstance(env_vars, dict):
        env_vars = _list(depinfo_data, "depinfo.env_vars", location)
    try:
        depinfo = DependencyInfo.create(
            setup_cmd=_list(depinfo_data, "depinfo.setup_cmd", location),
            env_vars=env_vars,
            search_flags=_list(depinfo_data, "depinfo.search_flags", location),
            link_flags=_list(depinfo_data, "depinfo.link_flags", location),
            transitive_dylibs=_list(
                depinfo_data, "depinfo.transitive_dylibs", location
            ),
        )
    except ValueError as e:
        raise ConfigureError(str(e), location) from e

    crate_data = _section(data, "crate", location)
    crate_type = _require(crate_data, "crate.type", location)
    if crate_type not in CRATE_TYPES:
        raise ConfigureError(f"unknown crate type: {crate_type}", location)
    request = CompileRequest(
        crate_name=_require(crate_data, "crate.name", location),
        crate_type=crate_type,
        src=_require(crate_data, "crate.src", location),
        output_dir=_require(crate_data, "crate.output_dir", location),
        features=tuple(_list(crate_data, "crate.features", location)),
        rust_flags=tuple(_list(crate_data, "crate.rust_flags", location)),
        rustc_flags=tuple(_list(crate_data, "crate.rustc_flags", location)),
        doc_flags=tuple(_list(crate_data, "crate.doc_flags", location)),
    )

    doc_zip = data.get("doc_zip")
    if resolved_kind is InvocationKind.DOC and not doc_zip:
        raise MissingFieldError("doc_zip", location)

    return Action(
        kind=resolved_kind,
        toolchain=toolchain,
        cc=cc,
        depinfo=depinfo,
        request=request,
        doc_zip=doc_zip,
        **resolve_options(_optional_section(data, "options", location)),
    )


def resolve_options(options: dict[str, Any]) -> dict[str, str]:
    """Resolve action options from the file, build variables and defaults."""
    from rcons import get_var

    resolved: dict[str, str] = {}
    for name, (var, default) in OPTION_VARS.items():
        value = options.get(name)
        if value is None:
            value = get_var(var, default)
        resolved[name] = str(value)
    return resolved


def _parse_kind(kind: InvocationKind | str, location: str | None) -> InvocationKind:
    if isinstance(kind, InvocationKind):
        return kind
    try:
        return InvocationKind(kind)
    except ValueError:
        raise ConfigureError(f"unknown invocation kind: {kind}", location) from None


def _section(data: dict[str, Any], name: str, location: str | None) -> dict[str, Any]:
    section = _require(data, name, location)
    if not isinstance(section, dict):
        raise ConfigureError(f"{name} must be an object", location)
    return section


def _optional_section(
    data: dict[str, Any], name: str, location: str | None
) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigureError(f"{name} must be an object", location)
    return section


def _list(data: dict[str, Any], field: str, location: str | None) -> list[str]:
    key = field.rsplit(".", 1)[-1]
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigureError(f"{field} must be a list of strings", location)
    return value


def _require(data: dict[str, Any], field: str, location: str | None) -> Any:
    key = field.rsplit(".", 1)[-1]
    value = data.get(key)
    if value is None or (isinstance(value, (str, list)) and not value):
        raise MissingFieldError(field, location)
    return value
