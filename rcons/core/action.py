# SPDX-License-Identifier: MIT
"""Data model for a single rcons build action.

All values here are immutable: they are built fresh for one action,
read by the command builders, and discarded.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from rcons.core.rpath import ORIGIN
from rcons.tools.toolchain import DEFAULT_AR, CcToolchain, ToolchainDescriptor

ZIP_PATH = "/usr/bin/zip"

# Crate types understood by rustc's --crate-type
CRATE_TYPES: frozenset[str] = frozenset(
    ["bin", "lib", "rlib", "dylib", "cdylib", "staticlib", "proc-macro"]
)


class InvocationKind(Enum):
    """The kinds of command rcons can build."""

    COMPILE = "compile"
    DOC = "doc"
    DOC_TEST = "doctest"


@dataclass(frozen=True)
class DependencyInfo:
    """Summary of a target's resolved dependency graph.

    Attributes:
        setup_cmd: Shell fragments run before the tool (e.g. "mkdir -p d;").
        env_vars: Environment assignments as ordered (name, value) pairs;
            "NAME=value" strings and mappings are normalised to pairs.
        search_flags: Library search path flags, in order.
        link_flags: Link flags (e.g. "--extern foo=path"), in order.
        transitive_dylibs: Transitive dynamic library files.
    """

    setup_cmd: tuple[str, ...] = ()
    env_vars: tuple[tuple[str, str], ...] = ()
    search_flags: tuple[str, ...] = ()
    link_flags: tuple[str, ...] = ()
    transitive_dylibs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Accept "NAME=value" strings or a mapping as well as pairs
        object.__setattr__(self, "env_vars", _env_pairs(self.env_vars))

    @classmethod
    def create(
        cls,
        *,
        setup_cmd: Iterable[str] = (),
        env_vars: Mapping[str, str] | Iterable[str] = (),
        search_flags: Iterable[str] = (),
        link_flags: Iterable[str] = (),
        transitive_dylibs: Iterable[str] = (),
    ) -> DependencyInfo:
        """Create a DependencyInfo from loosely typed collections.

        env_vars may be a mapping or "NAME=value" strings. A set of
        dylibs is sorted so the result does not depend on hash order.
        """
        if isinstance(transitive_dylibs, (set, frozenset)):
            transitive_dylibs = sorted(transitive_dylibs)
        return cls(
            setup_cmd=tuple(setup_cmd),
            env_vars=_env_pairs(env_vars),
            search_flags=tuple(search_flags),
            link_flags=tuple(link_flags),
            transitive_dylibs=tuple(transitive_dylibs),
        )


@dataclass(frozen=True)
class CompileRequest:
    """The crate being compiled, documented or doc-tested.

    Attributes:
        crate_name: Crate name passed to --crate-name.
        crate_type: Crate type passed to --crate-type (see CRATE_TYPES).
        src: Root source file (e.g. src/lib.rs).
        output_dir: Directory for compiler outputs.
        features: Enabled crate features, in order.
        rust_flags: Raw flags placed before the dependency flags.
        rustc_flags: Raw flags appended last, overriding earlier ones.
        doc_flags: Raw flags for rustdoc.
    """

    crate_name: str
    crate_type: str
    src: str
    output_dir: str
    features: tuple[str, ...] = ()
    rust_flags: tuple[str, ...] = ()
    rustc_flags: tuple[str, ...] = ()
    doc_flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Action:
    """One fully described invocation.

    Attributes:
        kind: Which command to build.
        toolchain: The Rust toolchain.
        cc: The host C/C++ toolchain.
        depinfo: The dependency summary.
        request: The crate being built.
        doc_zip: Output archive path (DOC actions only).
        ar_fallback: Archiver substituted for libtool.
        zip_path: zip executable used to archive documentation.
        origin: Loader origin marker for rpaths.
    """

    kind: InvocationKind
    toolchain: ToolchainDescriptor
    cc: CcToolchain
    depinfo: DependencyInfo
    request: CompileRequest
    doc_zip: str | None = None
    ar_fallback: str = DEFAULT_AR
    zip_path: str = ZIP_PATH
    origin: str = ORIGIN


def _env_pairs(
    env_vars: Mapping[str, str] | Iterable[str | tuple[str, str]],
) -> tuple[tuple[str, str], ...]:
    if isinstance(env_vars, Mapping):
        return tuple((str(k), str(v)) for k, v in env_vars.items())
    if isinstance(env_vars, str):
        raise ValueError(f"invalid environment assignments: {env_vars!r}")
    pairs: list[tuple[str, str]] = []
    for assignment in env_vars:
        if isinstance(assignment, tuple) and len(assignment) == 2:
            pairs.append((str(assignment[0]), str(assignment[1])))
            continue
        name, sep, value = assignment.partition("=")
        if not name or not sep:
            raise ValueError(f"invalid environment assignment: {assignment!r}")
        pairs.append((name, value))
    return tuple(pairs)
