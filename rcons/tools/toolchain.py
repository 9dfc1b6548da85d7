# SPDX-License-Identifier: MIT
"""Toolchain descriptors and tool endpoint resolution.

A ToolchainDescriptor is the resolved Rust toolchain (rustc, rustdoc and
their library directories). A CcToolchain is the host C/C++ toolchain
rustc links and archives with.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from rcons.util.paths import get_dir_names, get_path_str, ordered

logger = logging.getLogger(__name__)

# Some CROSSTOOL configs (notably darwin) set ar to "libtool". rustc
# passes ar-specific flags, so a real ar binary is substituted.
LIBTOOL_MARKER = "libtool"
DEFAULT_AR = "/usr/bin/ar"


@dataclass(frozen=True)
class ToolchainDescriptor:
    """A resolved Rust toolchain.

    Attributes:
        rustc: Path to the rustc executable.
        rust_doc: Path to the rustdoc executable.
        rustc_lib: Files making up rustc's own runtime library directory.
        rust_lib: Files making up the Rust standard library directory.

    Example:
        toolchain = ToolchainDescriptor(
            rustc="external/rust/bin/rustc",
            rust_doc="external/rust/bin/rustdoc",
            rustc_lib=("external/rust/lib/librustc_driver.so",),
            rust_lib=("external/rust/lib/rustlib/x86_64/lib/libstd.rlib",),
        )
    """

    rustc: str
    rust_doc: str
    rustc_lib: tuple[str, ...] = ()
    rust_lib: tuple[str, ...] = ()

    @classmethod
    def from_files(
        cls,
        rustc: str | Iterable[str],
        rust_doc: str | Iterable[str],
        rustc_lib: Iterable[Iterable[str]] = (),
        rust_lib: Iterable[Iterable[str]] = (),
    ) -> ToolchainDescriptor:
        """Create a descriptor from file groups.

        The executables may be given directly or as a group holding one
        file (the first file is used). The library lists are groups of
        files and are flattened.
        """
        return cls(
            rustc=_first_file(rustc),
            rust_doc=_first_file(rust_doc),
            rustc_lib=_flatten(rustc_lib),
            rust_lib=_flatten(rust_lib),
        )

    @property
    def rustc_lib_dirs(self) -> list[str]:
        return get_dir_names(self.rustc_lib)

    @property
    def rust_lib_dirs(self) -> list[str]:
        return get_dir_names(self.rust_lib)

    @property
    def rustc_lib_path(self) -> str:
        """Loader search path value for rustc's runtime libraries."""
        return get_path_str(self.rustc_lib_dirs)


@dataclass(frozen=True)
class CcToolchain:
    """The host C/C++ toolchain as seen by the build.

    Attributes:
        compiler_executable: C compiler, used by rustc as its linker driver.
        ar_executable: Archiver for static libraries.
        link_options: Options always passed to the linker, in order.
    """

    compiler_executable: str
    ar_executable: str
    link_options: tuple[str, ...] = ()


def resolve_linker_and_archiver(
    cc: CcToolchain, ar_fallback: str = DEFAULT_AR
) -> tuple[str, str]:
    """Return the (linker, archiver) executables for rustc.

    If the configured archiver is really libtool, ar_fallback is used
    instead.
    """
    ar = cc.ar_executable
    if LIBTOOL_MARKER in ar:
        logger.debug("Archiver %s is libtool; using %s", ar, ar_fallback)
        ar = ar_fallback
    return cc.compiler_executable, ar


def library_search_flags(*file_sets: Iterable[str]) -> list[str]:
    """Construct "-L all=DIR" flags for the directories of library files.

    Directories are de-duplicated across all sets, in order of first
    appearance.

    Examples:
        >>> library_search_flags(["lib/a.rlib", "lib/b.rlib"], ["std/c.rlib"])
        ['-L', 'all=lib', '-L', 'all=std']
    """
    files: list[str] = []
    for file_set in file_sets:
        files.extend(ordered(file_set))

    result: list[str] = []
    for d in get_dir_names(files):
        result.append("-L")
        result.append(f"all={d}")
    return result


def _first_file(group: str | Iterable[str]) -> str:
    if isinstance(group, str):
        return group
    for f in group:
        return f
    raise ValueError("empty file group")


def _flatten(groups: Iterable[Iterable[str]]) -> tuple[str, ...]:
    files: list[str] = []
    for group in groups:
        if isinstance(group, str):
            files.append(group)
        else:
            files.extend(group)
    return tuple(files)
