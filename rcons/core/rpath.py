# SPDX-License-Identifier: MIT
"""Runtime library search path (rpath) resolution.

Rpaths are always relative to the loading binary's own directory, via
a loader origin marker, so the output tree stays valid wherever it is
mounted as long as its internal layout is preserved.
"""

from __future__ import annotations

from collections.abc import Iterable

from rcons.util.paths import get_dir_names, ordered, relative_path

# ELF loader marker for "the directory containing this binary"
ORIGIN = "$ORIGIN"

# Mach-O equivalent of ORIGIN
LOADER_PATH = "@loader_path"


def compute_rpaths(
    output_dir: str,
    library_dirs: Iterable[str],
    origin: str = ORIGIN,
) -> list[str]:
    """Determine rpath entries for library directories.

    Args:
        output_dir: Directory the linked artifact is written to.
        library_dirs: Directories holding transitive dynamic libraries.
        origin: Loader origin marker to prefix each entry with.

    Returns:
        One entry per distinct directory, in order of first appearance.
        Empty when there are no library directories.
    """
    dirs = list(dict.fromkeys(ordered(library_dirs)))
    return [f"{origin}/{relative_path(output_dir, libdir)}" for libdir in dirs]


def compute_dylib_rpaths(
    output_dir: str,
    dylibs: Iterable[str],
    origin: str = ORIGIN,
) -> list[str]:
    """Determine rpath entries for a collection of dynamic library files."""
    return compute_rpaths(output_dir, get_dir_names(dylibs), origin)
