# SPDX-License-Identifier: MIT
"""Lexical path helpers for slash-delimited build paths.

These operate purely on strings: no symlinks are followed and ``..``
segments are never resolved. Build paths are always ``/``-delimited,
regardless of host platform.
"""

from __future__ import annotations

from collections.abc import Iterable


def ordered(items: Iterable[str]) -> list[str]:
    """Return items as a list with a deterministic order.

    Sequences keep their order. Sets have no stable iteration order
    across interpreter runs, so they are sorted.
    """
    if isinstance(items, (set, frozenset)):
        return sorted(items)
    return list(items)


def path_parts(path: str) -> list[str]:
    """Split a path into its parts, with all "." elements removed.

    Empty elements from doubled or trailing slashes are dropped as well.
    An absolute path keeps a leading "" element for the root, so it
    never shares a prefix with a relative path.

    Examples:
        >>> path_parts("./foo/bar")
        ['foo', 'bar']
        >>> path_parts("/usr/lib/")
        ['', 'usr', 'lib']
    """
    parts = [part for part in path.split("/") if part and part != "."]
    if path.startswith("/"):
        return ["", *parts]
    return parts


def relative_path(src_path: str, dest_path: str) -> str:
    """Return the relative path from directory src_path to dest_path.

    The common prefix is found by pairwise comparison, stopping at the
    first mismatch. The result is empty when both paths are the same.

    Both paths must be relative, or both absolute. Mixing the two is
    not supported: the root of an absolute dest_path survives as an
    empty segment (relative_path("out", "/usr/lib") == "..//usr/lib").

    Examples:
        >>> relative_path("a/b/c", "a/b/d/e")
        '../d/e'
        >>> relative_path("a/b", "a/b/c")
        'c'
    """
    src_parts = path_parts(src_path)
    dest_parts = path_parts(dest_path)

    n = 0
    for src_part, dest_part in zip(src_parts, dest_parts):
        if src_part != dest_part:
            break
        n += 1

    return "../" * (len(src_parts) - n) + "/".join(dest_parts[n:])


def dirname(path: str) -> str:
    """Return the directory containing a file path ("" for a bare name)."""
    head, sep, _ = path.rpartition("/")
    if sep and not head:
        return "/"
    return head


def get_dir_names(files: Iterable[str]) -> list[str]:
    """Return the distinct directories of files, in order of first appearance."""
    dirs: dict[str, None] = {}
    for f in ordered(files):
        dirs[dirname(f)] = None
    return list(dirs)


def get_path_str(dirs: Iterable[str]) -> str:
    """Join directories into a colon-separated search path."""
    return ":".join(dirs)
