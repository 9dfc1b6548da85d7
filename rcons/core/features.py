# SPDX-License-Identifier: MIT
"""Translation of crate features into rustc configuration flags."""

from __future__ import annotations

from collections.abc import Iterable

from rcons.util.paths import ordered


def features_flags(features: Iterable[str]) -> list[str]:
    """Construct the --cfg flags for a collection of crate features.

    Produces interleaved pairs, one pair per feature, in input order:
        features_flags(["foo", "bar"])
        -> ["--cfg", 'feature="foo"', "--cfg", 'feature="bar"']

    The double quotes are part of the compiler argument (a string
    literal in rustc's cfg syntax); shell quoting happens later.
    """
    result: list[str] = []
    for feature in ordered(features):
        result.append("--cfg")
        result.append(f'feature="{feature}"')
    return result
