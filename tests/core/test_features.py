# SPDX-License-Identifier: MIT
"""Tests for rcons.core.features."""

from rcons.core.features import features_flags


class TestFeaturesFlags:
    def test_empty(self):
        assert features_flags([]) == []

    def test_order_preserved(self):
        flags = features_flags(["foo", "bar"])
        assert flags == ["--cfg", 'feature="foo"', "--cfg", 'feature="bar"']

    def test_one_flag_per_feature(self):
        flags = features_flags(("a", "b", "c"))
        assert flags.count("--cfg") == 3

    def test_set_sorted(self):
        flags = features_flags({"zeta", "alpha"})
        assert flags == ["--cfg", 'feature="alpha"', "--cfg", 'feature="zeta"']
