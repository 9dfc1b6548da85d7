# SPDX-License-Identifier: MIT
"""Tests for rcons.core.action."""

import dataclasses

import pytest

from rcons.core.action import (
    CRATE_TYPES,
    CompileRequest,
    DependencyInfo,
    InvocationKind,
)


class TestDependencyInfo:
    def test_defaults(self):
        depinfo = DependencyInfo()
        assert depinfo.setup_cmd == ()
        assert depinfo.env_vars == ()
        assert depinfo.search_flags == ()
        assert depinfo.link_flags == ()
        assert depinfo.transitive_dylibs == ()

    def test_create_from_mapping(self):
        depinfo = DependencyInfo.create(env_vars={"A": "1", "B": "two"})
        assert depinfo.env_vars == (("A", "1"), ("B", "two"))

    def test_create_from_assignments(self):
        depinfo = DependencyInfo.create(env_vars=["A=1", "B=x=y"])
        assert depinfo.env_vars == (("A", "1"), ("B", "x=y"))

    def test_create_invalid_assignment(self):
        with pytest.raises(ValueError, match="invalid environment assignment"):
            DependencyInfo.create(env_vars=["NOVALUE"])

    def test_create_sorts_dylib_set(self):
        depinfo = DependencyInfo.create(transitive_dylibs={"b/x.so", "a/y.so"})
        assert depinfo.transitive_dylibs == ("a/y.so", "b/x.so")

    def test_create_keeps_sequences(self):
        depinfo = DependencyInfo.create(
            search_flags=["-L b", "-L a"], link_flags=["--extern z=z.rlib"]
        )
        assert depinfo.search_flags == ("-L b", "-L a")
        assert depinfo.link_flags == ("--extern z=z.rlib",)

    def test_direct_assignments_normalised(self):
        depinfo = DependencyInfo(env_vars=("FOO=bar",))
        assert depinfo.env_vars == (("FOO", "bar"),)

    def test_direct_mapping_normalised(self):
        depinfo = DependencyInfo(env_vars={"A": "1"})  # type: ignore[arg-type]
        assert depinfo.env_vars == (("A", "1"),)

    def test_direct_invalid_assignment(self):
        with pytest.raises(ValueError, match="invalid environment assignment"):
            DependencyInfo(env_vars=("NOVALUE",))  # type: ignore[arg-type]

    def test_direct_bare_string_rejected(self):
        with pytest.raises(ValueError, match="invalid environment assignments"):
            DependencyInfo(env_vars="FOO=bar")  # type: ignore[arg-type]

    def test_frozen(self):
        depinfo = DependencyInfo()
        with pytest.raises(dataclasses.FrozenInstanceError):
            depinfo.setup_cmd = ("x",)  # type: ignore[misc]


class TestCompileRequest:
    def test_creation(self):
        request = CompileRequest("foo", "lib", "src/lib.rs", "out")
        assert request.crate_name == "foo"
        assert request.features == ()
        assert request.rustc_flags == ()

    def test_equality(self):
        a = CompileRequest("foo", "lib", "src/lib.rs", "out", features=("x",))
        b = CompileRequest("foo", "lib", "src/lib.rs", "out", features=("x",))
        assert a == b


class TestInvocationKind:
    def test_values(self):
        assert InvocationKind("compile") is InvocationKind.COMPILE
        assert InvocationKind("doc") is InvocationKind.DOC
        assert InvocationKind("doctest") is InvocationKind.DOC_TEST

    def test_crate_types(self):
        assert "lib" in CRATE_TYPES
        assert "staticlib" in CRATE_TYPES
        assert "proc-macro" in CRATE_TYPES
