# SPDX-License-Identifier: MIT
"""Tests for rcons.tools.toolchain."""

import dataclasses
import logging

import pytest

from rcons.tools.toolchain import (
    DEFAULT_AR,
    CcToolchain,
    ToolchainDescriptor,
    library_search_flags,
    resolve_linker_and_archiver,
)


class TestToolchainDescriptor:
    def test_creation(self):
        toolchain = ToolchainDescriptor(rustc="bin/rustc", rust_doc="bin/rustdoc")
        assert toolchain.rustc == "bin/rustc"
        assert toolchain.rust_doc == "bin/rustdoc"
        assert toolchain.rustc_lib == ()
        assert toolchain.rust_lib == ()

    def test_fields(self):
        names = [f.name for f in dataclasses.fields(ToolchainDescriptor)]
        assert names == ["rustc", "rust_doc", "rustc_lib", "rust_lib"]

    def test_from_files_first_file(self):
        toolchain = ToolchainDescriptor.from_files(
            rustc=["rust/bin/rustc", "rust/bin/rustc.sha"],
            rust_doc="rust/bin/rustdoc",
            rustc_lib=[["rust/lib/a.so", "rust/lib/b.so"], ["rust/lib2/c.so"]],
            rust_lib=[["rust/std/libstd.rlib"]],
        )
        assert toolchain.rustc == "rust/bin/rustc"
        assert toolchain.rustc_lib == (
            "rust/lib/a.so",
            "rust/lib/b.so",
            "rust/lib2/c.so",
        )
        assert toolchain.rust_lib == ("rust/std/libstd.rlib",)

    def test_from_files_empty_group(self):
        with pytest.raises(ValueError, match="empty file group"):
            ToolchainDescriptor.from_files(rustc=[], rust_doc="rustdoc")

    def test_lib_dirs(self):
        toolchain = ToolchainDescriptor(
            rustc="rustc",
            rust_doc="rustdoc",
            rustc_lib=("r/lib/a.so", "r/lib/b.so", "r/lib64/c.so"),
            rust_lib=("r/std/libstd.rlib",),
        )
        assert toolchain.rustc_lib_dirs == ["r/lib", "r/lib64"]
        assert toolchain.rustc_lib_path == "r/lib:r/lib64"
        assert toolchain.rust_lib_dirs == ["r/std"]

    def test_hashable_and_equal(self):
        a = ToolchainDescriptor("rustc", "rustdoc", ("l/a.so",))
        b = ToolchainDescriptor("rustc", "rustdoc", ("l/a.so",))
        assert a == b
        assert hash(a) == hash(b)


class TestResolveLinkerAndArchiver:
    def test_passthrough(self):
        cc = CcToolchain("/usr/bin/gcc", "/usr/bin/ar")
        assert resolve_linker_and_archiver(cc) == ("/usr/bin/gcc", "/usr/bin/ar")

    def test_libtool_substituted(self):
        cc = CcToolchain("/usr/bin/clang", "/usr/bin/libtool")
        assert resolve_linker_and_archiver(cc) == ("/usr/bin/clang", DEFAULT_AR)

    def test_libtool_wrapper_name_substituted(self):
        cc = CcToolchain("cc_wrapper.sh", "external/local_config_cc/libtool_check_unique")
        _, ar = resolve_linker_and_archiver(cc)
        assert ar == "/usr/bin/ar"

    def test_override_fallback(self):
        cc = CcToolchain("clang", "libtool")
        _, ar = resolve_linker_and_archiver(cc, ar_fallback="/opt/llvm/bin/llvm-ar")
        assert ar == "/opt/llvm/bin/llvm-ar"

    def test_fallback_unused_for_real_ar(self):
        cc = CcToolchain("gcc", "/opt/bin/gcc-ar")
        _, ar = resolve_linker_and_archiver(cc, ar_fallback="/nope")
        assert ar == "/opt/bin/gcc-ar"

    def test_substitution_logged(self, caplog):
        cc = CcToolchain("clang", "/usr/bin/libtool")
        with caplog.at_level(logging.DEBUG, logger="rcons.tools.toolchain"):
            resolve_linker_and_archiver(cc)
        assert "libtool" in caplog.text


class TestLibrarySearchFlags:
    def test_empty(self):
        assert library_search_flags([]) == []
        assert library_search_flags() == []

    def test_single_set(self):
        flags = library_search_flags(["std/a.rlib", "std/b.rlib"])
        assert flags == ["-L", "all=std"]

    def test_multiple_sets_deduplicated(self):
        flags = library_search_flags(
            ["std/a.rlib", "core/b.rlib"], ["core/c.rlib", "alloc/d.rlib"]
        )
        assert flags == ["-L", "all=std", "-L", "all=core", "-L", "all=alloc"]
