# SPDX-License-Identifier: MIT
"""Tests for rcons.core.shell."""

from rcons.core.shell import (
    INTERPRETER_DIRECTIVE,
    EnvAssign,
    Raw,
    quote_for_shell,
    raw,
    to_script,
    to_shell_command,
)


class TestQuoteForShell:
    def test_plain_unchanged(self):
        assert quote_for_shell("out/lib") == "out/lib"
        assert quote_for_shell("--emit=dep-info,link") == "--emit=dep-info,link"

    def test_empty(self):
        assert quote_for_shell("") == "''"

    def test_space(self):
        assert quote_for_shell("my dir") == "'my dir'"

    def test_dollar_single_quoted(self):
        assert quote_for_shell("$ORIGIN/lib") == "'$ORIGIN/lib'"

    def test_double_quotes(self):
        assert quote_for_shell('feature="foo"') == "'feature=\"foo\"'"

    def test_single_quote_escaped(self):
        assert quote_for_shell("it's $x") == '"it\'s \\$x"'


class TestTokens:
    def test_raw_verbatim(self):
        assert str(Raw("mkdir -p $TMPDIR;")) == "mkdir -p $TMPDIR;"

    def test_raw_helper(self):
        assert raw(["a b", "c"]) == [Raw("a b"), Raw("c")]

    def test_env_assign(self):
        assert str(EnvAssign("LD_LIBRARY_PATH", "a:b")) == "LD_LIBRARY_PATH=a:b"

    def test_env_assign_quotes_value_only(self):
        assert str(EnvAssign("FOO", "a b")) == "FOO='a b'"

    def test_env_assign_empty(self):
        assert str(EnvAssign("FOO", "")) == "FOO=''"


class TestToShellCommand:
    def test_mixed(self):
        tokens = [Raw("set -e;"), EnvAssign("X", "1"), "cmd", "a b", Raw("&&")]
        assert to_shell_command(tokens) == "set -e; X=1 cmd 'a b' &&"

    def test_empty(self):
        assert to_shell_command([]) == ""


class TestToScript:
    def test_lines(self):
        script = to_script([[Raw("set -e")], ["echo", "hi there"]])
        assert script == f"{INTERPRETER_DIRECTIVE}\nset -e\necho 'hi there'\n"
