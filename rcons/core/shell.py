# SPDX-License-Identifier: MIT
"""Shell command rendering for rcons.

Key design principles:
1. Commands stay as token lists until final shell command generation
2. Plain string tokens are single argv words, quoted only when needed
3. Raw tokens are pre-formed shell fragments and pass through verbatim
4. Environment assignments quote the value but never the name

Token kinds:
- str: "--out-dir" or "/path/with space" (quoted if it holds metacharacters)
- Raw: Raw("set -e;") or Raw("mkdir -p dir;") (emitted as-is)
- EnvAssign: EnvAssign("LD_LIBRARY_PATH", "a:b") -> LD_LIBRARY_PATH=a:b
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

INTERPRETER_DIRECTIVE = "#!/usr/bin/env bash"

# Characters that make bash treat a word as something other than a literal
_BASH_SPECIAL = " \t\n\"'\\$`!*?[](){}|&;<>#~"


@dataclass(frozen=True)
class Raw:
    """A pre-formed shell fragment, emitted without quoting.

    Dependency summaries and caller flag lists are shell text produced
    upstream (e.g. "-L dependency=out/deps" or "mkdir -p out;"), so
    they are spliced into the command verbatim.
    """

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class EnvAssign:
    """An environment variable assignment prefixing a command.

    Attributes:
        name: Variable name (never quoted).
        value: Variable value (quoted for the shell if needed).
    """

    name: str
    value: str

    def __str__(self) -> str:
        return f"{self.name}={quote_for_shell(self.value)}"


# Type alias for command tokens
CommandToken = str | Raw | EnvAssign


def raw(fragments: Iterable[str]) -> list[Raw]:
    """Wrap a sequence of shell fragments as Raw tokens."""
    return [Raw(f) for f in fragments]


def quote_for_shell(s: str) -> str:
    """Quote a single word for bash if needed.

    Words without shell metacharacters are returned unchanged, so
    ordinary paths and flags render exactly as written.

    Examples:
        >>> quote_for_shell("out/lib")
        'out/lib'
        >>> quote_for_shell("link-arg=-Wl,-rpath=$ORIGIN/lib")
        "'link-arg=-Wl,-rpath=$ORIGIN/lib'"
    """
    if not s:
        return "''"
    if not any(c in s for c in _BASH_SPECIAL):
        return s
    if "'" not in s:
        return f"'{s}'"
    escaped = (
        s.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )
    return f'"{escaped}"'


def render_token(token: CommandToken) -> str:
    """Render one token as shell text."""
    if isinstance(token, (Raw, EnvAssign)):
        return str(token)
    return quote_for_shell(token)


def to_shell_command(tokens: Sequence[CommandToken]) -> str:
    """Convert a token list to a single-line shell command string."""
    return " ".join(render_token(t) for t in tokens)


def to_script(lines: Sequence[Sequence[CommandToken]]) -> str:
    """Render a bash script, one command per line.

    The script starts with an interpreter directive and ends with a
    newline.
    """
    body = [to_shell_command(line) for line in lines]
    return "\n".join([INTERPRETER_DIRECTIVE, *body]) + "\n"
