# SPDX-License-Identifier: MIT
"""Command builders for rustc and rustdoc actions.

Each builder is a pure function from an action's inputs to a shell
command: identical inputs always give byte-identical output, since the
orchestrator keys its action cache on the command text.

Commands are assembled as token lists (see rcons.core.shell) and only
rendered to shell text at the end. The *_tokens / *_lines functions
expose the structured form.

Three kinds of command are built:
- compile: a single `set -e;` guarded rustc invocation
- doc: rustdoc into a scratch directory, zipped into one archive
- doc test: a standalone bash script running `rustdoc --test`
"""

from __future__ import annotations

import hashlib
import logging
import posixpath

from rcons.core.action import (
    ZIP_PATH,
    Action,
    CompileRequest,
    DependencyInfo,
    InvocationKind,
)
from rcons.core.errors import BuilderError
from rcons.core.features import features_flags
from rcons.core.rpath import ORIGIN, compute_dylib_rpaths
from rcons.core.shell import (
    CommandToken,
    EnvAssign,
    Raw,
    raw,
    to_script,
    to_shell_command,
)
from rcons.tools.toolchain import (
    DEFAULT_AR,
    CcToolchain,
    ToolchainDescriptor,
    library_search_flags,
    resolve_linker_and_archiver,
)

logger = logging.getLogger(__name__)

STRICT_PRELUDE = "set -e;"

# rustc dies if TMPDIR is set but the directory does not exist.
TMPDIR_GUARD = "if [[ -v TMPDIR ]]; then mkdir -p $TMPDIR; fi;"

OPT_LEVEL = "3"

DOCS_DIR_NAME = "_rust_docs"


def metadata_hash(src: str) -> str:
    """Return the -C metadata discriminator for a source path.

    Derived from the path, not the file contents, so the same source
    always gets the same value across processes and hosts.
    """
    return hashlib.sha256(src.encode("utf-8")).hexdigest()[:16]


def _loader_env(toolchain: ToolchainDescriptor) -> list[CommandToken]:
    # Both the ELF and Mach-O loader variables, so rustc finds its own
    # runtime libraries on either platform.
    lib_path = toolchain.rustc_lib_path
    return [
        EnvAssign("LD_LIBRARY_PATH", lib_path),
        EnvAssign("DYLD_LIBRARY_PATH", lib_path),
    ]


def _dep_env(depinfo: DependencyInfo) -> list[CommandToken]:
    return [EnvAssign(name, value) for name, value in depinfo.env_vars]


def rustc_command_tokens(
    toolchain: ToolchainDescriptor,
    cc: CcToolchain,
    depinfo: DependencyInfo,
    request: CompileRequest,
    *,
    ar_fallback: str = DEFAULT_AR,
    origin: str = ORIGIN,
) -> list[CommandToken]:
    """Construct the tokens of the rustc command for a crate."""
    linker, ar = resolve_linker_and_archiver(cc, ar_fallback)
    rpaths = compute_dylib_rpaths(
        request.output_dir, depinfo.transitive_dylibs, origin
    )
    logger.debug(
        "Building rustc command for %s (%s), %d rpath(s)",
        request.crate_name,
        request.crate_type,
        len(rpaths),
    )

    tokens: list[CommandToken] = [Raw(STRICT_PRELUDE), Raw(TMPDIR_GUARD)]
    tokens += raw(depinfo.setup_cmd)
    tokens += _loader_env(toolchain)
    tokens += _dep_env(depinfo)
    tokens += [
        toolchain.rustc,
        request.src,
        "--crate-name",
        request.crate_name,
        "--crate-type",
        request.crate_type,
        "--codegen",
        f"opt-level={OPT_LEVEL}",
        "-C",
        f"metadata={metadata_hash(request.src)}",
        "--codegen",
        f"ar={ar}",
        "--codegen",
        f"linker={linker}",
        "--codegen",
        "link-args=" + " ".join(cc.link_options),
        "--out-dir",
        request.output_dir,
        "--emit=dep-info,link",
    ]
    for rpath in rpaths:
        tokens += ["--codegen", f"link-arg=-Wl,-rpath={rpath}"]
    tokens += features_flags(request.features)
    tokens += raw(request.rust_flags)
    tokens += library_search_flags(toolchain.rust_lib)
    tokens += raw(depinfo.search_flags)
    tokens += raw(depinfo.link_flags)
    tokens += raw(request.rustc_flags)
    return tokens


def build_rustc_command(
    toolchain: ToolchainDescriptor,
    cc: CcToolchain,
    depinfo: DependencyInfo,
    request: CompileRequest,
    *,
    ar_fallback: str = DEFAULT_AR,
    origin: str = ORIGIN,
) -> str:
    """Construct the rustc command used to build a crate.

    Args:
        toolchain: The Rust toolchain.
        cc: Host C/C++ toolchain providing the linker and archiver.
        depinfo: Dependency summary for the crate.
        request: The crate to compile.
        ar_fallback: Archiver used when the configured one is libtool.
        origin: Loader origin marker for rpath entries.

    Returns:
        A single shell command string.
    """
    return to_shell_command(
        rustc_command_tokens(
            toolchain, cc, depinfo, request, ar_fallback=ar_fallback, origin=origin
        )
    )


def docs_dir_for(doc_zip: str) -> str:
    """Return the scratch directory documentation is generated into."""
    return posixpath.join(posixpath.dirname(doc_zip), DOCS_DIR_NAME)


def rustdoc_command_tokens(
    toolchain: ToolchainDescriptor,
    depinfo: DependencyInfo,
    request: CompileRequest,
    doc_zip: str,
    *,
    zip_path: str = ZIP_PATH,
) -> list[CommandToken]:
    """Construct the tokens of the rustdoc command for a crate."""
    docs_dir = docs_dir_for(doc_zip)
    zip_name = posixpath.basename(doc_zip)
    logger.debug("Building rustdoc command for %s -> %s", request.crate_name, doc_zip)

    tokens: list[CommandToken] = [Raw(STRICT_PRELUDE)]
    tokens += raw(depinfo.setup_cmd)
    tokens += ["rm", "-rf", docs_dir, Raw(";"), "mkdir", "-p", docs_dir, Raw(";")]
    tokens += _loader_env(toolchain)
    tokens += _dep_env(depinfo)
    tokens += [toolchain.rust_doc, request.src, "--crate-name", request.crate_name]
    tokens += library_search_flags(toolchain.rust_lib)
    tokens += ["-o", docs_dir]
    tokens += raw(request.doc_flags)
    tokens += raw(depinfo.search_flags)
    tokens += raw(depinfo.link_flags)
    tokens += [
        Raw("&&"),
        Raw("("),
        "cd",
        docs_dir,
        Raw("&&"),
        zip_path,
        "-qR",
        zip_name,
        Raw("$(find . -type f)"),
        Raw(")"),
        Raw("&&"),
        "mv",
        posixpath.join(docs_dir, zip_name),
        doc_zip,
    ]
    return tokens


def build_rustdoc_command(
    toolchain: ToolchainDescriptor,
    depinfo: DependencyInfo,
    request: CompileRequest,
    doc_zip: str,
    *,
    zip_path: str = ZIP_PATH,
) -> str:
    """Construct the rustdoc command used to document a crate.

    Documentation is generated into a scratch directory next to
    doc_zip, then archived into doc_zip.
    """
    return to_shell_command(
        rustdoc_command_tokens(toolchain, depinfo, request, doc_zip, zip_path=zip_path)
    )


def rustdoc_test_script_lines(
    toolchain: ToolchainDescriptor,
    depinfo: DependencyInfo,
    request: CompileRequest,
) -> list[list[CommandToken]]:
    """Construct the command lines of the rustdoc test script."""
    logger.debug("Building rustdoc test script for %s", request.crate_name)

    lines: list[list[CommandToken]] = [[Raw("set -e")]]
    lines += [[Raw(cmd)] for cmd in depinfo.setup_cmd]

    command: list[CommandToken] = []
    command += _loader_env(toolchain)
    command += _dep_env(depinfo)
    command += [toolchain.rust_doc, "--test"]
    command += library_search_flags(toolchain.rust_lib)
    command += [request.src, "--crate-name", request.crate_name]
    command += raw(depinfo.search_flags)
    command += raw(depinfo.link_flags)
    lines.append(command)
    return lines


def build_rustdoc_test_script(
    toolchain: ToolchainDescriptor,
    depinfo: DependencyInfo,
    request: CompileRequest,
) -> str:
    """Construct the bash script used to run a crate's doc tests."""
    return to_script(rustdoc_test_script_lines(toolchain, depinfo, request))


def build_command(action: Action) -> str:
    """Build the command (or script) for an action, by its kind."""
    if action.kind is InvocationKind.COMPILE:
        return build_rustc_command(
            action.toolchain,
            action.cc,
            action.depinfo,
            action.request,
            ar_fallback=action.ar_fallback,
            origin=action.origin,
        )
    elif action.kind is InvocationKind.DOC:
        if not action.doc_zip:
            raise BuilderError(
                f"doc action for {action.request.crate_name} has no output archive"
            )
        return build_rustdoc_command(
            action.toolchain,
            action.depinfo,
            action.request,
            action.doc_zip,
            zip_path=action.zip_path,
        )
    elif action.kind is InvocationKind.DOC_TEST:
        return build_rustdoc_test_script(action.toolchain, action.depinfo, action.request)
    else:
        raise BuilderError(f"Unknown invocation kind: {action.kind}")
