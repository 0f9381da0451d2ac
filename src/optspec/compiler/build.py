# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler workflow for usage strings and usage files.

:func:`compile_spec` runs the pipeline on a string. :func:`compile_file`
adds a CMake-style cache on top: an artifact is reused when it already
exists and is strictly newer than the usage file.
"""

from __future__ import annotations

import logging
from pathlib import Path

from optspec.compiler.analyzer import analyze
from optspec.compiler.artifact import ARTIFACT_SUFFIX, read_artifact, write_artifact
from optspec.compiler.lexer import lex
from optspec.compiler.parser import parse
from optspec.model.doc import Doc
from optspec.model.grammar import Grammar

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class BuildError(Exception):
    """Raised when a usage file cannot be read or its artifact cannot be used."""


def compile_spec(source: str, program_name: str = "main") -> tuple[Grammar, Doc]:
    """Compile a usage string.

    Args:
        source: The usage string.
        program_name: Name of the program, used in messages and usage lines.

    Returns:
        The ``(grammar, doc)`` pair.

    Raises:
        LexerError: If the usage string cannot be tokenized.
        ParserError: If the usage string is syntactically invalid.
        AnalyzerError: If the usage string is semantically invalid.
    """
    tokens = lex(program_name, source)
    ast = parse(tokens)
    return analyze(ast)


def compile_file(
    source_file: Path,
    build_dir: Path | None = None,
    program_name: str | None = None,
) -> tuple[Grammar, Doc]:
    """Compile a usage file, reusing a cached artifact when possible.

    Args:
        source_file: Path to the usage file.
        build_dir: Directory for compiled artifacts. No caching when ``None``.
        program_name: Program name; defaults to the file name without suffix.

    Returns:
        The ``(grammar, doc)`` pair.

    Raises:
        BuildError: If the usage file cannot be read.
        CompilerError: If the usage string is invalid.
    """
    name = program_name or source_file.stem
    artifact = None if build_dir is None else build_dir / f"{name}{ARTIFACT_SUFFIX}"

    if artifact is not None and _is_up_to_date(source_file, artifact):
        try:
            grammar, doc = read_artifact(artifact)
        except ValueError as exc:
            logger.debug("Ignoring stale artifact %s: %s", artifact, exc)
        else:
            if grammar.program.name == name:
                logger.debug("Using cached artifact %s", artifact)
                return grammar, doc

    try:
        source = source_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise BuildError(f"Cannot read usage file '{source_file}': {exc}") from exc

    grammar, doc = compile_spec(source, name)
    if artifact is not None:
        write_artifact(grammar, doc, artifact)
        logger.debug("Wrote artifact %s", artifact)
    return grammar, doc


# ################
# Implementation
# ################


def _is_up_to_date(source_file: Path, artifact: Path) -> bool:
    """Return True if *artifact* exists and is strictly newer than *source_file*."""
    if not artifact.exists() or not source_file.exists():
        return False
    return artifact.stat().st_mtime > source_file.stat().st_mtime
