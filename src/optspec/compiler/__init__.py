# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for usage strings: lexing, parsing, and semantic analysis."""

from optspec.compiler.analyzer import AnalyzerError, analyze
from optspec.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from optspec.compiler.build import BuildError, compile_file, compile_spec
from optspec.compiler.lexer import LexerError, Token, TokenKind, lex
from optspec.compiler.parser import ParserError, parse

__all__ = [
    "lex",
    "Token",
    "TokenKind",
    "LexerError",
    "parse",
    "ParserError",
    "analyze",
    "AnalyzerError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "compile_spec",
    "compile_file",
    "BuildError",
]
