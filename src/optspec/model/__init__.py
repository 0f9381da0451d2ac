# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Trees produced by the compiler: AST, grammar, doc, and argument types."""

from optspec.model.doc import Doc, DocKind, DocNode
from optspec.model.grammar import CommandSpec, Grammar, GrammarKind, GrammarNode, OptionSpec
from optspec.model.types import ArgumentType, EnumType, FileType, FloatType, IntegerType, StringType

__all__ = [
    # Argument types
    "ArgumentType",
    "StringType",
    "IntegerType",
    "FloatType",
    "FileType",
    "EnumType",
    # Grammar
    "GrammarKind",
    "GrammarNode",
    "CommandSpec",
    "OptionSpec",
    "Grammar",
    # Documentation
    "DocKind",
    "DocNode",
    "Doc",
]
