# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compile usage strings into command line grammars and interpret argv with them."""

from optspec.compiler.build import compile_spec
from optspec.errors import CompilerError, InternalError, OptSpecError, UserError
from optspec.program import OptSpec, process
from optspec.runtime.args import Args
from optspec.runtime.interpreter import interpret
from optspec.runtime.result import ParsedCommand, ParsedOption

__all__ = [
    "Args",
    "CompilerError",
    "InternalError",
    "OptSpec",
    "OptSpecError",
    "ParsedCommand",
    "ParsedOption",
    "UserError",
    "compile_spec",
    "interpret",
    "process",
]
