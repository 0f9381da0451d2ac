# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Front end tying compilation and interpretation together.

:class:`OptSpec` compiles a usage string, adds the builtin options that were
asked for, interprets the command line and reports errors the way command
line programs do: ``<program>: <message>`` on stderr and exit status 1.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import NoReturn, TextIO

from optspec.compiler.build import compile_spec
from optspec.compiler.lexer import Token, TokenKind
from optspec.compiler.parser import parse_option
from optspec.errors import CompilerError, UserError
from optspec.model.doc import Doc
from optspec.model.grammar import Grammar, GrammarKind, GrammarNode
from optspec.render import render_help, render_usage
from optspec.runtime.args import Args
from optspec.runtime.interpreter import interpret
from optspec.runtime.result import ParsedCommand

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

BUILTIN_OPTIONS: dict[str, tuple[str, str]] = {
    "help": ("-h,help", "Write help text and exit"),
    "version": ("--version", "Write version number and exit"),
    "quiet": ("-q,quiet", "Quiet"),
    "verbose": ("+v,verbose", "Increase verbosity"),
    "debug": ("--debug", "Write debug information"),
}


class OptSpec:
    """Compile a usage string and interpret command lines against it.

    Attributes:
        name: Program name used in messages.
        grammar: The compiled grammar, after :meth:`compile`.
        doc: The compiled doc tree, after :meth:`compile`.
        quiet: True if the builtin ``--quiet`` option was given.
        verbose: Number of times the builtin ``--verbose`` option was given.
        debug: True if the builtin ``--debug`` option was given.
    """

    def __init__(
        self,
        name: str | None = None,
        *,
        float: bool = True,
        exceptions: bool = False,
        help: bool = False,
        version: str | None = None,
        quiet: bool = False,
        verbose: bool = False,
        debug: bool = False,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ) -> None:
        self.name = name or os.path.basename(sys.argv[0]) or "main"
        self.float = float
        self.exceptions = exceptions
        self.version = version
        self._builtins = [
            key
            for key, enabled in (
                ("help", help),
                ("version", version is not None),
                ("quiet", quiet),
                ("verbose", verbose),
                ("debug", debug),
            )
            if enabled
        ]
        self._stdout = stdout
        self._stderr = stderr
        self._builtin_ids: dict[str, int] = {}
        self.grammar: Grammar | None = None
        self.doc: Doc | None = None
        self.quiet = False
        self.verbose = 0
        self.debug = False

    def compile(self, source: str) -> Grammar:
        """Compile *source* and add the enabled builtin options.

        Raises:
            CompilerError: If *source* is invalid and ``exceptions`` is true.
        """
        try:
            self.grammar, self.doc = compile_spec(source, self.name)
        except CompilerError as exc:
            if self.exceptions:
                raise
            self._print(self._err, f"{self.name}: Error in usage string at {exc.location}: {exc.message}")
            sys.exit(1)
        self._add_builtins()
        return self.grammar

    def interpret(self, argv: list[str] | None = None) -> tuple[ParsedCommand, Args]:
        """Interpret *argv* (``sys.argv[1:]`` by default).

        Builtin ``--help`` and ``--version`` write their output and exit
        with status 0.

        Raises:
            UserError: On an invalid command line if ``exceptions`` is true.
        """
        if self.grammar is None:
            raise RuntimeError("compile() must be called before interpret()")
        argv = sys.argv[1:] if argv is None else argv
        try:
            result, args = interpret(self.grammar, argv, float=self.float, allow_exceptions=True)
        except UserError as exc:
            if self.exceptions:
                raise
            self.error(exc.message)
        self._apply_builtins(result)
        return result, args

    def process(self, source: str, argv: list[str] | None = None) -> tuple[ParsedCommand, Args]:
        """Compile *source* and interpret *argv*."""
        self.compile(source)
        return self.interpret(argv)

    def error(self, message: str) -> NoReturn:
        """Report a command line error with a usage line and exit with status 1."""
        self._print(self._err, f"{self.name}: {message}")
        if self.grammar is not None:
            self._print(self._err, f"Usage: {render_usage(self.grammar)}")
        sys.exit(1)

    def failure(self, message: str) -> NoReturn:
        """Report a runtime failure of the program and exit with status 1."""
        self._print(self._err, f"{self.name}: {message}")
        sys.exit(1)

    # ------------------------------------------------------------------
    # Builtin options
    # ------------------------------------------------------------------

    def _add_builtins(self) -> None:
        self._builtin_ids = {}
        for key in self._builtins:
            node = _add_builtin_option(self.grammar, *BUILTIN_OPTIONS[key])
            if node is None:
                logger.debug("Builtin option '%s' is shadowed by a declared option", key)
            else:
                self._builtin_ids[key] = node.id

    def _apply_builtins(self, result: ParsedCommand) -> None:
        # Floating builtins are recorded on the innermost command given
        options = []
        context = result
        while context is not None:
            options.extend(context.options)
            context = context.subcommand
        given = {option.node for option in options}
        ids = self._builtin_ids
        if ids.get("help") in given:
            self._print(self._out, render_help(self.grammar, self.doc))
            sys.exit(0)
        if ids.get("version") in given:
            self._print(self._out, f"{self.name} {self.version}")
            sys.exit(0)
        self.quiet = ids.get("quiet") in given
        self.verbose = sum(1 for option in options if option.node == ids.get("verbose"))
        self.debug = ids.get("debug") in given

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    @property
    def _out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def _err(self) -> TextIO:
        return self._stderr or sys.stderr

    def _print(self, stream: TextIO, text: str) -> None:
        print(text, file=stream)


def process(source: str, argv: list[str] | None = None, **options: object) -> tuple[ParsedCommand, Args]:
    """Compile *source* and interpret *argv* in one step.

    Keyword arguments are passed on to :class:`OptSpec`.
    """
    return OptSpec(**options).process(source, argv)


# ################
# Implementation
# ################


def _add_builtin_option(grammar: Grammar, declaration: str, brief: str) -> GrammarNode | None:
    """Append a builtin option to the program unless one of its names is taken."""
    spec = parse_option(Token(TokenKind.OPTION, 0, 0, declaration, declaration))
    program = grammar.program
    table = program.command.option_table
    if any(key in table for key in spec.names + spec.idents):
        return None
    node = GrammarNode(
        id=len(grammar.nodes),
        kind=GrammarKind.OPTION,
        parent=program.id,
        path=[spec.ident],
        brief=brief,
        option=spec,
    )
    grammar.nodes.append(node)
    program.children.insert(len(program.command.options), node.id)
    program.command.options.append(node.id)
    for key in spec.names + spec.idents:
        table[key] = node.id
    return node
