# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command line interpreter.

Walks an ``argv`` list against a compiled grammar and builds the result
tree: the program, the selected chain of sub-commands and the options given
to each of them.
"""

from __future__ import annotations

import logging
import re
import sys

from optspec.errors import UserError
from optspec.model.grammar import Grammar, GrammarNode
from optspec.render import render_usage
from optspec.runtime.args import Args
from optspec.runtime.result import ParsedCommand, ParsedOption

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def interpret(
    grammar: Grammar,
    argv: list[str],
    *,
    float: bool = True,
    allow_exceptions: bool = True,
) -> tuple[ParsedCommand, Args]:
    """Interpret a command line against a grammar.

    Args:
        grammar: The compiled grammar.
        argv: Command line arguments without the program name. The list is
            not modified.
        float: If true, options of enclosing commands are accepted after a
            sub-command and positional arguments may be mixed with options.
            If false, interpretation stops at the first positional argument
            and options must follow the command they belong to.
        allow_exceptions: If true, :class:`UserError` propagates to the
            caller. If false, the error is printed to stderr as
            ``<program>: <message>`` followed by the usage line and the
            process exits with status 1.

    Returns:
        The program's result node and the remaining positional arguments.

    Raises:
        UserError: On unknown or duplicate options, missing, superfluous or
            invalid option arguments (only if *allow_exceptions* is true).
    """
    try:
        return _Interpreter(grammar, argv, float).interpret()
    except UserError as exc:
        if allow_exceptions:
            raise
        program = grammar.program.name
        print(f"{program}: {exc.message}", file=sys.stderr)
        print(f"Usage: {render_usage(grammar)}", file=sys.stderr)
        sys.exit(1)


# ################
# Implementation
# ################

_LONG_RE = re.compile(r"^(--|\+\+)([^=]+)(?:=(.*))?$", re.DOTALL)
_SHORT_RE = re.compile(r"^([-+])(.)(.+)?$", re.DOTALL)


class _Interpreter:
    """Stateful walk over one ``argv`` list."""

    def __init__(self, grammar: Grammar, argv: list[str], floating: bool) -> None:
        self._grammar = grammar
        self._argv = list(argv)
        self._float = floating
        self._args = Args()
        # Runtime command contexts from the program down to the current one
        self._contexts = [ParsedCommand(grammar, 0)]
        # Uids of the options seen so far
        self._seen: set[str] = set()

    def interpret(self) -> tuple[ParsedCommand, Args]:
        """Consume ``argv`` and return the result tree and remaining args."""
        while self._argv:
            word = self._argv.pop(0)
            if word == "--":
                break
            if len(word) > 1 and word[0] in "-+":
                self._interpret_option(word)
                continue
            command = None
            if not self._args:
                command = self._grammar.find_subcommand(self._contexts[-1].node, word)
            if command is not None:
                self._enter(command)
            elif self._float:
                self._args.append(word)
            else:
                self._argv.insert(0, word)
                break
        self._args.extend(self._argv)
        logger.debug("Interpreted command line with %d remaining arguments", len(self._args))
        return self._contexts[0], self._args

    def _enter(self, command: GrammarNode) -> None:
        context = ParsedCommand(self._grammar, command.id)
        self._contexts[-1].subcommand = context
        self._contexts.append(context)

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def _interpret_option(self, word: str) -> None:
        name, value, short = _split_option(word)
        option = self._find_option(name, short)
        spec = option.option

        if option.uid in self._seen and not spec.repeatable:
            raise UserError(f"Duplicate option '{name}'")
        self._seen.add(option.uid)

        if spec.argument:
            if value is None and not spec.optional:
                if not self._argv:
                    raise UserError(f"Missing argument for option '{name}'")
                value = self._argv.pop(0)
        elif value is not None:
            if not short:
                raise UserError(f"No argument allowed for option '{name}'")
            # Clustered short options, e.g. -ab
            self._argv.insert(0, f"{word[0]}{value}")
            value = None

        converted = None
        if value is not None:
            message = spec.argument_type.explain(name, value)
            if message is None:
                converted = spec.argument_type.convert(value)
            elif value != "":
                raise UserError(message)

        parsed = ParsedOption(node=option.id, name=name, ident=spec.ident, value=converted)
        self._contexts[-1].add(parsed, spec)

    def _find_option(self, name: str, short: bool) -> GrammarNode:
        # The prefix is one character for short options and two for long ones
        ident = (name[1:] if short else name[2:]).replace("-", "_")
        contexts = reversed(self._contexts) if self._float else [self._contexts[-1]]
        for context in contexts:
            option = self._grammar.find_option(context.node, ident)
            if option is None:
                continue
            idents = option.option.short_idents if short else option.option.long_idents
            if ident in idents:
                return option
        raise UserError(f"Unknown option '{name}'")


def _split_option(word: str) -> tuple[str, str | None, bool]:
    """Return the name, inline value and short-ness of an option word."""
    match = _LONG_RE.match(word)
    if match is not None:
        initial, name, value = match.groups()
        return f"{initial}{name}", value, False
    match = _SHORT_RE.match(word)
    if match is None:
        raise UserError(f"Illegal option '{word}'")
    initial, name, value = match.groups()
    return f"{initial}{name}", value, True
