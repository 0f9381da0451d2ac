# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Indentation-driven parser for usage strings.

Converts the token stream produced by the lexer into an :class:`Ast`. Scope
is decided by indentation: a token belongs to the nearest enclosing node
whose indentation is strictly less than its own. Declarations on one line
share the command context that was in force when the line started.
"""

from __future__ import annotations

import logging
import re

from optspec.compiler.lexer import Token, TokenKind
from optspec.errors import CompilerError, InternalError
from optspec.model.ast import Ast, AstKind, AstNode
from optspec.model.grammar import OptionSpec
from optspec.model.types import EnumType, FloatType, IntegerType, StringType, file_type_for

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParserError(CompilerError):
    """Raised when the token stream does not form a valid usage string."""


def parse(tokens: list[Token]) -> Ast:
    """Parse a token stream into an AST.

    Args:
        tokens: Tokens as returned by :func:`optspec.compiler.lexer.lex`.

    Returns:
        The AST. Node 0 is the program.

    Raises:
        ParserError: On malformed option or command declarations, illegal
            nesting, or text following a declaration on the same line.
    """
    return _Parser(tokens).parse()


def parse_option(token: Token) -> OptionSpec:
    """Parse an option declaration such as ``-a,all=FILE?``.

    Raises:
        ParserError: If the declaration is malformed.
    """
    match = _OPTION_RE.match(token.source)
    if match is None:
        raise ParserError(f"Illegal option: {token.source}", token.line, token.char)
    initial, names_text, arg, optional = match.groups()

    names = names_text.split(",")
    short_idents: list[str] = []
    if initial in ("-", "+"):
        while names and len(names[0]) == 1:
            short_idents.append(names.pop(0))
    for name in names:
        if len(name) < 2:
            raise ParserError("Long names should be at least two characters long", token.line, token.char)
    long_idents = [name.replace("-", "_") for name in names]
    short_names = [f"-{name}" for name in short_idents]
    long_names = [f"--{name}" for name in names]

    spec = OptionSpec(
        short_idents=short_idents,
        long_idents=long_idents,
        short_names=short_names,
        long_names=long_names,
        ident=long_idents[0] if long_idents else short_idents[0],
        name=long_names[0] if long_names else short_names[0],
        repeatable=initial in ("+", "++"),
    )
    if arg is not None:
        spec.argument = True
        spec.optional = optional is not None
        spec.argument_name, spec.argument_type = _parse_argument(token, arg)
    return spec


# ################
# Implementation
# ################

_NAME = r"[a-zA-Z0-9?][a-zA-Z0-9_-]*"
_OPTION_RE = re.compile(rf"^(--|\+\+|-|\+)({_NAME}(?:,{_NAME})*)(?:=(.+?)(\?)?)?$")
_COMMAND_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9_-]*$")


def _parse_argument(token: Token, text: str) -> tuple[str, object]:
    """Return the argument name and type of an ``=NAME:TYPE`` expression."""
    name: str | None = None
    typed = ":" in text
    if typed:
        name, _, text = text.partition(":")
        name = name or None

    if text == "":
        return name or "VAL", StringType()
    if text == "#":
        return name or "INT", IntegerType()
    if text == "$":
        return name or "NUM", FloatType()
    file_type = file_type_for(text)
    if file_type is not None:
        return name or file_type.name, file_type
    if "," in text:
        return name or text, EnumType(values=text.split(","))
    if typed:
        raise ParserError(f"Illegal type expression: {text}", token.line, token.char)
    return text, StringType()


class _Parser:
    """Stack machine building the AST.

    ``_nodes`` holds the open indentation scopes, ``_cmds`` the command
    contexts. A command is popped from ``_cmds`` together with its node.
    """

    def __init__(self, tokens: list[Token]) -> None:
        if not tokens or tokens[0].kind != TokenKind.PROGRAM:
            raise InternalError("Token stream must start with the program token")
        self._tokens = tokens
        self._pos = 1
        self._ast = Ast(program_name=tokens[0].value)
        self._nodes: list[int] = []
        self._cmds: list[int] = []
        self._line = -1
        self._line_depth = 0
        self._line_options: list[int] = []
        self._last_decl: int | None = None
        self._group: int | None = None

    def parse(self) -> Ast:
        """Parse the full token stream and return the AST."""
        program = self._ast.add(AstKind.PROGRAM, self._tokens[0], None, text=self._ast.program_name)
        self._nodes.append(program.id)
        self._cmds.append(program.id)
        handlers = {
            TokenKind.BLANK: self._parse_blank,
            TokenKind.OPTION: self._parse_option,
            TokenKind.COMMAND: self._parse_command,
            TokenKind.ARG_SPEC: self._parse_arg_spec,
            TokenKind.ARG_DESCR: self._parse_arg_descr,
            TokenKind.BRIEF: self._parse_brief,
            TokenKind.TEXT: self._parse_text,
            TokenKind.CODE: self._parse_code,
            TokenKind.SECTION: self._parse_section,
            TokenKind.SUBSECTION: self._parse_subsection,
            TokenKind.BULLET: self._parse_bullet,
        }
        while self._pos < len(self._tokens):
            token = self._advance()
            handler = handlers.get(token.kind)
            if handler is None:
                raise InternalError(f"Unexpected {token.kind.value} token at {token.location}")
            handler(token)
        logger.debug("Parsed %d AST nodes", len(self._ast.nodes))
        return self._ast

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _peek(self) -> Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    # ------------------------------------------------------------------
    # Scope helpers
    # ------------------------------------------------------------------

    def _node(self, node_id: int) -> AstNode:
        return self._ast.nodes[node_id]

    def _pop(self) -> None:
        node_id = self._nodes.pop()
        if self._cmds and self._cmds[-1] == node_id:
            self._cmds.pop()

    def _unwind(self, token: Token) -> None:
        """Close every scope indented at or beyond *token*."""
        while self._nodes and self._node(self._nodes[-1]).char >= token.char:
            self._pop()
        if not self._nodes:
            raise ParserError("Illegal indentation", token.line, token.char)

    def _new_line(self, token: Token) -> None:
        self._unwind(token)
        self._start_line(token, len(self._nodes))

    def _start_line(self, token: Token, depth: int) -> None:
        self._line = token.line
        self._line_depth = depth
        self._line_options = []
        self._last_decl = None

    def _continues_paragraph(self, token: Token) -> bool:
        following = self._peek()
        return following is not None and following.kind == TokenKind.TEXT and following.char == token.char

    def _subject(self) -> int:
        """Return the open scope, skipping a paragraph in favour of its parent."""
        node = self._node(self._nodes[-1])
        if node.kind == AstKind.PARAGRAPH:
            return node.parent
        return node.id

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_option(self, token: Token) -> None:
        if token.line != self._line:
            group = self._group
            if group is not None and self._nodes[-1] == group and token.char == self._node(group).char:
                self._start_line(token, len(self._nodes) - 1)
            else:
                self._group = None
                self._new_line(token)

        if self._group is None:
            parent = self._subject()
            if self._node(parent).kind == AstKind.OPTION_GROUP:
                raise ParserError("Options can't be nested within an option group", token.line, token.char)
            group_node = self._ast.add(AstKind.OPTION_GROUP, token, parent, command=self._cmds[-1])
            self._nodes.append(group_node.id)
            self._group = group_node.id

        spec = parse_option(token)
        option = self._ast.add(AstKind.OPTION, token, self._group, command=self._cmds[-1], option=spec)
        self._line_options.append(option.id)
        self._last_decl = option.id

    def _parse_command(self, token: Token) -> None:
        self._group = None
        if token.line != self._line:
            self._new_line(token)
        else:
            # Commands on one line are siblings, not nested
            while len(self._nodes) > self._line_depth:
                self._pop()

        parent = self._subject()
        if self._node(parent).kind == AstKind.OPTION_GROUP:
            raise ParserError("Commands can't be nested within an option group", token.line, token.char)

        names = token.source[:-1].split(".")
        for name in names:
            if not _COMMAND_NAME_RE.match(name):
                raise ParserError(f"Illegal command: {token.source}", token.line, token.char)
        owner = self._cmds[-1]
        path = self._command_path(token, owner, names)
        command = self._ast.add(AstKind.COMMAND, token, parent, command=owner, path=path, text=names[-1])
        self._nodes.append(command.id)
        self._cmds.append(command.id)
        self._last_decl = command.id

    def _command_path(self, token: Token, owner: int, names: list[str]) -> tuple[str, ...]:
        """Return the full path of a command declared in the context of *owner*.

        Plain names extend the owner's path. Dotted names are absolute; below
        the top level one of the enclosing commands must be a prefix of them.
        """
        if len(names) == 1:
            return self._node(owner).path + (names[0],)
        path = tuple(names)
        if owner == 0:
            return path
        for command_id in reversed(self._cmds[1:]):
            prefix = self._node(command_id).path
            if len(prefix) < len(path) and path[: len(prefix)] == prefix:
                return path
        parent = ".".join(names[:-1])
        raise ParserError(f"Unknown command '{parent}' in '{token.source}'", token.line, token.char)

    def _parse_arg_spec(self, token: Token) -> None:
        self._group = None
        if token.line != self._line:
            self._new_line(token)
        command = self._cmds[-1]
        spec = self._ast.add(AstKind.ARG_SPEC, token, command, command=command)
        while self._peek() is not None and self._peek().kind == TokenKind.ARG:
            following = self._advance()
            self._ast.add(AstKind.ARG, following, spec.id, command=command, text=following.value)

    def _parse_arg_descr(self, token: Token) -> None:
        self._group = None
        if token.line != self._line:
            self._new_line(token)
        command = self._cmds[-1]
        self._ast.add(AstKind.ARG_DESCR, token, command, command=command, text=token.value)

    def _parse_brief(self, token: Token) -> None:
        if token.line == self._line:
            last = self._last_decl
            if last is None:
                subject = self._cmds[-1]
            elif self._node(last).kind == AstKind.OPTION and len(self._line_options) > 1:
                subject = self._node(last).parent
            else:
                subject = last
        else:
            self._group = None
            self._new_line(token)
            subject = self._subject()
        self._ast.add(AstKind.BRIEF, token, subject, text=token.value)

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    def _parse_blank(self, token: Token) -> None:
        self._group = None

    def _parse_text(self, token: Token) -> None:
        if token.line == self._line and self._last_decl is not None:
            raise ParserError("Text can't follow a declaration on the same line", token.line, token.char)
        self._group = None
        if token.line != self._line:
            self._new_line(token)

        texts = [token.value]
        line = token.line
        while self._continues_paragraph(token):
            following = self._advance()
            texts.append(following.value)
            line = following.line
        self._line = line

        paragraph = self._ast.add(AstKind.PARAGRAPH, token, self._subject(), text=" ".join(texts))
        self._nodes.append(paragraph.id)

    def _parse_code(self, token: Token) -> None:
        self._group = None
        self._new_line(token)
        self._ast.add(AstKind.CODE, token, self._subject(), text=token.value)
        self._line = token.line + len(token.lines or ()) - 1

    def _parse_section(self, token: Token) -> None:
        self._group = None
        self._new_line(token)
        if self._nodes[-1] != 0:
            raise ParserError("Sections can't be nested", token.line, token.char)
        section = self._ast.add(AstKind.SECTION, token, 0, text=token.value)
        self._nodes.append(section.id)

    def _parse_subsection(self, token: Token) -> None:
        self._group = None
        self._new_line(token)
        parent = self._subject()
        if self._node(parent).kind not in (AstKind.SECTION, AstKind.SUBSECTION):
            raise ParserError("Subsections must be nested within a section", token.line, token.char)
        subsection = self._ast.add(AstKind.SUBSECTION, token, parent, text=token.value)
        self._nodes.append(subsection.id)

    def _parse_bullet(self, token: Token) -> None:
        self._group = None
        self._new_line(token)
        bullet = self._ast.add(AstKind.BULLET, token, self._subject(), text=token.value)
        self._nodes.append(bullet.id)
