# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Abstract syntax tree produced by the parser."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from optspec.model.grammar import OptionSpec
from optspec.model.tree import TreeMixin

if TYPE_CHECKING:
    from optspec.compiler.lexer import Token

# ###############
# Public Interface
# ###############


class AstKind(enum.Enum):
    """Kinds of AST nodes."""

    PROGRAM = "program"
    OPTION_GROUP = "option_group"
    OPTION = "option"
    COMMAND = "command"
    ARG_SPEC = "arg_spec"
    ARG = "arg"
    ARG_DESCR = "arg_descr"
    BRIEF = "brief"
    PARAGRAPH = "paragraph"
    CODE = "code"
    SECTION = "section"
    SUBSECTION = "subsection"
    BULLET = "bullet"


@dataclass
class AstNode:
    """A node of the AST arena.

    Attributes:
        id: Index of the node in :attr:`Ast.nodes`.
        kind: The node variant.
        token: The token that opened the node.
        parent: Structural (indentation) parent.
        children: Structural children in source order.
        text: Brief, paragraph, header or code text.
        command: For option groups, options, commands and argument nodes:
            the command context the declaration belongs to.
        path: For commands: names from the program down to the command.
        option: For options: the parsed declaration.
    """

    id: int
    kind: AstKind
    token: Token
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    text: str = ""
    command: int | None = None
    path: tuple[str, ...] = ()
    option: OptionSpec | None = None

    @property
    def char(self) -> int:
        return self.token.char


@dataclass
class Ast(TreeMixin):
    """The parsed usage string. Node 0 is the program."""

    program_name: str
    nodes: list[AstNode] = field(default_factory=list)

    def add(self, kind: AstKind, token: Token, parent: int | None, **attrs: object) -> AstNode:
        """Append a node and link it below *parent*."""
        node = AstNode(id=len(self.nodes), kind=kind, token=token, parent=parent, **attrs)
        self.nodes.append(node)
        if parent is not None:
            self.nodes[parent].children.append(node.id)
        return node
