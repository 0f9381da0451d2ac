# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""The validated grammar produced by the analyzer.

The grammar is an arena of :class:`GrammarNode` objects. Node 0 is always
the program; commands and options refer to each other by index. A node's
``doc`` field links it to its documentation node in the :class:`Doc` tree.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from optspec.model.tree import TreeMixin
from optspec.model.types import ArgumentType, StringType

# ###############
# Public Interface
# ###############


class GrammarKind(Enum):
    """Kinds of grammar nodes."""

    PROGRAM = "program"
    COMMAND = "command"
    OPTION = "option"


class OptionSpec(BaseModel):
    """A parsed option declaration such as ``-a,all`` or ``+v,verbose``.

    Attributes:
        short_idents: Single character names without dashes.
        long_idents: Long names without dashes and with inner dashes
            replaced by underscores.
        short_names: Short names as written on a command line (``-a``).
        long_names: Long names as written on a command line (``--all``).
        ident: Canonical identifier: first long ident, else first short ident.
        name: Canonical name: first long name, else first short name.
        repeatable: True for ``+`` and ``++`` declarations.
        argument: True if the option takes an argument.
        optional: True if the argument may be omitted.
        argument_name: Display name of the argument (``VAL``, ``FILE``...).
        argument_type: Type used to validate and convert the argument.
    """

    short_idents: list[str] = Field(default_factory=list)
    long_idents: list[str] = Field(default_factory=list)
    short_names: list[str] = Field(default_factory=list)
    long_names: list[str] = Field(default_factory=list)
    ident: str
    name: str
    repeatable: bool = False
    argument: bool = False
    optional: bool = False
    argument_name: str | None = None
    argument_type: ArgumentType = Field(default_factory=StringType)

    @property
    def names(self) -> list[str]:
        return self.short_names + self.long_names

    @property
    def idents(self) -> list[str]:
        return self.short_idents + self.long_idents


class CommandSpec(BaseModel):
    """Command payload of program and command nodes.

    Attributes:
        name: The command name as typed on a command line.
        ident: ``name`` followed by ``!``.
        implicit: True if the command was synthesized for a dotted path.
        args: Argument names from the ``++`` specification, if any.
        arg_descr: Text of the ``--`` argument description, if any.
        options: Option node ids in declaration order.
        commands: Sub-command node ids in declaration order.
        option_table: Option names and idents mapped to option node ids.
        command_table: Sub-command names and idents mapped to node ids.
    """

    name: str
    ident: str
    implicit: bool = False
    args: list[str] | None = None
    arg_descr: str | None = None
    options: list[int] = Field(default_factory=list)
    commands: list[int] = Field(default_factory=list)
    option_table: dict[str, int] = Field(default_factory=dict)
    command_table: dict[str, int] = Field(default_factory=dict)


class GrammarNode(BaseModel):
    """A program, command or option in the grammar arena."""

    id: int
    kind: GrammarKind
    parent: int | None = None
    children: list[int] = Field(default_factory=list)
    line: int = 0
    char: int = 0
    path: list[str] = Field(default_factory=list)
    brief: str | None = None
    doc: int | None = None
    command: CommandSpec | None = None
    option: OptionSpec | None = None

    @property
    def name(self) -> str:
        return self.option.name if self.option is not None else self.command.name

    @property
    def ident(self) -> str:
        return self.option.ident if self.option is not None else self.command.ident

    @property
    def uid(self) -> str:
        """Dotted unique id, e.g. ``cmd1.cmd2.opt``. Empty for the program."""
        return ".".join(element.rstrip("!") for element in self.path)


class Grammar(TreeMixin, BaseModel):
    """Arena holding the program, its commands and their options."""

    nodes: list[GrammarNode] = Field(default_factory=list)

    @property
    def program(self) -> GrammarNode:
        return self.nodes[0]

    def node(self, node_id: int) -> GrammarNode:
        return self.nodes[node_id]

    def commands(self) -> list[GrammarNode]:
        """Return all command nodes (excluding the program) in pre-order."""
        return [self.nodes[i] for i in self.walk([GrammarKind.COMMAND])]

    def options(self) -> list[GrammarNode]:
        """Return all option nodes in pre-order."""
        return [self.nodes[i] for i in self.walk([GrammarKind.OPTION])]

    def supercommand(self, node_id: int) -> GrammarNode | None:
        parent = self.nodes[node_id].parent
        return None if parent is None else self.nodes[parent]

    def find_option(self, command_id: int, key: str) -> GrammarNode | None:
        """Look up an option of a command by name (``--all``) or ident (``all``)."""
        table = self.nodes[command_id].command.option_table
        option_id = table.get(key)
        if option_id is None:
            option_id = table.get(option_ident(key))
        return None if option_id is None else self.nodes[option_id]

    def find_subcommand(self, command_id: int, name: str) -> GrammarNode | None:
        """Look up a direct sub-command by its name (``cmd``, not ``cmd!``)."""
        command_id = self.nodes[command_id].command.command_table.get(name)
        if command_id is None or self.nodes[command_id].name != name:
            return None
        return self.nodes[command_id]

    def lookup(self, expr: str) -> GrammarNode:
        """Resolve a dotted path such as ``cmd1.cmd2.opt`` from the program.

        ``"!"`` or ``""`` denote the program. Every element but the last must
        name a command; the last element may name a command (optionally
        with a trailing ``!``) or an option of the preceding command.

        Raises:
            KeyError: If an element cannot be resolved.
        """
        current = 0
        if expr in ("", "!"):
            return self.nodes[current]
        elements = expr.split(".")
        for index, element in enumerate(elements):
            if index == len(elements) - 1 and not element.endswith("!"):
                option = self.find_option(current, element)
                if option is not None:
                    return option
            command = self.find_subcommand(current, element.rstrip("!"))
            if command is None:
                raise KeyError(f"Can't resolve '{expr}'")
            current = command.id
        return self.nodes[current]


def option_ident(name: str) -> str:
    """Return the ident of an option name: ``--with-sep`` becomes ``with_sep``."""
    return name.lstrip("-+").replace("-", "_")
