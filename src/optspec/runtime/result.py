# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Result tree produced by the interpreter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from optspec.model.grammar import Grammar, GrammarNode, OptionSpec, option_ident

# ###############
# Public Interface
# ###############


@dataclass
class ParsedOption:
    """One option occurrence on the command line.

    Attributes:
        node: Grammar node id of the option.
        name: The name as it was used, e.g. ``-a`` or ``--all``.
        ident: The canonical ident of the option.
        value: The converted argument or ``None``.
    """

    node: int
    name: str
    ident: str
    value: Any = None


@dataclass
class ParsedCommand:
    """The program or a sub-command as selected on the command line.

    Values are keyed by option ident. An option given once stores its value
    (``None`` without argument). A repeatable option without argument
    stores the number of occurrences, with argument a list of values.
    """

    grammar: Grammar
    node: int
    options: list[ParsedOption] = field(default_factory=list)
    values: dict[str, Any] = field(default_factory=dict)
    subcommand: ParsedCommand | None = None
    _aliases: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def spec(self) -> GrammarNode:
        return self.grammar.nodes[self.node]

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def ident(self) -> str:
        return self.spec.ident

    @property
    def subcommand_name(self) -> str | None:
        return None if self.subcommand is None else self.subcommand.name

    def add(self, option: ParsedOption, spec: OptionSpec) -> None:
        """Record an interpreted option."""
        self.options.append(option)
        for key in spec.names + spec.idents:
            self._aliases[key] = spec.ident
        if not spec.repeatable:
            self.values[spec.ident] = option.value
        elif spec.argument:
            self.values.setdefault(spec.ident, []).append(option.value)
        else:
            self.values[spec.ident] = self.values.get(spec.ident, 0) + 1

    def __contains__(self, key: str) -> bool:
        return self._resolve(key) in self.values

    def __getitem__(self, key: str) -> Any:
        return self.values[self._resolve(key)]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(self._resolve(key), default)

    def count(self, key: str) -> int:
        """Return how often an option was given."""
        ident = self._resolve(key)
        return sum(1 for option in self.options if option.ident == ident)

    def to_dict(self) -> dict[str, Any]:
        """Render the command and its sub-commands as plain data."""
        return {
            "command": self.name,
            "options": dict(self.values),
            "subcommand": None if self.subcommand is None else self.subcommand.to_dict(),
        }

    def _resolve(self, key: str) -> str:
        if key in self._aliases:
            return self._aliases[key]
        option = self.grammar.find_option(self.node, key)
        return option.ident if option is not None else option_ident(key)
