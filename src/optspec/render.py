# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Plain usage and help rendering for compiled grammars.

The output does not depend on the terminal width. It is meant for error
messages and ``--help`` output of simple programs.
"""

from __future__ import annotations

from optspec.model.doc import Doc
from optspec.model.grammar import Grammar, GrammarNode, OptionSpec

# ###############
# Public Interface
# ###############


def render_option(spec: OptionSpec) -> str:
    """Render an option as ``-a,--all`` or ``--file=FILE`` or ``--level[=INT]``."""
    text = ",".join(spec.names)
    if spec.argument:
        argument = f"={spec.argument_name}"
        text += f"[{argument}]" if spec.optional else argument
    return text


def render_usage(grammar: Grammar, command: int = 0) -> str:
    """Render a one-line usage of a command (the program by default)."""
    node = grammar.nodes[command]
    names = [grammar.program.name] + [element.rstrip("!") for element in node.path]
    parts = [" ".join(names)]
    parts.extend(f"[{render_option(grammar.nodes[option].option)}]" for option in node.command.options)
    if node.command.commands:
        parts.append("[" + "|".join(grammar.nodes[child].name for child in node.command.commands) + "]")
    if node.command.args:
        parts.extend(node.command.args)
    elif node.command.arg_descr:
        parts.append(node.command.arg_descr)
    return " ".join(parts)


def render_help(grammar: Grammar, doc: Doc | None = None, command: int = 0) -> str:
    """Render usage, briefs of options and sub-commands, and descriptions."""
    node = grammar.nodes[command]
    lines = [f"Usage: {render_usage(grammar, command)}"]
    if node.brief:
        lines += ["", node.brief]
    if doc is not None:
        for text in doc.description(command):
            lines += ["", text]
    lines += _render_entries(grammar, "Options:", node.command.options)
    lines += _render_entries(grammar, "Commands:", node.command.commands)
    return "\n".join(lines)


# ################
# Implementation
# ################


def _render_entries(grammar: Grammar, title: str, ids: list[int]) -> list[str]:
    if not ids:
        return []
    entries = [(_label(grammar.nodes[i]), grammar.nodes[i].brief or "") for i in ids]
    width = max(len(label) for label, _ in entries)
    lines = ["", title]
    for label, brief in entries:
        lines.append(f"  {label.ljust(width)}  {brief}".rstrip())
    return lines


def _label(node: GrammarNode) -> str:
    if node.option is not None:
        return render_option(node.option)
    return node.name
