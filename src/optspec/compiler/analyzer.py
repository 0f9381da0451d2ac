# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic analysis of a parsed usage string.

Turns the AST into the validated :class:`Grammar` and the :class:`Doc` tree.
The steps run in a fixed order:

1. Commands are linked under their logical parent (the dotted path), and
   implicit commands are synthesized for missing ancestors.
2. Options are collected from their option groups into each command, and
   name and ident lookup tables are built.
3. Options are moved in front of sub-commands.
4. Sub-command lookup tables are built.
5. Documentation (briefs, argument specs and descriptions, paragraphs) is
   split off into the doc tree; the grammar keeps only programs, commands
   and options.
"""

from __future__ import annotations

import logging

from optspec.compiler.lexer import Token
from optspec.errors import CompilerError
from optspec.model.ast import Ast, AstKind, AstNode
from optspec.model.doc import Doc, DocKind, DocNode
from optspec.model.grammar import CommandSpec, Grammar, GrammarKind, GrammarNode

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class AnalyzerError(CompilerError):
    """Raised when a well-formed usage string is semantically invalid."""


def analyze(ast: Ast) -> tuple[Grammar, Doc]:
    """Build the grammar and the doc tree from an AST.

    Checks performed:
    - At most one brief per program, command, option and option group.
    - At most one argument description and one argument specification
      per command.
    - No two options of one command share a name or an ident.
    - No two sub-commands of one command share a name.

    Args:
        ast: The AST returned by :func:`optspec.compiler.parser.parse`.

    Returns:
        A ``(grammar, doc)`` pair linked through ``GrammarNode.doc`` and
        ``DocNode.grammar``.

    Raises:
        AnalyzerError: If any of the checks fails.
    """
    return _Analyzer(ast).analyze()


# ################
# Implementation
# ################

_DOCUMENTED = (AstKind.PROGRAM, AstKind.COMMAND, AstKind.OPTION, AstKind.OPTION_GROUP)


class _Analyzer:
    """Builds a grammar and a doc tree from a single AST."""

    def __init__(self, ast: Ast) -> None:
        self._ast = ast
        self._grammar = Grammar()
        # AST command/option id -> grammar node id
        self._by_ast: dict[int, int] = {}
        # Command path -> first grammar command with that path
        self._by_path: dict[tuple[str, ...], int] = {}

    def analyze(self) -> tuple[Grammar, Doc]:
        """Run all analysis steps and return the results."""
        self._check_documentation()
        self._link_commands()
        self._collect_options()
        self._reorder()
        self._hash_commands()
        doc = self._split_doc()
        logger.debug(
            "Analyzed %d commands and %d options",
            len(self._grammar.commands()),
            len(self._grammar.options()),
        )
        return self._grammar, doc

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_documentation(self) -> None:
        for node in self._ast.nodes:
            if node.kind not in _DOCUMENTED:
                continue
            self._check_single(node, AstKind.BRIEF, "Duplicate brief")
            if node.kind in (AstKind.PROGRAM, AstKind.COMMAND):
                self._check_single(node, AstKind.ARG_DESCR, "Multiple argument descriptions")
                self._check_single(node, AstKind.ARG_SPEC, "Duplicate argument specification")

    def _check_single(self, node: AstNode, kind: AstKind, message: str) -> None:
        found = self._children(node, kind)
        if len(found) > 1:
            _raise(message, found[1].token)

    # ------------------------------------------------------------------
    # Step 1: commands
    # ------------------------------------------------------------------

    def _link_commands(self) -> None:
        program = self._ast.nodes[0]
        root = self._add(
            GrammarKind.PROGRAM,
            program.token,
            None,
            [],
            command=CommandSpec(name=self._ast.program_name, ident="!"),
        )
        self._by_ast[program.id] = root.id
        self._by_path[()] = root.id

        for ast_id in self._ast.walk([AstKind.COMMAND]):
            node = self._ast.nodes[ast_id]
            existing = self._by_path.get(node.path)
            if existing is not None and self._grammar.nodes[existing].command.implicit:
                # A command declared after a dotted path already synthesized it
                command = self._grammar.nodes[existing]
                command.command.implicit = False
                command.line, command.char = node.token.line, node.token.char
                self._by_ast[ast_id] = existing
                continue
            parent = self._ensure_parent(node.path, node.token)
            command = self._add_command(node.path, node.token, parent, implicit=False)
            self._by_ast[ast_id] = command.id
            self._by_path.setdefault(node.path, command.id)

    def _ensure_parent(self, path: tuple[str, ...], token: Token) -> int:
        """Return the parent of *path*, synthesizing missing ancestors."""
        parent_path = path[:-1]
        missing = []
        while parent_path and parent_path not in self._by_path:
            missing.append(parent_path)
            parent_path = parent_path[:-1]
        parent = self._by_path[parent_path]
        for ancestor in reversed(missing):
            parent = self._add_command(ancestor, token, parent, implicit=True).id
            self._by_path[ancestor] = parent
            logger.debug("Synthesized implicit command %s", ".".join(ancestor))
        return parent

    def _add_command(self, path: tuple[str, ...], token: Token, parent: int, implicit: bool) -> GrammarNode:
        name = path[-1]
        return self._add(
            GrammarKind.COMMAND,
            token,
            parent,
            [f"{element}!" for element in path],
            command=CommandSpec(name=name, ident=f"{name}!", implicit=implicit),
        )

    # ------------------------------------------------------------------
    # Step 2: options
    # ------------------------------------------------------------------

    def _collect_options(self) -> None:
        for ast_id in self._ast.walk([AstKind.OPTION]):
            node = self._ast.nodes[ast_id]
            command = self._grammar.nodes[self._by_ast[node.command]]
            spec = node.option.model_copy(deep=True)
            option = self._add(GrammarKind.OPTION, node.token, command.id, command.path + [spec.ident], option=spec)
            self._by_ast[ast_id] = option.id

            table = command.command.option_table
            for key in spec.names + spec.idents:
                if table.get(key, option.id) != option.id:
                    _raise(f"Duplicate option '{key}'", node.token)
                table[key] = option.id

    # ------------------------------------------------------------------
    # Step 3: reordering
    # ------------------------------------------------------------------

    def _reorder(self) -> None:
        nodes = self._grammar.nodes
        for command in nodes:
            if command.command is None:
                continue
            ordered = sorted(command.children, key=lambda child: (nodes[child].line, nodes[child].char))
            options = [child for child in ordered if nodes[child].kind == GrammarKind.OPTION]
            commands = [child for child in ordered if nodes[child].kind == GrammarKind.COMMAND]
            command.children = options + commands
            command.command.options = options
            command.command.commands = commands

    # ------------------------------------------------------------------
    # Step 4: command tables
    # ------------------------------------------------------------------

    def _hash_commands(self) -> None:
        nodes = self._grammar.nodes
        for command in nodes:
            if command.command is None:
                continue
            table = command.command.command_table
            for child_id in command.command.commands:
                child = nodes[child_id]
                for key in (child.command.name, child.command.ident):
                    if key in table:
                        raise AnalyzerError(f"Duplicate command '{child.command.name}'", child.line, child.char)
                    table[key] = child_id

    # ------------------------------------------------------------------
    # Step 5: documentation
    # ------------------------------------------------------------------

    def _split_doc(self) -> Doc:
        doc = Doc()
        doc_ids: dict[int, int] = {}
        for ast_id in self._ast.walk():
            node = self._ast.nodes[ast_id]
            parent = None if node.parent is None else doc_ids[node.parent]
            text = node.token.source if node.kind in (AstKind.COMMAND, AstKind.OPTION) else node.text
            entry = DocNode(
                id=len(doc.nodes),
                kind=DocKind(node.kind.value),
                parent=parent,
                line=node.token.line,
                char=node.token.char,
                text=text,
                lines=list(node.token.lines) if node.kind == AstKind.CODE and node.token.lines else None,
                grammar=self._by_ast.get(ast_id) if node.kind in _DOCUMENTED else None,
            )
            doc.nodes.append(entry)
            if parent is not None:
                doc.nodes[parent].children.append(entry.id)
            doc_ids[ast_id] = entry.id
            if entry.grammar is not None:
                self._document(node, self._grammar.nodes[entry.grammar], entry.id)
        return doc

    def _document(self, node: AstNode, target: GrammarNode, doc_id: int) -> None:
        """Copy documentation of an AST declaration onto its grammar node."""
        target.doc = doc_id
        briefs = self._children(node, AstKind.BRIEF)
        if not briefs and node.kind == AstKind.OPTION:
            briefs = self._children(self._ast.nodes[node.parent], AstKind.BRIEF)
        if briefs:
            target.brief = briefs[0].text
        if target.command is None:
            return
        for spec in self._children(node, AstKind.ARG_SPEC):
            target.command.args = [self._ast.nodes[arg].text for arg in spec.children]
        for descr in self._children(node, AstKind.ARG_DESCR):
            target.command.arg_descr = descr.text

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _add(
        self,
        kind: GrammarKind,
        token: Token,
        parent: int | None,
        path: list[str],
        **payload: object,
    ) -> GrammarNode:
        node = GrammarNode(
            id=len(self._grammar.nodes),
            kind=kind,
            parent=parent,
            line=token.line,
            char=token.char,
            path=path,
            **payload,
        )
        self._grammar.nodes.append(node)
        if parent is not None:
            self._grammar.nodes[parent].children.append(node.id)
        return node

    def _children(self, node: AstNode, kind: AstKind) -> list[AstNode]:
        return [self._ast.nodes[child] for child in node.children if self._ast.nodes[child].kind == kind]


def _raise(message: str, token: Token) -> None:
    raise AnalyzerError(message, token.line, token.char)
