# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Documentation tree split off the AST by the analyzer.

The doc tree keeps the structural (indentation) layout of the usage string:
sections, paragraphs, code blocks and bullets, together with the option
groups, options and commands they describe. Declaration nodes link to their
grammar node through ``grammar``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from optspec.model.tree import TreeMixin

# ###############
# Public Interface
# ###############


class DocKind(Enum):
    """Kinds of documentation nodes."""

    PROGRAM = "program"
    COMMAND = "command"
    OPTION_GROUP = "option_group"
    OPTION = "option"
    BRIEF = "brief"
    ARG_SPEC = "arg_spec"
    ARG = "arg"
    ARG_DESCR = "arg_descr"
    PARAGRAPH = "paragraph"
    CODE = "code"
    SECTION = "section"
    SUBSECTION = "subsection"
    BULLET = "bullet"


class DocNode(BaseModel):
    """A node of the documentation arena.

    Attributes:
        text: Declaration source for options and commands, the text of
            briefs, paragraphs and headers, the joined lines of code blocks.
        lines: The individual lines of a code block.
        grammar: Id of the grammar node a declaration node documents.
    """

    id: int
    kind: DocKind
    parent: int | None = None
    children: list[int] = Field(default_factory=list)
    line: int = 0
    char: int = 0
    text: str = ""
    lines: list[str] | None = None
    grammar: int | None = None


class Doc(TreeMixin, BaseModel):
    """Arena of documentation nodes rooted at the program node."""

    nodes: list[DocNode] = Field(default_factory=list)

    def node(self, node_id: int) -> DocNode:
        return self.nodes[node_id]

    def for_grammar(self, grammar_id: int) -> DocNode | None:
        """Return the doc node documenting grammar node *grammar_id*."""
        for node in self.nodes:
            if node.grammar == grammar_id:
                return node
        return None

    def brief(self, grammar_id: int) -> str | None:
        """Return the brief of a grammar node.

        Options without a brief of their own share the brief of their group.
        """
        node = self.for_grammar(grammar_id)
        if node is None:
            return None
        text = self._child_text(node, DocKind.BRIEF)
        if text is None and node.kind == DocKind.OPTION and node.parent is not None:
            text = self._child_text(self.nodes[node.parent], DocKind.BRIEF)
        return text

    def description(self, grammar_id: int) -> list[str]:
        """Return paragraph and code texts describing a grammar node."""
        node = self.for_grammar(grammar_id)
        if node is None:
            return []
        if node.kind == DocKind.OPTION and node.parent is not None:
            node = self.nodes[node.parent]
        return [
            self.nodes[child].text
            for child in node.children
            if self.nodes[child].kind in (DocKind.PARAGRAPH, DocKind.CODE)
        ]

    def _child_text(self, node: DocNode, kind: DocKind) -> str | None:
        for child in node.children:
            if self.nodes[child].kind == kind:
                return self.nodes[child].text
        return None
