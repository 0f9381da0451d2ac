# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Traversal helpers shared by the AST, grammar and doc arenas.

Every tree in OptSpec is an arena: a flat ``nodes`` list where each node has
an integer ``id`` equal to its index, a ``parent`` index (``None`` for the
root) and an ordered list of ``children`` indices.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any

# ###############
# Public Interface
# ###############


class DepthFirst:
    """Lazy pre-order iterator over an arena subtree.

    Iterating the object twice restarts the traversal from *start*, so the
    same instance can be handed around and consumed several times.
    """

    def __init__(self, nodes: list[Any], start: int = 0) -> None:
        self._nodes = nodes
        self._start = start

    def __iter__(self) -> Iterator[int]:
        stack = [self._start]
        while stack:
            node_id = stack.pop()
            yield node_id
            stack.extend(reversed(self._nodes[node_id].children))


class TreeMixin:
    """Arena traversal for classes exposing a ``nodes`` list."""

    nodes: list[Any]

    def depth_first(self, start: int = 0) -> DepthFirst:
        """Return a restartable pre-order iterator rooted at *start*."""
        return DepthFirst(self.nodes, start)

    def walk(self, kinds: Iterable[Any] | Callable[[Any], bool] | None = None, start: int = 0) -> Iterator[int]:
        """Yield node ids in pre-order, optionally filtered.

        Args:
            kinds: A collection of node kinds to keep, a predicate over the
                node, or ``None`` to yield every node.
            start: Root of the traversal.
        """
        predicate = _make_predicate(kinds)
        for node_id in DepthFirst(self.nodes, start):
            if predicate(self.nodes[node_id]):
                yield node_id

    def ancestors(self, node_id: int) -> Iterator[int]:
        """Yield the parent chain of *node_id*, nearest first."""
        parent = self.nodes[node_id].parent
        while parent is not None:
            yield parent
            parent = self.nodes[parent].parent


# ################
# Implementation
# ################


def _make_predicate(kinds: Iterable[Any] | Callable[[Any], bool] | None) -> Callable[[Any], bool]:
    if kinds is None:
        return lambda node: True
    if callable(kinds):
        return kinds
    wanted = set(kinds)
    return lambda node: node.kind in wanted
