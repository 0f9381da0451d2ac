# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lint checks for compiled grammars.

These checks operate on a grammar that already passed semantic analysis and
point out usage strings that are valid but probably not what the author
meant.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from optspec.model.grammar import Grammar, GrammarNode
from optspec.model.types import EnumType

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue in a usage string.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """An issue that makes part of a usage string unusable.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the lint checks.

    Attributes:
        warnings: Non-fatal issues.
        errors: Issues that should be corrected.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any errors were found."""
        return len(self.errors) > 0


def validate(grammar: Grammar) -> ValidationResult:
    """Run all lint checks on a compiled grammar.

    Checks performed:

    1. **Undocumented declarations** (warning): options and explicitly
       declared commands without a brief.
    2. **Implicit commands** (warning): commands that only exist because a
       dotted declaration such as ``a.b!`` names them.
    3. **Arguments before commands** (warning): a command with both an
       argument specification and sub-commands; once a positional argument
       is seen, sub-commands are no longer recognized.
    4. **Duplicate enum values** (error): an enumeration argument listing
       the same value twice.

    Args:
        grammar: The compiled grammar.

    Returns:
        A :class:`ValidationResult` with all findings.
    """
    result = ValidationResult()
    for node in grammar.nodes:
        if node.option is not None:
            _check_option(node, result)
        elif node.command is not None:
            _check_command(node, result)
    return result


# ################
# Implementation
# ################


def _label(node: GrammarNode) -> str:
    return node.uid or node.name


def _check_option(node: GrammarNode, result: ValidationResult) -> None:
    if node.brief is None:
        result.warnings.append(ValidationWarning(f"Option '{_label(node)}' has no brief"))
    argument_type = node.option.argument_type
    if isinstance(argument_type, EnumType):
        seen: set[str] = set()
        for value in argument_type.values:
            if value in seen:
                result.errors.append(ValidationError(f"Option '{_label(node)}' lists value '{value}' twice"))
            seen.add(value)


def _check_command(node: GrammarNode, result: ValidationResult) -> None:
    spec = node.command
    if node.parent is not None:
        if spec.implicit:
            result.warnings.append(ValidationWarning(f"Command '{_label(node)}' is only declared implicitly"))
        elif node.brief is None:
            result.warnings.append(ValidationWarning(f"Command '{_label(node)}' has no brief"))
    if spec.args and spec.commands:
        result.warnings.append(
            ValidationWarning(f"Command '{_label(node)}' takes arguments and has sub-commands")
        )
