# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error families raised by the OptSpec compiler and interpreter.

Compiler errors describe defects in a usage string and carry the position of
the offending token. User errors describe an invalid command line given by
the end user of the compiled program. Internal errors signal a defect in
OptSpec itself and are never caught by the front end.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class OptSpecError(Exception):
    """Base class of all errors the front end may report to the end user."""


class CompilerError(OptSpecError):
    """Raised when a usage string cannot be compiled.

    Attributes:
        message: Error description without position.
        line: 1-based line number of the offending token.
        char: 1-based column of the offending token.
    """

    def __init__(self, message: str, line: int, char: int) -> None:
        super().__init__(f"Line {line}, column {char}: {message}")
        self.message = message
        self.line = line
        self.char = char

    @property
    def location(self) -> str:
        """Return the position as ``line:char``."""
        return f"{self.line}:{self.char}"


class UserError(OptSpecError):
    """Raised when a command line does not conform to the compiled grammar.

    Attributes:
        message: Error description suitable for the end user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InternalError(Exception):
    """Raised on a broken invariant inside OptSpec."""
