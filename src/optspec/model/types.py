# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Argument types that option values are validated and converted with."""

from __future__ import annotations

import os
import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, PrivateAttr

# ###############
# Public Interface
# ###############


class _ArgumentTypeBase(BaseModel):
    """Common behaviour of all argument types.

    Subclasses implement :meth:`explain`, which is free of side effects and
    therefore safe to call on a shared grammar. :meth:`match` wraps it and
    remembers the message of the last failed match.
    """

    _message: str | None = PrivateAttr(default=None)

    @property
    def name(self) -> str:
        """Return the default argument name for this type."""
        raise NotImplementedError

    @property
    def message(self) -> str | None:
        """Return the message of the last failed :meth:`match`."""
        return self._message

    def explain(self, name: str, literal: str) -> str | None:
        """Return ``None`` if *literal* is valid, otherwise an error message.

        Args:
            name: The option name the literal was given to, used in messages.
            literal: The raw command line value.
        """
        raise NotImplementedError

    def match(self, name: str, literal: str) -> bool:
        """Check *literal* and remember the failure message."""
        self._message = self.explain(name, literal)
        return self._message is None

    def convert(self, literal: str) -> Any:
        """Convert a matched literal to its Python value."""
        return literal


class StringType(_ArgumentTypeBase):
    """Any string."""

    kind: Literal["string"] = "string"

    @property
    def name(self) -> str:
        return "VAL"

    def explain(self, name: str, literal: str) -> str | None:
        return None


class IntegerType(_ArgumentTypeBase):
    """Signed decimal integers."""

    kind: Literal["integer"] = "integer"

    @property
    def name(self) -> str:
        return "INT"

    def explain(self, name: str, literal: str) -> str | None:
        if _INTEGER_RE.match(literal):
            return None
        return f"Illegal integer value in {name}: {literal}"

    def convert(self, literal: str) -> int:
        return int(literal)


class FloatType(_ArgumentTypeBase):
    """Decimal numbers with optional fraction and exponent."""

    kind: Literal["float"] = "float"

    @property
    def name(self) -> str:
        return "NUM"

    def explain(self, name: str, literal: str) -> str | None:
        if _FLOAT_RE.match(literal):
            return None
        return f"Illegal decimal value in {name}: {literal}"

    def convert(self, literal: str) -> float:
        return float(literal)


class FileType(_ArgumentTypeBase):
    """Filesystem paths.

    Attributes:
        target: What the path must denote: a regular file, a directory or
            either of them.
        mode: ``exist`` requires the path to exist, ``new`` requires it not
            to exist, ``default`` accepts both as long as the parent
            directory exists.
        keyword: The keyword the type was declared with (``EFILE``...).
    """

    kind: Literal["file"] = "file"
    target: Literal["file", "dir", "path"] = "file"
    mode: Literal["default", "exist", "new"] = "default"
    keyword: str = "FILE"

    @property
    def name(self) -> str:
        return _FILE_NAMES[self.target]

    def explain(self, name: str, literal: str) -> str | None:
        subject = _FILE_SUBJECTS[self.target]
        if os.path.exists(literal):
            if self.mode == "new":
                return f"{subject.capitalize()} already exists in {name}: {literal}"
            if not self._is_target(literal):
                return f"Expected {subject} as {name} argument: {literal}"
            return None
        if self.mode == "exist":
            return f"Error in {name} argument: Can't find {literal}"
        parent = os.path.dirname(literal) or "."
        if os.path.isdir(parent):
            return None
        return f"Illegal path in {name}: {literal}"

    def _is_target(self, literal: str) -> bool:
        if self.target == "file":
            return os.path.isfile(literal)
        if self.target == "dir":
            return os.path.isdir(literal)
        return os.path.isfile(literal) or os.path.isdir(literal)


class EnumType(_ArgumentTypeBase):
    """One of a fixed list of words."""

    kind: Literal["enum"] = "enum"
    values: list[str]

    @property
    def name(self) -> str:
        return ",".join(self.values)

    def explain(self, name: str, literal: str) -> str | None:
        if literal in self.values:
            return None
        return f"Illegal value in {name}: '{literal}'"


ArgumentType = Annotated[
    Union[StringType, IntegerType, FloatType, FileType, EnumType],
    Field(discriminator="kind"),
]


def file_type_for(keyword: str) -> FileType | None:
    """Return the file type declared by *keyword* or ``None``.

    Recognised keywords are ``FILE``, ``DIR`` and ``PATH`` with an optional
    ``E`` (must exist) or ``N`` (must not exist) prefix, plus ``IFILE``
    (input file, must exist) and ``OFILE`` (output file).
    """
    if keyword in _FILE_ALIASES:
        target, mode = _FILE_ALIASES[keyword]
        return FileType(target=target, mode=mode, keyword=keyword)
    match = _FILE_KEYWORD_RE.match(keyword)
    if match is None:
        return None
    prefix, base = match.groups()
    return FileType(target=base.lower(), mode=_FILE_MODES[prefix], keyword=keyword)


# ################
# Implementation
# ################

_INTEGER_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_FILE_KEYWORD_RE = re.compile(r"^([EN]?)(FILE|DIR|PATH)$")

_FILE_MODES = {"": "default", "E": "exist", "N": "new"}
_FILE_ALIASES = {"IFILE": ("file", "exist"), "OFILE": ("file", "default")}
_FILE_NAMES = {"file": "FILE", "dir": "DIR", "path": "PATH"}
_FILE_SUBJECTS = {"file": "regular file", "dir": "directory", "path": "path"}
