# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for usage strings.

Converts a usage string into a flat sequence of tokens. The scanner works
line by line: it records the indentation of every line, skips comments,
recognizes section headers, bullets and code blocks, and splits declaration
lines into option, command, argument and brief tokens.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

from optspec.errors import CompilerError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the lexer."""

    PROGRAM = "program"
    SECTION = "section"
    SUBSECTION = "subsection"
    OPTION = "option"
    COMMAND = "command"
    ARG_SPEC = "arg_spec"
    ARG = "arg"
    ARG_DESCR = "arg_descr"
    BRIEF = "brief"
    TEXT = "text"
    CODE = "code"
    BULLET = "bullet"
    BLANK = "blank"


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Attributes:
        kind: The kind of token.
        line: 1-based line number (0 for the program token).
        char: 1-based column of the first character (0 for the program token).
        source: The text as written in the usage string.
        value: The normalized text: the brief without ``@``, the section
            name in plural form, the text of an escaped line without ``\\``.
        lines: The lines of a code block, indented relative to the block.
    """

    kind: TokenKind
    line: int
    char: int
    source: str
    value: str
    lines: tuple[str, ...] | None = None

    @property
    def location(self) -> str:
        return f"{self.line}:{self.char}"


class LexerError(CompilerError):
    """Raised when a usage string cannot be split into tokens."""


def lex(program_name: str, source: str) -> list[Token]:
    """Tokenize a usage string.

    The first token is always the synthetic program token. Comment lines
    are not included in the output; blank lines are emitted as BLANK tokens
    because they separate option groups and paragraphs.

    Args:
        program_name: Name of the program the usage string describes.
        source: The usage string.

    Returns:
        A list of Token objects starting with a single PROGRAM token.

    Raises:
        LexerError: On illegal indentation, an empty ``@`` declaration, or a
            brief without ``@`` in a single-line usage string.
    """
    return _Lexer(program_name, source).lex()


# ################
# Implementation
# ################

DECL_RE = re.compile(r"^(?:-|\+|@(?:\s|$)|[^\\!\s]\S*!(?:\s|$))")
SPEC_RE = re.compile(r"^[^a-z]{2,}$")
DESCR_RE = SPEC_RE

_SECTIONS = {
    "DESCRIPTION": "DESCRIPTION",
    "OPTION": "OPTIONS",
    "OPTIONS": "OPTIONS",
    "COMMAND": "COMMANDS",
    "COMMANDS": "COMMANDS",
}
_SUBSECTION_RE = re.compile(r"^\*(\S(?:.*\S)?)\*$")
_BULLET_RE = re.compile(r"^([o*#])(\s+)(\S.*)$")
_WORD_RE = re.compile(r"\S+")


@dataclass
class _Line:
    """A physical line with its indentation."""

    line: int
    char: int
    text: str

    @property
    def blank(self) -> bool:
        return self.text == ""

    def words(self) -> list[tuple[int, str]]:
        """Return ``(char, word)`` pairs for every word on the line."""
        return [(self.char + m.start(), m.group()) for m in _WORD_RE.finditer(self.text)]


class _Lexer:
    """Internal line-oriented scanner."""

    def __init__(self, program_name: str, source: str) -> None:
        self._program_name = program_name
        self._oneline = "\n" not in source
        self._lines = _split_lines(source)
        self._tokens: list[Token] = []
        self._last_nonblank: Token | None = None

    def lex(self) -> list[Token]:
        """Run the scanner and return all tokens."""
        self._tokens.append(Token(TokenKind.PROGRAM, 0, 0, self._program_name, self._program_name))
        lines = self._lines
        indent = lines[0].char if lines else 1
        index = 0
        while index < len(lines):
            line = lines[index]
            index += 1
            if line.blank:
                self._emit(TokenKind.BLANK, line.line, 1, "", "")
                continue
            if line.char < indent:
                if line.text.startswith("#"):
                    continue
                raise LexerError("Illegal indentation", line.line, line.char)
            if self._starts_code(line):
                index = self._lex_code(lines, index - 1)
                continue
            self._lex_line(line)
        logger.debug("Lexed %d tokens from %d lines", len(self._tokens), len(lines))
        return self._tokens

    # ------------------------------------------------------------------
    # Token emission helpers
    # ------------------------------------------------------------------

    def _emit(
        self,
        kind: TokenKind,
        line: int,
        char: int,
        source: str,
        value: str,
        lines: tuple[str, ...] | None = None,
    ) -> Token:
        token = Token(kind, line, char, source, value, lines)
        self._tokens.append(token)
        if kind not in (TokenKind.BLANK, TokenKind.ARG):
            self._last_nonblank = token
        return token

    # ------------------------------------------------------------------
    # Line rules
    # ------------------------------------------------------------------

    def _starts_code(self, line: _Line) -> bool:
        last = self._last_nonblank
        return (
            last is not None
            and last.kind == TokenKind.TEXT
            and line.char > last.char
            and not DECL_RE.match(line.text)
        )

    def _lex_code(self, lines: list[_Line], start: int) -> int:
        """Collect a code block starting at *start* and return the next index."""
        outer = self._last_nonblank.char
        end = start + 1
        while end < len(lines) and (lines[end].blank or lines[end].char > outer):
            end += 1
        while lines[end - 1].blank:
            end -= 1
        block = lines[start:end]
        base = min(line.char for line in block if not line.blank)
        code = tuple("" if line.blank else " " * (line.char - base) + line.text for line in block)
        first = block[0]
        self._emit(TokenKind.CODE, first.line, first.char, first.text, "\n".join(code), code)
        return end

    def _lex_line(self, line: _Line) -> None:
        text = line.text
        subsection = _SUBSECTION_RE.match(text)
        bullet = _BULLET_RE.match(text)
        if text.startswith("\\"):
            self._emit(TokenKind.TEXT, line.line, line.char, text, text[1:])
        elif text in _SECTIONS:
            self._emit(TokenKind.SECTION, line.line, line.char, text, _SECTIONS[text])
        elif subsection is not None:
            self._emit(TokenKind.SUBSECTION, line.line, line.char, text, subsection.group(1))
        elif bullet is not None:
            marker, space, rest = bullet.groups()
            self._emit(TokenKind.BULLET, line.line, line.char, marker, marker)
            self._emit(TokenKind.TEXT, line.line, line.char + 1 + len(space), rest, rest)
        elif DECL_RE.match(text):
            self._lex_declarations(line)
        elif text.startswith("@"):
            self._emit(TokenKind.BRIEF, line.line, line.char, text, text[1:].strip())
        else:
            self._emit(TokenKind.TEXT, line.line, line.char, text, text)

    def _lex_declarations(self, line: _Line) -> None:
        """Split a declaration line into tokens word by word."""
        words = line.words()
        index = 0
        while index < len(words):
            char, word = words[index]
            index += 1
            if word.startswith("#"):
                break
            if word == "@":
                if index == len(words):
                    raise LexerError("Empty '@' declaration", line.line, char)
                value = " ".join(w for _, w in words[index:])
                self._emit(TokenKind.BRIEF, line.line, char, word, value)
                index = len(words)
            elif word.startswith("@"):
                value = " ".join([word[1:]] + [w for _, w in words[index:]])
                self._emit(TokenKind.BRIEF, line.line, char, word, value)
                index = len(words)
            elif word == "--":
                descr = []
                while index < len(words) and _is_spec_word(words[index][1]):
                    descr.append(words[index][1])
                    index += 1
                self._emit(TokenKind.ARG_DESCR, line.line, char, word, " ".join(descr))
            elif word == "++":
                self._emit(TokenKind.ARG_SPEC, line.line, char, word, word)
                while index < len(words) and _is_spec_word(words[index][1]):
                    arg_char, arg = words[index]
                    self._emit(TokenKind.ARG, line.line, arg_char, arg, arg)
                    index += 1
            elif word[0] in "-+":
                self._emit(TokenKind.OPTION, line.line, char, word, word)
            elif word.endswith("!"):
                self._emit(TokenKind.COMMAND, line.line, char, word, word)
            else:
                brief = [word]
                while index < len(words) and not DECL_RE.match(words[index][1]):
                    brief.append(words[index][1])
                    index += 1
                if self._oneline:
                    raise LexerError("Briefs are only allowed in multi-line specifications", line.line, char)
                self._emit(TokenKind.BRIEF, line.line, char, word, " ".join(brief))


def _is_spec_word(word: str) -> bool:
    return word not in ("--", "++") and SPEC_RE.match(word) is not None


def _split_lines(source: str) -> list[_Line]:
    """Split *source* into lines without leading/trailing blanks and comments."""
    lines = []
    for number, raw in enumerate(source.split("\n"), start=1):
        text = raw.strip()
        char = len(raw) - len(raw.lstrip()) + 1 if text else 1
        lines.append(_Line(number, char, text))
    start = 0
    while start < len(lines) and (lines[start].blank or lines[start].text.startswith("#")):
        start += 1
    end = len(lines)
    while end > start and lines[end - 1].blank:
        end -= 1
    return lines[start:end]
