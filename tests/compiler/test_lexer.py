# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the usage string lexer."""

import pytest

from optspec.compiler.lexer import LexerError, Token, TokenKind, lex

# ###############
# Test Helpers
# ###############


def _tokens(source: str) -> list[Token]:
    """Return all tokens except the leading program token."""
    result = lex("main", source)
    assert result[0].kind == TokenKind.PROGRAM
    return result[1:]


def _kinds(source: str) -> list[TokenKind]:
    return [tok.kind for tok in _tokens(source)]


def _values(source: str) -> list[str]:
    return [tok.value for tok in _tokens(source)]


# ###############
# Program Token
# ###############


class TestProgramToken:
    def test_empty_source_produces_only_program_token(self) -> None:
        tokens = lex("main", "")
        assert tokens == [Token(TokenKind.PROGRAM, 0, 0, "main", "main")]

    def test_program_token_carries_program_name(self) -> None:
        token = lex("prog", "-a")[0]
        assert token.source == "prog"
        assert token.value == "prog"
        assert token.location == "0:0"


# ###############
# Lines
# ###############


class TestLines:
    def test_leading_blank_and_comment_lines_are_skipped(self) -> None:
        tokens = _tokens("\n# A comment\n-a")
        assert [tok.kind for tok in tokens] == [TokenKind.OPTION]
        assert tokens[0].line == 3

    def test_trailing_blank_lines_are_dropped(self) -> None:
        assert _kinds("-a\n\n\n") == [TokenKind.OPTION]

    def test_blank_line_between_declarations(self) -> None:
        assert _kinds("-a\n-b\n\n-c") == [
            TokenKind.OPTION,
            TokenKind.OPTION,
            TokenKind.BLANK,
            TokenKind.OPTION,
        ]

    def test_outdented_comment_is_ignored(self) -> None:
        assert _kinds("  -a\n# A comment\n  -b") == [TokenKind.OPTION, TokenKind.OPTION]

    def test_outdented_text_raises(self) -> None:
        with pytest.raises(LexerError) as exc_info:
            lex("main", "  -a\n-b")
        assert exc_info.value.line == 2
        assert exc_info.value.char == 1
        assert "Illegal indentation" in str(exc_info.value)

    def test_positions_are_one_based(self) -> None:
        tokens = _tokens("-a\n  -b")
        assert (tokens[0].line, tokens[0].char) == (1, 1)
        assert (tokens[1].line, tokens[1].char) == (2, 3)
        assert tokens[1].location == "2:3"


# ###############
# Declarations
# ###############


class TestDeclarations:
    def test_options_on_one_line(self) -> None:
        tokens = _tokens("-a -b")
        assert [tok.kind for tok in tokens] == [TokenKind.OPTION, TokenKind.OPTION]
        assert [tok.char for tok in tokens] == [1, 4]

    def test_command_and_option(self) -> None:
        assert _kinds("cmd! -b") == [TokenKind.COMMAND, TokenKind.OPTION]

    def test_dotted_command(self) -> None:
        tokens = _tokens("cmd.sub!")
        assert tokens[0].kind == TokenKind.COMMAND
        assert tokens[0].source == "cmd.sub!"

    def test_repeatable_option(self) -> None:
        assert _kinds("+v") == [TokenKind.OPTION]

    def test_arg_descr_collects_words(self) -> None:
        tokens = _tokens("-- ARG1 ARG2")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.ARG_DESCR
        assert tokens[0].source == "--"
        assert tokens[0].value == "ARG1 ARG2"

    def test_arg_spec_emits_one_token_per_argument(self) -> None:
        assert _kinds("++ ARG1 ARG2") == [TokenKind.ARG_SPEC, TokenKind.ARG, TokenKind.ARG]
        assert _values("++ ARG1 ARG2") == ["++", "ARG1", "ARG2"]

    def test_inline_comment_is_removed(self) -> None:
        assert _kinds("-a # a comment") == [TokenKind.OPTION]


# ###############
# Briefs
# ###############


class TestBriefs:
    def test_at_brief_takes_rest_of_line(self) -> None:
        tokens = _tokens("-a @ Brief text")
        assert [tok.kind for tok in tokens] == [TokenKind.OPTION, TokenKind.BRIEF]
        assert tokens[1].source == "@"
        assert tokens[1].value == "Brief text"

    def test_attached_at_brief(self) -> None:
        assert _values("-a @brief") == ["-a", "brief"]

    def test_empty_at_raises(self) -> None:
        with pytest.raises(LexerError, match="Empty '@' declaration"):
            lex("main", "-a @")

    def test_single_line_brief(self) -> None:
        tokens = _tokens("@brief")
        assert [tok.kind for tok in tokens] == [TokenKind.BRIEF]
        assert tokens[0].value == "brief"

    def test_brief_after_arg_descr(self) -> None:
        assert _kinds("-- ARG @brief") == [TokenKind.ARG_DESCR, TokenKind.BRIEF]

    def test_bare_words_form_brief_in_multi_line_source(self) -> None:
        tokens = _tokens("-a Brief text\n-b")
        assert [tok.kind for tok in tokens] == [TokenKind.OPTION, TokenKind.BRIEF, TokenKind.OPTION]
        assert tokens[1].value == "Brief text"

    @pytest.mark.parametrize("source", ["cmd! TEXT", "-a ARG"])
    def test_bare_words_in_single_line_source_raise(self, source: str) -> None:
        with pytest.raises(LexerError, match="multi-line"):
            lex("main", source)


# ###############
# Documentation
# ###############


class TestDocumentation:
    def test_plain_text(self) -> None:
        assert _kinds("Some text") == [TokenKind.TEXT]

    def test_escaped_line_is_text(self) -> None:
        tokens = _tokens("\\-a")
        assert tokens[0].kind == TokenKind.TEXT
        assert tokens[0].source == "\\-a"
        assert tokens[0].value == "-a"

    @pytest.mark.parametrize(
        ("keyword", "value"),
        [
            ("DESCRIPTION", "DESCRIPTION"),
            ("OPTION", "OPTIONS"),
            ("OPTIONS", "OPTIONS"),
            ("COMMAND", "COMMANDS"),
            ("COMMANDS", "COMMANDS"),
        ],
    )
    def test_section_value_is_plural(self, keyword: str, value: str) -> None:
        tokens = _tokens(f"{keyword}\n  cmd!")
        assert tokens[0].kind == TokenKind.SECTION
        assert tokens[0].source == keyword
        assert tokens[0].value == value
        assert tokens[1].kind == TokenKind.COMMAND

    def test_subsection(self) -> None:
        tokens = _tokens("DESCRIPTION\n  *Sub*\n    Text")
        assert [tok.kind for tok in tokens] == [TokenKind.SECTION, TokenKind.SUBSECTION, TokenKind.TEXT]
        assert tokens[1].value == "Sub"

    def test_bullet_is_followed_by_text(self) -> None:
        tokens = _tokens("o Item\n  more")
        assert [tok.kind for tok in tokens] == [TokenKind.BULLET, TokenKind.TEXT, TokenKind.TEXT]
        assert tokens[1].value == "Item"
        assert tokens[1].char == 3

    def test_declaration_below_text_is_not_code(self) -> None:
        assert _kinds("Text\n  -a") == [TokenKind.TEXT, TokenKind.OPTION]


# ###############
# Code Blocks
# ###############


class TestCodeBlocks:
    def test_indented_lines_after_text_form_code(self) -> None:
        tokens = _tokens("Text\n  code()\n    more()\n\nText again")
        assert [tok.kind for tok in tokens] == [
            TokenKind.TEXT,
            TokenKind.CODE,
            TokenKind.BLANK,
            TokenKind.TEXT,
        ]
        code = tokens[1]
        assert code.value == "code()\n  more()"
        assert code.lines == ("code()", "  more()")
        assert (code.line, code.char) == (2, 3)

    def test_code_after_blank_line(self) -> None:
        assert _kinds("Text\n\n  code()") == [TokenKind.TEXT, TokenKind.BLANK, TokenKind.CODE]

    def test_inner_blank_lines_are_kept(self) -> None:
        tokens = _tokens("Text\n  a\n\n  b")
        assert tokens[1].lines == ("a", "", "b")

    def test_code_below_option_description(self) -> None:
        assert _kinds("-a\n  Description\n    code") == [TokenKind.OPTION, TokenKind.TEXT, TokenKind.CODE]
