# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the interpreter result tree."""

from optspec.compiler.build import compile_spec
from optspec.runtime.interpreter import interpret
from optspec.runtime.result import ParsedCommand


def _result(source: str, argv: list[str]) -> ParsedCommand:
    grammar, _ = compile_spec(source, "prog")
    result, _ = interpret(grammar, argv)
    return result


class TestLookup:
    def test_lookup_by_name_or_ident(self) -> None:
        result = _result("-a,all --with-sep=VAL", ["-a", "--with-sep", ","])
        for key in ("all", "a", "-a", "--all"):
            assert key in result
            assert result[key] is None
        assert result["with_sep"] == ","
        assert result["--with-sep"] == ","

    def test_get_with_default(self) -> None:
        result = _result("-a -b=#", ["-a"])
        assert result.get("b", 7) == 7
        assert result.get("--unknown") is None

    def test_count(self) -> None:
        result = _result("+v,verbose -q", ["-v", "--verbose", "-v"])
        assert result["verbose"] == 3
        assert result.count("v") == 3
        assert result.count("q") == 0

    def test_options_keep_the_used_name(self) -> None:
        result = _result("-a,all", ["-a"])
        option = result.options[0]
        assert option.name == "-a"
        assert option.ident == "all"
        assert option.node == result.grammar.lookup("all").id


class TestToDict:
    def test_nested_commands(self) -> None:
        result = _result("-a cmd! -n=#", ["-a", "cmd", "-n", "3"])
        assert result.to_dict() == {
            "command": "prog",
            "options": {"a": None},
            "subcommand": {"command": "cmd", "options": {"n": 3}, "subcommand": None},
        }

    def test_ident_and_spec(self) -> None:
        result = _result("cmd!", ["cmd"])
        assert result.ident == "!"
        assert result.subcommand.ident == "cmd!"
        assert result.subcommand.spec.uid == "cmd"
