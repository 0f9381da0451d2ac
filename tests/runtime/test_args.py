# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the remaining-arguments list."""

import pytest

from optspec.errors import UserError
from optspec.runtime.args import Args


class TestExtract:
    def test_single_argument_is_a_string(self) -> None:
        args = Args(["a", "b", "c"])
        assert args.extract(1) == "a"
        assert args == ["b", "c"]

    def test_several_arguments_are_a_list(self) -> None:
        args = Args(["a", "b", "c"])
        assert args.extract(2) == ["a", "b"]
        assert args == ["c"]

    def test_negative_count_takes_from_the_end(self) -> None:
        args = Args(["a", "b", "c"])
        assert args.extract(-1) == "c"
        assert args.extract(-2) == ["a", "b"]
        assert args == []

    def test_too_few_arguments(self) -> None:
        with pytest.raises(UserError, match="Illegal number of arguments"):
            Args(["a"]).extract(2)

    def test_range_takes_what_is_available(self) -> None:
        args = Args(["a", "b", "c"])
        assert args.extract(range(1, 3)) == ["a", "b"]
        assert args == ["c"]
        assert args.extract(range(1, 3)) == ["c"]

    def test_range_below_minimum(self) -> None:
        with pytest.raises(UserError, match="Need a source"):
            Args([]).extract(range(1, 3), "Need a source")


class TestExpect:
    def test_exact_count(self) -> None:
        args = Args(["a", "b"])
        assert args.expect(2) == ["a", "b"]
        assert args == []

    def test_single_argument_is_a_string(self) -> None:
        assert Args(["a"]).expect(1) == "a"

    def test_range(self) -> None:
        assert Args([]).expect(range(0, 2)) == []
        assert Args(["a"]).expect(range(0, 2)) == ["a"]

    @pytest.mark.parametrize("argv", [[], ["a", "b"]])
    def test_wrong_count(self, argv: list[str]) -> None:
        with pytest.raises(UserError, match="Expected one file"):
            Args(argv).expect(1, "Expected one file")
