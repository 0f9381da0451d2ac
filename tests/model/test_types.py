# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for option argument types."""

from pathlib import Path

import pytest

from optspec.model.types import EnumType, FileType, FloatType, IntegerType, StringType, file_type_for

# ###############
# Scalar Types
# ###############


class TestStringType:
    def test_accepts_everything(self) -> None:
        assert StringType().match("--name", "") is True
        assert StringType().convert("x") == "x"
        assert StringType().name == "VAL"


class TestIntegerType:
    @pytest.mark.parametrize("literal", ["0", "42", "-7", "+3"])
    def test_valid(self, literal: str) -> None:
        assert IntegerType().explain("-n", literal) is None

    @pytest.mark.parametrize("literal", ["", "1.5", "x", "1e3"])
    def test_invalid(self, literal: str) -> None:
        assert IntegerType().explain("-n", literal) == f"Illegal integer value in -n: {literal}"

    def test_convert(self) -> None:
        assert IntegerType().convert("-7") == -7

    def test_match_remembers_message(self) -> None:
        integer = IntegerType()
        assert integer.match("--count", "x") is False
        assert integer.message == "Illegal integer value in --count: x"
        assert integer.match("--count", "1") is True
        assert integer.message is None


class TestFloatType:
    @pytest.mark.parametrize("literal", ["1", "1.5", "-2.", ".5", "1e3", "-2.5E-3"])
    def test_valid(self, literal: str) -> None:
        assert FloatType().explain("--scale", literal) is None

    @pytest.mark.parametrize("literal", ["", ".", "abc", "1.2.3", "e3"])
    def test_invalid(self, literal: str) -> None:
        assert FloatType().explain("--scale", literal) == f"Illegal decimal value in --scale: {literal}"

    def test_convert(self) -> None:
        assert FloatType().convert("2.5e1") == 25.0


class TestEnumType:
    def test_valid(self) -> None:
        assert EnumType(values=["fast", "slow"]).explain("--mode", "fast") is None

    def test_invalid(self) -> None:
        message = EnumType(values=["fast", "slow"]).explain("--mode", "medium")
        assert message == "Illegal value in --mode: 'medium'"

    def test_name_lists_values(self) -> None:
        assert EnumType(values=["fast", "slow"]).name == "fast,slow"


# ###############
# File Types
# ###############


class TestFileTypeKeywords:
    @pytest.mark.parametrize(
        ("keyword", "target", "mode"),
        [
            ("FILE", "file", "default"),
            ("EFILE", "file", "exist"),
            ("NFILE", "file", "new"),
            ("DIR", "dir", "default"),
            ("EDIR", "dir", "exist"),
            ("NPATH", "path", "new"),
            ("IFILE", "file", "exist"),
            ("OFILE", "file", "default"),
        ],
    )
    def test_keywords(self, keyword: str, target: str, mode: str) -> None:
        file_type = file_type_for(keyword)
        assert file_type.target == target
        assert file_type.mode == mode
        assert file_type.keyword == keyword

    @pytest.mark.parametrize("keyword", ["FILES", "XFILE", "file", "VAL"])
    def test_other_words(self, keyword: str) -> None:
        assert file_type_for(keyword) is None


class TestFileTypeChecks:
    def test_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("x", encoding="utf-8")
        assert FileType(mode="exist").explain("--in", str(path)) is None
        assert FileType().explain("--in", str(path)) is None

    def test_missing_file_in_exist_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.txt"
        message = FileType(mode="exist").explain("--in", str(path))
        assert message == f"Error in --in argument: Can't find {path}"

    def test_existing_file_in_new_mode(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("x", encoding="utf-8")
        message = FileType(mode="new").explain("--out", str(path))
        assert message == f"Regular file already exists in --out: {path}"

    def test_new_file_in_existing_directory(self, tmp_path: Path) -> None:
        assert FileType(mode="new").explain("--out", str(tmp_path / "new.txt")) is None

    def test_missing_parent_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "missing" / "new.txt"
        assert FileType().explain("--out", str(path)) == f"Illegal path in --out: {path}"

    def test_directory_given_for_file(self, tmp_path: Path) -> None:
        message = FileType().explain("--in", str(tmp_path))
        assert message == f"Expected regular file as --in argument: {tmp_path}"

    def test_file_given_for_directory(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("x", encoding="utf-8")
        message = FileType(target="dir").explain("--dir", str(path))
        assert message == f"Expected directory as --dir argument: {path}"

    def test_path_accepts_files_and_directories(self, tmp_path: Path) -> None:
        path = tmp_path / "a.txt"
        path.write_text("x", encoding="utf-8")
        assert FileType(target="path").explain("--p", str(path)) is None
        assert FileType(target="path").explain("--p", str(tmp_path)) is None
