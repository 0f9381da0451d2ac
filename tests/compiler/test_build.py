# Copyright 2026 OptSpec Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the usage file compiler workflow."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from optspec.compiler.analyzer import AnalyzerError
from optspec.compiler.artifact import ARTIFACT_SUFFIX, read_artifact
from optspec.compiler.build import BuildError, compile_file, compile_spec
from optspec.compiler.lexer import LexerError
from optspec.compiler.parser import ParserError
from optspec.errors import CompilerError

# ###############
# Helpers
# ###############


def _write(path: Path, content: str, *, mtime_offset: float = -2.0) -> None:
    """Write *content* to *path*, creating parent directories as needed.

    Sets the file's mtime to *mtime_offset* seconds relative to now (default:
    2 seconds in the past) so that subsequently written artifacts are reliably
    newer regardless of filesystem timestamp resolution.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    t = time.time() + mtime_offset
    os.utime(path, (t, t))


# ###############
# Strings
# ###############


class TestCompileSpec:
    def test_default_program_name(self) -> None:
        grammar, _ = compile_spec("-a")
        assert grammar.program.name == "main"

    @pytest.mark.parametrize(
        ("source", "error"),
        [
            ("  -a\n-b", LexerError),
            ("-a\n  -b", ParserError),
            ("-a -a", AnalyzerError),
        ],
    )
    def test_errors_are_compiler_errors(self, source: str, error: type) -> None:
        with pytest.raises(error) as exc_info:
            compile_spec(source)
        assert isinstance(exc_info.value, CompilerError)


# ###############
# Single-file compilation
# ###############


class TestSingleFile:
    def test_program_name_defaults_to_file_stem(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        _write(source, "-a")
        grammar, _ = compile_file(source)
        assert grammar.program.name == "tool"

    def test_explicit_program_name(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        _write(source, "-a")
        grammar, _ = compile_file(source, program_name="other")
        assert grammar.program.name == "other"

    def test_artifact_written_to_build_dir(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        build = tmp_path / "build"
        _write(source, "-a")
        grammar, doc = compile_file(source, build)
        artifact = build / f"tool{ARTIFACT_SUFFIX}"
        assert artifact.exists()
        assert read_artifact(artifact) == (grammar, doc)

    def test_no_artifact_without_build_dir(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        _write(source, "-a")
        compile_file(source)
        assert list(tmp_path.iterdir()) == [source]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(BuildError, match="Cannot read usage file"):
            compile_file(tmp_path / "missing.usage")


# ###############
# Caching
# ###############


class TestCache:
    def test_cache_hit_skips_recompile(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        build = tmp_path / "build"
        _write(source, "-a")
        compile_file(source, build)
        artifact = build / f"tool{ARTIFACT_SUFFIX}"
        mtime_first = artifact.stat().st_mtime
        compile_file(source, build)
        assert artifact.stat().st_mtime == mtime_first

    def test_stale_artifact_reads_updated_content(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        build = tmp_path / "build"
        _write(source, "-a")
        compile_file(source, build)
        _write(source, "-b", mtime_offset=2.0)
        grammar, _ = compile_file(source, build)
        assert grammar.find_option(0, "b") is not None
        assert grammar.find_option(0, "a") is None

    def test_artifact_per_program_name(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        build = tmp_path / "build"
        _write(source, "-a")
        compile_file(source, build)
        grammar, _ = compile_file(source, build, program_name="other")
        assert grammar.program.name == "other"
        assert (build / f"other{ARTIFACT_SUFFIX}").exists()

    def test_corrupt_version_is_ignored(self, tmp_path: Path) -> None:
        source = tmp_path / "tool.usage"
        build = tmp_path / "build"
        _write(source, "-a")
        artifact = build / f"tool{ARTIFACT_SUFFIX}"
        build.mkdir()
        artifact.write_text('{"v": "0"}', encoding="utf-8")
        grammar, _ = compile_file(source, build)
        assert grammar.find_option(0, "a") is not None
