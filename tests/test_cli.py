# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from flake8_bridge.cli.app import app

PROBLEM_SCRIPT = """case "$1" in
  --version) echo "7.1.1 (mccabe: 0.7.0) CPython 3.12.4 on Linux" ;;
  *) printf '%s:1:1: F401 unused import\\n' "$1"; exit 1 ;;
esac"""

CLEAN_SCRIPT = """case "$1" in
  --version) echo "7.1.1" ;;
  *) exit 0 ;;
esac"""


def test_locate_reports_missing_binary(tmp_path: Path) -> None:
    result = CliRunner().invoke(app, ["locate", "--search-path", str(tmp_path), "--no-emoji"])

    assert result.exit_code == 1


def test_locate_finds_binary(make_executable) -> None:  # noqa: ANN001
    script = make_executable(CLEAN_SCRIPT)

    result = CliRunner().invoke(app, ["locate", "--search-path", str(script.parent), "--no-emoji"])

    assert result.exit_code == 0


def test_check_reports_problems(tmp_path: Path, make_executable) -> None:  # noqa: ANN001
    script = make_executable(PROBLEM_SCRIPT)
    source = tmp_path / "mod.py"
    source.write_text("import os\n", encoding="utf-8")

    result = CliRunner().invoke(
        app,
        ["check", str(source), "--search-path", str(script.parent), "--root", str(tmp_path), "--no-emoji"],
    )

    assert result.exit_code == 1
    assert "F401" in result.stdout


def test_check_clean_file_exits_zero(tmp_path: Path, make_executable) -> None:  # noqa: ANN001
    script = make_executable(CLEAN_SCRIPT)
    source = tmp_path / "mod.py"
    source.write_text("x = 1\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["check", str(source), "--search-path", str(script.parent), "--no-emoji"])

    assert result.exit_code == 0


def test_check_without_linter_exits_two(tmp_path: Path) -> None:
    source = tmp_path / "mod.py"
    source.write_text("x = 1\n", encoding="utf-8")

    result = CliRunner().invoke(app, ["check", str(source), "--search-path", str(tmp_path / "nothing"), "--no-emoji"])

    assert result.exit_code == 2
