# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

FakeExecutableFactory = Callable[..., Path]


@pytest.fixture
def make_executable(tmp_path: Path) -> FakeExecutableFactory:
    """Return a factory writing POSIX shell scripts that stand in for flake8."""

    def factory(body: str, *, directory: str = "bin", name: str = "flake8", mode: int = 0o755) -> Path:
        target_dir = tmp_path / directory
        target_dir.mkdir(parents=True, exist_ok=True)
        script = target_dir / name
        script.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
        script.chmod(mode)
        return script

    return factory
