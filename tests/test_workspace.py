# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Unit tests for materializing documents for the linter."""

from __future__ import annotations

from pathlib import Path

import pytest

from flake8_bridge.errors import MaterializationError
from flake8_bridge.models import ValidationRequest
from flake8_bridge.workspace import materialize, shadow_path, uri_to_path


def test_materialize_without_content_uses_original_file(tmp_path: Path) -> None:
    source = tmp_path / "mod.py"
    source.write_text("import os\n", encoding="utf-8")
    before = sorted(tmp_path.iterdir())

    with materialize(ValidationRequest(document_uri=f"file://{source}")) as target:
        assert target.is_temporary is False
        assert target.path == source
        assert str(target.path) == f"file://{source}".removeprefix("file://")

    assert sorted(tmp_path.iterdir()) == before
    assert source.read_text(encoding="utf-8") == "import os\n"


def test_materialize_with_content_writes_and_removes_shadow(tmp_path: Path) -> None:
    source = tmp_path / "mod.py"
    source.write_text("saved\n", encoding="utf-8")
    before = sorted(tmp_path.iterdir())

    with materialize(ValidationRequest(document_uri=source.as_uri(), content="unsaved\n")) as target:
        assert target.is_temporary is True
        assert target.path != source
        assert target.path.parent == source.parent
        assert target.path.name.startswith("mod.py.")
        assert target.path.name.endswith(".flake8.py")
        assert target.path.read_text(encoding="utf-8") == "unsaved\n"

    assert not target.path.exists()
    assert sorted(tmp_path.iterdir()) == before


def test_shadow_file_removed_when_block_raises(tmp_path: Path) -> None:
    request = ValidationRequest(document_uri=(tmp_path / "mod.py").as_uri(), content="x = 1\n")

    with pytest.raises(RuntimeError):
        with materialize(request) as target:
            assert target.path.exists()
            raise RuntimeError("linter exploded")

    assert list(tmp_path.iterdir()) == []


def test_shadow_paths_are_unique_per_validation(tmp_path: Path) -> None:
    request = ValidationRequest(document_uri=(tmp_path / "mod.py").as_uri(), content="x = 1\n")

    with materialize(request) as first, materialize(request) as second:
        assert first.path != second.path
        assert first.path.exists() and second.path.exists()

    assert list(tmp_path.iterdir()) == []


def test_write_failure_raises_and_leaves_nothing(tmp_path: Path) -> None:
    missing_dir = tmp_path / "gone"
    request = ValidationRequest(document_uri=(missing_dir / "mod.py").as_uri(), content="x = 1\n")

    with pytest.raises(MaterializationError) as excinfo:
        with materialize(request):
            pytest.fail("no target should be yielded")

    assert excinfo.value.path.parent == missing_dir
    assert list(tmp_path.iterdir()) == []


def test_write_under_a_regular_file_raises_materialization_error(tmp_path: Path) -> None:
    blocker = tmp_path / "notadir"
    blocker.write_text("", encoding="utf-8")
    request = ValidationRequest(document_uri=(blocker / "mod.py").as_uri(), content="x = 1\n")

    with pytest.raises(MaterializationError):
        with materialize(request):
            pytest.fail("no target should be yielded")

    assert list(tmp_path.iterdir()) == [blocker]


def test_shadow_path_layout() -> None:
    assert shadow_path(Path("/src/app.py"), "abc") == Path("/src/app.py.abc.flake8.py")


def test_uri_to_path_decodes_file_uris() -> None:
    assert uri_to_path("file:///home/me/my%20project/app.py") == Path("/home/me/my project/app.py")
    assert uri_to_path("/already/a/path.py") == Path("/already/a/path.py")
