# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for settings parsing and session state."""

from __future__ import annotations

from pathlib import Path

import pytest

from flake8_bridge.config import DEFAULT_MAX_PROBLEMS, Capabilities, Session, parse_settings
from flake8_bridge.errors import ConfigError, SessionError
from flake8_bridge.tool_env import BinaryLocator, LinterBinary


class _StubLocator(BinaryLocator):
    def __init__(self, result: LinterBinary | None) -> None:
        super().__init__()
        self.result = result
        self.calls = 0

    def locate(self) -> LinterBinary | None:
        self.calls += 1
        return self.result


@pytest.mark.parametrize(
    "payload",
    [
        None,
        {},
        {"flake8": None},
        {"flake8": {}},
        {"flake8": {"maxNumberOfProblems": None}},
        {"flake8": {"maxNumberOfProblems": 0}},
    ],
)
def test_missing_or_zero_cap_defaults_to_100(payload: dict | None) -> None:
    session = Session(max_diagnostics=7)

    session.apply_settings(payload)

    assert session.max_diagnostics == DEFAULT_MAX_PROBLEMS == 100


def test_configured_cap_is_applied() -> None:
    session = Session()

    settings = session.apply_settings({"flake8": {"maxNumberOfProblems": 1, "discardStaleResults": True}})

    assert session.max_diagnostics == 1
    assert session.discard_stale_results is True
    assert settings.flake8.max_number_of_problems == 1


def test_stale_results_are_published_unless_discarding_is_enabled() -> None:
    session = Session()

    session.apply_settings({"flake8": {"maxNumberOfProblems": 5}})

    assert session.discard_stale_results is False
    assert parse_settings({}).flake8.discard_stale_results is False


def test_unrelated_settings_are_ignored() -> None:
    settings = parse_settings({"python": {"pythonPath": "/usr/bin/python3"}, "flake8": {"timeout": 2.5}})

    assert settings.flake8.timeout == 2.5
    assert settings.flake8.effective_max_problems == DEFAULT_MAX_PROBLEMS


@pytest.mark.parametrize(
    "payload",
    [{"flake8": {"maxNumberOfProblems": "many"}}, {"flake8": {"maxNumberOfProblems": -3}}, ["not", "a", "mapping"]],
)
def test_invalid_settings_raise_and_keep_session(payload: object) -> None:
    session = Session(max_diagnostics=42)

    with pytest.raises(ConfigError):
        session.apply_settings(payload)  # type: ignore[arg-type]

    assert session.max_diagnostics == 42


def test_on_initialize_binds_linter_and_declares_capabilities(tmp_path: Path) -> None:
    binary = LinterBinary(path=tmp_path / "flake8", version="7.1.1")
    locator = _StubLocator(binary)
    session = Session()

    capabilities = session.on_initialize(tmp_path, locator)

    assert capabilities == Capabilities(full_document_sync=True, completion_provider=True, completion_resolve=True)
    assert session.workspace_root == tmp_path
    assert session.linter == binary
    assert session.linting_enabled is True
    assert locator.calls == 1


def test_linter_binding_is_immutable(tmp_path: Path) -> None:
    session = Session()
    session.on_initialize(tmp_path, _StubLocator(None))

    assert session.linting_enabled is False
    with pytest.raises(SessionError):
        session.bind_linter(LinterBinary(path=tmp_path / "flake8", version="7.0.0"))


def test_session_rejects_negative_cap() -> None:
    session = Session()

    with pytest.raises(ValueError):
        session.max_diagnostics = -1
