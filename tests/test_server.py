# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the language server glue."""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import SimpleNamespace

import pytest
from lsprotocol import types

from flake8_bridge.config import Capabilities
from flake8_bridge.models import DiagnosticBatch, ProblemRecord, ValidationRequest
from flake8_bridge.server import Flake8LanguageServer, LspPublisher, _workspace_root, create_server, to_lsp_diagnostic
from flake8_bridge.tool_env import BinaryLocator


class _FakeTransport:
    def __init__(self) -> None:
        self.sent: list[types.PublishDiagnosticsParams] = []

    def text_document_publish_diagnostics(self, params: types.PublishDiagnosticsParams) -> None:
        self.sent.append(params)


def test_to_lsp_diagnostic_maps_range_code_and_severity() -> None:
    diagnostic = ProblemRecord(line=3, column=5, code="E501", message="line too long").to_diagnostic()

    converted = to_lsp_diagnostic(diagnostic)

    assert converted.range == types.Range(
        start=types.Position(line=2, character=4),
        end=types.Position(line=2, character=5),
    )
    assert converted.code == "E501"
    assert converted.message == "E501: line too long"
    assert converted.severity == types.DiagnosticSeverity.Error
    assert converted.source == "flake8"


def test_lsp_publisher_sends_empty_batches_to_clear() -> None:
    transport = _FakeTransport()
    publisher = LspPublisher(transport)  # type: ignore[arg-type]

    publisher.publish(DiagnosticBatch(document_uri="file:///w/app.py"))

    assert transport.sent == [types.PublishDiagnosticsParams(uri="file:///w/app.py", diagnostics=[])]


def test_workspace_root_prefers_root_uri() -> None:
    params = types.InitializeParams(
        process_id=None,
        capabilities=types.ClientCapabilities(),
        root_uri="file:///home/me/project",
        root_path="/elsewhere",
    )

    assert _workspace_root(params) == Path("/home/me/project")


def test_workspace_root_falls_back_to_root_path() -> None:
    params = types.InitializeParams(process_id=None, capabilities=types.ClientCapabilities(), root_path="/srv/code")

    assert _workspace_root(params) == Path("/srv/code")
    assert _workspace_root(types.InitializeParams(process_id=None, capabilities=types.ClientCapabilities())) is None


def test_create_server_wires_session_and_validator(tmp_path: Path) -> None:
    locator = BinaryLocator(search_path=str(tmp_path))

    server = create_server(locator=locator)

    assert isinstance(server, Flake8LanguageServer)
    assert server.locator is locator
    assert server.declared_capabilities == Capabilities()
    assert server.session.linter is None
    assert server.session.max_diagnostics == 100


class _FakeWorkspace:
    def __init__(self, documents: dict[str, str]) -> None:
        self.text_documents = {uri: SimpleNamespace(uri=uri, source=text) for uri, text in documents.items()}

    def get_text_document(self, uri: str) -> SimpleNamespace:
        return self.text_documents[uri]


class _RecordingValidator:
    def __init__(self) -> None:
        self.requests: list[ValidationRequest] = []
        self.revalidated: list[list[str]] = []

    async def validate(self, request: ValidationRequest) -> None:
        self.requests.append(request)

    async def revalidate(self, document_uris: list[str]) -> list[None]:
        self.revalidated.append(list(document_uris))
        return []


@pytest.fixture
def wired_server(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> tuple[Flake8LanguageServer, _RecordingValidator]:
    workspace = _FakeWorkspace({"file:///w/app.py": "import os\n", "file:///w/util.py": "x = 1\n"})
    monkeypatch.setattr(Flake8LanguageServer, "workspace", property(lambda self: workspace))
    server = create_server(locator=BinaryLocator(search_path=str(tmp_path)))
    validator = _RecordingValidator()
    server.validator = validator  # type: ignore[assignment]
    return server, validator


def test_document_events_validate_in_memory_source(wired_server) -> None:  # noqa: ANN001
    server, validator = wired_server

    asyncio.run(server.validate_document("file:///w/app.py"))

    assert validator.requests == [ValidationRequest(document_uri="file:///w/app.py", content="import os\n")]


def test_configuration_change_applies_settings_then_revalidates_open_documents(wired_server) -> None:  # noqa: ANN001
    server, validator = wired_server

    asyncio.run(server.apply_configuration({"flake8": {"maxNumberOfProblems": 3}}))

    assert server.session.max_diagnostics == 3
    assert validator.revalidated == [["file:///w/app.py", "file:///w/util.py"]]


def test_invalid_configuration_skips_revalidation(wired_server) -> None:  # noqa: ANN001
    server, validator = wired_server
    server.session.max_diagnostics = 9

    asyncio.run(server.apply_configuration({"flake8": {"maxNumberOfProblems": "lots"}}))

    assert server.session.max_diagnostics == 9
    assert validator.revalidated == []
