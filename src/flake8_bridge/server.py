# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Language server transport wiring document events to the validation pipeline."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from . import __version__
from .config.session import Capabilities, Session
from .errors import ConfigError
from .models import Diagnostic, DiagnosticBatch, ValidationRequest
from .pipeline.validator import DocumentValidator
from .severity import Severity
from .tool_env.locator import BinaryLocator
from .workspace import uri_to_path

LOGGER = logging.getLogger(__name__)

SERVER_NAME: Final[str] = "flake8-bridge"

_LSP_SEVERITY: Final[dict[Severity, types.DiagnosticSeverity]] = {
    Severity.ERROR: types.DiagnosticSeverity.Error,
    Severity.WARNING: types.DiagnosticSeverity.Warning,
    Severity.INFORMATION: types.DiagnosticSeverity.Information,
    Severity.HINT: types.DiagnosticSeverity.Hint,
}


def to_lsp_diagnostic(diagnostic: Diagnostic) -> types.Diagnostic:
    """Convert a pipeline diagnostic into its protocol representation."""

    start = diagnostic.range.start
    end = diagnostic.range.end
    return types.Diagnostic(
        range=types.Range(
            start=types.Position(line=start.line, character=start.character),
            end=types.Position(line=end.line, character=end.character),
        ),
        message=diagnostic.message,
        code=diagnostic.code,
        severity=_LSP_SEVERITY[diagnostic.severity],
        source=diagnostic.source,
    )


class LspPublisher:
    """Publish batches as ``textDocument/publishDiagnostics`` notifications."""

    def __init__(self, server: LanguageServer) -> None:
        self._server = server

    def publish(self, batch: DiagnosticBatch) -> None:
        self._server.text_document_publish_diagnostics(
            types.PublishDiagnosticsParams(
                uri=batch.document_uri,
                diagnostics=[to_lsp_diagnostic(item) for item in batch.diagnostics],
            ),
        )


class Flake8LanguageServer(LanguageServer):
    """Language server owning the session and the document validator."""

    def __init__(self, *, locator: BinaryLocator | None = None, capabilities: Capabilities | None = None) -> None:
        self.declared_capabilities = capabilities or Capabilities()
        sync_kind = (
            types.TextDocumentSyncKind.Full
            if self.declared_capabilities.full_document_sync
            else types.TextDocumentSyncKind.Incremental
        )
        super().__init__(SERVER_NAME, __version__, text_document_sync_kind=sync_kind)
        self.locator = locator or BinaryLocator()
        self.session = Session()
        self.validator = DocumentValidator(self.session, LspPublisher(self))

    def open_document_uris(self) -> list[str]:
        """Return the URIs of every document the client currently has open."""

        return list(self.workspace.text_documents.keys())

    async def validate_document(self, uri: str) -> None:
        """Validate the in-memory text of an open document."""

        document = self.workspace.get_text_document(uri)
        await self.validator.validate(ValidationRequest(document_uri=uri, content=document.source))

    async def apply_configuration(self, settings: Any) -> None:
        """Apply client settings and revalidate every open document from disk.

        Invalid settings are logged and leave both the session and the
        published diagnostics untouched.
        """

        try:
            self.session.apply_settings(settings)
        except ConfigError as exc:
            LOGGER.warning("Ignoring configuration change: %s", exc)
            return
        await self.validator.revalidate(self.open_document_uris())


def _workspace_root(params: types.InitializeParams) -> Path | None:
    if params.root_uri:
        return uri_to_path(params.root_uri)
    if params.root_path:
        return Path(params.root_path)
    return None


def create_server(
    *,
    locator: BinaryLocator | None = None,
    capabilities: Capabilities | None = None,
) -> Flake8LanguageServer:
    """Build a language server with all document and workspace handlers registered.

    Args:
        locator: Locator used at initialization; defaults to searching ``PATH``.
        capabilities: Capability descriptor driving sync mode and completion support.

    Returns:
        Flake8LanguageServer: Server ready for ``start_io`` or ``start_tcp``.
    """

    server = Flake8LanguageServer(locator=locator, capabilities=capabilities)

    @server.feature(types.INITIALIZE)
    def initialize(ls: Flake8LanguageServer, params: types.InitializeParams) -> None:
        root = _workspace_root(params)
        declared = ls.session.on_initialize(root, ls.locator)
        LOGGER.info(
            "Initialized for %s (full sync: %s, linter: %s)",
            root,
            declared.full_document_sync,
            ls.session.linter.path if ls.session.linter else "none",
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    async def did_open(ls: Flake8LanguageServer, params: types.DidOpenTextDocumentParams) -> None:
        await ls.validate_document(params.text_document.uri)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    async def did_change(ls: Flake8LanguageServer, params: types.DidChangeTextDocumentParams) -> None:
        await ls.validate_document(params.text_document.uri)

    @server.feature(types.WORKSPACE_DID_CHANGE_CONFIGURATION)
    async def did_change_configuration(
        ls: Flake8LanguageServer,
        params: types.DidChangeConfigurationParams,
    ) -> None:
        await ls.apply_configuration(params.settings)

    if server.declared_capabilities.completion_provider:
        options = types.CompletionOptions(resolve_provider=server.declared_capabilities.completion_resolve)

        # Advertised only; no items are offered.
        @server.feature(types.TEXT_DOCUMENT_COMPLETION, options)
        def completion(ls: Flake8LanguageServer, params: types.CompletionParams) -> types.CompletionList:
            return types.CompletionList(is_incomplete=False, items=[])

        @server.feature(types.COMPLETION_ITEM_RESOLVE)
        def completion_resolve(ls: Flake8LanguageServer, item: types.CompletionItem) -> types.CompletionItem:
            return item

    return server


__all__ = ["Flake8LanguageServer", "LspPublisher", "SERVER_NAME", "create_server", "to_lsp_diagnostic"]
