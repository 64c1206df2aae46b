# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Orchestrate one document validation from request to published diagnostics."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Iterable
from itertools import count

from ..config.session import Session
from ..errors import MaterializationError
from ..models import Diagnostic, DiagnosticBatch, ValidationRequest
from ..parsers.flake8 import parse_flake8
from ..tool_env.locator import LinterBinary
from ..workspace import materialize
from .invoker import LinterInvoker
from .publisher import DiagnosticsPublisher

LOGGER = logging.getLogger(__name__)


class DocumentValidator:
    """Run materialize, invoke, parse and publish for each request.

    Validations of the same document may overlap. Each one gets a sequence
    number; when ``session.discard_stale_results`` is set, a batch older than
    one already published for the same document is dropped instead of
    overwriting fresher diagnostics. Bookkeeping for a document is dropped
    once none of its validations is in flight.
    """

    def __init__(
        self,
        session: Session,
        publisher: DiagnosticsPublisher,
        invoker: LinterInvoker | None = None,
    ) -> None:
        self._session = session
        self._publisher = publisher
        self._invoker = invoker or LinterInvoker()
        self._sequence = count(1)
        self._published: dict[str, int] = {}
        self._in_flight: Counter[str] = Counter()

    async def validate(self, request: ValidationRequest) -> DiagnosticBatch | None:
        """Validate one document and publish the outcome.

        Materialization and invocation failures publish an empty batch so the
        editor drops stale markers. Without a linter binary the call is a no-op.

        Args:
            request: Document identifier and optional unsaved content.

        Returns:
            DiagnosticBatch | None: The published batch, or ``None`` when nothing
            was published (no linter, or the result was superseded).
        """

        binary = self._session.linter
        if binary is None:
            LOGGER.debug("Skipping %s: no linter available", request.document_uri)
            return None

        uri = request.document_uri
        sequence = next(self._sequence)
        self._in_flight[uri] += 1
        try:
            return await self._run(binary, request, sequence)
        finally:
            self._in_flight[uri] -= 1
            if self._in_flight[uri] <= 0:
                del self._in_flight[uri]
                self._published.pop(uri, None)

    async def revalidate(self, document_uris: Iterable[str]) -> list[DiagnosticBatch | None]:
        """Validate every document in ``document_uris`` from disk concurrently."""

        requests = [ValidationRequest(document_uri=uri) for uri in document_uris]
        return list(await asyncio.gather(*(self.validate(request) for request in requests)))

    def tracked_documents(self) -> set[str]:
        """Return the URIs that currently hold ordering bookkeeping."""

        return set(self._in_flight) | set(self._published)

    async def _run(self, binary: LinterBinary, request: ValidationRequest, sequence: int) -> DiagnosticBatch | None:
        diagnostics: list[Diagnostic] = []
        try:
            with materialize(request) as target:
                result = await self._invoker.invoke(
                    binary,
                    target,
                    self._session.workspace_root,
                    timeout=self._session.timeout,
                )
        except MaterializationError as exc:
            LOGGER.warning("Validation of %s aborted: %s", request.document_uri, exc)
        else:
            if result.failed:
                LOGGER.warning("flake8 failed for %s: %s", request.document_uri, result.error)
            else:
                diagnostics = parse_flake8(result.stdout, self._session.max_diagnostics)

        batch = DiagnosticBatch(
            document_uri=request.document_uri,
            diagnostics=tuple(diagnostics),
            sequence=sequence,
        )
        return self._publish(batch)

    def _publish(self, batch: DiagnosticBatch) -> DiagnosticBatch | None:
        newest = self._published.get(batch.document_uri, 0)
        if self._session.discard_stale_results and batch.sequence < newest:
            LOGGER.info(
                "Discarding stale diagnostics for %s (run %d superseded by %d)",
                batch.document_uri,
                batch.sequence,
                newest,
            )
            return None
        self._published[batch.document_uri] = max(newest, batch.sequence)
        self._publisher.publish(batch)
        return batch


__all__ = ["DocumentValidator"]
