# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Outbound hand-off of finished diagnostic batches."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..models import DiagnosticBatch


@runtime_checkable
class DiagnosticsPublisher(Protocol):
    """Deliver a batch to the editor, replacing earlier diagnostics for its document."""

    def publish(self, batch: DiagnosticBatch) -> None:
        """Send ``batch`` without waiting for an acknowledgement."""

        raise NotImplementedError


class RecordingPublisher:
    """Keep published batches in memory, in publication order."""

    def __init__(self) -> None:
        self.batches: list[DiagnosticBatch] = []

    def publish(self, batch: DiagnosticBatch) -> None:
        self.batches.append(batch)

    def latest(self, document_uri: str) -> DiagnosticBatch | None:
        """Return the most recent batch published for ``document_uri``."""

        for batch in reversed(self.batches):
            if batch.document_uri == document_uri:
                return batch
        return None


__all__ = ["DiagnosticsPublisher", "RecordingPublisher"]
