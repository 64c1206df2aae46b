# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Document validation pipeline: invoke, parse and publish."""

from __future__ import annotations

from .invoker import InvocationResult, LinterInvoker
from .publisher import DiagnosticsPublisher, RecordingPublisher
from .validator import DocumentValidator

__all__ = [
    "DiagnosticsPublisher",
    "DocumentValidator",
    "InvocationResult",
    "LinterInvoker",
    "RecordingPublisher",
]
