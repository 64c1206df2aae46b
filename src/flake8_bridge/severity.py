# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels understood by editors, ordered from most to least severe."""

    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"


def severity_from_code(code: str | None, default: Severity = Severity.INFORMATION) -> Severity:
    """Infer severity from conventional flake8 code prefixes.

    ``E`` (pycodestyle errors) and ``F`` (pyflakes) map to errors, ``W`` maps to
    warnings and everything else (``C`` complexity, plugin codes) falls back to
    ``default``.

    Args:
        code: Diagnostic code emitted by the tool.
        default: Severity returned when the code does not match known prefixes.

    Returns:
        Severity: Severity derived from the code or ``default`` when unmatched.
    """
    if not code:
        return default
    head = code[0].upper()
    if head in _ERROR_PREFIXES:
        return Severity.ERROR
    if head == _WARNING_PREFIX:
        return Severity.WARNING
    return default


_ERROR_PREFIXES: Final[set[str]] = {"E", "F"}
_WARNING_PREFIX: Final[str] = "W"

__all__ = ["Severity", "severity_from_code"]
