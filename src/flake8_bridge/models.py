# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models flowing through the document validation pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity, severity_from_code

DIAGNOSTIC_SOURCE = "flake8"


@dataclass(slots=True, frozen=True)
class ValidationRequest:
    """Ask for one validation of ``document_uri``.

    ``content`` holds unsaved editor text; ``None`` means the file on disk is
    validated as-is.
    """

    document_uri: str
    content: str | None = None


@dataclass(slots=True, frozen=True)
class MaterializedTarget:
    """Filesystem path the linter reads for a single validation."""

    path: Path
    is_temporary: bool


class Position(BaseModel):
    """Zero-based line/character position inside a document."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    """Half-open span between two positions."""

    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position


class Diagnostic(BaseModel):
    """Positioned, coded problem annotation attached to a document."""

    model_config = ConfigDict(frozen=True)

    range: Range
    code: str
    message: str
    severity: Severity = Severity.INFORMATION
    source: str = DIAGNOSTIC_SOURCE


class ProblemRecord(BaseModel):
    """Single problem line reported by flake8 (one-based coordinates)."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=1)
    column: int = Field(ge=1)
    code: str
    message: str

    def to_diagnostic(self) -> Diagnostic:
        """Return the diagnostic covering the single character at the reported column.

        Returns:
            Diagnostic: Zero-based diagnostic whose message is prefixed with the code.
        """

        line = self.line - 1
        return Diagnostic(
            range=Range(
                start=Position(line=line, character=self.column - 1),
                end=Position(line=line, character=self.column),
            ),
            code=self.code,
            message=f"{self.code}: {self.message}",
            severity=severity_from_code(self.code),
        )


class DiagnosticBatch(BaseModel):
    """Complete diagnostic set for one document produced by one validation.

    An empty ``diagnostics`` tuple is meaningful: it clears the editor view.
    """

    model_config = ConfigDict(frozen=True)

    document_uri: str
    diagnostics: tuple[Diagnostic, ...] = Field(default_factory=tuple)
    sequence: int = 0


__all__ = [
    "DIAGNOSTIC_SOURCE",
    "Diagnostic",
    "DiagnosticBatch",
    "MaterializedTarget",
    "Position",
    "ProblemRecord",
    "Range",
    "ValidationRequest",
]
