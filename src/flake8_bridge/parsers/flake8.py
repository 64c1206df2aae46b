# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parser for flake8's default ``path:line:col: CODE message`` output."""

from __future__ import annotations

import re
from collections.abc import Iterator
from itertools import islice
from typing import Final

from ..models import Diagnostic, ProblemRecord

# The message group stops at the end of the line; embedded colons are kept.
FLAKE8_PATTERN: Final[re.Pattern[str]] = re.compile(
    r":(?P<line>\d+):(?P<column>\d+): (?P<code>\w+) (?P<message>.*)",
    re.MULTILINE,
)


def iter_problem_records(stdout: str) -> Iterator[ProblemRecord]:
    """Yield problem records from ``stdout`` in order of appearance.

    Matching is lazy, so callers that stop early never scan the rest of the text.

    Args:
        stdout: Raw text written by flake8 to standard output.

    Yields:
        ProblemRecord: One record per position-coded problem line.
    """

    for match in FLAKE8_PATTERN.finditer(stdout):
        yield ProblemRecord(
            line=int(match.group("line")),
            column=int(match.group("column")),
            code=match.group("code"),
            message=match.group("message"),
        )


def parse_flake8(stdout: str, cap: int) -> list[Diagnostic]:
    """Parse flake8 textual output into at most ``cap`` diagnostics.

    Args:
        stdout: Raw text written by flake8 to standard output.
        cap: Upper bound on the number of diagnostics returned.

    Returns:
        list[Diagnostic]: Diagnostics for the first ``cap`` matches, in output order.
        Empty or non-matching output yields an empty list.
    """

    if cap <= 0 or not stdout.strip():
        return []
    return [record.to_diagnostic() for record in islice(iter_problem_records(stdout), cap)]


__all__ = ["FLAKE8_PATTERN", "iter_problem_records", "parse_flake8"]
