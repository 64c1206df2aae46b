# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Helpers for capturing tool versions."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Final

from packaging.version import InvalidVersion, Version

from ..runtime.process import CommandOptions, SubprocessExecutionError, run_command

PROBE_TIMEOUT_SECONDS: Final[float] = 10.0


class VersionResolver:
    """Capture version strings reported by ``--version`` style probes."""

    # flake8 prints ``7.1.1 (mccabe: 0.7.0, ...) CPython ...``; only a leading
    # three-part version counts.
    VERSION_PATTERN = re.compile(r"^(\d+\.\d+\.\d+)")

    def capture(
        self,
        command: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> str | None:
        """Return the version string produced by ``command`` when available.

        Args:
            command: Command sequence executed to report version information.
            env: Optional environment overrides supplied to the command invocation.

        Returns:
            str | None: Version string when parsing succeeds, otherwise ``None``.
        """
        try:
            completed = run_command(
                list(command),
                options=CommandOptions(
                    capture_output=True,
                    env=env,
                    timeout=PROBE_TIMEOUT_SECONDS,
                    discard_stdin=True,
                ),
            )
        except (OSError, ValueError, SubprocessExecutionError):
            return None
        return self.normalize(completed.stdout)

    def normalize(self, raw: str | None) -> str | None:
        """Return the leading ``MAJOR.MINOR.PATCH`` version found in ``raw``.

        Args:
            raw: Raw version text captured from tooling output.

        Returns:
            str | None: Version string, or ``None`` when ``raw`` does not start with one.
        """
        if not raw:
            return None
        match = self.VERSION_PATTERN.match(raw)
        if match is None:
            return None
        candidate = match.group(1)
        try:
            Version(candidate)
        except InvalidVersion:
            return None
        return candidate


__all__ = ["PROBE_TIMEOUT_SECONDS", "VersionResolver"]
