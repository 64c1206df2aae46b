# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the linter against a materialized target without blocking the event loop."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from ..models import MaterializedTarget
from ..runtime.process import TIMEOUT_RETURNCODE, CommandOptions, run_command
from ..tool_env.locator import LinterBinary

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class InvocationResult:
    """Captured output of one linter run.

    ``error`` is set when the process could not be spawned or timed out; the
    output fields are empty in the spawn failure case.
    """

    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the linter did not run to completion."""

        return self.error is not None


class LinterInvoker:
    """Schedule ``<binary> <path>`` runs on worker threads."""

    def __init__(self, options: CommandOptions | None = None) -> None:
        self._options = options or CommandOptions(check=False, capture_output=True, discard_stdin=True)

    def run(
        self,
        binary: LinterBinary,
        target: MaterializedTarget,
        cwd: Path | None,
        timeout: float | None = None,
    ) -> InvocationResult:
        """Run the linter synchronously and fold failures into the result.

        Args:
            binary: Located linter executable.
            target: Materialized file to lint.
            cwd: Working directory, normally the workspace root.
            timeout: Optional limit in seconds for the run.

        Returns:
            InvocationResult: Output streams, or the error that prevented the run.
        """

        command = [str(binary.path.absolute()), str(target.path.absolute())]
        LOGGER.info("Testing file %s with %s", target.path, binary.path)
        try:
            completed = run_command(command, options=self._options, overrides={"cwd": cwd, "timeout": timeout})
        except OSError as exc:
            LOGGER.warning("Unable to run %s: %s", binary.path, exc)
            return InvocationResult(error=exc)
        if completed.returncode == TIMEOUT_RETURNCODE and timeout is not None:
            error = TimeoutError(f"{binary.path} did not finish within {timeout:.1f}s")
            LOGGER.warning("%s", error)
            return InvocationResult(
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
                returncode=completed.returncode,
                error=error,
            )
        return InvocationResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )

    def invoke(
        self,
        binary: LinterBinary,
        target: MaterializedTarget,
        cwd: Path | None,
        *,
        timeout: float | None = None,
    ) -> asyncio.Task[InvocationResult]:
        """Start a linter run and return the task that completes with its result.

        Must be called from a running event loop. The task never raises for
        spawn failures; see :attr:`InvocationResult.error`.

        Args:
            binary: Located linter executable.
            target: Materialized file to lint. The caller keeps ownership and
                releases it once the task is done.
            cwd: Working directory, normally the workspace root.
            timeout: Optional limit in seconds for the run.

        Returns:
            asyncio.Task[InvocationResult]: Task wrapping the worker-thread run.
        """

        return asyncio.ensure_future(asyncio.to_thread(self.run, binary, target, cwd, timeout))


__all__ = ["InvocationResult", "LinterInvoker"]
