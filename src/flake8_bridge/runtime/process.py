# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; we run the linter with an argument
# list and never enable ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from subprocess import CompletedProcess
from typing import Final, Literal

CommandOverrideValue = Path | Mapping[str, str] | bool | float | int | None
CommandOptionKey = Literal["cwd", "env", "check", "capture_output", "text", "timeout", "discard_stdin"]
CommandOverrideMapping = Mapping[CommandOptionKey, CommandOverrideValue]

TIMEOUT_RETURNCODE: Final[int] = 124

_COMMAND_KEYS: Final[frozenset[str]] = frozenset(
    {"cwd", "env", "check", "capture_output", "text", "timeout", "discard_stdin"}
)
_BOOL_KEYS: Final[frozenset[str]] = frozenset({"check", "capture_output", "text", "discard_stdin"})


@dataclass(slots=True, frozen=True)
class CommandOptions:
    """Immutable command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    capture_output: bool = False
    text: bool = True
    timeout: float | None = None
    discard_stdin: bool = False

    def with_overrides(self, overrides: CommandOverrideMapping) -> CommandOptions:
        """Return a new options instance with ``overrides`` applied.

        Args:
            overrides: Mapping of option names to replacement values.

        Returns:
            CommandOptions: Updated options instance with overrides applied.

        Raises:
            TypeError: If ``overrides`` includes an unknown option name or a value
                with an incompatible type.
            ValueError: When a timeout override is negative.
        """

        unknown = [key for key in overrides if key not in _COMMAND_KEYS]
        if unknown:
            message = ", ".join(sorted(unknown))
            raise TypeError(f"Unknown command option(s): {message}")
        validated: dict[str, CommandOverrideValue] = {}
        for key, value in overrides.items():
            if key == "cwd" and value is not None and not isinstance(value, Path):
                raise TypeError("cwd override must be a pathlib.Path or None")
            if key == "env" and value is not None and not isinstance(value, Mapping):
                raise TypeError("env override must be a mapping of strings to strings")
            if key in _BOOL_KEYS and not isinstance(value, bool):
                raise TypeError(f"{key} override must be a boolean value")
            if key == "timeout" and value is not None:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise TypeError("timeout override must be a number or None")
                if value < 0:
                    raise ValueError("timeout override must be non-negative")
                value = float(value)
            validated[key] = value
        return replace(self, **validated)


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _ensure_text(value: str | bytes | None) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return value.decode(errors="ignore")


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If a relative executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    options: CommandOptions | None = None,
    overrides: CommandOverrideMapping | None = None,
) -> CompletedProcess[str]:
    """Execute ``args`` after normalising the executable path.

    A timeout is reported as a completed process with return code ``124`` and
    a note appended to stderr rather than as an exception.

    Args:
        args: Command and argument sequence to execute.
        options: Base options configuring execution semantics.
        overrides: Keyword overrides applied to a cloned ``options`` instance.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        OSError: If the executable exists but cannot be spawned.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved_options = (options or CommandOptions()).with_overrides(overrides or {})

    try:
        completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - argument list, no shell
            normalized,
            cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
            env=dict(resolved_options.env) if resolved_options.env is not None else None,
            check=False,
            capture_output=resolved_options.capture_output,
            text=resolved_options.text,
            timeout=resolved_options.timeout,
            stdin=subprocess.DEVNULL if resolved_options.discard_stdin else None,
        )
    except subprocess.TimeoutExpired as exc:
        stdout = _ensure_text(exc.stdout) or ""
        stderr = _ensure_text(exc.stderr)
        timeout_value = resolved_options.timeout
        timeout_msg = (
            f"Command timed out after {timeout_value:.1f}s" if timeout_value is not None else "Command timed out"
        )
        combined_stderr = f"{stderr}\n{timeout_msg}" if stderr else timeout_msg
        completed = subprocess.CompletedProcess(
            args=list(normalized),
            returncode=TIMEOUT_RETURNCODE,
            stdout=stdout,
            stderr=combined_stderr,
        )

    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(
            normalized,
            completed.returncode,
            completed.stdout if isinstance(completed.stdout, str) else None,
            completed.stderr if isinstance(completed.stderr, str) else None,
        )

    return completed


__all__ = [
    "CommandOptionKey",
    "CommandOptions",
    "CommandOverrideMapping",
    "CommandOverrideValue",
    "SubprocessExecutionError",
    "TIMEOUT_RETURNCODE",
    "run_command",
]
