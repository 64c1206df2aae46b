# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process and console runtime helpers."""

from __future__ import annotations

from .console import RichConsoleManager, detect_tty, get_console_manager
from .process import CommandOptions, SubprocessExecutionError, run_command

__all__ = [
    "CommandOptions",
    "RichConsoleManager",
    "SubprocessExecutionError",
    "detect_tty",
    "get_console_manager",
    "run_command",
]
