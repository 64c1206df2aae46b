# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the bridge components."""

from __future__ import annotations

from pathlib import Path


class BridgeError(Exception):
    """Base class for errors raised by the flake8 bridge."""


class ConfigError(BridgeError):
    """Raised when configuration input is invalid."""


class SessionError(BridgeError):
    """Raised when session state is mutated in an unsupported way."""


class MaterializationError(BridgeError):
    """Raised when document content cannot be written for the linter."""

    def __init__(self, path: Path, reason: OSError) -> None:
        """Initialise the error with the shadow path that could not be written.

        Args:
            path: Filesystem location the bridge attempted to write.
            reason: Underlying operating system error.
        """

        super().__init__(f"Unable to write shadow file '{path}': {reason}")
        self.path = path
        self.reason = reason


__all__ = [
    "BridgeError",
    "ConfigError",
    "MaterializationError",
    "SessionError",
]
