# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery of the external linter executable."""

from __future__ import annotations

from .locator import DEFAULT_EXECUTABLE, BinaryLocator, LinterBinary
from .versioning import VersionResolver

__all__ = ["DEFAULT_EXECUTABLE", "BinaryLocator", "LinterBinary", "VersionResolver"]
