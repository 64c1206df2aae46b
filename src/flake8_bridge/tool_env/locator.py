# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate a working flake8 executable on the search path."""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .versioning import VersionResolver

LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE: Final[str] = "flake8"
VERSION_FLAG: Final[str] = "--version"
_EXECUTE_BITS: Final[int] = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass(slots=True, frozen=True)
class LinterBinary:
    """Executable that answered the version probe."""

    path: Path
    version: str


class BinaryLocator:
    """Scan ``PATH`` entries in order for an executable that reports a version."""

    def __init__(
        self,
        name: str = DEFAULT_EXECUTABLE,
        *,
        search_path: str | None = None,
        versions: VersionResolver | None = None,
    ) -> None:
        """Initialise the locator.

        Args:
            name: Exact file name looked up in each search directory.
            search_path: ``os.pathsep`` separated directory list; defaults to
                the ``PATH`` environment variable at lookup time.
            versions: Resolver used to probe candidates.
        """

        self._name = name
        self._search_path = search_path
        self._versions = versions or VersionResolver()

    def candidates(self) -> Iterator[Path]:
        """Yield ``<dir>/<name>`` for each non-empty search path entry, in order."""

        raw = self._search_path if self._search_path is not None else os.environ.get("PATH", "")
        for directory in raw.split(os.pathsep):
            if directory:
                yield Path(directory) / self._name

    def locate(self) -> LinterBinary | None:
        """Return the first candidate that is executable and answers ``--version``.

        Returns:
            LinterBinary | None: Winning executable, or ``None`` when the whole
            search path is exhausted. Linting is disabled in that case.
        """

        for candidate in self.candidates():
            LOGGER.debug("Checking %s", candidate)
            try:
                info = candidate.stat()
            except OSError:
                continue
            is_file = stat.S_ISREG(info.st_mode)
            LOGGER.debug("File exists %s (regular file: %s)", candidate, is_file)
            if not is_file or not info.st_mode & _EXECUTE_BITS:
                continue
            LOGGER.debug("Spawning %s %s", candidate, VERSION_FLAG)
            version = self._versions.capture([str(candidate.absolute()), VERSION_FLAG])
            if version is None:
                LOGGER.debug("No version reported by %s", candidate)
                continue
            LOGGER.info("Found %s on %s version %s", self._name, candidate, version)
            return LinterBinary(path=candidate, version=version)
        LOGGER.warning("No usable %s executable found on the search path; linting is disabled", self._name)
        return None


__all__ = ["DEFAULT_EXECUTABLE", "VERSION_FLAG", "BinaryLocator", "LinterBinary"]
