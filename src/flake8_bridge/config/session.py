# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Process-wide session state shared by every validation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from ..errors import SessionError
from ..tool_env.locator import BinaryLocator, LinterBinary
from .models import DEFAULT_MAX_PROBLEMS, BridgeSettings, parse_settings

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class Capabilities:
    """Capabilities the bridge declares to the editor during initialization."""

    full_document_sync: bool = True
    completion_provider: bool = True
    completion_resolve: bool = True


class Session(BaseModel):
    """Settings read by every in-flight validation.

    ``workspace_root`` and ``max_diagnostics`` follow configuration events;
    the linter binary is bound once and never replaced. Validations read the
    live values, so a configuration change can affect work already in flight.
    """

    model_config = ConfigDict(validate_assignment=True)

    workspace_root: Path | None = None
    max_diagnostics: int = Field(default=DEFAULT_MAX_PROBLEMS, ge=0)
    discard_stale_results: bool = False
    timeout: float | None = Field(default=None, gt=0)

    _linter: LinterBinary | None = PrivateAttr(default=None)
    _linter_bound: bool = PrivateAttr(default=False)

    @property
    def linter(self) -> LinterBinary | None:
        """Return the linter bound at initialization, if any was found."""

        return self._linter

    @property
    def linting_enabled(self) -> bool:
        """Return ``True`` when a linter binary is available."""

        return self._linter is not None

    def bind_linter(self, binary: LinterBinary | None) -> None:
        """Record the locator result for the rest of the session.

        Args:
            binary: Located executable, or ``None`` when none was found.

        Raises:
            SessionError: If a locator result was already bound.
        """

        if self._linter_bound:
            raise SessionError("linter binary is already bound for this session")
        self._linter = binary
        self._linter_bound = True

    def on_initialize(self, root: Path | None, locator: BinaryLocator) -> Capabilities:
        """Store the workspace root, locate the linter and describe capabilities.

        Args:
            root: Workspace root sent by the client; used as the linter's cwd.
            locator: Locator used to discover the linter executable.

        Returns:
            Capabilities: Descriptor announcing full sync and completion support.
        """

        self.workspace_root = root
        self.bind_linter(locator.locate())
        return Capabilities()

    def apply_settings(self, payload: Mapping[str, Any] | None) -> BridgeSettings:
        """Apply a configuration change payload.

        Args:
            payload: Raw settings object, e.g. ``{"flake8": {"maxNumberOfProblems": 50}}``.

        Returns:
            BridgeSettings: Parsed settings that were applied.

        Raises:
            ConfigError: If the payload is malformed; the session is left unchanged.
        """

        settings = parse_settings(payload)
        flake8 = settings.flake8
        self.max_diagnostics = flake8.effective_max_problems
        self.discard_stale_results = flake8.discard_stale_results
        self.timeout = flake8.timeout
        LOGGER.debug("Applied settings: max_diagnostics=%d", self.max_diagnostics)
        return settings


__all__ = ["Capabilities", "Session"]
