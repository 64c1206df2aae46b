# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Settings payload delivered by the editor on configuration changes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError

DEFAULT_MAX_PROBLEMS: Final[int] = 100


class Flake8Settings(BaseModel):
    """Client settings found under the ``flake8`` key."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    max_number_of_problems: int | None = Field(default=None, alias="maxNumberOfProblems", ge=0)
    discard_stale_results: bool = Field(default=False, alias="discardStaleResults")
    timeout: float | None = Field(default=None, gt=0)

    @property
    def effective_max_problems(self) -> int:
        """Return the configured cap, treating unset and zero as the default."""

        return self.max_number_of_problems or DEFAULT_MAX_PROBLEMS


class BridgeSettings(BaseModel):
    """Top-level settings object sent with ``workspace/didChangeConfiguration``."""

    model_config = ConfigDict(extra="ignore")

    flake8: Flake8Settings = Field(default_factory=Flake8Settings)


def parse_settings(payload: Mapping[str, Any] | None) -> BridgeSettings:
    """Validate a raw settings payload.

    Args:
        payload: JSON-like mapping received from the client, or ``None``.

    Returns:
        BridgeSettings: Parsed settings with defaults applied for missing keys.

    Raises:
        ConfigError: If the payload contains values of the wrong type.
    """

    if payload is None:
        return BridgeSettings()
    if not isinstance(payload, Mapping):
        raise ConfigError(f"settings payload must be an object, got {type(payload).__name__}")
    normalized = dict(payload)
    if normalized.get("flake8") is None:
        normalized.pop("flake8", None)
    try:
        return BridgeSettings.model_validate(normalized)
    except ValidationError as exc:
        raise ConfigError(f"invalid flake8 settings: {exc}") from exc


__all__ = ["DEFAULT_MAX_PROBLEMS", "BridgeSettings", "Flake8Settings", "parse_settings"]
