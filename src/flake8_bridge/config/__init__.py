# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and process-wide session state."""

from __future__ import annotations

from .models import DEFAULT_MAX_PROBLEMS, BridgeSettings, Flake8Settings, parse_settings
from .session import Capabilities, Session

__all__ = [
    "DEFAULT_MAX_PROBLEMS",
    "BridgeSettings",
    "Capabilities",
    "Flake8Settings",
    "Session",
    "parse_settings",
]
