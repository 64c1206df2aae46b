# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers translating linter output into diagnostics."""

from __future__ import annotations

from .flake8 import FLAKE8_PATTERN, iter_problem_records, parse_flake8

__all__ = ["FLAKE8_PATTERN", "iter_problem_records", "parse_flake8"]
