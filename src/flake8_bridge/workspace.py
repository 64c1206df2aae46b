# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Turn validation requests into files the linter can read."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from pathlib import Path
from typing import Final
from urllib.parse import unquote, urlparse

from .errors import MaterializationError
from .models import MaterializedTarget, ValidationRequest

LOGGER = logging.getLogger(__name__)

FILE_SCHEME: Final[str] = "file://"
SHADOW_SUFFIX: Final[str] = "flake8.py"


def uri_to_path(uri: str) -> Path:
    """Return the filesystem path named by ``uri``.

    ``file://`` URIs are stripped of their scheme and percent-decoded; anything
    else is treated as a plain path.
    """

    if uri.startswith(FILE_SCHEME):
        return Path(unquote(urlparse(uri).path))
    return Path(uri)


def new_shadow_token() -> str:
    """Return a token unique to one validation."""

    return uuid.uuid4().hex[:12]


def shadow_path(original: Path, token: str) -> Path:
    """Return the sibling path ``<original>.<token>.flake8.py``."""

    return original.with_name(f"{original.name}.{token}.{SHADOW_SUFFIX}")


def _write_shadow(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        with suppress(OSError):
            path.unlink(missing_ok=True)
        raise MaterializationError(path, exc) from exc


@contextmanager
def materialize(request: ValidationRequest, *, token: str | None = None) -> Iterator[MaterializedTarget]:
    """Yield a target the linter can read for ``request``.

    Without content the document's own file is used and nothing is written.
    With content a shadow file is written next to the original and removed
    when the context exits, whatever the outcome of the block.

    Args:
        request: Document identifier and optional unsaved content.
        token: Shadow file token; a fresh unique token is generated when omitted.

    Yields:
        MaterializedTarget: Path handed to the linter.

    Raises:
        MaterializationError: If the shadow file cannot be written. No target is
            yielded in that case.
    """

    original = uri_to_path(request.document_uri)
    if request.content is None:
        yield MaterializedTarget(path=original, is_temporary=False)
        return

    path = shadow_path(original, token or new_shadow_token())
    _write_shadow(path, request.content)
    LOGGER.debug("Wrote shadow file %s", path)
    try:
        yield MaterializedTarget(path=path, is_temporary=True)
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Unable to remove shadow file %s: %s", path, exc)


__all__ = [
    "FILE_SCHEME",
    "SHADOW_SUFFIX",
    "materialize",
    "new_shadow_token",
    "shadow_path",
    "uri_to_path",
]
