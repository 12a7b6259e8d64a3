"""Locate the project manifest."""

from __future__ import annotations

import logging
from pathlib import Path

from .consts import MANIFEST_FILE_NAME
from .errors import ManifestNotFoundError

logger = logging.getLogger(__name__)


def find_manifest_path(start: str | Path | None = None) -> Path:
    """Walk up from ``start`` (default: cwd) to the nearest manifest file."""
    here = Path(start).absolute() if start is not None else Path.cwd()
    for directory in (here, *here.parents):
        candidate = directory / MANIFEST_FILE_NAME
        if candidate.is_file():
            logger.debug("Found manifest at %s", candidate)
            return candidate
    raise ManifestNotFoundError(
        f"could not find {MANIFEST_FILE_NAME} in {here} or any parent directory"
    )
