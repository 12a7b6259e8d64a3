"""Filesystem handles and process-level advisory locks."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from .ui import Ui

logger = logging.getLogger(__name__)

_OUTPUT_DIR_GITIGNORE = "# Created by kiln automatically.\n*\n"


class Filesystem:
    """A directory kiln owns, created on first use."""

    def __init__(self, root: str | Path, *, output_dir: bool = False) -> None:
        self._root = Path(root)
        self.is_output_dir = output_dir

    @classmethod
    def new_output_dir(cls, root: str | Path) -> Filesystem:
        """Create a handle to a build output tree, which is git-ignored once created."""
        return cls(root, output_dir=True)

    def path_unchecked(self) -> Path:
        """Return the directory path without touching the disk."""
        return self._root

    def path_existent(self) -> Path:
        """Return the directory path, creating it first if missing."""
        if not self._root.is_dir():
            logger.debug("Creating directory %s", self._root)
            self._root.mkdir(parents=True, exist_ok=True)
            if self.is_output_dir:
                gitignore = self._root / ".gitignore"
                if not gitignore.exists():
                    gitignore.write_text(_OUTPUT_DIR_GITIGNORE)
        return self._root

    def advisory_lock(self, name: str, description: str, ui: Ui) -> AdvisoryLock:
        """Create an advisory lock over ``name`` inside this directory.

        The directory is created here, so an unwritable location fails now
        with OSError rather than on first acquire.
        """
        self.path_existent()
        return AdvisoryLock(self, name, description, ui)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Filesystem):
            return NotImplemented
        return self._root == other._root and self.is_output_dir == other.is_output_dir

    def __hash__(self) -> int:
        return hash((self._root, self.is_output_dir))

    def __str__(self) -> str:
        return str(self._root)

    def __repr__(self) -> str:
        return f"Filesystem({str(self._root)!r})"


class AdvisoryLock:
    """A cooperative lock over a file, shared by everything in this process.

    The handle owns its own reference to the directory it locks in, so it
    stays valid independently of whatever created it. Acquisition is
    re-entrant: nested ``acquire()`` blocks in the same process share one
    OS-level lock.
    """

    def __init__(self, filesystem: Filesystem, name: str, description: str, ui: Ui) -> None:
        self.filesystem = filesystem
        self.name = name
        self.description = description
        self._ui = ui
        self._file_lock = FileLock(str(self.path), thread_local=False)

    @property
    def path(self) -> Path:
        return self.filesystem.path_unchecked() / self.name

    @property
    def is_locked(self) -> bool:
        return self._file_lock.is_locked

    @contextmanager
    def acquire(self) -> Iterator[AdvisoryLock]:
        """Hold the lock for the duration of the block, waiting as long as needed."""
        try:
            self._file_lock.acquire(blocking=False)
        except Timeout:
            self._ui.print(f"Blocking waiting for file lock on {self.description}")
            logger.debug("Lock %s is held by another process; waiting", self.path)
            self._file_lock.acquire()
        logger.debug("Acquired lock on %s (level %d)", self.path, self._file_lock.lock_counter)
        try:
            yield self
        finally:
            self._file_lock.release()

    def __repr__(self) -> str:
        return f"AdvisoryLock({self.description!r}, path={str(self.path)!r})"
