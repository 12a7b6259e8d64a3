"""Runtime execution context for a single kiln invocation."""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from pathlib import Path

from .consts import (
    DEFAULT_TARGET_DIR_NAME,
    KILN_LOG_ENV,
    PACKAGE_CACHE_LOCK_DESCRIPTION,
    PACKAGE_CACHE_LOCK_NAME,
)
from .dirs import AppDirs
from .errors import InvariantViolation, LockAcquisitionError
from .exe import resolve_executable_path
from .flock import AdvisoryLock, Filesystem
from .once import OnceCell
from .system import System
from .ui import Ui

logger = logging.getLogger(__name__)


def _project_root(manifest_path: Path) -> Path:
    parent = manifest_path.parent
    if parent == manifest_path or not parent.parts:
        raise InvariantViolation("parent of manifest path must always exist")
    return parent


class Context:
    """State shared by everything running in one kiln invocation.

    Created once, early, and passed explicitly to whatever needs it. Apart
    from the offline flag, everything here is fixed at construction or
    computed once on first use.
    """

    def __init__(
        self,
        manifest_path: str | Path,
        dirs: AppDirs,
        ui: Ui,
        *,
        target_dir_override: str | Path | None = None,
        system: System | None = None,
    ) -> None:
        self._creation_time = time.monotonic()
        self._system = system or System()

        if logger.isEnabledFor(logging.DEBUG):
            for line in str(dirs).splitlines():
                logger.debug("%s", line)

        self._manifest_path = Path(manifest_path)
        root = _project_root(self._manifest_path)

        if target_dir_override is not None:
            target = Path(target_dir_override)
        else:
            target = root / DEFAULT_TARGET_DIR_NAME
        self._target_dir = Filesystem.new_output_dir(target)

        self._dirs = dirs
        self._ui = ui
        self._log_filter = self._system.getenv(KILN_LOG_ENV) or ""
        self._offline = False

        self._app_exe: OnceCell[Path] = OnceCell()
        self._package_cache_lock: OnceCell[AdvisoryLock] = OnceCell()

    @property
    def manifest_path(self) -> Path:
        return self._manifest_path

    @property
    def root(self) -> Path:
        """The project root: the directory containing the manifest."""
        return _project_root(self._manifest_path)

    @property
    def log_filter(self) -> str:
        """The value of $KILN_LOG when this context was created."""
        return self._log_filter

    @property
    def dirs(self) -> AppDirs:
        return self._dirs

    @property
    def target_dir(self) -> Filesystem:
        return self._target_dir

    @property
    def ui(self) -> Ui:
        return self._ui

    def executable_path(self) -> Path:
        """Return the absolute path to the kiln executable.

        Resolved on first call and cached; later calls return the same path
        without looking again.

        Raises:
            ExecutableResolutionError: if no strategy could find it. Nothing
                is cached in that case.
        """
        return self._app_exe.get_or_try_init(
            lambda: resolve_executable_path(self._system, self._dirs.path_env())
        )

    def package_cache_lock(self) -> AdvisoryLock:
        """Return the process-wide lock guarding the shared package cache.

        The handle is built on first call and reused afterwards. It holds its
        own reference to the cache directory rather than to this context.

        Raises:
            LockAcquisitionError: if the handle cannot be created. The failure
                is not remembered; the next call tries again.
        """
        return self._package_cache_lock.get_or_try_init(self._create_package_cache_lock)

    def _create_package_cache_lock(self) -> AdvisoryLock:
        cache_dir = self._dirs.cache_dir
        try:
            lock = cache_dir.advisory_lock(
                PACKAGE_CACHE_LOCK_NAME, PACKAGE_CACHE_LOCK_DESCRIPTION, self._ui
            )
        except OSError as exc:
            raise LockAcquisitionError(
                f"failed to create lock for {PACKAGE_CACHE_LOCK_DESCRIPTION} in {cache_dir}"
            ) from exc
        logger.debug("Created %s lock at %s", PACKAGE_CACHE_LOCK_DESCRIPTION, lock.path)
        return lock

    @property
    def offline(self) -> bool:
        """Whether offline mode is on.

        To check whether kiln may use the network, prefer
        :meth:`network_allowed`, which may consult more than this flag.
        """
        return self._offline

    def set_offline(self, offline: bool) -> None:
        self._offline = offline

    def network_allowed(self) -> bool:
        """If False, kiln must not touch the network but should otherwise keep going."""
        return not self.offline

    def elapsed_time(self) -> timedelta:
        """Time since this context was created."""
        return timedelta(seconds=time.monotonic() - self._creation_time)

    def __repr__(self) -> str:
        return f"Context(root={str(self.root)!r}, offline={self._offline})"
