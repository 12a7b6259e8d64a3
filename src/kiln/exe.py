"""Locate the kiln executable that is currently running."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .consts import KILN_ENV, TOOL_NAME
from .errors import ExecutableResolutionError
from .system import System

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionAttempt:
    """The failed outcome of one strategy."""

    strategy: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.strategy}: {self.error}"


def _canonicalize(path: str | Path) -> Path:
    return Path(path).resolve(strict=True)


def _is_executable(path: Path) -> bool:
    return path.is_file() and os.access(path, os.X_OK)


def which_in(name: str, search_path: str | None, cwd: Path) -> Path:
    """Find ``name`` like a shell would, relative entries resolved against ``cwd``.

    A name containing a path separator (including `./kiln`) is taken as a
    path to the binary itself; a bare name is looked up in each
    ``search_path`` entry.
    """
    if os.sep in name or (os.altsep and os.altsep in name):
        target = cwd / name
        if not _is_executable(target):
            raise FileNotFoundError(f"{target} is not an executable file")
        return _canonicalize(target)

    for entry in (search_path or "").split(os.pathsep):
        if not entry:
            continue
        target = cwd / entry / name
        if _is_executable(target):
            return _canonicalize(target)
    raise FileNotFoundError(f"cannot find '{name}' in the executable search path")


def _from_env(system: System) -> Path:
    # Lets commands built on kiln (e.g. `kiln-*` helpers) inherit or set the
    # path to kiln when the current process is not kiln itself.
    value = system.getenv(KILN_ENV)
    if not value:
        raise LookupError(f"${KILN_ENV} not set")
    return _canonicalize(system.cwd() / value)


def _from_current_exe(system: System) -> Path:
    return _canonicalize(system.cwd() / system.current_exe())


def _from_argv(system: System, search_path: str | None) -> Path:
    argv0 = system.argv0()
    if not argv0:
        raise LookupError("no argv[0]")
    return which_in(argv0, search_path, system.cwd())


def resolve_executable_path(system: System, search_path: str | None) -> Path:
    """Find the absolute, canonical path to the kiln executable.

    Tries, in order: the ``$KILN`` environment variable, the executable
    reported by the OS, and ``argv[0]``. The first strategy to succeed wins.

    Raises:
        ExecutableResolutionError: with every failed attempt recorded.
    """
    strategies: list[tuple[str, Callable[[], Path]]] = [
        ("env", lambda: _from_env(system)),
        ("current_exe", lambda: _from_current_exe(system)),
        ("argv0", lambda: _from_argv(system, search_path)),
    ]

    attempts: list[ResolutionAttempt] = []
    for label, strategy in strategies:
        try:
            path = strategy()
        except (OSError, LookupError, RuntimeError) as exc:
            logger.debug("Executable lookup via %s failed: %s", label, exc)
            attempts.append(ResolutionAttempt(label, exc))
            continue
        logger.debug("Resolved %s executable via %s: %s", TOOL_NAME, label, path)
        return path

    raise ExecutableResolutionError(
        f"could not get the path to the {TOOL_NAME} executable", attempts
    ) from attempts[-1].error
