"""System — the process and OS facts kiln reads, behind one seam."""

from __future__ import annotations

import os
import sys
from pathlib import Path


class System:
    """Wraps process-level lookups for testability.

    In production: reads the real environment, argv and working directory.
    In tests: replaced with a fake that returns canned values.
    """

    def getenv(self, name: str) -> str | None:
        """Get an environment variable, or None if unset."""
        return os.environ.get(name)

    def argv0(self) -> str | None:
        """Get the first command-line argument the process was invoked with."""
        return sys.argv[0] if sys.argv and sys.argv[0] else None

    def current_exe(self) -> Path:
        """Get the path of the running executable as reported by the OS.

        Outside a frozen build the OS reports the Python interpreter, which
        says nothing about where kiln lives, so that case is an error.
        """
        if not getattr(sys, "frozen", False):
            raise OSError("current executable is the Python interpreter, not kiln")
        if not sys.executable:
            raise OSError("platform does not report the current executable")
        return Path(sys.executable)

    def cwd(self) -> Path:
        """Get the current working directory."""
        return Path.cwd()
