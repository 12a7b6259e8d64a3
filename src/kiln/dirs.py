"""AppDirs — where kiln keeps its caches, configuration and helper binaries."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field

from .consts import KILN_CACHE_ENV, KILN_CONFIG_ENV, TOOL_NAME
from .flock import Filesystem
from .system import System

logger = logging.getLogger(__name__)


def _xdg_dir(system: System, env_name: str, fallback: str) -> Path:
    base = system.getenv(env_name)
    if base:
        return Path(base) / TOOL_NAME
    home = system.getenv("HOME")
    root = Path(home) if home else Path.home()
    return root / fallback / TOOL_NAME


def _resolve_dir(
    system: System,
    override: str | Path | None,
    env_name: str,
    xdg_env: str,
    fallback: str,
) -> Path:
    if override is not None:
        return Path(override)
    from_env = system.getenv(env_name)
    if from_env:
        logger.debug("Using $%s=%s", env_name, from_env)
        return Path(from_env)
    return _xdg_dir(system, xdg_env, fallback)


class AppDirs(BaseModel):
    """Directory layout shared by everything running in one kiln invocation."""

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    cache_dir: Filesystem
    config_dir: Filesystem
    path_dirs: list[Path] = Field(default_factory=list)

    @classmethod
    def init(
        cls,
        cache_dir_override: str | Path | None = None,
        config_dir_override: str | Path | None = None,
        *,
        system: System | None = None,
    ) -> AppDirs:
        """Build the layout from overrides, $KILN_CACHE/$KILN_CONFIG, or XDG defaults."""
        system = system or System()
        cache_dir = _resolve_dir(
            system, cache_dir_override, KILN_CACHE_ENV, "XDG_CACHE_HOME", ".cache"
        )
        config_dir = _resolve_dir(
            system, config_dir_override, KILN_CONFIG_ENV, "XDG_CONFIG_HOME", ".config"
        )

        path_dirs = [config_dir / "bin"]
        path_dirs.extend(Path(p) for p in (system.getenv("PATH") or "").split(os.pathsep) if p)

        return cls(
            cache_dir=Filesystem(cache_dir),
            config_dir=Filesystem(config_dir),
            path_dirs=path_dirs,
        )

    def path_env(self) -> str:
        """Return the executable search path as a PATH-style string."""
        return os.pathsep.join(str(p) for p in self.path_dirs)

    def __str__(self) -> str:
        lines = [
            f"cache dir:  {self.cache_dir}",
            f"config dir: {self.config_dir}",
        ]
        lines.extend(f"path dir:   {p}" for p in self.path_dirs)
        return "\n".join(lines)
