"""Tool-wide names and environment variables."""

from __future__ import annotations

TOOL_NAME = "kiln"

MANIFEST_FILE_NAME = "Kiln.toml"
DEFAULT_TARGET_DIR_NAME = "target"

PACKAGE_CACHE_LOCK_NAME = ".package-cache.lock"
PACKAGE_CACHE_LOCK_DESCRIPTION = "package cache"

# Path to the kiln executable, set by kiln when it re-invokes itself or by a wrapper.
KILN_ENV = "KILN"
KILN_LOG_ENV = "KILN_LOG"
KILN_CACHE_ENV = "KILN_CACHE"
KILN_CONFIG_ENV = "KILN_CONFIG"
