"""Apply a $KILN_LOG-style filter to the stdlib logging tree."""

from __future__ import annotations

import logging
from typing import TextIO

_LEVELS: dict[str, int] = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG,
}

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _level(name: str) -> int:
    try:
        return _LEVELS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown log level: '{name.strip()}'") from None


def parse_filter(text: str) -> tuple[int, dict[str, int]]:
    """Parse a comma-separated list of ``level`` or ``logger=level`` directives.

    A bare level sets the default; the last one wins. Logger names may use
    ``::`` or ``.`` as the separator.
    """
    default = _DEFAULT_LEVEL
    targets: dict[str, int] = {}
    for directive in text.split(","):
        directive = directive.strip()
        if not directive:
            continue
        if "=" in directive:
            name, _, level = directive.partition("=")
            targets[name.strip().replace("::", ".")] = _level(level)
        elif directive.lower() in _LEVELS:
            default = _level(directive)
        else:
            # A bare module name enables everything from it
            targets[directive.replace("::", ".")] = logging.DEBUG
    return default, targets


def init_logging(filter_text: str, *, stream: TextIO | None = None) -> None:
    """Configure the root logger and any per-logger levels from ``filter_text``."""
    default, targets = parse_filter(filter_text)
    logging.basicConfig(level=default, format=_FORMAT, stream=stream, force=True)
    for name, level in targets.items():
        logging.getLogger(name).setLevel(level)
