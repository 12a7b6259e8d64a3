"""User-facing output, separate from diagnostic logging."""

from __future__ import annotations

import json
import logging
from enum import Enum

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)


class Verbosity(Enum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class OutputFormat(Enum):
    TEXT = "text"
    JSON = "json"


class Ui:
    """Prints status messages to the user in the configured format."""

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.NORMAL,
        output_format: OutputFormat = OutputFormat.TEXT,
        *,
        console: Console | None = None,
    ) -> None:
        self.verbosity = verbosity
        self.output_format = output_format
        self._console = console or Console(stderr=True, highlight=False)

    def _emit(self, kind: str, message: str, style: str | None = None) -> None:
        if self.output_format is OutputFormat.JSON:
            line = Text(json.dumps({"type": kind, "message": message}))
        elif style:
            line = Text.assemble((kind, style), ": ", message)
        else:
            line = Text(message)
        self._console.print(line, highlight=False, soft_wrap=True)

    def print(self, message: str) -> None:
        """Print a status message unless running quietly."""
        if self.verbosity is not Verbosity.QUIET:
            self._emit("print", message)

    def verbose(self, message: str) -> None:
        """Print a message only in verbose mode."""
        if self.verbosity is Verbosity.VERBOSE:
            self._emit("print", message)

    def warn(self, message: str) -> None:
        logger.debug("warning: %s", message)
        if self.verbosity is not Verbosity.QUIET:
            self._emit("warn", message, style="bold yellow")

    def error(self, message: str) -> None:
        """Print an error; errors are shown at every verbosity."""
        self._emit("error", message, style="bold red")

    def __repr__(self) -> str:
        return f"Ui(verbosity={self.verbosity.value}, output_format={self.output_format.value})"
