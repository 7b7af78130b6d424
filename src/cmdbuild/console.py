"""Console: colored status lines written to a build's output sink."""

from __future__ import annotations

import os
import sys
from typing import Any

MAGENTA = "\u001b[35m"
CYAN = "\u001b[36m"
YELLOW = "\u001b[33m"
GREEN = "\u001b[32m"
RED = "\u001b[31m"
RESET = "\u001b[0m"


def supports_color(stream: Any) -> bool:
    """True if the stream is a terminal and NO_COLOR is not set."""
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # closed stream
        return False


class Console:
    """Writes build status messages, optionally wrapped in ANSI colors."""

    def __init__(self, stream: Any = None, *, color: bool | None = None) -> None:
        self._stream = stream
        self._color = color

    @property
    def stream(self) -> Any:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def color(self) -> bool:
        if self._color is None:
            return supports_color(self.stream)
        return self._color

    def line(self, text: str = "", color: str | None = None) -> None:
        if color and text and self.color:
            text = f"{color}{text}{RESET}"
        self.stream.write(text + "\n")
        self._flush()

    def breadcrumb(self, crumb: str) -> None:
        self.line(crumb, CYAN)

    def command(self, crumb: str, cmdline: str) -> None:
        prefix = f"{crumb} " if crumb else ""
        self.line(f"{prefix}[cmd] {cmdline}", MAGENTA)

    def info(self, message: str) -> None:
        self.line(f"[info] {message}", GREEN)

    def warn(self, message: str) -> None:
        self.line(f"[warn] {message}", YELLOW)

    def error(self, message: str) -> None:
        self.line(message, RED)

    def success(self, message: str) -> None:
        self.line(message, GREEN)

    def targets(self, names: list[str]) -> None:
        self.line("Available targets:")
        for name in names:
            if self.color:
                self.stream.write(f"    - {CYAN}{name}{RESET}\n")
            else:
                self.stream.write(f"    - {name}\n")
        self._flush()

    def _flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
