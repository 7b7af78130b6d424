"""Target stack: the nested sequence of currently running targets and steps."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


class TargetStack:
    """Ordered stack of active target names, outermost first."""

    def __init__(self) -> None:
        self._names: list[str] = []

    def push(self, name: str) -> Callable[[], None]:
        """Push a name and return a callable that pops exactly that entry.

        Releasing also drops any deeper entries that were pushed and never
        released. The release is idempotent, and does nothing once an outer
        release has already dropped the entry.
        """
        self._names.append(name)
        depth = len(self._names)
        logger.debug("Entering '%s' (depth %d)", name, depth)
        released = False

        def release() -> None:
            nonlocal released
            if released:
                return
            released = True
            if len(self._names) < depth or self._names[depth - 1] != name:
                logger.debug("Step '%s' was already dropped", name)
                return
            stray = self._names[depth:]
            if stray:
                logger.debug("Dropping unreleased step(s) %s", stray)
            del self._names[depth - 1 :]
            logger.debug("Leaving '%s'", name)

        return release

    def clear(self) -> None:
        self._names.clear()

    def breadcrumb(self) -> str:
        """Render the stack as ``[outer | inner]``; empty renders as ''."""
        if not self._names:
            return ""
        return "[" + " | ".join(self._names) + "]"

    @property
    def current(self) -> str | None:
        return self._names[-1] if self._names else None

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"TargetStack({self._names!r})"
