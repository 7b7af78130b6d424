"""Build errors and the accumulator that collects them during a run."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Iterator, Sequence

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Base class for failures recorded during a build."""


class RegistrationError(BuildError):
    """A command could not be registered."""


class UnknownTargetError(BuildError):
    """A requested target has no registered command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"can't find such command as: `{name}`")
        self.name = name


class ExecutionError(BuildError):
    """An external command failed or could not be started."""

    def __init__(
        self,
        argv: Sequence[str],
        returncode: int | None = None,
        cause: OSError | None = None,
    ) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.cause = cause
        cmdline = shlex.join(self.argv)
        if cause is not None:
            msg = f"`{cmdline}` could not be started: {cause}"
        else:
            msg = f"`{cmdline}` exited with status {returncode}"
        super().__init__(msg)


class ErrorAccumulator(Sequence[BaseException]):
    """Ordered, append-only collection of build failures."""

    def __init__(self) -> None:
        self._errors: list[BaseException] = []

    def add(self, err: BaseException | str | None) -> None:
        """Record a failure; None is ignored and strings become BuildErrors."""
        if err is None:
            return
        if isinstance(err, str):
            err = BuildError(err)
        logger.debug("Recorded build error: %s", err)
        self._errors.append(err)

    def clear(self) -> None:
        if self._errors:
            logger.debug("Discarding %d build error(s)", len(self._errors))
        self._errors.clear()

    def messages(self) -> list[str]:
        return [str(err) for err in self._errors]

    def __getitem__(self, index):  # type: ignore[override]
        return self._errors[index]

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self._errors)

    def __bool__(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return f"ErrorAccumulator(errors={len(self._errors)})"
