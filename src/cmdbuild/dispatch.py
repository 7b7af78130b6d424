"""Dispatch: the argument state machine and the result of a build run."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

HELP_FLAGS = frozenset({"-h", "--help"})
VERBOSE_FLAGS = frozenset({"-v", "--verbose"})

EXIT_FAILURE = 255


class Phase(Enum):
    """Stages a dispatch moves through, in order."""

    FLAGS = "flags"
    VALIDATE = "validate"
    EXECUTE = "execute"


class Invocation(BaseModel):
    """What a command line asks the dispatcher to do."""

    help: bool = False
    verbose: bool = False
    targets: list[str] = Field(default_factory=list)


def parse_args(args: Sequence[str]) -> Invocation:
    """Run the flag phase over a CLI-style argument list.

    Flags are recognised only before the first target name; everything after
    that is treated as a target name.
    """
    args = list(args)
    if not args or args[0] in HELP_FLAGS:
        return Invocation(help=True)

    verbose = False
    if args[0] in VERBOSE_FLAGS:
        verbose = True
        args = args[1:]

    # a lone verbose flag has nothing to run
    if not args:
        return Invocation(help=True, verbose=verbose)

    logger.debug("Parsed arguments: verbose=%s targets=%s", verbose, args)
    return Invocation(verbose=verbose, targets=args)


class BuildResult(BaseModel):
    """Outcome of a single dispatch."""

    ok: bool
    exit_code: int = 0
    errors: list[str] = Field(default_factory=list)
    breadcrumb: str = ""
    targets_run: list[str] = Field(default_factory=list)

    @classmethod
    def failure(
        cls,
        errors: list[str],
        *,
        breadcrumb: str = "",
        targets_run: list[str] | None = None,
    ) -> BuildResult:
        return cls(
            ok=False,
            exit_code=EXIT_FAILURE,
            errors=errors,
            breadcrumb=breadcrumb,
            targets_run=targets_run or [],
        )

    def __bool__(self) -> bool:
        return self.ok
