"""Build: register named targets and run them from command-line arguments."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any

from .commands import Body, Command, CommandRegistry
from .console import Console
from .dispatch import BuildResult, Phase, parse_args
from .errors import ErrorAccumulator, ExecutionError, UnknownTargetError
from .options import BuildOptions
from .runner import ProcessRunner
from .targets import TargetStack

logger = logging.getLogger(__name__)

GO = "go"


class Build:
    """Command registry, process runner and error accumulator for a build script.

    Failures are never raised out of registration or process runs; they are
    collected and inspected by the dispatcher after every target. A Build is
    not safe to share between threads.
    """

    def __init__(self, options: BuildOptions | None = None, **kwargs: Any) -> None:
        if options is None:
            options = BuildOptions(**kwargs)
        elif kwargs:
            raise TypeError("pass either a BuildOptions or keyword settings, not both")
        self.options = options

        self._env = MappingProxyType(dict(options.env))
        self.verbose = False
        self.phase: Phase | None = None

        self.errors = ErrorAccumulator()
        self.targets = TargetStack()
        self.commands = CommandRegistry()
        self._once: set[str] = set()

        self.console = Console(options.stdout, color=options.color)
        self.runner = ProcessRunner(
            self._env,
            stdout=options.stdout,
            stderr=options.stderr,
            shell=options.shell,
        )

    @property
    def env(self) -> MappingProxyType[str, str]:
        """The environment overlay applied to every spawned process."""
        return self._env

    # -- Registration --

    def cmd(self, name: str, body: Body | None) -> None:
        """Register a target; failures are recorded, not raised."""
        self.add_error(self.commands.add(name, body))

    def register(self, commands: Iterable[Command | tuple[str, Body | None]]) -> None:
        """Register several targets, preserving their order."""
        for command in commands:
            if isinstance(command, Command):
                self.cmd(command.name, command.body)
            else:
                name, body = command
                self.cmd(name, body)

    def command(self, name: str | None = None) -> Callable[[Body], Body]:
        """Decorator form of cmd(); defaults to the function's name."""

        def decorator(fn: Body) -> Body:
            self.cmd(name or fn.__name__, fn)
            return fn

        return decorator

    def target_names(self) -> list[str]:
        return self.commands.names()

    def once(self, name: str, body: Body) -> None:
        """Run body the first time name is seen; later calls do nothing."""
        if name in self._once:
            logger.debug("Skipping '%s'; already ran", name)
            return
        self._once.add(name)
        body()

    # -- Process execution --

    def run(self, cmd: str, *args: str) -> int | None:
        """Run a command, recording a failure instead of raising it.

        Returns the exit status, or None if the command failed.
        """
        argv = [cmd, *args]
        if self.verbose:
            self.console.command(self.targets.breadcrumb(), " ".join(argv))
        try:
            return self.runner.run(argv)
        except ExecutionError as exc:
            self.add_error(exc)
            return None

    def force_run(self, cmd: str, *args: str) -> int | None:
        """Run a command, then discard every accumulated error."""
        status = self.run(cmd, *args)
        self.clear_errors()
        return status

    def sh_run(self, cmd: str, *args: str) -> int | None:
        """Run a command line through the shell."""
        return self.run(*self.runner.shell_argv(cmd, *args))

    def force_sh_run(self, cmd: str, *args: str) -> int | None:
        status = self.sh_run(cmd, *args)
        self.clear_errors()
        return status

    def run_cmd(self, cmd: str, *args: str) -> Body:
        return lambda: self.run(cmd, *args)

    def force_run_cmd(self, cmd: str, *args: str) -> Body:
        return lambda: self.force_run(cmd, *args)

    def sh_run_cmd(self, cmd: str, *args: str) -> Body:
        return lambda: self.sh_run(cmd, *args)

    def force_sh_run_cmd(self, cmd: str, *args: str) -> Body:
        return lambda: self.force_sh_run(cmd, *args)

    # -- Targets & diagnostics --

    def add_target(self, name: str) -> Callable[[], None]:
        """Push a nested step, print the breadcrumb, and return its release."""
        release = self.targets.push(name)
        self.console.breadcrumb(self.targets.breadcrumb())
        return release

    @contextmanager
    def step(self, name: str) -> Iterator[None]:
        """Scope a nested step; the step is popped on every exit path."""
        release = self.add_target(name)
        try:
            yield
        finally:
            release()

    def breadcrumb(self) -> str:
        return self.targets.breadcrumb()

    def info(self, message: str) -> None:
        if not self.verbose:
            return
        self.console.info(message)

    def warn(self, message: str) -> None:
        self.console.warn(message)

    # -- Errors --

    def add_error(self, err: BaseException | str | None) -> None:
        self.errors.add(err)

    def has_errors(self) -> bool:
        return bool(self.errors)

    def clear_errors(self) -> None:
        self.errors.clear()

    def _report_and_halt(self, targets_run: list[str] | None = None) -> BuildResult:
        """Print every accumulated error and a failure banner."""
        crumb = self.targets.breadcrumb()
        self.console.line()
        for message in self.errors.messages():
            self.console.error(message)
        self.console.error(f"{crumb} Build failed" if crumb else "Build failed")
        return BuildResult.failure(
            self.errors.messages(),
            breadcrumb=crumb,
            targets_run=targets_run,
        )

    # -- Dispatch --

    def build(self, args: Sequence[str]) -> BuildResult:
        """Dispatch CLI-style arguments to registered targets.

        Targets run in the order given. The run stops at the first target
        that leaves errors behind; nothing runs if any name is unknown.
        """
        if self.errors:
            logger.debug("Registration errors present; not dispatching")
            return self._report_and_halt()

        self.phase = Phase.FLAGS
        invocation = parse_args(args)
        if invocation.verbose:
            self.verbose = True
        if invocation.help:
            self.console.targets(self.target_names())
            return BuildResult(ok=True)

        self.phase = Phase.VALIDATE
        unknown = self.commands.unknown(invocation.targets)
        if unknown:
            self.console.targets(self.target_names())
            self.add_error(UnknownTargetError(unknown[0]))
            return self._report_and_halt()

        self.phase = Phase.EXECUTE
        self.targets.clear()
        targets_run: list[str] = []
        for name in invocation.targets:
            logger.debug("Running target '%s'", name)
            targets_run.append(name)
            with self.step(name):
                self.commands[name]()
                if self.errors:
                    return self._report_and_halt(targets_run)

        self.console.line()
        self.console.success("Successful build")
        return BuildResult(ok=True, targets_run=targets_run)

    def build_from_argv(self, argv: Sequence[str] | None = None) -> None:
        """Dispatch sys.argv (or argv) and exit with the result's status."""
        if argv is None:
            argv = sys.argv[1:]
        result = self.build(argv)
        sys.exit(result.exit_code)

    main = build_from_argv

    def __repr__(self) -> str:
        return (
            f"Build(commands={len(self.commands)}, errors={len(self.errors)}, "
            f"verbose={self.verbose})"
        )
