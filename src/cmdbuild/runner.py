"""Process runner: spawn external commands with the build's environment and sinks."""

from __future__ import annotations

import io
import logging
import os
import shlex
import subprocess
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import ExecutionError

logger = logging.getLogger(__name__)


def _child_target(stream: Any) -> Any:
    """Return what Popen should receive for a sink.

    Streams backed by a file descriptor are handed to the child directly;
    anything else is captured through a pipe and copied afterwards.
    """
    try:
        stream.flush()
        return stream.fileno()
    except (AttributeError, OSError, ValueError):
        return subprocess.PIPE


def _write_output(stream: Any, data: bytes) -> None:
    """Copy captured child output into a sink.

    Binary sinks receive the bytes unchanged, as do text streams exposing a
    ``buffer``. Other text sinks get the output decoded with their encoding
    (UTF-8 when they have none), undecodable bytes replaced.
    """
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        stream.write(data)
        return
    buffer = getattr(stream, "buffer", None)
    if buffer is not None:
        stream.flush()
        buffer.write(data)
        buffer.flush()
        return
    encoding = getattr(stream, "encoding", None) or "utf-8"
    stream.write(data.decode(encoding, errors="replace"))


class ProcessRunner:
    """Run commands in the inherited environment plus an overlay.

    Child stdin is inherited from this process. Child stdout and stderr are
    connected to the configured sinks, which default to ``sys.stdout`` and
    ``sys.stderr`` as they are at call time.
    """

    def __init__(
        self,
        env: Mapping[str, str] | None = None,
        *,
        stdout: Any = None,
        stderr: Any = None,
        shell: str = "/bin/sh",
    ) -> None:
        self._env = dict(env or {})
        self._stdout = stdout
        self._stderr = stderr
        self.shell = shell

    @property
    def stdout(self) -> Any:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> Any:
        return self._stderr if self._stderr is not None else sys.stderr

    def environment(self) -> dict[str, str]:
        """The inherited environment with the overlay applied on top."""
        env = dict(os.environ)
        env.update(self._env)
        return env

    def shell_argv(self, command: str, *args: str) -> list[str]:
        """Join a command line into a single ``<shell> -c`` invocation."""
        return [self.shell, "-c", " ".join([command, *args])]

    def run(self, argv: Sequence[str]) -> int:
        """Run argv to completion and return its exit status.

        Raises ExecutionError if the process exits non-zero or cannot be
        started.
        """
        argv = list(argv)
        out_stream, err_stream = self.stdout, self.stderr
        logger.debug("Spawning %s", shlex.join(argv))

        try:
            with subprocess.Popen(
                argv,
                env=self.environment(),
                stdout=_child_target(out_stream),
                stderr=_child_target(err_stream),
            ) as proc:
                out, err = proc.communicate()
        except OSError as exc:
            logger.debug("Failed to start %s: %s", argv[0], exc)
            raise ExecutionError(argv, cause=exc) from exc

        if out:
            _write_output(out_stream, out)
        if err:
            _write_output(err_stream, err)

        logger.debug("%s exited with status %d", argv[0], proc.returncode)
        if proc.returncode != 0:
            raise ExecutionError(argv, returncode=proc.returncode)
        return proc.returncode
