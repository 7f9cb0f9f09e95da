"""External process invocation.

The orchestration only talks to the toolchain through a ``ProcessInvoker`` so
tests can substitute canned output and exit codes for a real ``go`` binary.
"""

import io
import logging
import os
import subprocess
from typing import IO, Optional, Protocol, Sequence

from .errors import ToolchainError

logger = logging.getLogger(__name__)


class ProcessInvoker(Protocol):
    def run(
        self,
        command: str,
        args: Sequence[str],
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        stderr: Optional[IO] = None,
    ) -> int:
        """Run ``command args...`` and return its exit status.

        ``stdin=None`` disables input. ``stdout``/``stderr`` of ``None`` inherit
        the current process streams. Raises ToolchainError if the process
        cannot be started.
        """
        ...


def _has_fileno(stream: IO) -> bool:
    try:
        stream.fileno()
    except (AttributeError, io.UnsupportedOperation, OSError, ValueError):
        return False
    return True


class SubprocessInvoker:
    """ProcessInvoker backed by ``subprocess.run`` with no timeout."""

    def run(
        self,
        command: str,
        args: Sequence[str],
        stdin: Optional[IO] = None,
        stdout: Optional[IO] = None,
        stderr: Optional[IO] = None,
    ) -> int:
        cmd = [command, *args]
        # In-memory streams (e.g. under a test runner) cannot be handed to the
        # child directly; collect through a pipe and copy afterwards.
        out_target = stdout if stdout is None or _has_fileno(stdout) else subprocess.PIPE
        err_target = stderr if stderr is None or _has_fileno(stderr) else subprocess.PIPE
        if stdin is None:
            in_target = subprocess.DEVNULL
        elif _has_fileno(stdin):
            in_target = stdin
        else:
            in_target = subprocess.DEVNULL

        if stdout is not None and out_target is stdout:
            stdout.flush()
        if stderr is not None and err_target is stderr:
            stderr.flush()

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                stdin=in_target,
                stdout=out_target,
                stderr=err_target,
            )
        except OSError as exc:
            raise ToolchainError(command, args, reason=str(exc)) from exc

        if out_target is subprocess.PIPE and result.stdout:
            # Output carries file system paths; decode them the way os does
            stdout.write(os.fsdecode(result.stdout))
        if err_target is subprocess.PIPE and result.stderr:
            stderr.write(os.fsdecode(result.stderr))
        return result.returncode


def run_checked(
    invoker: ProcessInvoker,
    command: str,
    args: Sequence[str],
    stdin: Optional[IO] = None,
    stdout: Optional[IO] = None,
    stderr: Optional[IO] = None,
) -> None:
    """Run via ``invoker`` and raise ToolchainError on a non-zero exit."""
    returncode = invoker.run(command, args, stdin=stdin, stdout=stdout, stderr=stderr)
    if returncode != 0:
        logger.debug("%s %s exited with %s", command, args[0] if args else "", returncode)
        raise ToolchainError(command, args, returncode)
