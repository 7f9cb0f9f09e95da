"""Package discovery via `go list`.

Grammar of one listing line (produced by ``-f "{{.Dir}} {{.Name}} {{.GoFiles}}"``)::

    <dir> <name> [<file> <file> ...]

``<dir>`` and ``<name>`` are single whitespace-free tokens; the bracketed list
may be empty. Lines that do not have this shape are skipped with a warning;
a directory containing whitespace is one such case, and that package gets no
placeholder tests.
"""

import io
import logging
import re
import sys
from typing import IO, List, Optional, Sequence

from .constants import LIST_FORMAT
from .diagnostics import Diagnostics, LogDiagnostics
from .models import PackageDescriptor, RunnerSettings
from .process import ProcessInvoker, SubprocessInvoker, run_checked

logger = logging.getLogger(__name__)

LIST_LINE_RE = re.compile(r"(\S+) (\S+) \[(.*)\]")


def parse_list_line(line: str) -> Optional[PackageDescriptor]:
    """Parse one listing line, returning None when it does not match."""
    match = LIST_LINE_RE.fullmatch(line.strip())
    if match is None:
        return None
    directory, name, files = match.groups()
    return PackageDescriptor(directory=directory, name=name, source_files=tuple(files.split()))


def parse_list_output(text: str, diagnostics: Optional[Diagnostics] = None) -> List[PackageDescriptor]:
    """Parse full `go list` output, one descriptor per well-formed line.

    Skipped non-empty lines are reported to ``diagnostics`` when given.
    """
    descriptors: List[PackageDescriptor] = []
    for line in text.splitlines():
        descriptor = parse_list_line(line)
        if descriptor is None:
            if line.strip():
                if diagnostics is not None:
                    diagnostics.warn(f"skipping unrecognized go list line: {line!r}")
                else:
                    logger.debug("Skipping unrecognized go list line: %r", line)
            continue
        descriptors.append(descriptor)
    return descriptors


def list_packages(
    packages: Sequence[str],
    invoker: Optional[ProcessInvoker] = None,
    settings: Optional[RunnerSettings] = None,
    diagnostics: Optional[Diagnostics] = None,
    stderr: Optional[IO] = None,
) -> List[PackageDescriptor]:
    """Ask the toolchain for each package's directory, name and source files."""
    invoker = invoker or SubprocessInvoker()
    settings = settings or RunnerSettings()
    diagnostics = diagnostics or LogDiagnostics()

    buf = io.StringIO()
    run_checked(
        invoker,
        settings.go,
        ["list", "-f", LIST_FORMAT, *packages],
        stdin=sys.stdin,
        stdout=buf,
        stderr=stderr if stderr is not None else sys.stderr,
    )
    output = buf.getvalue()
    descriptors = parse_list_output(output, diagnostics)
    if output.strip() and not descriptors:
        diagnostics.warn("go list produced output but no package lines were recognized")
    logger.info("Listed %d package(s)", len(descriptors))
    return descriptors
