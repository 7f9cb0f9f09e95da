"""Test-run orchestration.

One run: list packages, synthesize placeholder tests, run ``go test`` with a
cover profile in a private temp directory, then merge the profile. Cleanups
are registered as each resource is acquired and unwind in reverse order, so
the workspace goes first and placeholder files last, on every exit path.
"""

import glob
import logging
import sys
from pathlib import Path
from typing import IO, Callable, List, Optional, Sequence

from . import testflag
from .diagnostics import Diagnostics, LogDiagnostics
from .listing import list_packages
from .models import CoverageReport, RunnerSettings, Workspace
from .process import ProcessInvoker, SubprocessInvoker, run_checked
from .profile import convert_profiles
from .synth import placeholder_test_files
from .workspace import coverage_workspace

logger = logging.getLogger(__name__)

MergeFn = Callable[[List[Path], IO], CoverageReport]


def build_test_args(cover_file: Path | str, test_flags: Sequence[str], packages: Sequence[str]) -> List[str]:
    """Arguments for ``go``: test, cover profile, caller flags, then packages."""
    return ["test", "-coverprofile", str(cover_file), *test_flags, *packages]


def execute_tests(
    invoker: ProcessInvoker,
    settings: RunnerSettings,
    workspace: Workspace,
    test_flags: Sequence[str],
    packages: Sequence[str],
    stderr: Optional[IO] = None,
) -> None:
    """Run ``go test`` with stdin disabled and all output on stderr."""
    stderr = stderr if stderr is not None else sys.stderr
    # stdout goes to stderr so test chatter never mixes with the JSON report.
    run_checked(
        invoker,
        settings.go,
        build_test_args(workspace.cover_file, test_flags, packages),
        stdin=None,
        stdout=stderr,
        stderr=stderr,
    )


def collect_profiles(workspace: Workspace) -> List[Path]:
    """Profiles written into the workspace; may be empty."""
    return sorted(workspace.directory.glob(glob.escape(workspace.cover_file.name)))


def run_tests(
    args: Sequence[str],
    settings: Optional[RunnerSettings] = None,
    invoker: Optional[ProcessInvoker] = None,
    diagnostics: Optional[Diagnostics] = None,
    merge: Optional[MergeFn] = None,
    stdout: Optional[IO] = None,
    stderr: Optional[IO] = None,
) -> CoverageReport:
    """Run the test suite for ``args`` and return the merged coverage report.

    ``args`` mixes package specifiers and ``go test`` flags. Any stage failure
    propagates after the cleanups registered so far have run.
    """
    settings = settings or RunnerSettings()
    invoker = invoker or SubprocessInvoker()
    diagnostics = diagnostics or LogDiagnostics()
    merge = merge or convert_profiles
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    packages, test_flags = testflag.split(args)
    logger.debug("Packages: %s; test flags: %s", packages, test_flags)

    descriptors = list_packages(
        packages, invoker=invoker, settings=settings, diagnostics=diagnostics, stderr=stderr
    )
    with placeholder_test_files(descriptors, diagnostics=diagnostics, test_suffix=settings.test_suffix):
        with coverage_workspace(settings, diagnostics=diagnostics) as workspace:
            execute_tests(invoker, settings, workspace, test_flags, packages, stderr=stderr)
            profiles = collect_profiles(workspace)
            logger.info("Collected %d coverage profile(s)", len(profiles))
            return merge(profiles, stdout)
