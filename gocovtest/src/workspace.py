"""Per-run temporary directory for coverage output."""

import logging
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .diagnostics import Diagnostics, LogDiagnostics
from .models import RunnerSettings, Workspace

logger = logging.getLogger(__name__)


@contextmanager
def coverage_workspace(
    settings: Optional[RunnerSettings] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> Iterator[Workspace]:
    """Yield a fresh private directory; remove it on exit.

    Removal failures are reported as warnings and never replace the result of
    the enclosed block.
    """
    settings = settings or RunnerSettings()
    diagnostics = diagnostics or LogDiagnostics()

    directory = Path(tempfile.mkdtemp(prefix=settings.temp_prefix))
    logger.debug("Allocated coverage workspace %s", directory)
    try:
        yield Workspace(directory=directory, cover_file=directory / settings.cover_filename)
    finally:
        try:
            shutil.rmtree(directory)
        except OSError as exc:
            diagnostics.warn(f"failed to clean up temp directory {str(directory)!r}: {exc}")
