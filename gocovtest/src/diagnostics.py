"""Diagnostics sink for non-fatal problems.

Degraded paths (workspace removal, suppressed cleanup failures, suspicious
listing output) report here instead of failing the run. The default sink
emits log lines; tests inject their own to assert on what was reported.
"""

import logging
from typing import Protocol

logger = logging.getLogger("gocovtest.diagnostics")


class Diagnostics(Protocol):
    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LogDiagnostics:
    """Forward diagnostics to the ``gocovtest.diagnostics`` logger."""

    def __init__(self, log: logging.Logger = logger):
        self.log = log

    def warn(self, message: str) -> None:
        self.log.warning("%s", message)

    def error(self, message: str) -> None:
        self.log.error("%s", message)
