"""Domain exceptions for gocovtest."""

from typing import Optional, Sequence


class GoCovError(Exception):
    """Base class for expected failures (maps to CLI exit 1)."""


class ConfigError(GoCovError, ValueError):
    """Configuration file is unreadable or invalid."""


class ToolchainError(GoCovError):
    """A toolchain invocation failed to start or exited non-zero."""

    def __init__(self, command: str, args: Sequence[str], returncode: Optional[int] = None, reason: str = ""):
        self.command = command
        self.args_list = list(args)
        self.returncode = returncode
        cmdline = " ".join([command, *self.args_list])
        if returncode is None:
            message = f"failed to start `{cmdline}`: {reason}" if reason else f"failed to start `{cmdline}`"
        else:
            message = f"`{cmdline}` exited with status {returncode}"
        super().__init__(message)


class SynthesisError(GoCovError):
    """A placeholder test file could not be created or written."""

    def __init__(self, path, cause: OSError):
        self.path = path
        super().__init__(f"failed to create placeholder test file {path}: {cause}")


class CleanupError(GoCovError):
    """A placeholder test file could not be removed."""

    def __init__(self, path, cause: OSError):
        self.path = path
        super().__init__(f"failed to remove placeholder test file {path}: {cause}")


class ProfileError(GoCovError):
    """A coverage profile is malformed or profiles cannot be merged."""
