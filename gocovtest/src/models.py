"""gocovtest Pydantic Models"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_COVER_FILENAME,
    DEFAULT_GO_BINARY,
    DEFAULT_TEMP_PREFIX,
    DEFAULT_TEST_SUFFIX,
)


class CoverMode(str, Enum):
    SET = "set"
    COUNT = "count"
    ATOMIC = "atomic"


@dataclass(frozen=True)
class PackageDescriptor:
    """One line of `go list` output: where a package lives and what it builds.

    A plain dataclass: ``directory`` may hold surrogate-escaped bytes from a
    non-UTF-8 file system path, which must pass through unvalidated.
    """

    directory: str
    name: str
    source_files: Tuple[str, ...] = ()


class RunnerSettings(BaseModel):
    """Toolchain and workspace settings (``runner:`` section of gocovtest.yml)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    go: str = DEFAULT_GO_BINARY
    cover_filename: str = Field(default=DEFAULT_COVER_FILENAME, min_length=1)
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    test_suffix: str = Field(default=DEFAULT_TEST_SUFFIX, min_length=1)

    @field_validator("cover_filename")
    @classmethod
    def cover_filename_is_plain(cls, value: str) -> str:
        # Must stay inside the workspace and be usable as a literal glob
        if value in (".", "..") or any(ch in value for ch in "/\\*?[]"):
            raise ValueError(f"cover_filename must be a plain file name, got {value!r}")
        return value


class Workspace(BaseModel):
    """Private per-run directory and the coverage file path inside it."""

    model_config = ConfigDict(frozen=True)

    directory: Path
    cover_file: Path


class ProfileBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_line: int
    start_col: int
    end_line: int
    end_col: int
    num_stmt: int
    count: int

    @property
    def position(self) -> Tuple[int, int, int, int]:
        return (self.start_line, self.start_col, self.end_line, self.end_col)


class Profile(BaseModel):
    """Parsed cover profile: mode plus blocks grouped by file name."""

    mode: CoverMode
    files: Dict[str, List[ProfileBlock]] = Field(default_factory=dict)


class FileCoverage(BaseModel):
    file_name: str
    statements: int
    covered: int
    percent: float
    blocks: List[ProfileBlock]


class CoverageReport(BaseModel):
    mode: Optional[CoverMode] = None
    statements: int = 0
    covered: int = 0
    percent: float = 0.0
    files: List[FileCoverage] = Field(default_factory=list)
