"""Go cover profile parsing and merging.

Profile text format (as written by ``go test -coverprofile``)::

    mode: set
    example.com/pkg/foo.go:3.14,5.2 1 1

Blocks from several profiles are merged by file and position; ``set`` mode
keeps the maximum count, ``count``/``atomic`` add counts together.
"""

import json
import logging
import re
import sys
from pathlib import Path
from typing import IO, Dict, Iterable, List, Optional, Tuple

from .errors import ProfileError
from .models import CoverageReport, CoverMode, FileCoverage, Profile, ProfileBlock

logger = logging.getLogger(__name__)

MODE_PREFIX = "mode: "
BLOCK_RE = re.compile(r"^(.+):(\d+)\.(\d+),(\d+)\.(\d+) (\d+) (\d+)$")


def parse_profile_text(text: str, source: str = "<profile>") -> Profile:
    """Parse profile text; ``source`` names the file in error messages."""
    mode: Optional[CoverMode] = None
    files: Dict[str, List[ProfileBlock]] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if mode is None:
            if not line.startswith(MODE_PREFIX):
                raise ProfileError(f"{source}:{lineno}: missing mode line")
            value = line[len(MODE_PREFIX):].strip()
            try:
                mode = CoverMode(value)
            except ValueError:
                raise ProfileError(f"{source}:{lineno}: unknown cover mode {value!r}") from None
            continue
        match = BLOCK_RE.match(line)
        if match is None:
            raise ProfileError(f"{source}:{lineno}: malformed profile line {line!r}")
        file_name = match.group(1)
        sl, sc, el, ec, num_stmt, count = (int(g) for g in match.groups()[1:])
        files.setdefault(file_name, []).append(
            ProfileBlock(start_line=sl, start_col=sc, end_line=el, end_col=ec, num_stmt=num_stmt, count=count)
        )
    if mode is None:
        raise ProfileError(f"{source}: empty profile")
    return Profile(mode=mode, files=files)


def parse_profile(path: Path | str) -> Profile:
    path = Path(path)
    try:
        text = path.read_text()
    except OSError as exc:
        raise ProfileError(f"failed to read profile {path}: {exc}") from exc
    return parse_profile_text(text, source=str(path))


def merge_profiles(profiles: Iterable[Profile]) -> Optional[Profile]:
    """Merge profiles into one, or return None when given none."""
    mode: Optional[CoverMode] = None
    merged: Dict[str, Dict[Tuple[int, int, int, int], ProfileBlock]] = {}
    for profile in profiles:
        if mode is None:
            mode = profile.mode
        elif profile.mode != mode:
            raise ProfileError(f"cannot merge profiles with modes {mode.value!r} and {profile.mode.value!r}")
        for file_name, blocks in profile.files.items():
            by_position = merged.setdefault(file_name, {})
            for block in blocks:
                existing = by_position.get(block.position)
                if existing is None:
                    by_position[block.position] = block
                    continue
                if existing.num_stmt != block.num_stmt:
                    raise ProfileError(
                        f"inconsistent statement count for {file_name}:{block.start_line}.{block.start_col}"
                    )
                if mode == CoverMode.SET:
                    count = max(existing.count, block.count)
                else:
                    count = existing.count + block.count
                by_position[block.position] = existing.model_copy(update={"count": count})
    if mode is None:
        return None
    return Profile(
        mode=mode,
        files={name: sorted(blocks.values(), key=lambda b: b.position) for name, blocks in merged.items()},
    )


def _percent(covered: int, statements: int) -> float:
    return round(100.0 * covered / statements, 2) if statements else 0.0


def build_report(profile: Optional[Profile]) -> CoverageReport:
    if profile is None:
        return CoverageReport()
    files: List[FileCoverage] = []
    for file_name in sorted(profile.files):
        blocks = profile.files[file_name]
        statements = sum(b.num_stmt for b in blocks)
        covered = sum(b.num_stmt for b in blocks if b.count > 0)
        files.append(FileCoverage(
            file_name=file_name,
            statements=statements,
            covered=covered,
            percent=_percent(covered, statements),
            blocks=blocks,
        ))
    statements = sum(f.statements for f in files)
    covered = sum(f.covered for f in files)
    return CoverageReport(
        mode=profile.mode,
        statements=statements,
        covered=covered,
        percent=_percent(covered, statements),
        files=files,
    )


def convert_profiles(files: Iterable[Path | str], out: Optional[IO] = None) -> CoverageReport:
    """Merge profile files and write the JSON report to ``out`` (stdout)."""
    paths = list(files)
    logger.info("Merging %d coverage profile(s)", len(paths))
    report = build_report(merge_profiles(parse_profile(p) for p in paths))
    out = out if out is not None else sys.stdout
    json.dump(report.model_dump(mode="json"), out, indent=2)
    out.write("\n")
    return report
