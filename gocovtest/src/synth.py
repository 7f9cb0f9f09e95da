"""Placeholder test files for packages without tests.

`go test -coverprofile` only instruments packages that have at least one test
file, so untested packages silently drop out of the aggregate. Writing a
``<name>_test.go`` containing nothing but the package clause makes every
package participate without adding tests or coverage of its own.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .constants import DEFAULT_TEST_SUFFIX, SOURCE_SUFFIX
from .diagnostics import Diagnostics, LogDiagnostics
from .errors import CleanupError, SynthesisError
from .models import PackageDescriptor

logger = logging.getLogger(__name__)


def placeholder_name(source_file: str, test_suffix: str = DEFAULT_TEST_SUFFIX) -> str:
    """Map ``foo.go`` to ``foo_test.go``."""
    stem = source_file[: -len(SOURCE_SUFFIX)] if source_file.endswith(SOURCE_SUFFIX) else source_file
    return stem + test_suffix


def _create_exclusive(path: Path) -> Optional[int]:
    """Open ``path`` for writing only if it does not exist yet."""
    try:
        return os.open(path, os.O_RDWR | os.O_CREAT | os.O_EXCL, 0o666)
    except FileExistsError:
        return None
    except OSError as exc:
        raise SynthesisError(path, exc) from exc


def create_missing_test_files(
    packages: Iterable[PackageDescriptor],
    created: Optional[List[Path]] = None,
    test_suffix: str = DEFAULT_TEST_SUFFIX,
) -> List[Path]:
    """Create an empty test file for every source file lacking one.

    Paths are appended to ``created`` as soon as the file exists on disk, so a
    caller holding the list can remove partial results if a later file fails.
    Existing test files are left untouched and not recorded.
    """
    if created is None:
        created = []
    for package in packages:
        for source_file in package.source_files:
            path = Path(package.directory) / placeholder_name(source_file, test_suffix)
            fd = _create_exclusive(path)
            if fd is None:
                continue
            created.append(path)
            try:
                with os.fdopen(fd, "w") as handle:
                    handle.write(f"package {package.name}\n")
            except OSError as exc:
                raise SynthesisError(path, exc) from exc
            logger.debug("Created placeholder test file %s", path)
    return created


def delete_created_test_files(files: Iterable[Path]) -> None:
    """Remove files in order, stopping at the first failure."""
    for path in files:
        try:
            os.remove(path)
        except OSError as exc:
            raise CleanupError(path, exc) from exc
        logger.debug("Removed placeholder test file %s", path)


@contextmanager
def placeholder_test_files(
    packages: Iterable[PackageDescriptor],
    diagnostics: Optional[Diagnostics] = None,
    test_suffix: str = DEFAULT_TEST_SUFFIX,
) -> Iterator[List[Path]]:
    """Synthesize placeholder tests and remove them when the block exits.

    A cleanup failure while another error is propagating is reported to
    ``diagnostics`` and the original error wins; otherwise it is raised.
    """
    diagnostics = diagnostics or LogDiagnostics()
    created: List[Path] = []
    primary: Optional[BaseException] = None
    try:
        create_missing_test_files(packages, created, test_suffix)
        logger.info("Created %d placeholder test file(s)", len(created))
        yield created
    except BaseException as exc:
        primary = exc
        raise
    finally:
        try:
            delete_created_test_files(created)
        except CleanupError as exc:
            if primary is not None:
                diagnostics.error(f"{exc} (while handling: {primary})")
            else:
                logger.error("%s", exc)
                raise
