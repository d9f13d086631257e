"""Copy the build output into the working tree.

The copy is best-effort: a failure on one entry is recorded in the returned
summary and the remaining entries are still copied. Only a source root that
cannot be read at all aborts the copy.
"""

import os
import shutil
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, TextIO

from ghpages.core.exceptions import CopyError
from ghpages.utils.logging import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[Path, Path], None]


class CopyStatus(str, Enum):
    """Outcome of copying a single entry."""

    COPIED = "copied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class CopyEntry:
    """One visited entry of the build output."""

    source: Path
    destination: Path
    status: CopyStatus
    error: str | None = None


@dataclass
class CopySummary:
    """Per-entry results of a materialize() call."""

    entries: list[CopyEntry] = field(default_factory=list)

    def _count(self, status: CopyStatus) -> int:
        return sum(1 for entry in self.entries if entry.status == status)

    @property
    def visited(self) -> int:
        return len(self.entries)

    @property
    def copied(self) -> int:
        return self._count(CopyStatus.COPIED)

    @property
    def skipped(self) -> int:
        return self._count(CopyStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(CopyStatus.FAILED)

    @property
    def failures(self) -> list[CopyEntry]:
        return [entry for entry in self.entries if entry.status == CopyStatus.FAILED]


class CopyProgress:
    """Progress reporter: one log line per entry, or a stream of dots.

    Dots wrap every ``width`` entries so runner logs stay readable.
    """

    def __init__(self, verbose: bool = False, stream: TextIO | None = None, width: int = 80):
        self.verbose = verbose
        self.stream = stream or sys.stdout
        self.width = width
        self.count = 0

    def __call__(self, source: Path, destination: Path) -> None:
        if self.verbose:
            logger.info(f"{source} => {destination}")
        else:
            if self.count > 1 and self.count % self.width == 0:
                self.stream.write("\n")
            self.stream.write(".")
            self.stream.flush()
        self.count += 1

    def finish(self) -> None:
        if not self.verbose and self.count:
            self.stream.write("\n")
            self.stream.flush()


def _scan(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda entry: entry.name)


def _clear_for_file(destination: Path, source: Path) -> None:
    if destination.is_dir() and not destination.is_symlink():
        raise IsADirectoryError(
            f"Cannot overwrite directory {destination} with non-directory {source}"
        )
    if os.path.lexists(destination):
        destination.unlink()


class _TreeCopier:
    def __init__(self, follow_symlinks: bool, progress: ProgressCallback | None):
        self.follow_symlinks = follow_symlinks
        self.progress = progress
        self.summary = CopySummary()
        # Real paths of the directories currently being copied, for cycle checks
        self._ancestors: set[str] = set()

    def _record(
        self,
        source: Path,
        destination: Path,
        status: CopyStatus,
        error: str | None = None,
    ) -> None:
        self.summary.entries.append(CopyEntry(source, destination, status, error))

    def copy_entries(self, entries: list[os.DirEntry], destination: Path) -> None:
        for entry in entries:
            source = Path(entry.path)
            target = destination / entry.name
            if self.progress:
                self.progress(source, target)
            try:
                self._copy_entry(entry, source, target)
            except OSError as exc:
                logger.error("materializer.copy_failed", source=str(source), error=str(exc))
                self._record(source, target, CopyStatus.FAILED, str(exc))

    def copy_tree(self, source: Path, destination: Path, entries: list[os.DirEntry]) -> None:
        real = os.path.realpath(source)
        self._ancestors.add(real)
        try:
            self.copy_entries(entries, destination)
        finally:
            self._ancestors.discard(real)

    def _copy_entry(self, entry: os.DirEntry, source: Path, target: Path) -> None:
        if entry.is_symlink() and not self.follow_symlinks:
            _clear_for_file(target, source)
            os.symlink(os.readlink(source), target)
            self._record(source, target, CopyStatus.COPIED)
            return

        if entry.is_dir():
            if os.path.realpath(source) in self._ancestors:
                self._record(source, target, CopyStatus.SKIPPED, "symlink cycle")
                return
            children = _scan(source)
            if target.is_symlink():
                target.unlink()
            elif os.path.lexists(target) and not target.is_dir():
                raise FileExistsError(
                    f"Cannot overwrite non-directory {target} with directory {source}"
                )
            target.mkdir(exist_ok=True)
            self._record(source, target, CopyStatus.COPIED)
            self.copy_tree(source, target, children)
            return

        if entry.is_file():
            _clear_for_file(target, source)
            shutil.copy2(source, target)
            self._record(source, target, CopyStatus.COPIED)
            return

        # Dangling symlink being dereferenced, socket, fifo, device
        self._record(source, target, CopyStatus.SKIPPED, "not a regular file or directory")


def materialize(
    source: Path,
    destination: Path,
    follow_symlinks: bool = False,
    progress: ProgressCallback | None = None,
) -> CopySummary:
    """Recursively copy the contents of ``source`` into ``destination``.

    Args:
        source: Build output directory
        destination: Working tree root
        follow_symlinks: Copy link targets instead of recreating the links
        progress: Called with (source, destination) for every visited entry

    Returns:
        CopySummary with one entry per visited path

    Raises:
        CopyError: If ``source`` is missing or cannot be listed
    """
    source = Path(source)
    destination = Path(destination)

    if not source.is_dir():
        raise CopyError(f"Cannot copy {source}: not a directory", str(source))
    try:
        entries = _scan(source)
    except OSError as exc:
        raise CopyError(f"Cannot read {source}: {exc}", str(source)) from exc

    destination.mkdir(parents=True, exist_ok=True)
    copier = _TreeCopier(follow_symlinks, progress)
    copier.copy_tree(source, destination, entries)
    return copier.summary
