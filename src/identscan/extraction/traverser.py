"""File and directory traversal.

Walks a single file or a whole directory tree, dispatching each file to the
query engine through an extension lookup. The directory walk is iterative
(an explicit stack of pending directories), so nesting depth is bounded by
memory rather than the interpreter's recursion limit.

Failures are isolated: a directory that cannot be listed, an entry whose
type cannot be determined, or a file that cannot be read produces one
diagnostic line and the walk continues with everything else. Only regular
files (or symlinks to them) are dispatched; FIFOs, sockets, devices and
symlinked directories are skipped silently.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import structlog

from identscan.config.constants import PROGRAM_NAME
from identscan.core.errors import FileReadError
from identscan.extraction.engine import QueryEngine
from identscan.extraction.packs import LanguageRegistry

log = structlog.get_logger(__name__)

LineSink = Callable[[str], None]


class FileOutcome(str, Enum):
    """What happened to a single file."""

    PROCESSED = "processed"
    UNSUPPORTED = "unsupported"
    TOO_LARGE = "too_large"
    READ_FAILED = "read_failed"


@dataclass
class ScanStats:
    """Counters accumulated over one or more visits."""

    files_processed: int = 0
    files_unsupported: int = 0
    files_too_large: int = 0
    files_failed: int = 0
    dirs_failed: int = 0
    entries_failed: int = 0
    entries_skipped: int = 0
    identifiers: int = 0

    def record(self, outcome: FileOutcome) -> None:
        if outcome is FileOutcome.PROCESSED:
            self.files_processed += 1
        elif outcome is FileOutcome.UNSUPPORTED:
            self.files_unsupported += 1
        elif outcome is FileOutcome.TOO_LARGE:
            self.files_too_large += 1
        else:
            self.files_failed += 1

    def merge(self, other: ScanStats) -> None:
        self.files_processed += other.files_processed
        self.files_unsupported += other.files_unsupported
        self.files_too_large += other.files_too_large
        self.files_failed += other.files_failed
        self.dirs_failed += other.dirs_failed
        self.entries_failed += other.entries_failed
        self.entries_skipped += other.entries_skipped
        self.identifiers += other.identifiers

    @property
    def errors(self) -> int:
        return self.files_failed + self.files_too_large + self.dirs_failed + self.entries_failed


class Traverser:
    """Visits files and directory trees and prints extracted identifiers.

    Args:
        registry: Extension lookup table.
        engine: Query engine compiled for the registry's specs.
        emit: Receives each extracted identifier (one output line).
        report: Receives each diagnostic line.
        program_name: Prefix for diagnostic lines.
        max_file_size_bytes: Skip larger files with a diagnostic. None = no limit.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        engine: QueryEngine,
        emit: LineSink,
        report: LineSink,
        program_name: str = PROGRAM_NAME,
        max_file_size_bytes: int | None = None,
    ) -> None:
        self.registry = registry
        self.engine = engine
        self._emit = emit
        self._report = report
        self.program_name = program_name
        self.max_file_size_bytes = max_file_size_bytes

    def visit(self, root: str | Path) -> ScanStats:
        """Visit ``root`` as a directory tree if it is one, else as a single file.

        An empty string names nothing; it is not the current directory.
        """
        if isinstance(root, str) and not root:
            return ScanStats()
        root = Path(root)
        if root.is_dir():
            return self.visit_directory(root)
        stats = ScanStats()
        self._process(root, stats)
        return stats

    def visit_directory(self, root: Path) -> ScanStats:
        stats = ScanStats()
        stack: list[Path] = [root]

        while stack:
            top = stack.pop()
            try:
                with os.scandir(top) as it:
                    entries = list(it)
            except OSError as e:
                stats.dirs_failed += 1
                self._diagnostic("read dir", top, e)
                continue

            for entry in entries:
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    # Symlinks to regular files count; FIFOs, sockets, devices,
                    # dangling links and links to directories do not.
                    is_file = not is_dir and entry.is_file()
                except OSError as e:
                    stats.entries_failed += 1
                    self._diagnostic("read dir entry", top, e)
                    continue

                path = Path(entry.path)
                if is_dir:
                    stack.append(path)
                elif is_file:
                    self._process(path, stats)
                else:
                    stats.entries_skipped += 1
                    log.debug("entry_skipped", path=str(path))

        log.debug("directory_visited", root=str(root), **_stats_fields(stats))
        return stats

    def process_file(self, path: Path) -> FileOutcome:
        """Extract and emit identifiers from one file.

        Unsupported extensions are skipped without output or diagnostics.
        """
        stats = ScanStats()
        return self._process(path, stats)

    def _process(self, path: Path, stats: ScanStats) -> FileOutcome:
        outcome = self._process_file(path, stats)
        stats.record(outcome)
        return outcome

    def _process_file(self, path: Path, stats: ScanStats) -> FileOutcome:
        spec = self.registry.lookup_path(path)
        if spec is None:
            log.debug("file_unsupported", path=str(path))
            return FileOutcome.UNSUPPORTED

        if self.max_file_size_bytes is not None:
            try:
                size = path.stat().st_size
            except OSError as e:
                self._diagnostic("read file", path, e)
                return FileOutcome.READ_FAILED
            if size > self.max_file_size_bytes:
                self._report(
                    f"{self.program_name}: error: file too large: {path}: {size} bytes"
                )
                log.debug("file_too_large", path=str(path), size=size)
                return FileOutcome.TOO_LARGE

        try:
            source = _read_source(path)
        except FileReadError as e:
            self._report(
                f"{self.program_name}: error: read file: {path}: {e.details['reason']}"
            )
            log.debug("file_read_failed", path=str(path), error=e.error_name)
            return FileOutcome.READ_FAILED

        count = 0
        for text in self.engine.extract(spec, source):
            self._emit(text)
            count += 1
        stats.identifiers += count
        log.debug("file_processed", path=str(path), language=spec.name, identifiers=count)
        return FileOutcome.PROCESSED

    def _diagnostic(self, context: str, path: Path, cause: OSError) -> None:
        self._report(f"{self.program_name}: error: {context}: {path}: {_describe(cause)}")
        log.debug("traversal_error", context=context, path=str(path), errno=cause.errno)


def _read_source(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileReadError.unreadable(str(path), _describe(e)) from e


def _describe(err: OSError) -> str:
    return err.strerror or str(err)


def _stats_fields(stats: ScanStats) -> dict[str, int]:
    return {
        "files_processed": stats.files_processed,
        "files_unsupported": stats.files_unsupported,
        "files_failed": stats.files_failed,
        "identifiers": stats.identifiers,
    }
