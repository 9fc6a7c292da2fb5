"""Input-mode selection and sequential dispatch to the traverser."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from identscan.core.errors import UsageError
from identscan.extraction.traverser import ScanStats, Traverser

log = structlog.get_logger(__name__)


class InputMode(str, Enum):
    SINGLE_PATH = "single_path"
    STREAM = "stream"
    COMBINED = "combined"


@dataclass(frozen=True)
class Invocation:
    """A validated command line: where paths come from."""

    mode: InputMode
    path: str | None = None

    @property
    def reads_stream(self) -> bool:
        return self.mode in (InputMode.STREAM, InputMode.COMBINED)


def resolve_mode(paths: Sequence[str], use_stream: bool) -> Invocation:
    """Validate the path arguments against the stream flag.

    Raises:
        UsageError: More than one path, or neither a path nor stream mode.
    """
    if len(paths) > 1:
        raise UsageError.too_many_paths(list(paths))
    path = paths[0] if paths else None
    if path is None and not use_stream:
        raise UsageError.missing_input()
    if path is None:
        return Invocation(mode=InputMode.STREAM)
    if use_stream:
        return Invocation(mode=InputMode.COMBINED, path=path)
    return Invocation(mode=InputMode.SINGLE_PATH, path=path)


class Driver:
    """Runs one traversal per path query, strictly one at a time.

    Stream lines are processed first, then the explicit path.
    """

    def __init__(self, traverser: Traverser) -> None:
        self.traverser = traverser

    def run(self, invocation: Invocation, stream: Iterable[str] | None = None) -> ScanStats:
        stats = ScanStats()
        if invocation.reads_stream:
            if stream is None:
                raise ValueError(f"{invocation.mode.value} mode needs an input stream")
            stats.merge(self.run_stream(stream))
        if invocation.path is not None:
            stats.merge(self.run_path(invocation.path))
        log.debug(
            "run_complete",
            mode=invocation.mode.value,
            files_processed=stats.files_processed,
            identifiers=stats.identifiers,
            errors=stats.errors,
        )
        return stats

    def run_path(self, path: str) -> ScanStats:
        return self.traverser.visit(path)

    def run_stream(self, lines: Iterable[str]) -> ScanStats:
        """Treat each stripped line as an independent path query.

        Blank lines are skipped; they never stand for the current directory.
        """
        stats = ScanStats()
        for line in lines:
            path = line.strip()
            if not path:
                continue
            stats.merge(self.traverser.visit(path))
        return stats
