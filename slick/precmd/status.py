"""Deep status: full index + working-tree enumeration folded into short codes.

This is the one slow local query; it runs on a worker thread and never on the
path that produces the first record.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Callable, Mapping
from datetime import timedelta
from pathlib import Path

import pygit2
from pygit2.enums import FileStatus

logger = logging.getLogger(__name__)


def _both(a: FileStatus, b: FileStatus) -> Callable[[int], bool]:
    return lambda flags: bool(flags & a) and bool(flags & b)


def _either(a: FileStatus, b: FileStatus) -> Callable[[int], bool]:
    return lambda flags: bool(flags & (a | b))


def _has(a: FileStatus) -> Callable[[int], bool]:
    return lambda flags: bool(flags & a)


# Most specific combinations first; first match wins
STATUS_RULES: list[tuple[str, Callable[[int], bool]]] = [
    ("AM", _both(FileStatus.INDEX_NEW, FileStatus.WT_MODIFIED)),
    ("MM", _both(FileStatus.INDEX_MODIFIED, FileStatus.WT_MODIFIED)),
    ("M", _either(FileStatus.INDEX_MODIFIED, FileStatus.WT_MODIFIED)),
    ("D", _either(FileStatus.INDEX_DELETED, FileStatus.WT_DELETED)),
    ("R", _either(FileStatus.INDEX_RENAMED, FileStatus.WT_RENAMED)),
    ("T", _either(FileStatus.INDEX_TYPECHANGE, FileStatus.WT_TYPECHANGE)),
    ("A", _has(FileStatus.INDEX_NEW)),
    ("??", _has(FileStatus.WT_NEW)),
    ("UU", _has(FileStatus.CONFLICTED)),
    ("!", _has(FileStatus.IGNORED)),
]
FALLBACK_CODE = "X"


def fold_status(flags: int) -> str:
    for code, matches in STATUS_RULES:
        if matches(flags):
            return code
    return FALLBACK_CODE


def summarize_status(statuses: Mapping[str, int]) -> str:
    """'<code> <count>' tokens joined by spaces, codes in first-seen order; '' when clean."""
    counts = Counter(fold_status(flags) for flags in statuses.values())
    return " ".join(f"{code} {count}" for code, count in counts.items())


def collect_status(repo_path: Path, delay: timedelta = timedelta(0)) -> str:
    """Open the repository at repo_path and summarize its status.

    Blocking; call from a worker thread. delay is a test knob that simulates
    a large repository.
    """
    if delay:
        time.sleep(delay.total_seconds())
    repo = pygit2.Repository(str(repo_path))
    start = time.perf_counter()
    statuses = repo.status(untracked_files="normal", ignored=False)
    logger.debug("status of %s: %d entries in %.1fms", repo_path, len(statuses), (time.perf_counter() - start) * 1000)
    return summarize_status(statuses)
