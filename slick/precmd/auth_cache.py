"""File-backed cache of the last auth probe outcome, one file per repository.

Files live at <cache-home>/slick/auth_<hex-hash> and hold "<timestamp>:<0|1>".
Every operation is best-effort: I/O or parse failures read as "no failure
recorded" and writes that fail are dropped.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta
from pathlib import Path

import pygit2

from slick.shared.configuration import Configuration
from slick.shared.constants import AUTH_CACHE_PREFIX
from slick.shared.models import CacheEntry

logger = logging.getLogger(__name__)

_HASH_MASK = 2**64 - 1


def unix_timestamp() -> int:
    """Seconds since the epoch; 0 if the clock is before it."""
    return max(int(time.time()), 0)


def path_hash(path: str) -> int:
    """Rolling multiply-by-31 hash over the UTF-8 bytes of path, wrapping at 64 bits."""
    acc = 0
    for b in path.encode():
        acc = (acc * 31 + b) & _HASH_MASK
    return acc


def repo_identity(repo: pygit2.Repository) -> str | None:
    """Canonical working-directory path of repo; None for bare or unresolvable repos."""
    if repo.workdir is None:
        return None
    try:
        canonical = Path(repo.workdir).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        logger.debug("Cannot canonicalize workdir %s: %s", repo.workdir, e)
        return None
    return str(canonical)


class AuthCache:
    def __init__(self, cache_dir: Path | None, ttl: timedelta):
        self.cache_dir = cache_dir
        self.ttl = ttl

    @classmethod
    def from_config(cls, config: Configuration) -> AuthCache:
        return cls(config.cache_dir, config.cache_ttl)

    def path_for(self, identity: str | None) -> Path | None:
        if identity is None or self.cache_dir is None:
            return None
        try:
            digest = path_hash(identity)
        except UnicodeEncodeError:
            return None
        return self.cache_dir / f"{AUTH_CACHE_PREFIX}{digest:x}"

    def read(self, identity: str | None, now: int | None = None) -> bool:
        """True only for a fresh, well-formed entry recording a failure."""
        cache_path = self.path_for(identity)
        if cache_path is None:
            return False
        try:
            content = cache_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return False
        entry = CacheEntry.parse(content)
        if entry is None:
            logger.debug("Ignoring malformed auth cache %s", cache_path)
            return False
        now = unix_timestamp() if now is None else now
        return entry.failed and entry.is_fresh(now, int(self.ttl.total_seconds()))

    def ensure_dir(self) -> None:
        if self.cache_dir is None:
            return
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.debug("Cannot create cache dir %s: %s", self.cache_dir, e)

    def write(self, identity: str | None, failed: bool, now: int) -> None:
        """Overwrite the entry for identity; last writer wins."""
        cache_path = self.path_for(identity)
        if cache_path is None:
            return
        try:
            cache_path.parent.mkdir(parents=True, exist_ok=True)
            cache_path.write_text(CacheEntry(timestamp=now, failed=failed).encode(), encoding="utf-8")
        except OSError as e:
            logger.debug("Dropping auth cache write %s: %s", cache_path, e)
