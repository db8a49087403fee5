"""Background auth probe: a non-interactive fetch whose outcome feeds the auth cache."""

from __future__ import annotations

import logging
from pathlib import Path

import pygit2

from slick.precmd.auth_cache import AuthCache, unix_timestamp
from slick.shared.configuration import Configuration
from slick.shared.constants import AUTH_FAILURE_MARKERS, FALLBACK_REMOTE
from slick.shared.error_handling import FEATURE_UNAVAILABLE_ERRORS, ProbeInconclusiveError
from slick.shared.git_utils import GitResult, fetch_args, git_run_async

logger = logging.getLogger(__name__)


def is_auth_failure(stderr: str) -> bool:
    text = stderr.lower()
    return any(marker in text for marker in AUTH_FAILURE_MARKERS)


def classify(result: GitResult) -> bool:
    """failed flag for a fetch that ran to completion.

    Non-zero exits without an auth marker (network down, corrupt repo) count
    as "not an auth failure".
    """
    if result.ok:
        return False
    return is_auth_failure(result.stderr)


def select_remote(repo: pygit2.Repository) -> str | None:
    """Upstream remote of the current branch, else origin, else the first remote."""
    try:
        names = list(repo.remotes.names())
    except FEATURE_UNAVAILABLE_ERRORS:
        return None
    if not names:
        return None
    if not repo.head_is_unborn and not repo.head_is_detached:
        try:
            configured = repo.config[f"branch.{repo.head.shorthand}.remote"]
        except FEATURE_UNAVAILABLE_ERRORS:
            configured = None
        if configured in names:
            return configured
    return FALLBACK_REMOTE if FALLBACK_REMOTE in names else names[0]


class AuthProbe:
    def __init__(self, config: Configuration, cache: AuthCache, identity: str, workdir: Path, remote: str):
        self.config = config
        self.cache = cache
        self.identity = identity
        self.workdir = workdir
        self.remote = remote

    async def run(self) -> bool | None:
        """Fetch once and record the outcome. Returns the recorded flag, or None if inconclusive."""
        self.cache.ensure_dir()
        try:
            result = await git_run_async(
                self.config.git_executable,
                fetch_args(self.remote),
                self.workdir,
                timeout=self.config.fetch_timeout,
            )
        except ProbeInconclusiveError as e:
            logger.debug("Auth probe inconclusive for %s: %s", self.workdir, e)
            return None

        failed = classify(result)
        logger.debug("Auth probe for %s exited %d: failed=%s", self.workdir, result.returncode, failed)
        self.cache.write(self.identity, failed, unix_timestamp())
        return failed
