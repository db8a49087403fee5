"""Error types and best-effort helpers for slick.

A prompt renderer must never crash or block the shell: fast-path failures
degrade to default field values, probe failures leave the cache untouched.
"""

from __future__ import annotations

import logging

import pygit2

logger = logging.getLogger(__name__)

# Failures that mean "this piece of repository state is unavailable"
FEATURE_UNAVAILABLE_ERRORS: tuple[type[Exception], ...] = (pygit2.GitError, KeyError, ValueError, OSError)


class SlickError(Exception):
    pass


class ConfigError(SlickError):
    """Configuration validation or loading error."""


class ProbeInconclusiveError(SlickError):
    """The fetch could not be spawned or did not finish in time."""


class BestEffort:
    """Run one fast-path step; log and suppress feature-unavailable failures.

    Anything outside FEATURE_UNAVAILABLE_ERRORS still propagates.
    """

    def __init__(self, step: str):
        self.step = step

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or not issubclass(exc_type, FEATURE_UNAVAILABLE_ERRORS):
            return False
        logger.debug("Step %s unavailable: %s", self.step, exc_val)
        return True
