"""Non-interactive git subprocess helpers."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Mapping, Sequence
from contextlib import suppress
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from slick.shared.error_handling import ProbeInconclusiveError

logger = logging.getLogger(__name__)

# Forced over the inherited environment: nothing may prompt or block on a TTY
NON_INTERACTIVE_GIT_ENV = {
    "GIT_TERMINAL_PROMPT": "0",
    "GIT_SSH_COMMAND": "ssh -o BatchMode=yes",
    "GIT_ASKPASS": "true",
    "SSH_ASKPASS": "true",
}


def build_non_interactive_git_env(env: Mapping[str, str] | None = None) -> dict[str, str]:
    e = dict(os.environ if env is None else env)
    e.update(NON_INTERACTIVE_GIT_ENV)
    return e


def fetch_args(remote: str) -> list[str]:
    """Arguments for a quiet, side-effect-minimal fetch of one remote."""
    return [
        "-c",
        "gc.auto=0",
        "-c",
        "core.hooksPath=",
        "fetch",
        "--quiet",
        "--no-tags",
        "--recurse-submodules=no",
        remote,
    ]


@dataclass(frozen=True)
class GitResult:
    returncode: int
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


async def git_run_async(
    git_executable: str,
    args: Sequence[str],
    cwd: Path,
    *,
    timeout: timedelta,
    env: Mapping[str, str] | None = None,
) -> GitResult:
    """Run git without a TTY, bounded by timeout.

    Raises ProbeInconclusiveError if git cannot be spawned or does not exit in time.
    """
    try:
        process = await asyncio.create_subprocess_exec(
            git_executable,
            *args,
            cwd=cwd,
            env=build_non_interactive_git_env(env),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ProbeInconclusiveError(f"cannot spawn {git_executable}: {e}") from e

    try:
        _, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout.total_seconds())
    except TimeoutError as e:
        with suppress(ProcessLookupError):
            process.kill()
        raise ProbeInconclusiveError(f"git {' '.join(args)} timed out after {timeout.total_seconds()}s") from e

    assert process.returncode is not None
    return GitResult(returncode=process.returncode, stderr=stderr.decode(errors="replace"))
