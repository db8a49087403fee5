"""Two-phase precmd pipeline.

Start -> fast record emitted -> (deep status on a worker thread, auth probe as
a background task) -> refined record emitted -> bounded wait for the probe ->
done. The probe runs as a detached `slick auth-probe` process in its own session,
so a fetch that outlasts the grace period still records its outcome after
precmd has exited.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
from pathlib import Path

import pygit2

from slick.precmd.auth_cache import AuthCache, repo_identity
from slick.precmd.emitter import Emitter
from slick.precmd.probe import select_remote
from slick.precmd.snapshot import build_fast_snapshot
from slick.precmd.status import collect_status
from slick.shared.configuration import Configuration
from slick.shared.models import AggregateRecord

logger = logging.getLogger(__name__)

EXIT_POLL_INTERVAL = 0.02


def discover_repo(cwd: Path | None) -> pygit2.Repository | None:
    if cwd is None:
        return None
    try:
        repo_path = pygit2.discover_repository(str(cwd))
        if repo_path is None:
            return None
        return pygit2.Repository(repo_path)
    except (pygit2.GitError, OSError, ValueError) as e:
        logger.debug("No repository at %s: %s", cwd, e)
        return None


def auth_probe_command(config: Configuration, cache_dir: Path, workdir: str, remote: str) -> list[str]:
    return [
        sys.executable,
        "-m",
        "slick",
        "auth-probe",
        workdir,
        remote,
        "--git-executable",
        config.git_executable,
        "--cache-dir",
        str(cache_dir),
        "--timeout",
        str(config.fetch_timeout.total_seconds()),
    ]


def spawn_auth_probe(config: Configuration, cache_dir: Path, workdir: str, remote: str) -> subprocess.Popen:
    """Start the probe in its own session; it neither holds our stdout nor dies with us."""
    return subprocess.Popen(
        auth_probe_command(config, cache_dir, workdir, remote),
        cwd=workdir,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


async def wait_for_exit(process: subprocess.Popen) -> int:
    while (returncode := process.poll()) is None:
        await asyncio.sleep(EXIT_POLL_INTERVAL)
    return returncode


def _log_task_exception(t: asyncio.Task) -> None:
    try:
        exc = t.exception()
        if exc:
            logger.error("background task failed", exc_info=exc)
    except asyncio.CancelledError:
        logger.debug("background task abandoned before completion")


class PrecmdPipeline:
    def __init__(self, config: Configuration, emitter: Emitter, cache: AuthCache | None = None):
        self.config = config
        self.emitter = emitter
        self.cache = cache if cache is not None else AuthCache.from_config(config)
        self.probe_process: subprocess.Popen | None = None
        self.probe_task: asyncio.Task[int] | None = None

    def _start_probe(self, repo: pygit2.Repository) -> None:
        if not self.config.fetch_enabled:
            return
        identity = repo_identity(repo)
        if identity is None:
            return
        remote = select_remote(repo)
        if remote is None:
            logger.debug("No remote configured for %s; skipping auth probe", identity)
            return
        if self.cache.cache_dir is None:
            return
        try:
            self.probe_process = spawn_auth_probe(self.config, self.cache.cache_dir, identity, remote)
        except OSError as e:
            logger.debug("Cannot start auth probe for %s: %s", identity, e)
            return
        self.probe_task = asyncio.create_task(wait_for_exit(self.probe_process))
        self.probe_task.add_done_callback(_log_task_exception)

    async def run(self, cwd: Path | None) -> AggregateRecord:
        repo = discover_repo(cwd)
        if repo is None:
            record = AggregateRecord()
            self.emitter.emit(record)
            return record

        record = build_fast_snapshot(repo, self.config.prompt_env, self.cache)
        self.emitter.emit(record)

        status_task = asyncio.create_task(asyncio.to_thread(collect_status, Path(repo.path), self.config.status_delay))
        self._start_probe(repo)

        try:
            status = await status_task
        except Exception:
            logger.exception("Deep status failed for %s; keeping fast record", repo.path)
        else:
            record.status = status
            self.emitter.emit(record)

        if self.probe_task is not None:
            await asyncio.wait({self.probe_task}, timeout=self.config.fetch_grace.total_seconds())
        return record
