"""Shared test utilities to avoid duplication across test files."""

import os
import stat
import subprocess
import sys
import time
from collections.abc import Callable
from datetime import timedelta
from pathlib import Path

from tenacity import RetryError, Retrying, stop_after_delay, wait_fixed


def run_cli_command(args, cwd=None, env=None, timeout: timedelta = timedelta(seconds=60.0)):
    """Run the actual CLI command as subprocess."""
    cmd = [sys.executable, "-m", "slick", *args]
    if env is None:
        env = os.environ.copy()
    return subprocess.run(cmd, capture_output=True, text=True, cwd=cwd, env=env, timeout=timeout.total_seconds(), check=False)


def run_cli_timed_lines(
    args, cwd=None, env=None, timeout: timedelta = timedelta(seconds=60.0)
) -> tuple[int, list[tuple[float, str]], float]:
    """Run the CLI; return (exit code, [(seconds since start, line), ...], seconds until exit)."""
    cmd = [sys.executable, "-m", "slick", *args]
    if env is None:
        env = os.environ.copy()
    start = time.monotonic()
    lines: list[tuple[float, str]] = []
    with subprocess.Popen(cmd, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, text=True, cwd=cwd, env=env) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            lines.append((time.monotonic() - start, line.rstrip("\n")))
        returncode = proc.wait(timeout=timeout.total_seconds())
    return returncode, lines, time.monotonic() - start


def write_fake_git(path: Path, *, exit_code: int = 0, stderr: str = "", sleep_seconds: float = 0.0) -> Path:
    """Write an executable that stands in for git: optional sleep, fixed stderr, fixed exit code.

    Its argv is appended to <path>.args so tests can check what was invoked.
    """
    args_log = path.with_suffix(".args")
    script = "#!/bin/sh\n"
    script += f'printf "%s\\n" "$*" >> "{args_log}"\n'
    if sleep_seconds:
        script += f"sleep {sleep_seconds} </dev/null >/dev/null 2>&1\n"
    if stderr:
        script += f"printf '%s\\n' '{stderr}' >&2\n"
    script += f"exit {exit_code}\n"
    path.write_text(script)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def wait_until(predicate: Callable[[], bool], *, timeout_seconds: float = 5.0, interval_seconds: float = 0.1) -> bool:
    """Poll `predicate` until it returns True or timeout elapses.

    Returns True if the condition became true within the timeout; False otherwise.
    """

    def _check() -> bool:
        result = predicate()
        if not result:
            raise RuntimeError("predicate not yet true")
        return result

    try:
        Retrying(stop=stop_after_delay(timeout_seconds), wait=wait_fixed(interval_seconds), reraise=True)(_check)
        return True
    except (RetryError, RuntimeError):
        return False
