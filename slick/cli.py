"""Thin CLI layer - argument parsing and hand-off to the precmd pipeline and prompt renderer."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import os
from datetime import timedelta
from pathlib import Path

import click
import typer
from typer.main import get_command

from slick.precmd.auth_cache import AuthCache
from slick.precmd.emitter import Emitter
from slick.precmd.pipeline import PrecmdPipeline
from slick.precmd.probe import AuthProbe
from slick.prompt.render import NO_ERROR, PromptContext, render_prompt
from slick.shared.configuration import load_config
from slick.shared.logging import LogLevel, configure_logging
from slick.shell.install import render_shell_init

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def _root(
    log_output: str = typer.Option(
        "none", "--log-output", envvar="SLICK_LOG_OUTPUT", help="Log destination: none, stdout, stderr or a file path"
    ),
    log_level: LogLevel = typer.Option(LogLevel.WARNING, "--log-level", envvar="SLICK_LOG_LEVEL", case_sensitive=False),
) -> None:
    """slick - asynchronous zsh prompt."""
    configure_logging(log_output, log_level)


def _safe_cwd() -> Path | None:
    try:
        return Path.cwd()
    except OSError as e:
        logger.debug("Working directory unavailable: %s", e)
        return None


@app.command()
def precmd() -> None:
    """Emit the fast repository snapshot, then the refined one once status is known."""
    config = load_config()
    try:
        asyncio.run(PrecmdPipeline(config, Emitter()).run(_safe_cwd()))
    except Exception:
        # Whatever was already emitted stands; the shell must never see a failure
        logger.exception("precmd pipeline failed")


@app.command("auth-probe", hidden=True)
def auth_probe(
    workdir: Path = typer.Argument(..., help="Canonical working directory; also the cache key"),
    remote: str = typer.Argument(...),
    git_executable: str = typer.Option("git", "--git-executable"),
    cache_dir: Path = typer.Option(..., "--cache-dir"),
    timeout: float = typer.Option(5.0, "--timeout", help="Seconds before the fetch counts as inconclusive"),
) -> None:
    """Fetch once and record whether it failed on authentication. Started detached by precmd."""
    config = dataclasses.replace(
        load_config(), git_executable=git_executable, cache_dir=cache_dir, fetch_timeout=timedelta(seconds=timeout)
    )
    probe = AuthProbe(config, AuthCache.from_config(config), str(workdir), workdir, remote)
    try:
        asyncio.run(probe.run())
    except Exception:
        logger.exception("auth probe failed for %s", workdir)


@app.command()
def prompt(
    last_return_code: str = typer.Option(NO_ERROR, "-r", "--last-return-code"),
    keymap: str = typer.Option("main", "-k", "--keymap"),
    elapsed: int = typer.Option(0, "-e", "--elapsed", help="Seconds the last command ran"),
    data: str = typer.Option("", "-d", "--data", help="Last record emitted by `slick precmd`"),
) -> None:
    """Print the zsh PROMPT string."""
    config = load_config()
    ctx = PromptContext(
        last_return_code=last_return_code,
        keymap=keymap,
        elapsed=max(elapsed, 0),
        data=data,
        is_root=os.geteuid() == 0,
        is_ssh=bool(os.environ.get("SSH_CONNECTION")),
    )
    click.echo(render_prompt(ctx, config.prompt_env, config.cmd_max_exec_time), nl=False)


@app.command("shell-init")
def shell_init() -> None:
    """Print the zsh hooks; load with eval "$(slick shell-init)"."""
    click.echo(render_shell_init(), nl=False)


main = get_command(app)


if __name__ == "__main__":
    main()
