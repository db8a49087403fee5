"""Immutable configuration after resolution.

This module contains the frozen Configuration dataclass that represents the
environment resolved once at start-up. Components receive it explicitly;
nothing downstream reads os.environ again.
"""

from __future__ import annotations

import logging
import os
import sys
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

import click

from slick.shared.constants import APP_NAME
from slick.shared.env import is_explicitly_disabled, is_test_mode
from slick.shared.error_handling import ConfigError
from slick.shared.prompt_env import PromptEnv

logger = logging.getLogger(__name__)

DEFAULT_CMD_MAX_EXEC_TIME = 5


def resolve_cache_dir(environ: Mapping[str, str]) -> Path | None:
    """$XDG_CACHE_HOME/slick, falling back to $HOME/.cache/slick; None if neither is set."""
    if cache_home := environ.get("XDG_CACHE_HOME"):
        return Path(cache_home) / APP_NAME
    if home := environ.get("HOME"):
        return Path(home) / ".cache" / APP_NAME
    return None


def _parse_seconds(raw: str, *, name: str) -> timedelta:
    try:
        seconds = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return timedelta(0)
    return timedelta(seconds=max(seconds, 0.0))


@dataclass(frozen=True)
class Configuration:
    """Immutable configuration after resolution."""

    prompt_env: PromptEnv = field(default_factory=PromptEnv)
    fetch_enabled: bool = True
    cache_dir: Path | None = None
    cache_ttl: timedelta = timedelta(seconds=300)
    fetch_timeout: timedelta = timedelta(seconds=5)
    fetch_grace: timedelta = timedelta(milliseconds=500)
    status_delay: timedelta = timedelta(0)
    git_executable: str = "git"

    @property
    def cmd_max_exec_time(self) -> int:
        try:
            return int(self.prompt_env.cmd_max_exec_time)
        except ValueError:
            return DEFAULT_CMD_MAX_EXEC_TIME

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> Configuration:
        """Resolve configuration from an environment mapping."""
        prompt_env = PromptEnv.from_environ(environ)
        cfg = cls(
            prompt_env=prompt_env,
            fetch_enabled=not is_explicitly_disabled(prompt_env.git_fetch),
            cache_dir=resolve_cache_dir(environ),
            status_delay=_parse_seconds(prompt_env.test_delay, name="SLICK_PROMPT_TEST_DELAY"),
        )

        if is_test_mode(environ) and cfg.cache_dir is not None:
            temp_root = Path(tempfile.gettempdir()).resolve()
            if not cfg.cache_dir.resolve().is_relative_to(temp_root):
                raise ConfigError(
                    "SLICK_TEST_MODE is set, but the cache directory is not under the system temp directory.\n"
                    f"  cache_dir={cfg.cache_dir}\n"
                    "Refusing to touch a real auth cache from tests."
                )
        return cfg


def load_config() -> Configuration:
    """Load configuration from the process environment."""
    try:
        return Configuration.from_env(os.environ)
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
