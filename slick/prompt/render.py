"""Render the zsh PROMPT string from the last precmd record."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import ValidationError

from slick.shared.constants import MASTER_BRANCHES, VICMD_KEYMAP
from slick.shared.models import AggregateRecord
from slick.shared.prompt_env import PromptEnv

logger = logging.getLogger(__name__)

NO_ERROR = "0"
STAGED_MARKER = "+"

_UNITS = (("d", 86400), ("h", 3600), ("m", 60), ("s", 1))


@dataclass(frozen=True)
class PromptContext:
    last_return_code: str = NO_ERROR
    keymap: str = "main"
    elapsed: int = 0
    data: str = ""
    is_root: bool = False
    is_ssh: bool = False


def format_elapsed(seconds: int) -> str:
    """Largest non-zero unit plus the next one down when non-zero: 10s, 1m 5s, 2h, 1d 4h."""
    seconds = max(seconds, 0)
    values = []
    for unit, size in _UNITS:
        value, seconds = divmod(seconds, size)
        values.append((value, unit))
    for i, (value, unit) in enumerate(values):
        if value:
            parts = [f"{value}{unit}"]
            if i + 1 < len(values) and values[i + 1][0]:
                parts.append(f"{values[i + 1][0]}{values[i + 1][1]}")
            return " ".join(parts)
    return "0s"


def parse_record(data: str) -> AggregateRecord | None:
    if not data.strip():
        return None
    try:
        return AggregateRecord.model_validate_json(data)
    except ValidationError as e:
        logger.debug("Ignoring unparsable prompt data: %s", e)
        return None


def _fg(color: str, text: str) -> str:
    return f"%F{{{color}}}{text}%f"


def git_segment(record: AggregateRecord, env: PromptEnv) -> list[str]:
    if not record.branch:
        return []
    parts = []
    if record.u_name:
        parts.append(_fg(env.git_uname_color, record.u_name))
    branch_color = env.git_master_branch_color if record.branch in MASTER_BRANCHES else env.git_branch_color
    parts.append(_fg(branch_color, record.branch))
    if record.action:
        parts.append(_fg(env.git_action_color, record.action))
    if record.status:
        parts.append(_fg(env.git_status_color, record.status))
    if record.staged:
        parts.append(_fg(env.git_staged_color, STAGED_MARKER))
    if record.remote:
        parts.append(_fg(env.git_remote_color, " ".join(record.remote)))
    if record.auth_failed:
        parts.append(_fg(env.git_auth_color, env.git_auth_symbol))
    return parts


def _symbol(ctx: PromptContext, env: PromptEnv) -> tuple[str, str]:
    if ctx.keymap == VICMD_KEYMAP:
        return env.vicmd_symbol, env.vicmd_color
    symbol = env.root_symbol if ctx.is_root else env.symbol
    if ctx.last_return_code != NO_ERROR:
        return symbol, env.error_color
    return symbol, env.root_color if ctx.is_root else env.symbol_color


def render_prompt(ctx: PromptContext, env: PromptEnv, max_exec_time: int) -> str:
    first_line = []
    if ctx.is_ssh:
        first_line.append(_fg(env.ssh_color, "%n@%m"))
    first_line.append(_fg(env.path_color, "%~"))

    record = parse_record(ctx.data)
    if record is not None:
        first_line.extend(git_segment(record, env))

    if ctx.elapsed >= max_exec_time and ctx.elapsed > 0:
        first_line.append(_fg(env.time_elapsed_color, format_elapsed(ctx.elapsed)))

    symbol, color = _symbol(ctx, env)
    return " ".join(first_line) + "\n" + _fg(color, symbol) + env.non_breaking_space
