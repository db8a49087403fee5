"""Pure data model of the SLICK_PROMPT_* environment variables.

DO NOT ADD LOGIC - THIS IS PURE DATA

Every field is the raw string the user exported (or the default when unset).
Parsing into typed values happens in configuration.py.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

ENV_PREFIX = "SLICK_PROMPT_"


class PromptEnv(BaseModel):
    """Prompt symbols, colors and feature switches as stored in the environment."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # Timing
    cmd_max_exec_time: str = Field("5", alias="SLICK_PROMPT_CMD_MAX_EXEC_TIME")

    # Colors
    error_color: str = Field("196", alias="SLICK_PROMPT_ERROR_COLOR")
    git_action_color: str = Field("3", alias="SLICK_PROMPT_GIT_ACTION_COLOR")
    git_auth_color: str = Field("red", alias="SLICK_PROMPT_GIT_AUTH_COLOR")
    git_branch_color: str = Field("3", alias="SLICK_PROMPT_GIT_BRANCH_COLOR")
    git_master_branch_color: str = Field("160", alias="SLICK_PROMPT_GIT_MASTER_BRANCH_COLOR")
    git_remote_color: str = Field("6", alias="SLICK_PROMPT_GIT_REMOTE_COLOR")
    git_staged_color: str = Field("7", alias="SLICK_PROMPT_GIT_STAGED_COLOR")
    git_status_color: str = Field("5", alias="SLICK_PROMPT_GIT_STATUS_COLOR")
    git_uname_color: str = Field("8", alias="SLICK_PROMPT_GIT_UNAME_COLOR")
    path_color: str = Field("74", alias="SLICK_PROMPT_PATH_COLOR")
    root_color: str = Field("1", alias="SLICK_PROMPT_ROOT_COLOR")
    ssh_color: str = Field("8", alias="SLICK_PROMPT_SSH_COLOR")
    symbol_color: str = Field("5", alias="SLICK_PROMPT_SYMBOL_COLOR")
    time_elapsed_color: str = Field("3", alias="SLICK_PROMPT_TIME_ELAPSED_COLOR")
    vicmd_color: str = Field("3", alias="SLICK_PROMPT_VICMD_COLOR")

    # Symbols
    git_auth_symbol: str = Field("\U0001f512", alias="SLICK_PROMPT_GIT_AUTH_SYMBOL")
    git_remote_ahead: str = Field("⇡", alias="SLICK_PROMPT_GIT_REMOTE_AHEAD")
    git_remote_behind: str = Field("⇣", alias="SLICK_PROMPT_GIT_REMOTE_BEHIND")
    non_breaking_space: str = Field("\u00a0", alias="SLICK_PROMPT_NON_BREAKING_SPACE")
    root_symbol: str = Field("#", alias="SLICK_PROMPT_ROOT_SYMBOL")
    symbol: str = Field("$", alias="SLICK_PROMPT_SYMBOL")
    vicmd_symbol: str = Field(">", alias="SLICK_PROMPT_VICMD_SYMBOL")

    # Feature switches
    git_fetch: str = Field("1", alias="SLICK_PROMPT_GIT_FETCH")
    test_delay: str = Field("0", alias="SLICK_PROMPT_TEST_DELAY")

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> PromptEnv:
        return cls.model_validate({k: v for k, v in environ.items() if k.startswith(ENV_PREFIX)})
