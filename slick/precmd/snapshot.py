"""Fast, synchronous repository queries for the first emitted record.

Only local refs, config, the index and marker files are touched: no network,
no working-tree walk. Each step is independent; a failing step leaves its
field at the default and the others still run.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pygit2

from slick.precmd.actions import detect_action
from slick.precmd.auth_cache import AuthCache, repo_identity
from slick.shared.constants import NO_BRANCH
from slick.shared.error_handling import FEATURE_UNAVAILABLE_ERRORS, BestEffort
from slick.shared.models import AggregateRecord
from slick.shared.prompt_env import PromptEnv

logger = logging.getLogger(__name__)


def current_branch(repo: pygit2.Repository) -> str:
    if repo.head_is_unborn or repo.head_is_detached:
        return NO_BRANCH
    return repo.head.shorthand or NO_BRANCH


def user_name(repo: pygit2.Repository) -> str:
    try:
        return repo.config["user.name"]
    except KeyError:
        return ""


def ahead_behind(repo: pygit2.Repository) -> tuple[int, int]:
    """(ahead, behind) of HEAD against its upstream; (0, 0) without one."""
    try:
        head = repo.revparse_single("HEAD")
        upstream = repo.revparse_single("@{u}")
        return repo.ahead_behind(head.id, upstream.id)
    except FEATURE_UNAVAILABLE_ERRORS as e:
        logger.debug("No ahead/behind for %s: %s", repo.path, e)
        return 0, 0


def remote_tokens(ahead: int, behind: int, env: PromptEnv) -> list[str]:
    """Behind token first, then ahead; zero counts are omitted."""
    tokens = []
    if behind > 0:
        tokens.append(f"{env.git_remote_behind}{behind}")
    if ahead > 0:
        tokens.append(f"{env.git_remote_ahead}{ahead}")
    return tokens


def is_staged(repo: pygit2.Repository) -> bool:
    """True iff the index differs from HEAD. Raises on unborn HEAD."""
    tree = repo.head.peel(pygit2.Tree)
    stats = tree.diff_to_index(repo.index).stats
    return stats.files_changed > 0 or stats.insertions > 0 or stats.deletions > 0


def build_fast_snapshot(repo: pygit2.Repository, env: PromptEnv, cache: AuthCache) -> AggregateRecord:
    record = AggregateRecord(branch=NO_BRANCH)

    with BestEffort("branch"):
        record.branch = current_branch(repo)

    with BestEffort("user.name"):
        record.u_name = user_name(repo)

    record.auth_failed = cache.read(repo_identity(repo))

    ahead, behind = ahead_behind(repo)
    record.remote = remote_tokens(ahead, behind, env)

    with BestEffort("action"):
        record.action = detect_action(Path(repo.path)) or ""

    with BestEffort("staged"):
        record.staged = is_staged(repo)

    return record
