"""In-progress operation detection from marker files in the git directory.

An ordered decision table: the first rule whose marker exists names the
action. No rule matching means no operation is in progress.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from slick.shared.constants import (
    ACTION_AM,
    ACTION_AM_REBASE,
    ACTION_BISECT,
    ACTION_CHERRY,
    ACTION_CHERRY_OR_REVERT,
    ACTION_CHERRY_SEQ,
    ACTION_MERGE,
    ACTION_REBASE,
    ACTION_REBASE_I,
    ACTION_REBASE_M,
)


@dataclass(frozen=True)
class ActionRule:
    label: str
    matches: Callable[[Path], bool]


def _exists(*parts: str) -> Callable[[Path], bool]:
    return lambda gitdir: gitdir.joinpath(*parts).exists()


def _all_exist(*predicates: Callable[[Path], bool]) -> Callable[[Path], bool]:
    return lambda gitdir: all(p(gitdir) for p in predicates)


def _apply_dir_rules(*parts: str) -> list[ActionRule]:
    """rebasing / applying / generic, checked per directory before moving to the next one."""
    return [
        ActionRule(ACTION_REBASE, _exists(*parts, "rebasing")),
        ActionRule(ACTION_AM, _exists(*parts, "applying")),
        ActionRule(ACTION_AM_REBASE, _exists(*parts)),
    ]


ACTION_RULES: list[ActionRule] = [
    *_apply_dir_rules("rebase-apply"),
    *_apply_dir_rules("rebase"),
    *_apply_dir_rules("..", ".dotest"),
    ActionRule(ACTION_REBASE_I, _exists("rebase-merge", "interactive")),
    ActionRule(ACTION_REBASE_I, _exists(".dotest-merge", "interactive")),
    ActionRule(ACTION_REBASE_M, _exists("rebase-merge")),
    ActionRule(ACTION_REBASE_M, _exists(".dotest-merge")),
    ActionRule(ACTION_MERGE, _exists("MERGE_HEAD")),
    ActionRule(ACTION_BISECT, _exists("BISECT_LOG")),
    ActionRule(ACTION_CHERRY_SEQ, _all_exist(_exists("CHERRY_PICK_HEAD"), _exists("sequencer"))),
    ActionRule(ACTION_CHERRY, _exists("CHERRY_PICK_HEAD")),
    ActionRule(ACTION_CHERRY_OR_REVERT, _exists("sequencer")),
]


def detect_action(gitdir: Path, rules: list[ActionRule] = ACTION_RULES) -> str | None:
    for rule in rules:
        if rule.matches(gitdir):
            return rule.label
    return None
