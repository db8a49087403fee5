from datetime import timedelta
from unittest.mock import Mock

import pygit2
import pytest

from slick.precmd.auth_cache import AuthCache, repo_identity, unix_timestamp
from slick.precmd.snapshot import ahead_behind, build_fast_snapshot, current_branch, remote_tokens, user_name
from slick.shared.constants import NO_BRANCH
from slick.shared.prompt_env import PromptEnv
from slick.testing.data import TestData
from slick.testing.git_helpers import stage_files, write_files


@pytest.fixture
def cache(cache_dir) -> AuthCache:
    return AuthCache(cache_dir, timedelta(seconds=300))


def test_fresh_repository(repo_factory, cache):
    repo = pygit2.Repository(repo_factory.create_repo())
    record = build_fast_snapshot(repo, PromptEnv(), cache)
    assert record.branch == TestData.Branches.MAIN
    assert record.u_name == TestData.Git.USER_NAME
    assert record.remote == []
    assert record.action == ""
    assert record.staged is False
    assert record.auth_failed is False
    assert record.status == ""


def test_detached_head_uses_sentinel(repo_factory):
    repo = pygit2.Repository(repo_factory.create_repo())
    repo.set_head(repo.head.target)
    assert repo.head_is_detached
    assert current_branch(repo) == NO_BRANCH


def test_unborn_head_keeps_defaults(repo_factory, cache):
    repo = pygit2.Repository(repo_factory.create_repo(with_commit=False))
    record = build_fast_snapshot(repo, PromptEnv(), cache)
    assert record.branch == NO_BRANCH
    assert record.staged is False
    assert record.remote == []


def test_user_name_missing_is_empty():
    repo = Mock()
    repo.config = {}
    assert user_name(repo) == ""


def test_staged_change_detected(repo_factory, cache):
    repo_path = repo_factory.create_repo()
    stage_files(repo_path, {"staged.txt": "s"})
    record = build_fast_snapshot(pygit2.Repository(repo_path), PromptEnv(), cache)
    assert record.staged is True


def test_unstaged_change_not_staged(repo_factory, cache):
    repo_path = repo_factory.create_repo()
    write_files(repo_path, {TestData.Files.README: "edited"})
    record = build_fast_snapshot(pygit2.Repository(repo_path), PromptEnv(), cache)
    assert record.staged is False


def test_ahead_and_behind_tokens(repo_factory, cache):
    repo_path = repo_factory.create_repo()
    repo_factory.add_remote(repo_path)
    repo_factory.diverge(repo_path, ahead=2, behind=3)

    repo = pygit2.Repository(repo_path)
    assert ahead_behind(repo) == (2, 3)
    record = build_fast_snapshot(repo, PromptEnv(), cache)
    assert record.remote == ["⇣3", "⇡2"]


def test_no_upstream_means_no_remote_tokens(repo_factory):
    repo_path = repo_factory.create_repo()
    repo_factory.add_remote(repo_path, track=False)
    assert ahead_behind(pygit2.Repository(repo_path)) == (0, 0)


@pytest.mark.parametrize(
    ("ahead", "behind", "expected"),
    [(0, 0, []), (1, 0, ["⇡1"]), (0, 4, ["⇣4"]), (5, 6, ["⇣6", "⇡5"])],
)
def test_remote_tokens(ahead, behind, expected):
    assert remote_tokens(ahead, behind, PromptEnv()) == expected


def test_remote_tokens_custom_symbols():
    env = PromptEnv.from_environ({"SLICK_PROMPT_GIT_REMOTE_AHEAD": "^", "SLICK_PROMPT_GIT_REMOTE_BEHIND": "v"})
    assert remote_tokens(1, 2, env) == ["v2", "^1"]


def test_action_marker_reported(repo_factory, cache):
    repo_path = repo_factory.create_repo()
    repo = pygit2.Repository(repo_path)
    (repo_path / ".git" / "MERGE_HEAD").write_text(str(repo.head.target))
    record = build_fast_snapshot(repo, PromptEnv(), cache)
    assert record.action == "merge"


def test_cached_auth_failure_surfaces(repo_factory, cache):
    repo = pygit2.Repository(repo_factory.create_repo())
    cache.write(repo_identity(repo), True, unix_timestamp())
    assert build_fast_snapshot(repo, PromptEnv(), cache).auth_failed is True


def test_stale_auth_failure_ignored(repo_factory, cache):
    repo = pygit2.Repository(repo_factory.create_repo())
    cache.write(repo_identity(repo), True, unix_timestamp() - 301)
    assert build_fast_snapshot(repo, PromptEnv(), cache).auth_failed is False


def test_failing_step_leaves_other_fields(repo_factory, cache, monkeypatch):
    repo = pygit2.Repository(repo_factory.create_repo())

    def _boom(_repo):
        raise pygit2.GitError("index locked")

    monkeypatch.setattr("slick.precmd.snapshot.is_staged", _boom)
    record = build_fast_snapshot(repo, PromptEnv(), cache)
    assert record.staged is False
    assert record.branch == TestData.Branches.MAIN
    assert record.u_name == TestData.Git.USER_NAME
