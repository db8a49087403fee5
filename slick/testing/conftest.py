import dataclasses
import os
from pathlib import Path

import pytest

from slick.shared.configuration import Configuration
from slick.testing.repo_factory import GitRepoFactory
from slick.testing.utils import write_fake_git


@pytest.fixture(autouse=True)
def _isolated_slick_env(tmp_path: Path, monkeypatch):
    """Point the auth cache at a per-test temp dir and drop user prompt customizations.

    SLICK_TEST_MODE makes configuration refuse any cache directory outside the
    system temp dir, so a stray test cannot touch the real auth cache.
    """
    for key in list(os.environ):
        if key.startswith("SLICK_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("SSH_CONNECTION", raising=False)
    monkeypatch.setenv("SLICK_TEST_MODE", "1")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache-home"))


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def repo_factory(temp_dir):
    """Factory for creating git repositories with different configurations."""
    return GitRepoFactory(temp_dir)


@pytest.fixture
def cache_dir(temp_dir) -> Path:
    return temp_dir / "cache-home" / "slick"


@pytest.fixture
def config_factory():
    """Build a Configuration from the (isolated) process environment, with field overrides.

    Example:
        config = config_factory(fetch_enabled=False)
    """

    def _factory(**overrides) -> Configuration:
        return dataclasses.replace(Configuration.from_env(os.environ), **overrides)

    return _factory


@pytest.fixture
def fake_git(temp_dir):
    """Factory: write a stand-in git executable and return its path."""
    counter = iter(range(1_000_000))

    def _factory(**kwargs) -> Path:
        return write_fake_git(temp_dir / f"fake-git-{next(counter)}", **kwargs)

    return _factory
