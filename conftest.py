"""Root pytest configuration.

Registers common markers. Per-package conftest.py files pull in the shared
fixtures from slick.testing.conftest.
"""

from __future__ import annotations

import shutil

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Register all common test markers."""
    config.addinivalue_line("markers", "unit: fast unit tests")
    config.addinivalue_line("markers", "integration: tests touching real repositories or subprocesses")
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "e2e: tests running the slick CLI as a subprocess")
    config.addinivalue_line("markers", "requires_git: tests requiring a git executable on PATH")
    config.addinivalue_line("markers", "asyncio: tests that use pytest-asyncio")


def pytest_runtest_setup(item: pytest.Item) -> None:
    """Skip tests based on environment and markers."""
    if item.get_closest_marker("requires_git") and shutil.which("git") is None:
        pytest.skip("git executable not found on PATH")
