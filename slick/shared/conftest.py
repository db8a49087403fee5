"""Pytest configuration for slick/shared tests."""

import pytest

# Import fixtures from testing modules (replaces deprecated pytest_plugins)
from slick.testing.conftest import *  # noqa: F403
from slick.testing.conftest import _isolated_slick_env  # noqa: F401


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest-asyncio auto mode."""
    config.option.asyncio_mode = "auto"
