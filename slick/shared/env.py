"""Environment helpers for slick.

Centralizes truthy/falsy parsing of feature flags.
"""

from __future__ import annotations

from collections.abc import Mapping

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def is_truthy(value: str | None) -> bool:
    """Values considered true: "1", "true", "yes", "on" (case-insensitive)."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def is_explicitly_disabled(value: str | None) -> bool:
    """True only for an explicit falsy value; unset or unrecognized stays enabled."""
    if value is None:
        return False
    return value.strip().lower() in _FALSY


def is_test_mode(environ: Mapping[str, str]) -> bool:
    return is_truthy(environ.get("SLICK_TEST_MODE"))
