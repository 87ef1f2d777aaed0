"""pytest configuration and shared fixtures."""

import pytest

from struct_defaults import build_default_filler, build_filler, use_default


@pytest.fixture
def filler():
    """Filler with the standard wiring (shapes, ISO 8601 timestamps, durations)."""
    return build_default_filler()


@pytest.fixture
def shapes_only():
    """Filler with the standard shape handlers and no type handlers."""
    return build_filler(use_default())
