"""Shared pytest fixtures for wonderbox tests."""

import pytest

from wonderbox.container import Container


@pytest.fixture()
def container() -> Container:
    """Default container with cycle detection enabled."""
    return Container()


@pytest.fixture()
def container_without_cycle_detection() -> Container:
    """Container with detect_cycles=False."""
    return Container(detect_cycles=False)
