"""Shared pytest fixtures for the full codexpath test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from tests.fs_fakes import FakeFileSystem


@pytest.fixture
def fake_filesystem() -> FakeFileSystem:
    """Provide an empty in-memory filesystem probe."""

    return FakeFileSystem()


@pytest.fixture(autouse=True)
def _reset_loguru_handlers() -> Iterator[None]:
    """Drop loguru sinks bound to per-test streams once a test finishes."""

    yield
    logger.remove()
