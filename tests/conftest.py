"""Shared test fixtures."""

from __future__ import annotations

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog.configure() done by the code under test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def events() -> list[str]:
    """Ordered record of advice and operation executions."""
    return []
