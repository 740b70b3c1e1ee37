"""Pytest configuration for async_af tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

import async_af._config
import async_af.log


@pytest.fixture
def fresh_config() -> Generator[None]:
    """Drop any configuration a test sets up."""
    async_af._config._config = None
    yield
    async_af._config._config = None


@pytest.fixture
def fresh_log_options() -> Generator[None]:
    """Restore default log_af settings around a test."""
    async_af.log.reset_log_options()
    yield
    async_af.log.reset_log_options()
