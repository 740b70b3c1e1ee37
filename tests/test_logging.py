"""Tests for logging configuration and hooks."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import pytest

from async_af import AsyncAF, add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook
from tests.helpers import Pending


@pytest.fixture(autouse=True)
def cleanup_hooks() -> Generator[None]:
    """Clear log hooks before and after each test."""
    clear_log_hooks()
    yield
    clear_log_hooks()


class TestLogHooks:
    """Tests for logging hooks functionality."""

    def test_hook_receives_log_events(self) -> None:
        """Registered hooks receive log entry dicts."""
        received: list[dict[str, Any]] = []

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(received.append)

        get_logger('test').info('Test message', extra_field='extra_value')

        entries = [e for e in received if e.get('event') == 'Test message']
        assert len(entries) == 1
        assert entries[0]['extra_field'] == 'extra_value'
        assert entries[0]['level'] == 'info'

    def test_remove_hook(self) -> None:
        """remove_log_hook() stops the hook from being called."""
        calls: list[str] = []

        def hook(event_dict: dict[str, Any]) -> None:
            calls.append('called')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(hook)

        logger = get_logger('test')
        logger.info('First')
        assert len(calls) == 1

        remove_log_hook(hook)
        remove_log_hook(hook)
        logger.info('Second')
        assert len(calls) == 1

    def test_clear_hooks(self) -> None:
        """clear_log_hooks() removes all hooks."""
        calls: list[str] = []

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(lambda e: calls.append('hook1'))
        add_log_hook(lambda e: calls.append('hook2'))

        logger = get_logger('test')
        logger.info('First')
        assert calls == ['hook1', 'hook2']

        clear_log_hooks()
        logger.info('Second')
        assert calls == ['hook1', 'hook2']

    def test_hook_exception_does_not_break_logging(self) -> None:
        """Exceptions in hooks don't prevent logging or other hooks."""
        calls: list[str] = []

        def bad_hook(event_dict: dict[str, Any]) -> None:
            raise RuntimeError('Hook failed')

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(bad_hook)
        add_log_hook(lambda e: calls.append('good'))

        get_logger('test').info('Test')

        assert calls == ['good']

    def test_hook_receives_copy_of_event_dict(self) -> None:
        """Hooks receive a copy, not the original event dict."""
        received: list[dict[str, Any]] = []

        def mutating_hook(event_dict: dict[str, Any]) -> None:
            event_dict['mutated'] = True
            received.append(event_dict)

        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(mutating_hook)
        add_log_hook(received.append)

        get_logger('test').info('Test')

        assert received[0].get('mutated') is True
        assert 'mutated' not in received[1]


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_sets_root_level(self) -> None:
        configure_logging(level='warning')
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self) -> None:
        configure_logging(level='chatty')
        assert logging.getLogger().level == logging.INFO

    def test_replaces_root_handlers(self) -> None:
        configure_logging()
        configure_logging()
        assert len(logging.getLogger().handlers) == 1


class TestLibraryEvents:
    """Debug events emitted while resolving elements."""

    async def test_gather_failure_is_logged(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(received.append)

        with pytest.raises(ValueError):
            await AsyncAF([Pending(error=ValueError('bad'))]).map(lambda n: n)

        failures = [e for e in received if e.get('event') == 'element resolution failed']
        assert len(failures) == 1
        assert failures[0]['index'] == 0
        assert failures[0]['logger'] == 'async_af.resolve'

    async def test_series_short_circuit_is_logged(self) -> None:
        received: list[dict[str, Any]] = []
        configure_logging(level='DEBUG', json_output=True)
        add_log_hook(received.append)

        assert await AsyncAF([1, 2, 3]).series.find_index(lambda n: n == 2) == 1

        stops = [e for e in received if e.get('event') == 'series search stopped early']
        assert len(stops) == 1
        assert stops[0]['index'] == 1
        assert stops[0]['length'] == 3
