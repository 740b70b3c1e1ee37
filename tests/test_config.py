"""Tests for configuration and initialization."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest

from async_af import AsyncAFConfig, get_config, init
from async_af._config import LIMIT_ENV_VAR, _detect_limit


class TestAsyncAFConfig:
    """Tests for the AsyncAFConfig dataclass."""

    def test_default_values(self) -> None:
        config = AsyncAFConfig()
        assert config.limit is None
        assert config.log_level is None

    def test_config_is_frozen(self) -> None:
        config = AsyncAFConfig()
        with pytest.raises(AttributeError):
            config.limit = 8  # type: ignore[misc]


class TestDetectLimit:
    """Tests for _detect_limit()."""

    def test_env_limit(self) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: '4'}):
            assert _detect_limit() == 4

    def test_env_whitespace_is_stripped(self) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: ' 2 '}):
            assert _detect_limit() == 2

    def test_no_env_is_unlimited(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert _detect_limit() is None

    def test_empty_env_is_unlimited(self) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: ''}):
            assert _detect_limit() is None

    @pytest.mark.parametrize('raw', ['lots', '0', '-3', '1.5'])
    def test_invalid_env_warns_and_is_ignored(self, raw: str, caplog: pytest.LogCaptureFixture) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: raw}), caplog.at_level(logging.WARNING):
            assert _detect_limit() is None
        assert f"Invalid {LIMIT_ENV_VAR} value '{raw}'" in caplog.text


@pytest.mark.usefixtures('fresh_config')
class TestInit:
    """Tests for init() and get_config()."""

    def test_explicit_limit(self) -> None:
        config = init(limit=8)
        assert config.limit == 8
        assert get_config() is config

    def test_limit_is_clamped_to_one(self) -> None:
        assert init(limit=0).limit == 1
        assert init(limit=-5).limit == 1

    def test_limit_from_env(self) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: '3'}):
            assert init().limit == 3

    def test_explicit_limit_beats_env(self) -> None:
        with patch.dict(os.environ, {LIMIT_ENV_VAR: '3'}):
            assert init(limit=5).limit == 5

    def test_get_config_initializes_lazily(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = get_config()
        assert config == AsyncAFConfig()
        assert get_config() is config

    def test_log_level_configures_logging(self) -> None:
        with patch('async_af._config.configure_logging') as configure:
            config = init(log_level='DEBUG')
        configure.assert_called_once_with('DEBUG')
        assert config.log_level == 'DEBUG'

    def test_no_log_level_leaves_logging_alone(self) -> None:
        with patch('async_af._config.configure_logging') as configure:
            init()
        configure.assert_not_called()


@pytest.mark.usefixtures('fresh_config')
class TestLimitIntegration:
    """The configured limit reaches parallel resolution."""

    async def test_init_limit_caps_parallel_map(self) -> None:
        import anyio

        from async_af import AsyncAF

        active = 0
        peak = 0

        async def track(n: int) -> int:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await anyio.sleep(0.01)
            active -= 1
            return n

        init(limit=1)
        assert await AsyncAF([1, 2, 3]).map(track) == [1, 2, 3]
        assert peak == 1
