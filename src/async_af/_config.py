"""Library configuration: AsyncAFConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from async_af._logging import configure_logging

__all__ = [
    'AsyncAFConfig',
    'get_config',
    'init',
]

LIMIT_ENV_VAR = 'ASYNC_AF_LIMIT'


@dataclass(frozen=True)
class AsyncAFConfig:
    """Configuration for async_af.

    Attributes:
        limit: Maximum number of pending values resolved at once in parallel
            mode. None = unlimited.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging
            unconfigured.
    """

    limit: int | None = None
    log_level: str | None = None


# Global configuration (set by init())
_config: AsyncAFConfig | None = None


def _detect_limit() -> int | None:
    """Read the parallel concurrency limit from ASYNC_AF_LIMIT.

    Empty or unset means unlimited. Values that are not positive integers
    are logged and ignored.
    """
    raw = os.environ.get(LIMIT_ENV_VAR, '').strip()
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        logging.warning("Invalid %s value '%s', running without a limit", LIMIT_ENV_VAR, raw)
        return None
    if limit < 1:
        logging.warning("Invalid %s value '%s', running without a limit", LIMIT_ENV_VAR, raw)
        return None
    return limit


def init(
    limit: int | None = None,
    log_level: str | None = None,
) -> AsyncAFConfig:
    """Initialize async_af with the given configuration.

    Args:
        limit: Max concurrent resolutions in parallel mode. Read from
            ASYNC_AF_LIMIT if None; unlimited if that is unset too.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = leave
            logging as it is.

    Returns:
        The AsyncAFConfig that was set.

    Example:
        ```python
        import async_af

        # Resolve at most 8 pending elements at a time
        async_af.init(limit=8, log_level="DEBUG")
        ```
    """
    global _config  # noqa: PLW0603

    resolved_limit = _detect_limit() if limit is None else max(1, limit)

    _config = AsyncAFConfig(limit=resolved_limit, log_level=log_level)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> AsyncAFConfig:
    """Get the current configuration, initializing defaults on first use.

    Returns:
        The current AsyncAFConfig.
    """
    if _config is None:
        return init()
    return _config
