"""log_af: log settled values with their call site and elapsed time.

log_af settles its arguments in parallel and emits them, space separated,
through the async_af structlog logger. Each entry carries a label built from
the caller's location and, unless disabled, the seconds elapsed since the
previous log_af call.

Label formats:
    file    @name.py:12:5:
    path    @/abs/path/to/name.py:12:5:
    parent  @parent/name.py:12:5:
    arrow   ========================>
    custom  'custom=<template>', a str.format template that may use
            {file}, {path}, {parent}, {arrow}, {line} and {col}

Example:
    ```python
    from async_af import log_af, log_options

    async def main():
        await log_af(fetch_user(1), 'loaded')
        log_options(label_format='custom={file}:{line} =>', duration=False)
    ```
"""

from __future__ import annotations

import inspect
import os
import time
from dataclasses import dataclass, replace
from typing import Any

from async_af._logging import get_logger
from async_af.resolve import gather

__all__ = [
    'LABEL_FORMATS',
    'LogOptions',
    'get_log_options',
    'log_af',
    'log_options',
    'reset_log_options',
]

logger = get_logger(__name__)

LABEL_FORMATS = ('file', 'path', 'parent', 'arrow', 'custom')
ARROW = '=' * 24 + '>'
CUSTOM_PREFIX = 'custom='


@dataclass(frozen=True)
class LogOptions:
    """Settings applied to every log_af call.

    Attributes:
        label: Include the call-site label.
        duration: Include the seconds elapsed since the previous call.
        label_format: One of 'file', 'path', 'parent', 'arrow' or
            'custom=<template>'.
    """

    label: bool = True
    duration: bool = True
    label_format: str = 'file'


_options = LogOptions()
_last_logged: float | None = None


def get_log_options() -> LogOptions:
    """Return the current log_af settings."""
    return _options


def log_options(
    label: bool | None = None,
    duration: bool | None = None,
    label_format: str | None = None,
) -> LogOptions:
    """Update the log_af settings; arguments left as None are unchanged.

    An unknown label_format, or a custom template that does not render with
    the {file} {path} {parent} {arrow} {line} {col} fields, is reported with a
    warning and ignored.

    Returns:
        The settings now in effect.
    """
    global _options  # noqa: PLW0603

    changes: dict[str, Any] = {}
    if isinstance(label, bool):
        changes['label'] = label
    if isinstance(duration, bool):
        changes['duration'] = duration
    if label_format:
        if not _is_valid_format(label_format):
            logger.warning(
                "log_af label_format must be 'file' (default), 'path', 'parent', 'arrow', or 'custom=<template>'",
                label_format=label_format,
            )
        else:
            changes['label_format'] = label_format
    _options = replace(_options, **changes)
    return _options


def reset_log_options() -> LogOptions:
    """Restore the default log_af settings and forget the last call time."""
    global _options, _last_logged  # noqa: PLW0603

    _options = LogOptions()
    _last_logged = None
    return _options


def _format_label(label_format: str, frame_info: inspect.Traceback) -> str:
    path = os.path.abspath(frame_info.filename)
    directory, file = os.path.split(path)
    parent = os.path.basename(directory)
    line = frame_info.lineno
    positions = frame_info.positions
    col = positions.col_offset + 1 if positions is not None and positions.col_offset is not None else 0

    if label_format == 'path':
        return f'@{path}:{line}:{col}:'
    if label_format == 'parent':
        return f'@{parent}/{file}:{line}:{col}:'
    if label_format == 'arrow':
        return ARROW
    if label_format.startswith(CUSTOM_PREFIX):
        return _render_custom(
            label_format[len(CUSTOM_PREFIX) :],
            file=file,
            path=directory + os.sep,
            parent=parent + os.sep,
            line=line,
            col=col,
        )
    return f'@{file}:{line}:{col}:'


def _render_custom(template: str, *, file: str, path: str, parent: str, line: int, col: int) -> str:
    return template.format(file=file, path=path, parent=parent, arrow=ARROW, line=line, col=col)


def _is_valid_format(label_format: str) -> bool:
    """Return True for a named format or a custom template that renders."""
    if label_format in LABEL_FORMATS[:-1]:
        return True
    if not label_format.startswith(CUSTOM_PREFIX):
        return False
    try:
        _render_custom(
            label_format[len(CUSTOM_PREFIX) :],
            file='name.py',
            path=os.sep + 'dir' + os.sep,
            parent='dir' + os.sep,
            line=1,
            col=1,
        )
    except (AttributeError, IndexError, KeyError, TypeError, ValueError):
        return False
    return True


async def log_af(*items: Any) -> None:
    """Settle items in parallel and log them with the caller's location.

    Args:
        *items: Values or awaitables to log.

    Raises:
        Exception: Whatever the first failing item raised.
    """
    global _last_logged  # noqa: PLW0603

    started = time.perf_counter()
    options = _options
    label = None
    if options.label:
        caller = inspect.currentframe()
        caller = caller.f_back if caller is not None else None
        if caller is not None:
            label = _format_label(options.label_format, inspect.getframeinfo(caller, context=0))
            del caller

    values = await gather(items)

    now = time.perf_counter()
    elapsed = now - (_last_logged if _last_logged is not None else started)
    _last_logged = now

    fields: dict[str, Any] = {}
    if label is not None:
        fields['label'] = label
    if options.duration:
        fields['duration'] = f'in {elapsed:.3f} secs'
    logger.info(' '.join(str(v) for v in values), **fields)
