"""async_af: async counterparts of the native array methods.

Wrap a collection whose elements may be pending (coroutines, tasks, futures)
and chain array methods over it; elements are settled in parallel by default,
or one at a time through .series / .io.

Flat imports (preferred):
    from async_af import AsyncAF, HOLE, SparseArray, log_af, log_options

Submodule imports (for organization):
    from async_af.itertools import some, reduce, includes
    from async_af.resolve import Mode, Parallel, Series, gather
    from async_af.errors import NotArrayLikeError, EmptyReductionError
"""

from async_af._config import AsyncAFConfig, get_config, init
from async_af._logging import add_log_hook, clear_log_hooks, configure_logging, get_logger, remove_log_hook
from async_af.errors import (
    EmptyReduction,
    EmptyReductionError,
    NotArrayLike,
    NotArrayLikeError,
    NotAString,
    NotAStringError,
    NotCallable,
    NotCallableError,
)
from async_af.log import LogOptions, get_log_options, log_af, log_options, reset_log_options
from async_af.resolve import Mode, Parallel, ResolutionStrategy, Series, gather, settle, strategy_for
from async_af.sparse import HOLE, SparseArray
from async_af.wrapper import AsyncAF

__all__ = [
    # Wrapper
    'AsyncAF',
    # Config
    'AsyncAFConfig',
    # Errors - struct variants
    'EmptyReduction',
    # Errors - exception variants
    'EmptyReductionError',
    # Sparse arrays
    'HOLE',
    # Logging helper
    'LogOptions',
    # Resolution
    'Mode',
    'NotAString',
    'NotAStringError',
    'NotArrayLike',
    'NotArrayLikeError',
    'NotCallable',
    'NotCallableError',
    'Parallel',
    'ResolutionStrategy',
    'Series',
    'SparseArray',
    # Logging
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'gather',
    'get_config',
    'get_log_options',
    'get_logger',
    'init',
    'log_af',
    'log_options',
    'remove_log_hook',
    'reset_log_options',
    'settle',
    'strategy_for',
]
