"""Callables that clean up after themselves.

Pair a callback with a nullary cleanup that runs exactly once, when the
callback is reclaimed by the garbage collector.

Example:
    >>> import gc
    >>> from callback_cleanup import construct
    >>> log = []
    >>> def make_counter():
    ...     count = [0]
    ...     def bump():
    ...         count[0] += 1
    ...         return count[0]
    ...     return bump
    >>> bump = construct(make_counter(), lambda: log.append("closed"))
    >>> bump(), bump()
    (1, 2)
    >>> del bump
    >>> _ = gc.collect()
    >>> log
    ['closed']
"""

from __future__ import annotations

from .boxed import BoxedCallback, wrap
from .classify import Identity, classify, is_unique
from .dispatch import construct, is_managed, strategy_for
from .errors import (
    AlreadyManagedError,
    CallbackCleanupError,
    ClassificationMismatchError,
    InvalidSettingError,
    NotInvocableError,
)
from .registry import IdentityRegistry, attach, is_attached
from .sugar import callback, cleanup, on_cleanup

__all__ = [
    "AlreadyManagedError",
    "BoxedCallback",
    "CallbackCleanupError",
    "ClassificationMismatchError",
    "Identity",
    "IdentityRegistry",
    "InvalidSettingError",
    "NotInvocableError",
    "__version__",
    "attach",
    "callback",
    "classify",
    "cleanup",
    "construct",
    "is_attached",
    "is_managed",
    "is_unique",
    "on_cleanup",
    "strategy_for",
    "wrap",
]

try:
    from importlib.metadata import PackageNotFoundError, version
except ImportError:  # pragma: no cover - import edge cases
    __version__ = "0.0.0"
else:
    try:
        __version__ = version("callback-cleanup")
    except PackageNotFoundError:
        __version__ = "0.0.0"
