"""Decide whether a callable's identity belongs to a single logical instance.

A plain function with captured cells is allocated fresh every time its
``def`` or ``lambda`` is evaluated, so its identity is private to that
evaluation. Anything else may be reached through other bindings: a
top-level function is one object shared by every importer, builtins are
global, and bound methods are rebuilt on each attribute access.

A closure still counts as shared when any of these hold:

- it carries ``__wrapped__``: decorator output, usually bound to a
  module-level name by the ``@`` syntax;
- its ``__qualname__`` has no ``<locals>`` part, which is what
  ``functools.wraps`` leaves behind on a top-level wrapper;
- it is published as a global of the module named by ``__module__``.

Example:
    >>> def make():
    ...     hits = []
    ...     return lambda: hits
    >>> classify(make())
    <Identity.UNIQUE: 'unique'>
    >>> classify(len)
    <Identity.SHAREABLE: 'shareable'>
"""

from __future__ import annotations

import sys
import types
from enum import Enum

from .errors import NotInvocableError


class Identity(str, Enum):
    UNIQUE = "unique"
    SHAREABLE = "shareable"


def _published_in_module(fn: types.FunctionType) -> bool:
    module = sys.modules.get(getattr(fn, "__module__", None) or "")
    if module is None:
        return False
    return any(value is fn for value in list(vars(module).values()))


def classify(invocable: object) -> Identity:
    """Classify ``invocable`` as ``UNIQUE`` or ``SHAREABLE``.

    Raises:
        NotInvocableError: ``invocable`` is not callable.
    """
    if not callable(invocable):
        raise NotInvocableError(f"expected a callable, got {type(invocable).__name__}")
    if not isinstance(invocable, types.FunctionType) or not invocable.__closure__:
        return Identity.SHAREABLE
    if hasattr(invocable, "__wrapped__"):
        return Identity.SHAREABLE
    if "<locals>" not in invocable.__qualname__:
        return Identity.SHAREABLE
    if _published_in_module(invocable):
        return Identity.SHAREABLE
    return Identity.UNIQUE


def is_unique(invocable: object) -> bool:
    return classify(invocable) is Identity.UNIQUE


def describe(invocable: object) -> str:
    """Return a short human-readable label for log messages."""
    name = getattr(invocable, "__qualname__", None) or getattr(invocable, "__name__", None)
    if name is None:
        name = type(invocable).__name__
    return f"{name}@{id(invocable):#x}"
