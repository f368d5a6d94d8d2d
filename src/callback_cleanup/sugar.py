"""Argument-order conveniences over ``construct``.

Example:
    >>> done = []
    >>> def greet(name):
    ...     return f"hi {name}"
    >>> managed = callback(greet, lambda: done.append(True))
    >>> managed("ada")
    'hi ada'
    >>> callback(greet) is greet
    True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from .dispatch import construct
from .trigger import Cleanup

R = TypeVar("R")


def callback(body: Callable[..., R], cleanup: Cleanup | None = None) -> Callable[..., R]:
    """Pair ``body`` with ``cleanup``; return ``body`` alone when no cleanup is given."""
    if cleanup is None:
        return body
    return construct(body, cleanup)


def cleanup(action: Cleanup, body: Callable[..., R] | None = None) -> Callable[..., object]:
    """Same as ``callback`` with the arguments reversed."""
    if body is None:
        return action
    return construct(body, action)


def on_cleanup(action: Cleanup) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Decorator form: ``@on_cleanup(action)`` above a function definition.

    Also usable on methods in a class body; the result still binds ``self``.
    The cleanup then follows the class, not each instance.
    """

    def decorate(body: Callable[..., R]) -> Callable[..., R]:
        return construct(body, action)

    return decorate
