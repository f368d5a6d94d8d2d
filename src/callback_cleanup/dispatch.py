"""Single entry point that picks a cleanup strategy for a callable."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from . import log
from .boxed import BoxedCallback, wrap
from .classify import Identity, classify, describe
from .errors import NotInvocableError
from .registry import attach, is_attached
from .trigger import Cleanup

R = TypeVar("R")

ManagedCallback = Callable[..., R]


def strategy_for(invocable: object) -> str:
    """Name the strategy ``construct`` would use: ``"attach"`` or ``"wrap"``."""
    return "attach" if classify(invocable) is Identity.UNIQUE else "wrap"


def construct(invocable: Callable[..., R], cleanup: Cleanup) -> ManagedCallback[R]:
    """Bind ``cleanup`` to the lifetime of ``invocable``.

    Functions with captured state are tracked by identity and returned
    as-is. Everything else is boxed, so the caller must keep using the
    returned value rather than the original.

    Raises:
        NotInvocableError: Either argument is not callable.
        AlreadyManagedError: ``invocable`` is a function that already has a
            cleanup attached by identity.
    """
    if not callable(cleanup):
        raise NotInvocableError(f"cleanup must be callable, got {type(cleanup).__name__}")
    strategy = strategy_for(invocable)
    log.trace(f"{describe(invocable)} -> {strategy}", component="construct")
    if strategy == "attach":
        return attach(invocable, cleanup)
    return wrap(invocable, cleanup)


def is_managed(value: object) -> bool:
    """Return True when ``value`` carries a cleanup from this package."""
    return isinstance(value, BoxedCallback) or is_attached(value)
