"""Boxed cleanups: a fresh container that forwards calls to its body."""

from __future__ import annotations

import functools
import types
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from . import log
from .classify import describe
from .errors import NotInvocableError
from .trigger import Cleanup, CleanupTrigger, watch

R = TypeVar("R")


class BoxedCallback(Generic[R]):
    """Callable container that owns a cleanup.

    The cleanup is tied to the container's lifetime. ``body`` is only
    referenced, so it may outlive the container through other bindings
    without affecting when the cleanup runs.

    Example:
        >>> seen = []
        >>> box = BoxedCallback(abs, lambda: seen.append("done"))
        >>> box(-3)
        3
        >>> del box
        >>> seen
        ['done']
    """

    def __init__(self, body: Callable[..., R], cleanup: Cleanup) -> None:
        if not callable(body):
            raise NotInvocableError(f"callback must be callable, got {type(body).__name__}")
        if not callable(cleanup):
            raise NotInvocableError(f"cleanup must be callable, got {type(cleanup).__name__}")
        functools.update_wrapper(self, body, updated=())
        self.body = body
        label = f"box({describe(body)})@{id(self):#x}"
        self._trigger = CleanupTrigger(cleanup, label)
        self._finalizer = watch(self, self._trigger)
        log.debug(f"boxed {describe(body)}", component="wrap")

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        return self.body(*args, **kwargs)

    def __get__(self, instance: object, owner: type | None = None) -> Callable[..., R]:
        # Bind like a plain function when stored as a class attribute.
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __repr__(self) -> str:
        return f"<BoxedCallback {describe(self.body)}>"


def wrap(body: Callable[..., R], cleanup: Cleanup) -> BoxedCallback[R]:
    """Box ``body`` so that ``cleanup`` runs once the box is reclaimed."""
    return BoxedCallback(body, cleanup)
