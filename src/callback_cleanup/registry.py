"""Identity-tracked cleanups for uniquely allocated functions.

The function itself is returned untouched; its cleanup lives in a side
table keyed by ``id()``. The table only holds weak references to the
functions it tracks, and each entry is removed from inside the function's
own reclaim notification. Every registry also consults one process-wide
weak set of claimed functions, so a function can enter the managed state
only once no matter which registry attaches it.

No lock guards the table. CPython delivers weakref callbacks on the thread
that released the last reference (or inside a ``gc`` pass), which may be in
the middle of registry code, so a non-reentrant lock could deadlock. Every
mutation is a single ``dict`` operation instead.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from . import log
from .classify import Identity, classify, describe
from .errors import AlreadyManagedError, ClassificationMismatchError, NotInvocableError
from .trigger import Cleanup, CleanupTrigger, warn_if_retained, watch

F = TypeVar("F", bound=Callable[..., object])

# Functions managed by any registry in this process. One cleanup per identity.
_claimed: weakref.WeakSet = weakref.WeakSet()


@dataclass(frozen=True)
class _Entry:
    ref: weakref.ref
    trigger: CleanupTrigger
    finalizer: weakref.finalize


class IdentityRegistry:
    """Side table associating one cleanup with each tracked function."""

    def __init__(self) -> None:
        self._entries: dict[int, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def is_managed(self, invocable: object) -> bool:
        entry = self._entries.get(id(invocable))
        return entry is not None and entry.ref() is invocable

    def attach(self, invocable: F, cleanup: Cleanup) -> F:
        """Run ``cleanup`` once ``invocable`` is reclaimed.

        Args:
            invocable: A function classified ``UNIQUE``.
            cleanup: Nullary callable. It must not reference ``invocable``.

        Returns:
            ``invocable`` itself, unchanged.

        Raises:
            NotInvocableError: ``cleanup`` is not callable.
            ClassificationMismatchError: ``invocable`` may be shared.
            AlreadyManagedError: ``invocable`` already has a cleanup.
        """
        if not callable(cleanup):
            raise NotInvocableError(f"cleanup must be callable, got {type(cleanup).__name__}")
        label = describe(invocable)
        if classify(invocable) is not Identity.UNIQUE:
            raise ClassificationMismatchError(
                f"{label} may be shared across bindings; refusing to track it by identity",
                recovery_hint="use wrap() or construct() for functions without captured state",
            )
        if invocable in _claimed:
            raise AlreadyManagedError(
                f"{label} already has a cleanup attached",
                recovery_hint="wrap() the function to attach another cleanup",
            )
        warn_if_retained(cleanup, invocable, label)
        ident = id(invocable)
        trigger = CleanupTrigger(cleanup, label)
        finalizer = watch(invocable, self.reclaim, ident)
        self._entries[ident] = _Entry(weakref.ref(invocable), trigger, finalizer)
        _claimed.add(invocable)
        log.debug(f"tracking {label}", component="attach")
        return invocable

    def reclaim(self, ident: int) -> None:
        """Handle the reclaim notification for ``ident``.

        Unknown identities are ignored, which makes repeated notifications
        harmless.
        """
        entry = self._entries.pop(ident, None)
        if entry is None:
            log.trace(f"no entry for {ident:#x}", component="reclaim")
            return
        entry.trigger()


_default_registry = IdentityRegistry()


def default_registry() -> IdentityRegistry:
    return _default_registry


def attach(invocable: F, cleanup: Cleanup) -> F:
    """Attach ``cleanup`` to ``invocable`` in the process-wide registry."""
    return _default_registry.attach(invocable, cleanup)


def is_attached(invocable: object) -> bool:
    """Return True when any registry in this process tracks ``invocable``."""
    return invocable in _claimed
