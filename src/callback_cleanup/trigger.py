"""Finalize-trigger contract shared by both wrapper strategies."""

from __future__ import annotations

import weakref
from collections.abc import Callable
from typing import Any

from . import log, settings

Cleanup = Callable[[], object]


class CleanupTrigger:
    """Own a cleanup and run it at most once.

    The trigger must never reference the object whose reclamation it
    announces, otherwise that object stays reachable from the finalizer
    registry forever.
    """

    __slots__ = ("_cleanup", "label", "fired")

    def __init__(self, cleanup: Cleanup, label: str) -> None:
        self._cleanup: Cleanup | None = cleanup
        self.label = label
        self.fired = False

    def __call__(self) -> None:
        if self.fired:
            log.trace(f"duplicate notification ignored for {self.label}", component="reclaim")
            return
        # Marked before running so a raising cleanup is not retried.
        self.fired = True
        cleanup, self._cleanup = self._cleanup, None
        log.debug(f"running cleanup for {self.label}", component="reclaim")
        cleanup()

    def __repr__(self) -> str:
        state = "finalized" if self.fired else "live"
        return f"<CleanupTrigger {self.label} {state}>"


def watch(target: object, callback: Callable[..., Any], *args: Any) -> weakref.finalize:
    """Call ``callback(*args)`` once ``target`` is reclaimed.

    Pending callbacks run at interpreter exit only when the
    ``run_at_exit`` setting is on.
    """
    finalizer = weakref.finalize(target, callback, *args)
    finalizer.atexit = settings.current().run_at_exit
    return finalizer


def retains(cleanup: object, target: object) -> bool:
    """Return True when ``cleanup`` directly holds a strong reference to ``target``.

    Only closure cells and a bound ``__self__`` are inspected; deeper
    reference chains are not followed.
    """
    if getattr(cleanup, "__self__", None) is target:
        return True
    for cell in getattr(cleanup, "__closure__", None) or ():
        try:
            contents = cell.cell_contents
        except ValueError:
            continue
        if contents is target:
            return True
    return False


def warn_if_retained(cleanup: object, target: object, label: str) -> None:
    if retains(cleanup, target):
        log.warning(
            f"cleanup for {label} references its own callback; it cannot run before exit",
            component="construct",
        )
