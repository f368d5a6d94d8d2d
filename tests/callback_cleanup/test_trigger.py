import pytest

from callback_cleanup import settings
from callback_cleanup.trigger import CleanupTrigger, retains, watch


class Target:
    def method(self) -> None:
        return None


def test_trigger_runs_cleanup_once() -> None:
    calls: list[str] = []
    trigger = CleanupTrigger(lambda: calls.append("x"), "sample")

    assert trigger.fired is False
    trigger()
    trigger()
    trigger()

    assert calls == ["x"]
    assert trigger.fired is True


def test_trigger_propagates_failure_and_never_retries() -> None:
    attempts: list[int] = []

    def failing() -> None:
        attempts.append(1)
        raise RuntimeError("cleanup broke")

    trigger = CleanupTrigger(failing, "sample")

    with pytest.raises(RuntimeError, match="cleanup broke"):
        trigger()
    trigger()

    assert attempts == [1]


def test_trigger_repr_reports_state() -> None:
    trigger = CleanupTrigger(lambda: None, "sample")
    assert repr(trigger) == "<CleanupTrigger sample live>"
    trigger()
    assert repr(trigger) == "<CleanupTrigger sample finalized>"


def test_watch_fires_when_target_is_reclaimed() -> None:
    calls: list[str] = []
    target = Target()
    finalizer = watch(target, calls.append, "gone")

    assert finalizer.alive is True
    del target

    assert calls == ["gone"]
    assert finalizer.alive is False


def test_watch_applies_run_at_exit_setting() -> None:
    target = Target()
    assert watch(target, lambda: None).atexit is True

    settings.configure(run_at_exit=False)
    finalizer = watch(target, lambda: None)

    assert finalizer.atexit is False


def test_retains_detects_closure_reference() -> None:
    target = Target()

    def cleanup() -> Target:
        return target

    assert retains(cleanup, target) is True
    assert retains(lambda: None, target) is False


def test_retains_detects_bound_method_of_target() -> None:
    target = Target()
    assert retains(target.method, target) is True
    assert retains(Target().method, target) is False
