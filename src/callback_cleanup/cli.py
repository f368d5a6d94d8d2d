"""Command-line diagnostics for callback-cleanup."""

from __future__ import annotations

import gc
import importlib
from collections.abc import Callable
from typing import Annotated

import typer

from . import __version__, settings
from . import log as cc_log
from .boxed import wrap
from .classify import classify
from .dispatch import strategy_for
from .errors import NotInvocableError
from .registry import attach

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Inspect and self-check GC-triggered callback cleanups.",
)


def _validate_log_level(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized == "warn":
        normalized = "warning"
    if normalized not in settings.LOG_LEVEL_VALUES:
        raise typer.BadParameter(f"expected one of {', '.join(settings.LOG_LEVEL_VALUES)}")
    return normalized


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Minimum log level (trace|debug|info|success|warning|error).",
            callback=_validate_log_level,
        ),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable styled output.")] = False,
) -> None:
    if log_level is not None:
        cc_log.set_level(log_level)
    if no_color:
        cc_log.set_no_color(True)


def resolve_target(target: str) -> object:
    """Import ``package.module:attr.path`` and return the named object."""
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"expected MODULE:ATTR, got {target!r}")
    value: object = importlib.import_module(module_name)
    for part in attr_path.split("."):
        value = getattr(value, part)
    return value


@app.command("inspect")
def inspect_cmd(
    target: Annotated[str, typer.Argument(help="Callable to classify, as MODULE:ATTR.")],
) -> None:
    """Show how a callable would be managed."""
    try:
        value = resolve_target(target)
    except (ImportError, AttributeError, ValueError) as exc:
        cc_log.error(f"cannot resolve {target}: {exc}")
        raise typer.Exit(code=1) from exc
    try:
        identity = classify(value)
    except NotInvocableError as exc:
        cc_log.error(f"{target}: {exc}")
        raise typer.Exit(code=1) from exc
    cc_log.info(f"{target}: {identity.value}, construct() would {strategy_for(value)}")


def _closure_sample() -> Callable[[], dict]:
    state: dict = {}

    def sample() -> dict:
        return state

    return sample


def _run_sample(build: Callable[[Callable[[], object]], Callable[..., object]]) -> tuple[int, int]:
    fired: list[int] = []
    managed = build(lambda: fired.append(1))
    managed()
    gc.collect()
    while_live = len(fired)
    del managed
    gc.collect()
    return while_live, len(fired)


@app.command("selfcheck")
def selfcheck_cmd() -> None:
    """Build one callback per strategy, drop it and verify its cleanup ran once."""
    samples = {
        "attach": lambda cleanup: attach(_closure_sample(), cleanup),
        "wrap": lambda cleanup: wrap(_closure_sample(), cleanup),
    }
    failed = False
    for name, build in samples.items():
        while_live, after_drop = _run_sample(build)
        if while_live == 0 and after_drop == 1:
            cc_log.success(f"{name}: cleanup ran once after reclamation")
            continue
        failed = True
        cc_log.error(f"{name}: cleanup ran {while_live} time(s) while live, {after_drop} after drop")
    if failed:
        raise typer.Exit(code=1)


@app.command("version")
def version_cmd() -> None:
    """Print the installed version."""
    cc_log.info(__version__)


if __name__ == "__main__":
    app()
