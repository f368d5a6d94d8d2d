"""Leveled terminal logging for callback-cleanup.

Messages carry an optional bracketed component prefix (``[attach]``,
``[reclaim]``) so construction and reclamation can be told apart when both
are enabled.
"""

from __future__ import annotations

import sys
from enum import IntEnum

from rich.console import Console
from rich.text import Text

from . import settings


class LogLevel(IntEnum):
    TRACE = 10
    DEBUG = 20
    INFO = 30
    SUCCESS = 35
    WARNING = 40
    ERROR = 50


_LEVEL_BY_NAME = {level.name.lower(): level for level in LogLevel}
_STYLE_BY_LEVEL = {
    LogLevel.TRACE: "dim",
    LogLevel.DEBUG: "cyan",
    LogLevel.SUCCESS: "green",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "bold red",
}


def configured_level() -> LogLevel:
    return _LEVEL_BY_NAME[settings.current().log_level]


def set_level(value: str | None) -> None:
    """Set the active log level; unknown names fall back to ``info``."""
    settings.configure(log_level=value)


def set_no_color(value: bool) -> None:
    settings.configure(no_color=value)


def is_enabled(level: LogLevel) -> bool:
    return level >= configured_level()


def _console(*, stderr: bool) -> Console:
    return Console(
        file=sys.stderr if stderr else sys.stdout,
        soft_wrap=True,
        highlight=False,
        no_color=settings.current().no_color,
    )


def emit(
    level: LogLevel,
    message: str,
    *,
    component: str | None = None,
    style: str | None = None,
    stderr: bool | None = None,
) -> None:
    if not is_enabled(level):
        return
    if component:
        message = f"[{component}] {message}"
    target_stderr = stderr if stderr is not None else level >= LogLevel.WARNING
    text = Text(message, style=style or _STYLE_BY_LEVEL.get(level, ""))
    _console(stderr=target_stderr).print(text)


def trace(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.TRACE, message, component=component)


def debug(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.DEBUG, message, component=component)


def info(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.INFO, message, component=component)


def success(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.SUCCESS, message, component=component)


def warning(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.WARNING, message, component=component)


def error(message: str, *, component: str | None = None) -> None:
    emit(LogLevel.ERROR, message, component=component)
