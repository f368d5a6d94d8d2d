"""Runtime settings for callback-cleanup.

Settings come from ``CALLBACK_CLEANUP_*`` environment variables, are
validated with a Pydantic model and cached for the life of the process.

Example:
    >>> from_env({"CALLBACK_CLEANUP_AT_EXIT": "no"}).run_at_exit
    False
    >>> from_env({"CALLBACK_CLEANUP_LOG_LEVEL": "WARN"}).log_level
    'warning'
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidSettingError

LOG_LEVEL_VALUES = ("trace", "debug", "info", "success", "warning", "error")
LogLevelName = Literal["trace", "debug", "info", "success", "warning", "error"]

ENV_LOG_LEVEL = "CALLBACK_CLEANUP_LOG_LEVEL"
ENV_NO_COLOR = "CALLBACK_CLEANUP_NO_COLOR"
ENV_AT_EXIT = "CALLBACK_CLEANUP_AT_EXIT"

_ENV_FIELDS: tuple[tuple[str, str], ...] = (
    ("log_level", ENV_LOG_LEVEL),
    ("no_color", ENV_NO_COLOR),
    ("run_at_exit", ENV_AT_EXIT),
)
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

_current: CleanupSettings | None = None


class CleanupSettings(BaseModel):
    """Process-wide behavior switches.

    Attributes:
        log_level: Minimum level emitted by ``callback_cleanup.log``.
        no_color: Disable styled terminal output.
        run_at_exit: Run cleanups that are still pending when the
            interpreter exits. When false they are dropped silently.

    Example:
        >>> CleanupSettings()
        CleanupSettings(log_level='info', no_color=False, run_at_exit=True)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    log_level: LogLevelName = "info"
    no_color: bool = False
    run_at_exit: bool = True

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if value is None:
            return "info"
        if not isinstance(value, str):
            return value
        normalized = value.strip().lower()
        if normalized == "warn":
            return "warning"
        if normalized not in LOG_LEVEL_VALUES:
            return "info"
        return normalized

    @field_validator("no_color", "run_at_exit", mode="before")
    @classmethod
    def parse_bool_words(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        normalized = value.strip().lower()
        if normalized in _TRUE_VALUES:
            return True
        if normalized in _FALSE_VALUES:
            return False
        raise ValueError(f"expected one of {'|'.join(sorted(_TRUE_VALUES | _FALSE_VALUES))}")


def _validate(raw: Mapping[str, object], *, source: str) -> CleanupSettings:
    try:
        return CleanupSettings.model_validate(dict(raw))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        raise InvalidSettingError(
            f"invalid settings from {source}: {problems}",
            recovery_hint=f"check {', '.join(env for _, env in _ENV_FIELDS)}",
        ) from exc


def from_env(environ: Mapping[str, str] | None = None) -> CleanupSettings:
    """Build settings from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        Validated ``CleanupSettings``. Unset or blank variables keep their
        built-in defaults.

    Raises:
        InvalidSettingError: A boolean variable holds an unrecognized word.
    """
    env = os.environ if environ is None else environ
    raw: dict[str, object] = {}
    for field, env_var in _ENV_FIELDS:
        value = env.get(env_var)
        if value is None or not value.strip():
            continue
        raw[field] = value
    if "no_color" not in raw and env.get("NO_COLOR"):
        raw["no_color"] = True
    return _validate(raw, source="environment")


def current() -> CleanupSettings:
    """Return the active settings, loading them from the environment once."""
    global _current
    if _current is None:
        _current = from_env()
    return _current


def configure(**overrides: object) -> CleanupSettings:
    """Replace selected settings for the rest of the process.

    Example:
        >>> configure(run_at_exit=False).run_at_exit
        False
        >>> reset()
    """
    global _current
    merged = {**current().model_dump(), **overrides}
    _current = _validate(merged, source="configure()")
    return _current


def reset() -> None:
    """Drop cached settings so the next ``current()`` re-reads the environment."""
    global _current
    _current = None
