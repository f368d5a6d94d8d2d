"""Construction failure contracts.

Constructors raise CallbackCleanupError subclasses for programmer errors that
are detectable up front. Failures raised by a cleanup itself are never
wrapped: they propagate to whatever context triggered reclamation.
"""

from __future__ import annotations

from typing import Literal

CallbackCleanupErrorCode = Literal[
    "classification_mismatch",
    "already_managed",
    "not_invocable",
    "invalid_setting",
]


class CallbackCleanupError(Exception):
    """Expected construction failure.

    Use ``raise CallbackCleanupError(...) from exc`` to chain a causing
    exception; it is available as ``__cause__``.
    """

    def __init__(
        self,
        code: CallbackCleanupErrorCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.recovery_hint = recovery_hint


class ClassificationMismatchError(CallbackCleanupError):
    """Identity tracking was requested for a value that may be shared."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("classification_mismatch", message, recovery_hint=recovery_hint)


class AlreadyManagedError(CallbackCleanupError):
    """The value already has a cleanup attached to its identity."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("already_managed", message, recovery_hint=recovery_hint)


class NotInvocableError(CallbackCleanupError):
    """A callback or cleanup argument is not callable."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("not_invocable", message, recovery_hint=recovery_hint)


class InvalidSettingError(CallbackCleanupError):
    """A configuration value could not be parsed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("invalid_setting", message, recovery_hint=recovery_hint)
