"""Run-level failures surfaced to callers of the conversion pipeline."""

from __future__ import annotations

EMPTY_INPUT_MESSAGE = (
    'No valid lines: expected "YYYY-MM-DD amount" separated by a space, comma or semicolon'
)
RESOLVER_FAILURE_MESSAGE = "Could not fetch NBRB rates"
SESSION_BUSY_MESSAGE = "A conversion is already in progress"


class ConversionError(RuntimeError):
    """Base class for failures that abort a whole processing run."""

    default_message = "Conversion failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyInputError(ConversionError):
    """Parsing produced no records."""

    default_message = EMPTY_INPUT_MESSAGE


class ResolverFailure(ConversionError):
    """The batch of rate lookups could not be orchestrated."""

    default_message = RESOLVER_FAILURE_MESSAGE


class SessionBusyError(ConversionError):
    """A run was requested while the previous one is still in flight."""

    default_message = SESSION_BUSY_MESSAGE


__all__ = [
    "EMPTY_INPUT_MESSAGE",
    "RESOLVER_FAILURE_MESSAGE",
    "SESSION_BUSY_MESSAGE",
    "ConversionError",
    "EmptyInputError",
    "ResolverFailure",
    "SessionBusyError",
]
