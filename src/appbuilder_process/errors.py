"""Error taxonomy and the error reporting collaborator.

Definition errors (a corrupted process definition) are raised to the caller.
Unresolvable references found while resolving process data are never raised:
they are handed to an `ErrorReporter` and the lookup resolves to `None`.
"""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class ProcessError(Exception):
    """Base class for errors raised by the process core."""


class UnknownTaskTypeError(ProcessError):
    """Raised when a serialized element carries an unknown type tag."""

    def __init__(self, type_tag: object) -> None:
        super().__init__(f"Unknown process element type: {type_tag!r}")
        self.type_tag = type_tag


class UnknownFieldKindError(ProcessError):
    """Raised when a serialized data field carries an unknown kind."""

    def __init__(self, kind: object) -> None:
        super().__init__(f"Unknown data field kind: {kind!r}")
        self.kind = kind


class InvalidProcessDefinitionError(ProcessError):
    pass


class TaskNotFoundError(ProcessError, LookupError):
    pass


class ProcessRunawayError(ProcessError):
    """Raised when a run executes more tasks than the configured step limit."""

    def __init__(self, max_steps: int) -> None:
        super().__init__(f"Process run exceeded {max_steps} steps")
        self.max_steps = max_steps


class UnresolvedReferenceError(ProcessError, LookupError):
    """A referenced object, field or accessor could not be found.

    Instances are reported, not raised.
    """

    def __init__(self, message: str, *, element_id: str | None, reference: str | None) -> None:
        super().__init__(message)
        self.element_id = element_id
        self.reference = reference


class ErrorReporter(Protocol):
    """Out-of-band sink for runtime errors. Must never raise."""

    def report(self, error: Exception) -> None: ...


class LoggingErrorReporter:
    """Report errors through the standard logging module."""

    def report(self, error: Exception) -> None:
        logger.error(
            str(error),
            extra={
                "error_type": type(error).__name__,
                "element_id": getattr(error, "element_id", None),
                "reference": getattr(error, "reference", None),
            },
        )


class CollectingErrorReporter(LoggingErrorReporter):
    """Log errors and keep them for later inspection."""

    def __init__(self) -> None:
        self.errors: list[Exception] = []

    def report(self, error: Exception) -> None:
        self.errors.append(error)
        super().report(error)
