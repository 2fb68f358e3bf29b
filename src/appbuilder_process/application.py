"""Application-wide collaborators shared by every process element."""

from __future__ import annotations

from dataclasses import dataclass, field

from appbuilder_process.errors import ErrorReporter, LoggingErrorReporter
from appbuilder_process.objects.registry import DataObject, ObjectRegistry


@dataclass(slots=True)
class Application:
    """Bundle of the object registry and the error reporter.

    Elements reach data objects and report unresolvable references through
    this object instead of importing global state.
    """

    objects: ObjectRegistry = field(default_factory=ObjectRegistry)
    errors: ErrorReporter = field(default_factory=LoggingErrorReporter)

    def object_by_id(self, object_id: str | None) -> DataObject | None:
        if not object_id:
            return None
        return self.objects.object_by_id(object_id)

    def error(self, error: Exception) -> None:
        self.errors.report(error)
