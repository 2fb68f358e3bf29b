"""Type tag -> element class lookup."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from appbuilder_process.application import Application
from appbuilder_process.errors import UnknownTaskTypeError
from appbuilder_process.process.approval import ApprovalTask
from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.end import EndTask
from appbuilder_process.process.lifecycle import LifecycleTrigger
from appbuilder_process.process.schema import TaskType

if TYPE_CHECKING:
    from appbuilder_process.process.definition import ProcessDefinition

TASK_TYPES: dict[TaskType, type[ProcessElement]] = {
    TaskType.END: EndTask,
    TaskType.APPROVAL: ApprovalTask,
    TaskType.TRIGGER_LIFECYCLE: LifecycleTrigger,
}


def element_class_for(type_tag: object) -> type[ProcessElement]:
    """Resolve a serialized `type` tag. Unknown tags are definition errors."""

    if not isinstance(type_tag, str):
        raise UnknownTaskTypeError(type_tag)
    try:
        return TASK_TYPES[TaskType(type_tag)]
    except ValueError:
        raise UnknownTaskTypeError(type_tag) from None


def element_from_values(
    values: Mapping[str, Any],
    *,
    process: ProcessDefinition | None = None,
    application: Application | None = None,
) -> ProcessElement:
    cls = element_class_for(values.get("type"))
    return cls(values, process=process, application=application)
