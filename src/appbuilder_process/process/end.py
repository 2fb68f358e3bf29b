"""Terminal element of a process."""

from __future__ import annotations

from typing import Any

from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.instance import ProcessInstance
from appbuilder_process.process.schema import TaskCategory, TaskDefinition, TaskType


class EndTask(ProcessElement):
    """End event. Completing it completes the process; it has no successors."""

    definition = TaskDefinition(key="End", icon="stop", category=TaskCategory.END)
    type_tag = TaskType.END

    def default_state(self) -> dict[str, Any]:
        return {**super().default_state(), "triggered": False}

    def do(self, instance: ProcessInstance) -> bool:
        self.state_update(instance, {"triggered": True})
        self.state_completed(instance)
        self.log(instance, "End Event Reached")
        return True

    def next_tasks(self, instance: ProcessInstance) -> list[ProcessElement]:
        return []
