"""Base for elements started by an external event."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.instance import ProcessInstance
from appbuilder_process.process.schema import FieldSpec, TaskCategory, TaskDefinition


class ProcessTrigger(ProcessElement):
    """A start element activated by an external event rather than a predecessor.

    The engine matches incoming events on `trigger_key` and hands the event
    payload to `trigger`, which stores it in the state slot as `data`.
    """

    definition = TaskDefinition(
        key="Trigger",
        icon="bolt",
        category=TaskCategory.START,
        fields=(FieldSpec("triggerKey", "trigger_key"),),
    )

    trigger_key: str | None

    @property
    def effective_trigger_key(self) -> str | None:
        return self.trigger_key

    def matches(self, trigger_key: str) -> bool:
        key = self.effective_trigger_key
        return bool(key) and key == trigger_key

    def default_state(self) -> dict[str, Any]:
        return {**super().default_state(), "triggered": False, "data": None}

    def trigger(self, instance: ProcessInstance, data: Mapping[str, Any]) -> None:
        self.state_update(instance, {"triggered": True, "data": dict(data)})
        self.log(instance, "Trigger fired")

    def do(self, instance: ProcessInstance) -> bool:
        if not self.my_state(instance).get("triggered"):
            return False
        self.state_completed(instance)
        return True
