"""User approval task."""

from __future__ import annotations

from typing import Any

from appbuilder_process.process.data import DataFieldRef, parse_data_key
from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.instance import ProcessInstance, TaskStatus
from appbuilder_process.process.schema import FieldSpec, TaskDefinition, TaskType


class ApprovalTask(ProcessElement):
    """Suspends the process until a person answers the approval form.

    `who` and `toUsers` describe the designated approvers; the response is
    recorded out-of-band through `record_response`, after which `do` reports
    completion.
    """

    definition = TaskDefinition(
        key="Approval",
        icon="check-circle",
        category=None,
        fields=(
            FieldSpec("who", "who"),
            FieldSpec("toUsers", "to_users"),
            FieldSpec("userFormID", "user_form_id"),
            FieldSpec("userFormResponse", "user_form_response"),
        ),
    )
    type_tag = TaskType.APPROVAL

    who: Any
    to_users: Any
    user_form_id: str | None
    user_form_response: Any

    def default_state(self) -> dict[str, Any]:
        return {**super().default_state(), "userFormID": None, "userFormResponse": None}

    def do(self, instance: ProcessInstance) -> bool:
        state = self.my_state(instance)
        if state.get("userFormResponse") is None:
            if state.get("status") != TaskStatus.PROCESSING.value:
                self.state_processing(instance)
                self.log(instance, "Waiting for approval response")
            return False

        self.state_completed(instance)
        self.log(instance, "Approval response received")
        return True

    def record_response(
        self, instance: ProcessInstance, response: Any, form_id: str | None = None
    ) -> None:
        values: dict[str, Any] = {"userFormResponse": response}
        if form_id is not None:
            values["userFormID"] = form_id
        self.state_update(instance, values)

    def process_data_fields(self) -> list[DataFieldRef] | None:
        return [
            DataFieldRef(
                key=f"{self.id}.userFormResponse",
                label=f"{self.label}->Response",
            )
        ]

    def process_data(self, instance: ProcessInstance, key: str) -> Any:
        data_key = parse_data_key(key)
        if data_key.element_id != self.id or data_key.field_ref is None:
            return None
        return self.my_state(instance).get(data_key.field_ref)
