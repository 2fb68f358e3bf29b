"""Trigger fired by a data object lifecycle event (record added, updated, ...)."""

from __future__ import annotations

from typing import Any

from appbuilder_process.errors import UnresolvedReferenceError
from appbuilder_process.objects import DataObject
from appbuilder_process.process.data import DataFieldRef, parse_data_key
from appbuilder_process.process.instance import ProcessInstance
from appbuilder_process.process.schema import FieldSpec, TaskCategory, TaskType
from appbuilder_process.process.trigger import ProcessTrigger


class LifecycleTrigger(ProcessTrigger):
    """Starts a process when a record of `object_id` goes through `lifecycle_key`.

    The captured record is exposed to downstream elements as
    `<trigger id>.<field id>[.<accessor>]` plus `<trigger id>.uuid`.
    """

    definition = ProcessTrigger.definition.extend(
        key="TriggerLifecycle",
        icon="key",
        category=TaskCategory.START,
        fields=(
            FieldSpec("objectID", "object_id"),
            FieldSpec("lifecycleKey", "lifecycle_key"),
        ),
    )
    type_tag = TaskType.TRIGGER_LIFECYCLE

    object_id: str | None
    lifecycle_key: str | None

    @property
    def effective_trigger_key(self) -> str | None:
        if self.trigger_key:
            return self.trigger_key
        if self.object_id and self.lifecycle_key:
            return f"{self.object_id}.{self.lifecycle_key}"
        return None

    def _report_unresolved(self, message: str, reference: str | None) -> None:
        self.application.error(
            UnresolvedReferenceError(
                f"LifecycleTrigger[{self.id}]: {message}",
                element_id=self.id,
                reference=reference,
            )
        )

    def _resolve_object(self) -> DataObject | None:
        obj = self.application.object_by_id(self.object_id)
        if obj is None:
            self._report_unresolved(
                f"could not find referenced object by ID [{self.object_id}]", self.object_id
            )
        return obj

    def process_data_fields(self) -> list[DataFieldRef] | None:
        if not self.object_id:
            return None
        obj = self._resolve_object()
        if obj is None:
            return None

        fields = [
            DataFieldRef(
                key=f"{self.id}.{field.id}",
                label=f"{self.label}->{obj.label}->{field.label}",
                field=field,
                data_object=obj,
            )
            for field in obj.fields
        ]
        fields.append(
            DataFieldRef(
                key=f"{self.id}.uuid",
                label=f"{self.label}->{obj.label}",
                field=None,
                data_object=obj,
            )
        )
        return fields

    def process_data(self, instance: ProcessInstance, key: str) -> Any:
        data_key = parse_data_key(key)
        if data_key.element_id != self.id or data_key.field_ref is None:
            return None

        data = self.my_state(instance).get("data")
        if data is None:
            return None

        if data_key.field_ref == "uuid":
            return data.get("uuid")

        obj = self._resolve_object()
        if obj is None:
            return None

        field = obj.field_by_id(data_key.field_ref)
        if field is None:
            self._report_unresolved(
                f"could not find field [{data_key.field_ref}] on object [{obj.id}]",
                data_key.field_ref,
            )
            return None

        if data_key.accessor is None:
            return data.get(field.column_name)

        derived = field.derive(data, data_key.accessor)
        if not derived.found:
            self._report_unresolved(
                f"field [{field.id}] has no accessor [{data_key.accessor}]", str(data_key)
            )
            return None
        return derived.value

    def process_data_objects(self) -> list[DataObject] | None:
        if not self.object_id:
            return None
        obj = self._resolve_object()
        return [obj] if obj is not None else None
