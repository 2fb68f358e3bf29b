"""Base contract shared by every process task and trigger."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from appbuilder_process.application import Application
from appbuilder_process.process.data import DataFieldRef
from appbuilder_process.process.instance import ProcessInstance, TaskStatus, merge_defaults
from appbuilder_process.process.schema import TaskCategory, TaskDefinition, TaskType

if TYPE_CHECKING:
    from appbuilder_process.objects import DataObject
    from appbuilder_process.process.definition import ProcessDefinition

logger = logging.getLogger(__name__)


class ProcessElement:
    """A node of a process diagram.

    Definition-level values (`id`, `name`, `type`, `label` and the fields
    declared by `definition`) live on the element. Runtime values live in the
    element's state slot on a `ProcessInstance`, keyed by the element id.

    Subclasses customise behaviour by extending `definition`, extending
    `default_state()` and overriding `do`, `next_tasks` and the data hooks.
    """

    definition: ClassVar[TaskDefinition] = TaskDefinition(
        key="Task", icon="square", category=TaskCategory.TASK
    )
    type_tag: ClassVar[TaskType | None] = None

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        *,
        process: ProcessDefinition | None = None,
        application: Application | None = None,
    ) -> None:
        self.process = process
        if application is None:
            application = process.application if process is not None else Application()
        self.application = application

        self.id: str = ""
        self.name: str = ""
        self.type: str = ""
        self.label: str = ""
        self.from_values(attributes or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r}, label={self.label!r})"

    @property
    def key(self) -> str:
        return self.definition.key

    @property
    def icon(self) -> str:
        return self.definition.icon

    @property
    def category(self) -> TaskCategory | None:
        return self.definition.category

    def from_values(self, attributes: Mapping[str, Any]) -> None:
        """Hydrate the element from a flat attribute bag.

        Absent declared fields take their schema default; nothing is validated
        here.
        """

        self.id = attributes.get("id") or str(uuid.uuid4())
        self.name = attributes.get("name") or ""
        default_type = self.type_tag.value if self.type_tag is not None else ""
        self.type = attributes.get("type") or default_type
        self.label = attributes.get("label") or ""

        for spec in self.definition.fields:
            value = attributes[spec.name] if spec.name in attributes else spec.fresh_default()
            setattr(self, spec.attr, value)

    def to_obj(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "label": self.label,
        }
        for spec in self.definition.fields:
            data[spec.name] = getattr(self, spec.attr)
        return data

    def default_state(self) -> dict[str, Any]:
        """Default shape of this element's state slot. Subclasses extend it."""

        return {"status": TaskStatus.NO_STATUS.value}

    def init_state(
        self, instance: ProcessInstance, overrides: Mapping[str, Any] | None = None
    ) -> None:
        """Create this element's state slot the first time it is reached.

        On an existing slot only the missing default keys are filled in; keys
        already present keep their values, so the engine may call this on
        every visit.
        """

        initial = merge_defaults(self.default_state(), overrides)
        if instance.has_state(self.id):
            current = instance.state_for(self.id)
            missing = {k: v for k, v in initial.items() if k not in current}
            if missing:
                instance.write_state(self.id, missing)
            return
        instance.write_state(self.id, initial)

    def my_state(self, instance: ProcessInstance) -> dict[str, Any]:
        return instance.state_for(self.id)

    def state_update(self, instance: ProcessInstance, values: Mapping[str, Any]) -> None:
        self.init_state(instance)
        instance.write_state(self.id, values)

    def state_processing(self, instance: ProcessInstance) -> None:
        self.state_update(instance, {"status": TaskStatus.PROCESSING.value})

    def state_completed(self, instance: ProcessInstance) -> None:
        self.state_update(instance, {"status": TaskStatus.COMPLETED.value})

    def state_failed(self, instance: ProcessInstance, reason: str) -> None:
        self.state_update(instance, {"status": TaskStatus.FAILED.value})
        self.log(instance, f"Task failed: {reason}")

    def log(self, instance: ProcessInstance, message: str) -> None:
        instance.add_log(self.id, message)
        logger.info(
            message,
            extra={"instance_id": instance.id, "task_id": self.id, "task_key": self.key},
        )

    def do(self, instance: ProcessInstance) -> bool:
        """Perform this element's action.

        Returns True when the element is complete and the process may advance,
        False when it is suspended until a later external event.
        """

        self.state_completed(instance)
        return True

    def next_tasks(self, instance: ProcessInstance) -> list[ProcessElement]:
        """Elements to run once this one completes, in connection order."""

        if self.process is None:
            return []
        return self.process.next_elements(self)

    def process_data_fields(self) -> list[DataFieldRef] | None:
        """Values this element can provide to other elements.

        None means the element provides nothing (or cannot enumerate it).
        """

        return None

    def process_data(self, instance: ProcessInstance, key: str) -> Any:
        """Current value for `key`, or None when the key is not ours or unset."""

        return None

    def process_data_objects(self) -> list[DataObject] | None:
        return None
