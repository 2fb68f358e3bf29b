"""Static descriptors of process element types."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskType(str, Enum):
    """Type tags persisted in the `type` key of a serialized element."""

    END = "process.end"
    APPROVAL = "process.task.user.approval"
    TRIGGER_LIFECYCLE = "process.trigger.lifecycle"


class TaskCategory(str, Enum):
    """Where an element may be offered in a diagram. Advisory only."""

    START = "start"
    GATEWAY = "gateway"
    TASK = "task"
    END = "end"


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """One definition-level field an element persists on itself.

    `name` is the serialized key, `attr` the Python attribute it hydrates.
    """

    name: str
    attr: str
    default: Any = None

    def fresh_default(self) -> Any:
        return copy.deepcopy(self.default)


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    key: str
    icon: str
    category: TaskCategory | None = None
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def defaults(self) -> dict[str, Any]:
        return {spec.name: spec.fresh_default() for spec in self.fields}

    def extend(
        self,
        *,
        key: str,
        icon: str,
        category: TaskCategory | None,
        fields: tuple[FieldSpec, ...] = (),
    ) -> TaskDefinition:
        """Derive a definition that keeps this one's fields and appends `fields`."""

        return TaskDefinition(key=key, icon=icon, category=category, fields=self.fields + fields)
