"""Runtime state of a running process."""

from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class InstanceStatus(str, Enum):
    CREATED = "created"
    RUNNING = "running"
    WAITING = "waiting"
    COMPLETED = "completed"
    FAILED = "failed"


class TaskStatus(str, Enum):
    NO_STATUS = "no_status"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def merge_defaults(
    defaults: Mapping[str, Any], overrides: Mapping[str, Any] | None = None
) -> dict[str, Any]:
    """Return `overrides` merged over `defaults`.

    Only keys present in `defaults` are taken from `overrides`, so the result
    always has exactly the default key set.
    """

    merged = dict(defaults)
    for key, value in (overrides or {}).items():
        if key in merged:
            merged[key] = value
    return merged


class ProcessInstance(BaseModel):
    """One execution of a process definition.

    `task_state` holds one slot per element id. Only the owning element
    writes its slot; everyone else reads copies via `state_for`.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    process_id: str
    status: InstanceStatus = Field(default=InstanceStatus.CREATED)
    context: dict[str, Any] = Field(default_factory=dict)
    task_state: dict[str, dict[str, Any]] = Field(default_factory=dict)
    active_tasks: list[str] = Field(default_factory=list)
    log: list[dict[str, Any]] = Field(default_factory=list)
    error: str | None = None

    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    def has_state(self, task_id: str) -> bool:
        return task_id in self.task_state

    def state_for(self, task_id: str) -> dict[str, Any]:
        return copy.deepcopy(self.task_state.get(task_id, {}))

    def write_state(self, task_id: str, values: Mapping[str, Any]) -> None:
        self.task_state.setdefault(task_id, {}).update(values)

    def add_log(self, task_id: str | None, message: str) -> None:
        self.log.append(
            {"timestamp": _utc_now().isoformat(), "task_id": task_id, "message": message}
        )

    def activate(self, task_id: str) -> None:
        if task_id not in self.active_tasks:
            self.active_tasks.append(task_id)

    @property
    def is_finished(self) -> bool:
        return self.status in (InstanceStatus.COMPLETED, InstanceStatus.FAILED)
