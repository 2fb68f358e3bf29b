"""Process elements: tasks and triggers of a business process.

Every element follows the same contract:
- `from_values` / `to_obj` for the definition-level (serialized) fields
- `init_state` / `do` / `next_tasks` for execution against a process instance
- `process_data_fields` / `process_data` for exposing output to other elements

Execution is driven from outside (see `runner`); elements never block.
"""

from appbuilder_process.process.approval import ApprovalTask
from appbuilder_process.process.data import DataFieldRef, DataKey, parse_data_key
from appbuilder_process.process.definition import Connection, ProcessDefinition
from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.end import EndTask
from appbuilder_process.process.instance import (
    InstanceStatus,
    ProcessInstance,
    TaskStatus,
    merge_defaults,
)
from appbuilder_process.process.lifecycle import LifecycleTrigger
from appbuilder_process.process.registry import TASK_TYPES, element_class_for, element_from_values
from appbuilder_process.process.runner import ProcessRunner, RunResult
from appbuilder_process.process.schema import FieldSpec, TaskCategory, TaskDefinition, TaskType
from appbuilder_process.process.store import InstanceStore
from appbuilder_process.process.trigger import ProcessTrigger

__all__ = [
    "TASK_TYPES",
    "ApprovalTask",
    "Connection",
    "DataFieldRef",
    "DataKey",
    "EndTask",
    "FieldSpec",
    "InstanceStatus",
    "InstanceStore",
    "LifecycleTrigger",
    "ProcessDefinition",
    "ProcessElement",
    "ProcessInstance",
    "ProcessRunner",
    "ProcessTrigger",
    "RunResult",
    "TaskCategory",
    "TaskDefinition",
    "TaskStatus",
    "TaskType",
    "element_class_for",
    "element_from_values",
    "merge_defaults",
    "parse_data_key",
]
