"""Unit tests for element type descriptors."""

from __future__ import annotations

from appbuilder_process.process.approval import ApprovalTask
from appbuilder_process.process.end import EndTask
from appbuilder_process.process.lifecycle import LifecycleTrigger
from appbuilder_process.process.schema import FieldSpec, TaskCategory, TaskDefinition


def test_field_defaults_are_not_shared() -> None:
    definition = TaskDefinition(key="K", icon="i", fields=(FieldSpec("items", "items", []),))

    first = definition.defaults()
    first["items"].append("x")

    assert definition.defaults() == {"items": []}


def test_extend_keeps_parent_fields_first() -> None:
    base = TaskDefinition(key="Base", icon="b", fields=(FieldSpec("a", "a"),))
    child = base.extend(
        key="Child", icon="c", category=TaskCategory.TASK, fields=(FieldSpec("b", "b"),)
    )

    assert child.field_names == ("a", "b")
    assert base.field_names == ("a",)


def test_core_variant_definitions() -> None:
    assert EndTask.definition.key == "End"
    assert EndTask.definition.category is TaskCategory.END
    assert EndTask.definition.fields == ()

    assert ApprovalTask.definition.key == "Approval"
    assert ApprovalTask.definition.category is None
    assert ApprovalTask.definition.field_names == (
        "who",
        "toUsers",
        "userFormID",
        "userFormResponse",
    )

    assert LifecycleTrigger.definition.key == "TriggerLifecycle"
    assert LifecycleTrigger.definition.icon == "key"
    assert LifecycleTrigger.definition.category is TaskCategory.START
    assert LifecycleTrigger.definition.field_names == ("triggerKey", "objectID", "lifecycleKey")
