"""Test configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from appbuilder_process.application import Application
from appbuilder_process.errors import CollectingErrorReporter
from appbuilder_process.objects import ObjectRegistry
from appbuilder_process.process.definition import ProcessDefinition


@pytest.fixture
def objects_json() -> list[dict[str, Any]]:
    """Provide a single `User` object with a string and an email field."""
    return [
        {
            "id": "obj-user",
            "label": "User",
            "fields": [
                {"id": "f1", "label": "Name", "columnName": "name"},
                {"id": "f2", "key": "email", "label": "Email", "columnName": "email"},
            ],
        }
    ]


@pytest.fixture
def errors() -> CollectingErrorReporter:
    return CollectingErrorReporter()


@pytest.fixture
def application(
    objects_json: list[dict[str, Any]], errors: CollectingErrorReporter
) -> Application:
    """Provide an application whose reported errors can be inspected."""
    return Application(objects=ObjectRegistry.from_json(objects_json), errors=errors)


@pytest.fixture
def process_json() -> dict[str, Any]:
    """Provide a trigger -> approval -> end process."""
    return {
        "id": "proc-1",
        "name": "New user approval",
        "elements": [
            {
                "id": "trigger-1",
                "name": "start",
                "type": "process.trigger.lifecycle",
                "label": "New user",
                "objectID": "obj-user",
                "lifecycleKey": "added",
            },
            {
                "id": "approve-1",
                "name": "approve",
                "type": "process.task.user.approval",
                "label": "Manager approval",
                "who": "role",
                "toUsers": {"useRole": 1, "role": ["managers"]},
            },
            {
                "id": "end-1",
                "name": "end",
                "type": "process.end",
                "label": "Done",
            },
        ],
        "connections": [
            {"from": "trigger-1", "to": "approve-1"},
            {"from": "approve-1", "to": "end-1"},
        ],
    }


@pytest.fixture
def process(process_json: dict[str, Any], application: Application) -> ProcessDefinition:
    return ProcessDefinition.from_json(process_json, application=application)
