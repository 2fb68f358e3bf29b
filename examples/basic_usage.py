#!/usr/bin/env python3
"""Programmatic process run example.

This demonstrates using the process core directly:

* build a trigger -> approval -> end process in code
* fire the trigger with a captured record
* record the approval response and resume

Nothing is persisted; see `appbuilder-process start` for the stored variant.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from appbuilder_process.application import Application
from appbuilder_process.config import ProcessSettings
from appbuilder_process.logging import configure_logging
from appbuilder_process.objects import DataObject, ObjectRegistry
from appbuilder_process.process import ApprovalTask, EndTask, LifecycleTrigger, ProcessDefinition
from appbuilder_process.process.runner import ProcessRunner


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run a small approval process in memory.")
    parser.add_argument("--name", default="Alice", help="Name on the captured record")
    parser.add_argument("--approve", action="store_true", help="Approve instead of reject")
    return parser.parse_args(argv)


def build_process(application: Application) -> ProcessDefinition:
    process = ProcessDefinition(id="user-approval", name="User approval", application=application)
    process.add_element(
        LifecycleTrigger(
            {"id": "on-add", "label": "New user", "objectID": "user", "lifecycleKey": "added"}
        )
    )
    process.add_element(ApprovalTask({"id": "approve", "label": "Manager", "who": "role"}))
    process.add_element(EndTask({"id": "done", "label": "Done"}))
    process.connect("on-add", "approve")
    process.connect("approve", "done")
    return process


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = ProcessSettings()
    configure_logging(settings.log_level)

    objects = ObjectRegistry(
        [
            DataObject.model_validate(
                {
                    "id": "user",
                    "label": "User",
                    "fields": [{"id": "name", "label": "Name", "columnName": "name"}],
                }
            )
        ]
    )
    process = build_process(Application(objects=objects))
    runner = ProcessRunner(process, max_steps=settings.max_steps)

    result = runner.start("user.added", {"uuid": "r-1", "name": args.name})[0]
    instance = result.instance
    print(f"Started {instance.id}: {instance.status.value}, waiting on {result.waiting_tasks}")
    print(f"Captured name: {process.process_data(instance, 'on-add.name')}")

    result = runner.respond(instance, "approve", {"approved": args.approve})
    print(f"Finished {instance.id}: {instance.status.value}")
    print(f"Response: {process.process_data(instance, 'approve.userFormResponse')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
