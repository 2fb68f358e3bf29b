"""Cooperative driver that advances process instances.

The runner owns control flow only: it calls `init_state`, `do` and
`next_tasks` on elements in order and records where each instance stopped.
It never blocks; a suspended element is retried on the next `run`.

A failing `do` is not retried. The element slot is marked failed, the
instance is marked failed and the error goes to the application's error
reporter.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from appbuilder_process.errors import ProcessRunawayError, TaskNotFoundError
from appbuilder_process.process.approval import ApprovalTask
from appbuilder_process.process.definition import ProcessDefinition
from appbuilder_process.process.end import EndTask
from appbuilder_process.process.instance import InstanceStatus, ProcessInstance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    instance: ProcessInstance
    completed_tasks: list[str] = field(default_factory=list)
    waiting_tasks: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.instance.status != InstanceStatus.FAILED


class ProcessRunner:
    """Run instances of one process definition."""

    def __init__(self, process: ProcessDefinition, *, max_steps: int = 1000) -> None:
        self.process = process
        self.max_steps = max_steps

    def create_instance(self, context: Mapping[str, Any] | None = None) -> ProcessInstance:
        return ProcessInstance(process_id=self.process.id, context=dict(context or {}))

    def start(self, trigger_key: str, data: Mapping[str, Any]) -> list[RunResult]:
        """Start one instance per trigger listening on `trigger_key`."""

        results: list[RunResult] = []
        for trigger in self.process.triggers():
            if not trigger.matches(trigger_key):
                continue
            instance = self.create_instance()
            trigger.init_state(instance)
            trigger.trigger(instance, data)
            instance.activate(trigger.id)
            logger.info(
                "Process instance started",
                extra={
                    "process_id": self.process.id,
                    "instance_id": instance.id,
                    "trigger_id": trigger.id,
                    "trigger_key": trigger_key,
                },
            )
            results.append(self.run(instance))

        if not results:
            logger.info(
                "No trigger matched",
                extra={"process_id": self.process.id, "trigger_key": trigger_key},
            )
        return results

    def run(self, instance: ProcessInstance) -> RunResult:
        """Advance `instance` until every active element is suspended or it ends."""

        if instance.is_finished:
            return RunResult(instance=instance)

        instance.status = InstanceStatus.RUNNING
        queue = list(instance.active_tasks)
        waiting: list[str] = []
        completed: list[str] = []
        reached_end = False
        steps = 0

        while queue:
            steps += 1
            if steps > self.max_steps:
                # No single task is at fault.
                self._fail(instance, None, ProcessRunawayError(self.max_steps))
                return RunResult(instance=instance, completed_tasks=completed, waiting_tasks=[])

            task_id = queue.pop(0)
            try:
                element = self.process.element_for_id(task_id)
                if element is None:
                    raise TaskNotFoundError(f"Process {self.process.id} has no element {task_id}")

                element.init_state(instance)
                done = element.do(instance)
                successors = element.next_tasks(instance) if done else []
            except Exception as e:
                self._fail(instance, task_id, e)
                return RunResult(instance=instance, completed_tasks=completed, waiting_tasks=[])

            if not done:
                waiting.append(task_id)
                continue

            completed.append(task_id)
            if isinstance(element, EndTask):
                reached_end = True
                break

            for nxt in successors:
                if nxt.id not in queue and nxt.id not in waiting:
                    queue.append(nxt.id)

        if reached_end or not waiting:
            instance.active_tasks = []
            instance.status = InstanceStatus.COMPLETED
            waiting = []
        else:
            instance.active_tasks = waiting
            instance.status = InstanceStatus.WAITING

        logger.info(
            "Process run finished",
            extra={
                "instance_id": instance.id,
                "status": instance.status.value,
                "completed": completed,
                "waiting": waiting,
            },
        )
        return RunResult(instance=instance, completed_tasks=completed, waiting_tasks=waiting)

    def respond(
        self,
        instance: ProcessInstance,
        task_id: str,
        response: Any,
        form_id: str | None = None,
    ) -> RunResult:
        """Record an approval response and resume the instance."""

        element = self.process.element_for_id(task_id)
        if not isinstance(element, ApprovalTask):
            raise TaskNotFoundError(f"No approval task {task_id} in process {self.process.id}")
        if task_id not in instance.active_tasks:
            raise TaskNotFoundError(f"Approval task {task_id} is not waiting on {instance.id}")

        element.record_response(instance, response, form_id=form_id)
        return self.run(instance)

    def _fail(self, instance: ProcessInstance, task_id: str | None, error: Exception) -> None:
        logger.error(
            "Process run failed",
            exc_info=error,
            extra={"instance_id": instance.id, "task_id": task_id},
        )
        element = self.process.element_for_id(task_id) if task_id is not None else None
        if element is not None:
            element.state_failed(instance, str(error))
        else:
            instance.add_log(task_id, f"Run failed: {error}")
        instance.status = InstanceStatus.FAILED
        instance.error = str(error)
        self.process.application.error(error)
