"""JSON-file persistence for process instances.

The whole file is rewritten on every save. This is enough for local runs
and tests; a real deployment keeps instances in its own database.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from pydantic import ValidationError

from appbuilder_process.process.instance import ProcessInstance

logger = logging.getLogger(__name__)


@dataclass
class InstanceStore:
    path: Path

    def __post_init__(self) -> None:
        self._lock = threading.Lock()

    def _load_unlocked(self) -> list[ProcessInstance]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "Instance state file is not valid JSON; treating as empty",
                extra={"path": str(self.path)},
            )
            return []
        if not isinstance(raw, list):
            return []

        instances: list[ProcessInstance] = []
        for item in raw:
            try:
                instances.append(ProcessInstance.model_validate(item))
            except ValidationError as e:
                logger.warning(
                    "Skipping invalid instance record",
                    extra={"path": str(self.path), "error": str(e)},
                )
        return instances

    def _save_unlocked(self, instances: list[ProcessInstance]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [i.model_dump(mode="json") for i in instances]
        self.path.write_text(
            json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def list(self) -> list[ProcessInstance]:  # noqa: A003 (store API)
        with self._lock:
            return self._load_unlocked()

    def get(self, instance_id: str) -> ProcessInstance | None:
        with self._lock:
            for instance in self._load_unlocked():
                if instance.id == instance_id:
                    return instance
            return None

    def save(self, instance: ProcessInstance) -> ProcessInstance:
        """Insert or replace `instance` by id."""

        with self._lock:
            instances = self._load_unlocked()
            instance.updated_at = datetime.now(UTC)
            for idx, existing in enumerate(instances):
                if existing.id == instance.id:
                    instances[idx] = instance
                    break
            else:
                instances.append(instance)
            self._save_unlocked(instances)
            return instance
