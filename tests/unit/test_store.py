"""Unit tests for instance persistence."""

from __future__ import annotations

from pathlib import Path

from appbuilder_process.process.instance import InstanceStatus, ProcessInstance
from appbuilder_process.process.store import InstanceStore


def test_instance_store_roundtrip(tmp_path: Path) -> None:
    store = InstanceStore(tmp_path / "process_state" / "instances.json")
    assert store.list() == []

    instance = ProcessInstance(process_id="proc-1")
    instance.write_state("a1", {"status": "processing", "userFormResponse": None})
    instance.active_tasks = ["a1"]
    instance.status = InstanceStatus.WAITING
    store.save(instance)

    loaded = store.get(instance.id)
    assert loaded is not None
    assert loaded.status is InstanceStatus.WAITING
    assert loaded.active_tasks == ["a1"]
    assert loaded.state_for("a1") == {"status": "processing", "userFormResponse": None}


def test_save_replaces_existing_instance(tmp_path: Path) -> None:
    store = InstanceStore(tmp_path / "instances.json")
    instance = ProcessInstance(process_id="proc-1")
    store.save(instance)

    instance.status = InstanceStatus.COMPLETED
    store.save(instance)

    stored = store.list()
    assert len(stored) == 1
    assert stored[0].status is InstanceStatus.COMPLETED
    assert store.get("missing") is None


def test_corrupt_state_file_is_treated_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "instances.json"
    path.write_text("{not json", encoding="utf-8")

    assert InstanceStore(path).list() == []
