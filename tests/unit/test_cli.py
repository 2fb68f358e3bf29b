"""Unit tests for the command line entrypoint."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

import appbuilder_process.main as cli
from appbuilder_process.process.instance import InstanceStatus
from appbuilder_process.process.store import InstanceStore


@pytest.fixture
def workspace(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    process_json: dict[str, Any],
    objects_json: list[dict[str, Any]],
) -> Path:
    definition = tmp_path / "process.json"
    definition.write_text(json.dumps(process_json), encoding="utf-8")
    objects = tmp_path / "objects.json"
    objects.write_text(json.dumps(objects_json), encoding="utf-8")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("PROCESS_MAX_STEPS", raising=False)
    monkeypatch.setenv("PROCESS_STATE_PATH", str(tmp_path / "state"))
    monkeypatch.setenv("PROCESS_OBJECTS_PATH", str(objects))
    # Keep pytest's log capture handlers in place.
    monkeypatch.setattr(cli, "configure_logging", lambda _level: None)
    return tmp_path


def _store(workspace: Path) -> InstanceStore:
    return InstanceStore(workspace / "state" / "instances.json")


def test_describe_lists_elements_and_data_fields(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli.main(["describe", "--definition", str(workspace / "process.json")])

    out = capsys.readouterr().out
    assert code == 0
    assert "trigger-1 [process.trigger.lifecycle] New user" in out
    assert "trigger-1.f1  (New user->User->Name)" in out
    assert "approve-1.userFormResponse  (Manager approval->Response)" in out


def test_describe_json_lists_data_field_refs(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli.main(["describe", "--definition", str(workspace / "process.json"), "--json"])

    described = json.loads(capsys.readouterr().out)
    assert code == 0
    trigger, approval, end = described["elements"]
    assert trigger["objectID"] == "obj-user"
    assert {
        "key": "trigger-1.f2",
        "label": "New user->User->Email",
        "fieldID": "f2",
        "objectID": "obj-user",
    } in trigger["dataFields"]
    assert approval["dataFields"] == [
        {
            "key": "approve-1.userFormResponse",
            "label": "Manager approval->Response",
            "fieldID": None,
            "objectID": None,
        }
    ]
    assert end["dataFields"] == []


def test_start_respond_show(workspace: Path, capsys: pytest.CaptureFixture[str]) -> None:
    definition = str(workspace / "process.json")

    code = cli.main(
        [
            "start",
            "--definition",
            definition,
            "--trigger-key",
            "obj-user.added",
            "--data",
            json.dumps({"uuid": "r1", "name": "Alice"}),
        ]
    )
    assert code == 0
    assert "waiting: approve-1" in capsys.readouterr().out

    stored = _store(workspace).list()
    assert len(stored) == 1
    instance_id = stored[0].id
    assert stored[0].status is InstanceStatus.WAITING

    code = cli.main(
        [
            "respond",
            "--definition",
            definition,
            "--instance-id",
            instance_id,
            "--task-id",
            "approve-1",
            "--response",
            '{"approved": true}',
        ]
    )
    assert code == 0
    assert f"{instance_id} completed" in capsys.readouterr().out

    instance = _store(workspace).get(instance_id)
    assert instance is not None
    assert instance.status is InstanceStatus.COMPLETED
    assert instance.state_for("approve-1")["userFormResponse"] == {"approved": True}

    code = cli.main(["show", "--instance-id", instance_id])
    shown = json.loads(capsys.readouterr().out)
    assert code == 0
    assert shown["id"] == instance_id
    assert shown["task_state"]["trigger-1"]["data"] == {"uuid": "r1", "name": "Alice"}


def test_start_without_matching_trigger(
    workspace: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    code = cli.main(
        [
            "start",
            "--definition",
            str(workspace / "process.json"),
            "--trigger-key",
            "obj-user.deleted",
        ]
    )

    assert code == 0
    assert "No trigger listens on 'obj-user.deleted'" in capsys.readouterr().out
    assert _store(workspace).list() == []


def test_unknown_instance_exit_code(workspace: Path) -> None:
    assert cli.main(["show", "--instance-id", "missing"]) == 3


def test_invalid_definition_exit_code(
    workspace: Path, process_json: dict[str, Any]
) -> None:
    process_json["elements"].append({"id": "x", "type": "process.task.unknown"})
    bad = workspace / "bad.json"
    bad.write_text(json.dumps(process_json), encoding="utf-8")

    assert cli.main(["describe", "--definition", str(bad)]) == 2


def test_configuration_error_exit_code(
    workspace: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PROCESS_MAX_STEPS", "-1")

    assert cli.main(["show", "--instance-id", "x"]) == 2
    assert "Configuration error" in capsys.readouterr().err
