"""Unit tests for data objects and field kinds."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from appbuilder_process.errors import UnknownFieldKindError
from appbuilder_process.objects import (
    DataObject,
    Derived,
    EmailField,
    ObjectRegistry,
    StringField,
    field_from_values,
    load_objects,
)


def test_field_without_key_is_a_string_field() -> None:
    field = field_from_values({"id": "f1", "columnName": "name"})

    assert isinstance(field, StringField)
    assert field.column_name == "name"
    assert field.to_obj()["columnName"] == "name"


@pytest.mark.parametrize("key", [None, ""])
def test_blank_field_key_is_a_string_field(key: str | None) -> None:
    field = field_from_values({"id": "f1", "key": key, "columnName": "name"})

    assert isinstance(field, StringField)
    assert field.key == "string"


def test_unknown_field_kind_is_rejected() -> None:
    with pytest.raises(UnknownFieldKindError):
        field_from_values({"id": "f1", "key": "geolocation"})


def test_email_accessors() -> None:
    field = field_from_values({"id": "f2", "key": "email", "columnName": "email"})
    record = {"email": "Bob@Example.org"}

    assert isinstance(field, EmailField)
    assert field.derive(record, "value") == Derived(found=True, value="Bob@Example.org")
    assert field.derive(record, "format").value == "bob@example.org"
    assert field.derive(record, "domain").value == "example.org"
    assert field.derive({}, "domain").value == ""


def test_unknown_accessor_is_missing() -> None:
    field = field_from_values({"id": "f1", "columnName": "name"})

    assert field.derive({"name": "x"}, "domain") == Derived.missing()
    assert field.derive({"name": "x"}, "__class__").found is False


def test_format_of_missing_value_is_empty() -> None:
    field = field_from_values({"id": "f1", "columnName": "name"})
    assert field.derive({}, "format").value == ""


def test_object_keeps_field_kinds(objects_json: list[dict]) -> None:
    obj = DataObject.model_validate(objects_json[0])

    assert [type(f) for f in obj.fields] == [StringField, EmailField]
    assert obj.field_by_id("f2") is obj.fields[1]
    assert obj.field_by_id("nope") is None
    assert [f.id for f in obj.fields_where(lambda f: f.key == "email")] == ["f2"]
    assert obj.model_dump(by_alias=True)["fields"][1]["key"] == "email"


def test_registry_lookup(objects_json: list[dict]) -> None:
    registry = ObjectRegistry.from_json(objects_json)

    assert len(registry) == 1
    found = registry.object_by_id("obj-user")
    assert found is not None and found.label == "User"
    assert registry.object_by_id("missing") is None


def test_load_objects_from_file(tmp_path: Path, objects_json: list[dict]) -> None:
    path = tmp_path / "objects.json"
    path.write_text(json.dumps(objects_json), encoding="utf-8")

    assert load_objects(path).object_by_id("obj-user") is not None

    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_objects(path)
