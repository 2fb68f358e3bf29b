"""Data resolution keys.

Elements expose output under flat string keys of the form
`<element id>.<field ref>[.<accessor>]`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from appbuilder_process.objects import DataField, DataObject


@dataclass(frozen=True, slots=True)
class DataKey:
    element_id: str
    field_ref: str | None = None
    accessor: str | None = None

    def __str__(self) -> str:
        return ".".join(p for p in (self.element_id, self.field_ref, self.accessor) if p)


def parse_data_key(key: str) -> DataKey:
    """Split a data key. Missing segments are None; never raises."""

    parts = key.split(".")
    return DataKey(
        element_id=parts[0],
        field_ref=parts[1] if len(parts) > 1 and parts[1] else None,
        accessor=parts[2] if len(parts) > 2 and parts[2] else None,
    )


@dataclass(frozen=True, slots=True)
class DataFieldRef:
    """A value an element can provide to other elements."""

    key: str
    label: str
    field: DataField | None = None
    data_object: DataObject | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "fieldID": self.field.id if self.field is not None else None,
            "objectID": self.data_object.id if self.data_object is not None else None,
        }
