"""In-memory object registry."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, field_validator

from appbuilder_process.objects.fields import DataField, field_from_values

logger = logging.getLogger(__name__)


class DataObject(BaseModel):
    """A data object (table) and its ordered fields."""

    model_config = ConfigDict(extra="ignore")

    id: str
    label: str = ""
    fields: list[SerializeAsAny[DataField]] = Field(default_factory=list)

    @field_validator("fields", mode="before")
    @classmethod
    def _build_fields(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        return [item if isinstance(item, DataField) else field_from_values(item) for item in value]

    def fields_where(self, predicate: Callable[[DataField], bool] | None = None) -> list[DataField]:
        if predicate is None:
            return list(self.fields)
        return [f for f in self.fields if predicate(f)]

    def field_by_id(self, field_id: str) -> DataField | None:
        for f in self.fields:
            if f.id == field_id:
                return f
        return None


class ObjectRegistry:
    """Resolve data objects by id."""

    def __init__(self, objects: Iterable[DataObject] = ()) -> None:
        self._objects: dict[str, DataObject] = {}
        for obj in objects:
            self.add(obj)

    def __len__(self) -> int:
        return len(self._objects)

    def add(self, obj: DataObject) -> None:
        self._objects[obj.id] = obj

    def object_by_id(self, object_id: str) -> DataObject | None:
        return self._objects.get(object_id)

    @classmethod
    def from_json(cls, raw: list[dict[str, Any]]) -> ObjectRegistry:
        return cls(DataObject.model_validate(item) for item in raw)


def load_objects(path: Path) -> ObjectRegistry:
    """Load an object registry from a JSON list of objects."""

    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError(f"Objects file must contain a JSON list: {path}")
    registry = ObjectRegistry.from_json(raw)
    logger.info("Objects loaded", extra={"path": str(path), "count": len(registry)})
    return registry
