"""Field kinds and the derived-value capability."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from appbuilder_process.errors import UnknownFieldKindError

Record = Mapping[str, Any]
Accessor = Callable[[Record], object]


@dataclass(frozen=True, slots=True)
class Derived:
    """Result of asking a field for a value by accessor name.

    `found` is False when the field kind has no such accessor; `value` may
    legitimately be None when it is True.
    """

    found: bool
    value: object = None

    @classmethod
    def missing(cls) -> Derived:
        return cls(found=False)


class DataField(BaseModel):
    """Common shape of every field kind."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    key: str = "string"
    label: str = ""
    column_name: str = Field(default="", alias="columnName")
    settings: dict[str, Any] = Field(default_factory=dict)

    def value(self, record: Record) -> object:
        """Raw stored value of this field in `record`."""

        return record.get(self.column_name)

    def format(self, record: Record) -> str:  # noqa: A003 (display format)
        raw = self.value(record)
        return "" if raw is None else str(raw)

    def accessors(self) -> dict[str, Accessor]:
        return {"value": self.value, "format": self.format}

    def derive(self, record: Record, accessor: str) -> Derived:
        fn = self.accessors().get(accessor)
        if fn is None:
            return Derived.missing()
        return Derived(found=True, value=fn(record))

    def to_obj(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class StringField(DataField):
    key: Literal["string"] = "string"


class EmailField(DataField):
    key: Literal["email"] = "email"

    def format(self, record: Record) -> str:  # noqa: A003 (display format)
        return super().format(record).lower()

    def domain(self, record: Record) -> str:
        _, sep, domain = self.format(record).rpartition("@")
        return domain if sep else ""

    def accessors(self) -> dict[str, Accessor]:
        return {**super().accessors(), "domain": self.domain}


FIELD_KINDS: dict[str, type[DataField]] = {
    "string": StringField,
    "email": EmailField,
}


def field_from_values(values: Mapping[str, Any]) -> DataField:
    """Build the field kind named by `values["key"]` (string when absent)."""

    kind = values.get("key") or "string"
    cls = FIELD_KINDS.get(kind)
    if cls is None:
        raise UnknownFieldKindError(kind)
    return cls.model_validate({**values, "key": kind})
