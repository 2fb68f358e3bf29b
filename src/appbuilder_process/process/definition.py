"""Process definition: the elements of a diagram and the flows between them."""

from __future__ import annotations

import logging
import uuid
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from appbuilder_process.application import Application
from appbuilder_process.errors import InvalidProcessDefinitionError
from appbuilder_process.process.data import DataFieldRef
from appbuilder_process.process.element import ProcessElement
from appbuilder_process.process.instance import ProcessInstance
from appbuilder_process.process.registry import element_from_values
from appbuilder_process.process.trigger import ProcessTrigger

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=ProcessElement)


@dataclass(frozen=True, slots=True)
class Connection:
    """A sequence flow from one element to another."""

    source: str
    target: str

    def to_json(self) -> dict[str, str]:
        return {"from": self.source, "to": self.target}

    @staticmethod
    def from_json(obj: Mapping[str, Any]) -> Connection:
        source = obj.get("from")
        target = obj.get("to")
        if not isinstance(source, str) or not isinstance(target, str):
            raise InvalidProcessDefinitionError(f"Connection needs string 'from'/'to': {obj!r}")
        return Connection(source=source, target=target)


class ProcessDefinition:
    """Owns the elements of one process and answers graph queries about them.

    Successors are computed from `connections`; elements never hold links to
    each other.
    """

    def __init__(
        self,
        *,
        id: str | None = None,  # noqa: A002 (serialized key)
        name: str = "",
        application: Application | None = None,
    ) -> None:
        self.id = id or str(uuid.uuid4())
        self.name = name
        self.application = application or Application()
        self._elements: dict[str, ProcessElement] = {}
        self.connections: list[Connection] = []

    def __repr__(self) -> str:
        return f"ProcessDefinition(id={self.id!r}, name={self.name!r})"

    @property
    def elements(self) -> list[ProcessElement]:
        return list(self._elements.values())

    def add_element(self, element: ProcessElement) -> ProcessElement:
        if element.id in self._elements:
            raise InvalidProcessDefinitionError(f"Duplicate element id: {element.id}")
        element.process = self
        element.application = self.application
        self._elements[element.id] = element
        return element

    def add_element_from_values(self, values: Mapping[str, Any]) -> ProcessElement:
        return self.add_element(element_from_values(values, process=self))

    def remove_element(self, element_id: str) -> None:
        self._elements.pop(element_id, None)
        self.connections = [
            c for c in self.connections if element_id not in (c.source, c.target)
        ]

    def connect(self, source: str, target: str) -> Connection:
        for element_id in (source, target):
            if element_id not in self._elements:
                raise InvalidProcessDefinitionError(
                    f"Connection {source} -> {target} references unknown element {element_id}"
                )
        connection = Connection(source=source, target=target)
        self.connections.append(connection)
        return connection

    def element_for_id(self, element_id: str) -> ProcessElement | None:
        return self._elements.get(element_id)

    def elements_of(self, kind: type[E]) -> list[E]:
        return [e for e in self._elements.values() if isinstance(e, kind)]

    def triggers(self) -> list[ProcessTrigger]:
        return self.elements_of(ProcessTrigger)

    def connections_out(self, element_id: str) -> list[Connection]:
        return [c for c in self.connections if c.source == element_id]

    def connections_in(self, element_id: str) -> list[Connection]:
        return [c for c in self.connections if c.target == element_id]

    def next_elements(self, element: ProcessElement) -> list[ProcessElement]:
        return [self._elements[c.target] for c in self.connections_out(element.id)]

    def upstream_elements(self, element: ProcessElement) -> list[ProcessElement]:
        """Every element with a path to `element`, nearest first."""

        seen: set[str] = {element.id}
        ordered: list[ProcessElement] = []
        queue: deque[str] = deque([element.id])
        while queue:
            current = queue.popleft()
            for conn in self.connections_in(current):
                if conn.source in seen:
                    continue
                seen.add(conn.source)
                ordered.append(self._elements[conn.source])
                queue.append(conn.source)
        return ordered

    def process_data_fields(self, element: ProcessElement) -> list[DataFieldRef]:
        """Data fields `element` may reference: everything its predecessors provide."""

        fields: list[DataFieldRef] = []
        for upstream in self.upstream_elements(element):
            provided = upstream.process_data_fields()
            if provided:
                fields.extend(provided)
        return fields

    def process_data(self, instance: ProcessInstance, key: str) -> Any:
        """Ask every element for `key`; the first non-None answer wins."""

        for element in self._elements.values():
            value = element.process_data(instance, key)
            if value is not None:
                return value
        return None

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "elements": [e.to_obj() for e in self._elements.values()],
            "connections": [c.to_json() for c in self.connections],
        }

    @classmethod
    def from_json(
        cls, obj: Mapping[str, Any], *, application: Application | None = None
    ) -> ProcessDefinition:
        """Load a definition. Unknown element types and dangling flows raise."""

        elements = obj.get("elements") or []
        connections = obj.get("connections") or []
        if not isinstance(elements, list) or not isinstance(connections, list):
            raise InvalidProcessDefinitionError("'elements' and 'connections' must be lists")

        process = cls(id=obj.get("id"), name=obj.get("name") or "", application=application)
        for values in elements:
            if not isinstance(values, Mapping):
                raise InvalidProcessDefinitionError(f"Element must be an object: {values!r}")
            process.add_element_from_values(values)
        for raw in connections:
            if not isinstance(raw, Mapping):
                raise InvalidProcessDefinitionError(f"Connection must be an object: {raw!r}")
            conn = Connection.from_json(raw)
            process.connect(conn.source, conn.target)

        logger.debug(
            "Process definition loaded",
            extra={
                "process_id": process.id,
                "elements": len(process._elements),
                "connections": len(process.connections),
            },
        )
        return process
