"""Data objects and their fields, as seen by process elements.

Process elements only need to look objects up by id, enumerate their fields
and derive values from a captured record. Persistence and validation of
records belong to the model layer and are not modelled here.
"""

from appbuilder_process.objects.fields import (
    FIELD_KINDS,
    DataField,
    Derived,
    EmailField,
    StringField,
    field_from_values,
)
from appbuilder_process.objects.registry import DataObject, ObjectRegistry, load_objects

__all__ = [
    "FIELD_KINDS",
    "DataField",
    "DataObject",
    "Derived",
    "EmailField",
    "ObjectRegistry",
    "StringField",
    "field_from_values",
    "load_objects",
]
