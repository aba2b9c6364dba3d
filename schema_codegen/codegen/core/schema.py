"""
Core schema representation for code generation.

The intermediate representation (IR) decouples database dialects from
code generation: connectors emit a DatabaseSchema, generators consume it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
from enum import Enum


class SchemaError(Exception):
    """Exception raised for malformed schema documents."""

    pass


class GenericType(Enum):
    """Dialect-independent column type categories."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    DATETIME = "datetime"
    BYTES = "bytes"


@dataclass(frozen=True)
class Column:
    """A single table column."""

    name: str
    database_type: str  # raw dialect type, e.g. "varchar", "int8"
    generic_type: GenericType
    is_nullable: bool = False
    default_value: Optional[str] = None
    comment: Optional[str] = None
    is_primary_key: bool = False

    def __post_init__(self):
        """Accept the generic type as its string value."""
        if not isinstance(self.generic_type, GenericType):
            try:
                object.__setattr__(self, "generic_type", GenericType(self.generic_type))
            except ValueError:
                raise SchemaError(
                    f"Column '{self.name}' has unknown generic type: {self.generic_type!r}"
                )


@dataclass(frozen=True)
class Table:
    """A table; column order is the emitted field order."""

    name: str
    columns: List[Column] = field(default_factory=list)


@dataclass(frozen=True)
class DatabaseSchema:
    """Complete schema produced once per run by a connector."""

    name: str
    tables: List[Table] = field(default_factory=list)

    def get_table(self, name: str) -> Optional[Table]:
        """Look up a table by name."""
        for table in self.tables:
            if table.name == name:
                return table
        return None


def column_from_dict(data: Dict[str, Any], infer_generic=None) -> Column:
    """
    Build a Column from a schema document entry.

    Args:
        data: Mapping with at least ``name`` and ``database_type``
        infer_generic: Callable mapping a raw type to a generic category,
            used when the entry has no ``generic_type``

    Returns:
        Column instance
    """
    if not isinstance(data, dict) or "name" not in data:
        raise SchemaError(f"Column entry must be a mapping with a name: {data!r}")

    database_type = str(data.get("database_type", data.get("type", "")))
    generic = data.get("generic_type")
    if generic is None:
        if infer_generic is None:
            raise SchemaError(f"Column '{data['name']}' has no generic_type")
        generic = infer_generic(database_type)

    default_value = data.get("default_value")
    return Column(
        name=str(data["name"]),
        database_type=database_type,
        generic_type=generic,
        is_nullable=bool(data.get("is_nullable", False)),
        default_value=None if default_value is None else str(default_value),
        comment=data.get("comment"),
        is_primary_key=bool(data.get("is_primary_key", False)),
    )


def schema_from_dict(data: Dict[str, Any], infer_generic=None) -> DatabaseSchema:
    """
    Build a DatabaseSchema from a parsed YAML/JSON document.

    Expected shape::

        name: shop
        tables:
          - name: users
            columns:
              - {name: id, database_type: int8, generic_type: integer}
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema document must be a mapping")

    tables = []
    for table_data in data.get("tables") or []:
        if not isinstance(table_data, dict) or "name" not in table_data:
            raise SchemaError(f"Table entry must be a mapping with a name: {table_data!r}")
        columns = [
            column_from_dict(column_data, infer_generic)
            for column_data in table_data.get("columns") or []
        ]
        tables.append(Table(name=str(table_data["name"]), columns=columns))

    return DatabaseSchema(name=str(data.get("name", "main")), tables=tables)
