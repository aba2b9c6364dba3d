"""
Schema file connector.

Loads the intermediate schema from a YAML or JSON document, which lets
any external tool (or a hand-written file) feed the generators.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..codegen.core.schema import DatabaseSchema, SchemaError, schema_from_dict
from .base import DatabaseConnector, IntrospectionError
from .normalize import normalize_type


def load_schema_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML/JSON schema document."""
    path = Path(path)
    if not path.exists():
        raise IntrospectionError(f"Schema file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise IntrospectionError(f"Invalid schema file {path}: {e}") from e
    except OSError as e:
        raise IntrospectionError(f"Error reading schema file {path}: {e}") from e


class SchemaFileConnector(DatabaseConnector):
    """Connector reading a schema document instead of a live database."""

    def __init__(self, path: Union[str, Path], dialect: str = "file"):
        self.path = Path(path)
        self._dialect = dialect

    @property
    def dialect(self) -> str:
        return self._dialect

    def get_schema(self, database_name: str = "") -> DatabaseSchema:
        """
        Load the schema; columns without ``generic_type`` are classified
        with the dialect's type table.
        """
        document = load_schema_document(self.path)
        if isinstance(document, dict) and database_name and "name" not in document:
            document = {**document, "name": database_name}

        try:
            return schema_from_dict(
                document, lambda raw: normalize_type(self._dialect, raw)
            )
        except SchemaError as e:
            raise IntrospectionError(f"Invalid schema file {self.path}: {e}") from e
